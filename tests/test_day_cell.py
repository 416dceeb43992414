import sys
import unittest
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reminders import ReminderItem
from utils import Palette, load_fonts, new_canvas
from views.day_cell import CELL_STYLES, DayCell, cell_metrics, draw_day_cell
from views.modes import DisplayMode


def make_ctx(size=(80, 80)):
    img, draw = new_canvas(size)
    return {"img": img, "draw": draw, "inky": Palette, "fonts": load_fonts(1)}


class DayCellTests(unittest.TestCase):
    def test_styles_grow_with_mode(self):
        sizes = [CELL_STYLES[mode]["circle"] for mode in (DisplayMode.MONTHLY, DisplayMode.WEEKLY, DisplayMode.DAILY)]
        self.assertEqual(sizes, [14, 32, 48])
        self.assertEqual(cell_metrics(DisplayMode.WEEKLY, scale=2)["circle"], 64)

    def test_contains_and_activate(self):
        calls = []
        cell = DayCell(
            day=date(2024, 3, 5),
            reminders=[],
            selected=False,
            mode=DisplayMode.MONTHLY,
            bbox=(10, 10, 29, 29),
            action=lambda: calls.append(1),
        )
        self.assertTrue(cell.contains(10, 10))
        self.assertTrue(cell.contains(29, 20))
        self.assertFalse(cell.contains(30, 20))
        cell.activate()
        self.assertEqual(calls, [1])
        self.assertEqual(cell.center, (19, 19))

    def test_default_action_does_nothing(self):
        cell = DayCell(date(2024, 3, 5), [], False, DisplayMode.DAILY, (0, 0, 10, 10))
        cell.activate()

    def test_selected_marker_is_blue(self):
        ctx = make_ctx()
        cell = DayCell(date(2024, 3, 5), [], True, DisplayMode.WEEKLY, (0, 0, 79, 79))
        draw_day_cell(ctx, cell)
        cx, cy = cell.center
        self.assertEqual(ctx["img"].getpixel((cx - 13, cy)), Palette.BLUE)

    def test_unselected_marker_is_black(self):
        ctx = make_ctx()
        cell = DayCell(date(2024, 3, 5), [], False, DisplayMode.WEEKLY, (0, 0, 79, 79))
        draw_day_cell(ctx, cell)
        cx, cy = cell.center
        self.assertEqual(ctx["img"].getpixel((cx - 13, cy)), Palette.BLACK)
        self.assertEqual(ctx["img"].getpixel((2, 2)), Palette.WHITE)

    def test_dot_only_when_reminders(self):
        reminder = ReminderItem(title="r", due=date(2024, 3, 5))
        with_dot = make_ctx()
        cell = DayCell(date(2024, 3, 5), [reminder], False, DisplayMode.MONTHLY, (0, 0, 79, 79))
        draw_day_cell(with_dot, cell)
        cx, cy = cell.center
        self.assertEqual(with_dot["img"].getpixel((cx, cy + 8)), Palette.RED)

        without_dot = make_ctx()
        cell = DayCell(date(2024, 3, 5), [], False, DisplayMode.MONTHLY, (0, 0, 79, 79))
        draw_day_cell(without_dot, cell)
        self.assertEqual(without_dot["img"].getpixel((cx, cy + 8)), Palette.WHITE)


if __name__ == "__main__":
    unittest.main()
