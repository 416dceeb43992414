from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Tuple

from utils import draw_centered_text

from .modes import DisplayMode

# Sizes in pixels at scale 1: marker diameter, font size, dot diameter and
# the dot's distance below the marker centre.
CELL_STYLES = {
    DisplayMode.MONTHLY: {"circle": 14, "font": "day_month", "dot": 3, "dot_offset": 8},
    DisplayMode.WEEKLY: {"circle": 32, "font": "day_week", "dot": 3, "dot_offset": 8},
    DisplayMode.DAILY: {"circle": 48, "font": "day_day", "dot": 3, "dot_offset": 8},
}


def _noop():
    pass


@dataclass
class DayCell:
    day: date
    reminders: List[object]
    selected: bool
    mode: DisplayMode
    bbox: Tuple[int, int, int, int]
    action: Callable[[], None] = field(default=_noop, repr=False, compare=False)

    @property
    def center(self):
        x0, y0, x1, y1 = self.bbox
        return (x0 + x1) // 2, (y0 + y1) // 2

    @property
    def has_reminders(self):
        return bool(self.reminders)

    def contains(self, x, y):
        x0, y0, x1, y1 = self.bbox
        return x0 <= x <= x1 and y0 <= y <= y1

    def activate(self):
        self.action()


def cell_metrics(mode, scale=1):
    style = CELL_STYLES[mode]
    return {
        "circle": style["circle"] * scale,
        "dot": max(1, style["dot"] * scale),
        "dot_offset": style["dot_offset"] * scale,
        "font": style["font"],
    }


def draw_day_cell(ctx, cell, scale=1):
    draw = ctx["draw"]
    inky = ctx["inky"]
    metrics = cell_metrics(cell.mode, scale)
    cx, cy = cell.center
    radius = metrics["circle"] // 2
    fill = inky.BLUE if cell.selected else inky.BLACK
    draw.ellipse((cx - radius, cy - radius, cx + radius, cy + radius), fill=fill)
    font = ctx["fonts"][metrics["font"]]
    draw_centered_text(draw, (cx, cy), str(cell.day.day), inky.WHITE, font)
    if cell.has_reminders:
        dot_r = metrics["dot"] // 2
        dy = cy + metrics["dot_offset"]
        draw.ellipse((cx - dot_r, dy - dot_r, cx + dot_r, dy + dot_r), fill=inky.RED)
