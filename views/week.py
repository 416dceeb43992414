import calendar
from functools import partial

from utils import draw_centered_text, line_height

from .day_cell import CELL_STYLES, DayCell, draw_day_cell
from .modes import DisplayMode

COLUMN_SPACING = 8


def week_cell_boxes(bbox, count, scale=1, top_offset=0):
    x0, y0, x1, _y1 = bbox
    if count <= 0:
        return []
    gap = COLUMN_SPACING * scale
    col_w = max(1, (x1 - x0 - gap * (count - 1)) // count)
    cell_h = (CELL_STYLES[DisplayMode.WEEKLY]["circle"] + 4) * scale
    top = y0 + top_offset
    boxes = []
    for idx in range(count):
        bx = x0 + idx * (col_w + gap)
        boxes.append((bx, top, bx + col_w - 1, top + cell_h - 1))
    return boxes


def draw_week_view(ctx, bbox, days, events_by_day, config):
    draw = ctx["draw"]
    inky = ctx["inky"]
    font_meta = ctx["fonts"]["meta"]
    scale = ctx.get("scale", 1)
    selected = ctx.get("selected")
    select = ctx["select"]

    pad = config.get("pad", 8)
    x0, y0, x1, y1 = bbox
    inner = (x0 + pad, y0 + pad, x1 - pad, y1 - pad)
    header_h = line_height(draw, font_meta) + 4

    cells = []
    for day, box in zip(days, week_cell_boxes(inner, len(days), scale, top_offset=header_h)):
        bx0, by0, bx1, _by1 = box
        label = calendar.day_abbr[day.weekday()]
        draw_centered_text(draw, ((bx0 + bx1) // 2, by0 - header_h // 2), label, inky.BLACK, font_meta)
        cell = DayCell(
            day=day,
            reminders=events_by_day.get(day, []),
            selected=day == selected,
            mode=DisplayMode.WEEKLY,
            bbox=box,
            action=partial(select, day),
        )
        draw_day_cell(ctx, cell, scale)
        cells.append(cell)
    return cells
