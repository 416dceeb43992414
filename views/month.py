from functools import partial

from utils import draw_centered_text, line_height

from .day_cell import DayCell, draw_day_cell
from .grid import weekday_labels
from .modes import DisplayMode

COLUMN_WIDTH = 20
COLUMN_SPACING = 10
ROW_HEIGHT = 20
ROW_SPACING = 4


def month_cell_boxes(bbox, count, scale=1, top_offset=0):
    x0, y0, x1, _y1 = bbox
    col_w = COLUMN_WIDTH * scale
    col_gap = COLUMN_SPACING * scale
    row_h = ROW_HEIGHT * scale
    row_gap = ROW_SPACING * scale
    grid_w = 7 * col_w + 6 * col_gap
    left = x0 + max(0, (x1 - x0 - grid_w) // 2)
    top = y0 + top_offset
    boxes = []
    for idx in range(count):
        row, col = divmod(idx, 7)
        bx = left + col * (col_w + col_gap)
        by = top + row * (row_h + row_gap)
        boxes.append((bx, by, bx + col_w - 1, by + row_h - 1))
    return boxes


def draw_month_view(ctx, bbox, days, events_by_day, config):
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
    header_boxes = month_cell_boxes(inner, 7, scale)
    for label, (hx0, hy0, hx1, _hy1) in zip(weekday_labels(config.get("first_weekday")), header_boxes):
        draw_centered_text(draw, ((hx0 + hx1) // 2, hy0 + header_h // 2), label, inky.BLACK, font_meta)

    cells = []
    for day, box in zip(days, month_cell_boxes(inner, len(days), scale, top_offset=header_h)):
        cell = DayCell(
            day=day,
            reminders=events_by_day.get(day, []),
            selected=day == selected,
            mode=DisplayMode.MONTHLY,
            bbox=box,
            action=partial(select, day),
        )
        draw_day_cell(ctx, cell, scale)
        cells.append(cell)
    return cells
