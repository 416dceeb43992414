from functools import partial

from utils import color_value, line_height, text_color_for, text_size, truncate_text

from .day_cell import CELL_STYLES, DayCell, draw_day_cell
from .modes import DisplayMode


def draw_reminder_card(draw, x, y, w, h, text, bg_name, inky, font, radius=3):
    bg = color_value(inky, bg_name)
    fg = text_color_for(bg_name, inky)
    draw.rounded_rectangle((x, y, x + w, y + h), radius=radius, fill=bg, outline=inky.BLACK)
    row_text = truncate_text(draw, str(text), max(0, w - 6), font)
    draw.text((x + 3, y + 1), row_text, fg, font=font)


def reminder_color(reminder, calendar_colors):
    if reminder.color:
        return reminder.color
    return calendar_colors.get(reminder.calendar) or "black"


def draw_reminder_list(ctx, x, y, width, bottom, title, reminders):
    draw = ctx["draw"]
    inky = ctx["inky"]
    font_meta = ctx["fonts"]["meta"]
    font_body = ctx["fonts"]["body"]
    calendar_colors = ctx.get("calendar_colors", {})
    config = ctx.get("config", {})

    draw.text((x, y), title, inky.BLACK, font=font_meta)
    y += line_height(draw, font_meta) + 2
    card_h = line_height(draw, font_body) + 2
    shown = 0
    for reminder in reminders:
        if y + card_h > bottom:
            break
        label = reminder.title
        if config.get("show_calendar") and reminder.calendar:
            label = f"{reminder.calendar}: {label}"
        draw_reminder_card(
            draw, x, y, width, card_h, label, reminder_color(reminder, calendar_colors), inky, font_body
        )
        y += card_h + 2
        shown += 1
    remaining = len(reminders) - shown
    if remaining > 0 and y + line_height(draw, font_meta) <= bottom:
        draw.text((x, y), f"+{remaining}", inky.BLACK, font=font_meta)
        y += line_height(draw, font_meta) + 2
    return y


def day_cell_box(bbox, scale=1):
    x0, y0, x1, _y1 = bbox
    size = (CELL_STYLES[DisplayMode.DAILY]["circle"] + 4) * scale
    left = x0 + max(0, (x1 - x0 - size) // 2)
    return (left, y0, left + size - 1, y0 + size - 1)


def draw_day_view(ctx, bbox, days, events_by_day, config):
    draw = ctx["draw"]
    inky = ctx["inky"]
    font_sub = ctx["fonts"]["sub"]
    scale = ctx.get("scale", 1)
    selected = ctx.get("selected")
    select = ctx["select"]

    pad = config.get("pad", 8)
    x0, y0, x1, y1 = bbox
    inner = (x0 + pad, y0 + pad, x1 - pad, y1 - pad)

    cells = []
    for day in days[:1]:
        box = day_cell_box(inner, scale)
        cell = DayCell(
            day=day,
            reminders=events_by_day.get(day, []),
            selected=day == selected,
            mode=DisplayMode.DAILY,
            bbox=box,
            action=partial(select, day),
        )
        draw_day_cell(ctx, cell, scale)
        cells.append(cell)

        heading = day.strftime("%A %d %B")
        heading_w, _ = text_size(draw, heading, font_sub)
        y = box[3] + 4
        draw.text((x0 + max(pad, (x1 - x0 - heading_w) // 2), y), heading, inky.BLACK, font=font_sub)
        y += line_height(draw, font_sub) + 6

        width = inner[2] - inner[0]
        if cell.reminders:
            y = draw_reminder_list(ctx, inner[0], y, width, inner[3], "Due today", cell.reminders) + 4
        unscheduled = ctx.get("unscheduled") or []
        if unscheduled and config.get("show_unscheduled", True):
            draw_reminder_list(ctx, inner[0], y, width, inner[3], "No due date", unscheduled)
    return cells
