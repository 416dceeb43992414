from datetime import datetime

from reminders import calendars_from_config
from utils import Palette, draw_error, get_timezone, load_fonts, new_canvas

from . import VIEW_REGISTRY, normalize_calendar_config
from .grid import days_in_current_week, days_in_month, to_day
from .grouping import UNSCHEDULED, group_reminders
from .modes import DisplayMode
from .state import Observable


class CalendarView(Observable):
    """Renders a ``CalendarState`` as a month grid, a week row or a single day.

    The view keeps the selected date and the cells from the last render so a
    tap at a pixel position can be routed to the right day. Subscribers are
    told about selection changes as ``("selected_date", day)``.
    """

    def __init__(self, state, config=None, clock=None, inky=None):
        super().__init__()
        self.state = state
        self.config = normalize_calendar_config(config)
        self.tzinfo = get_timezone(self.config.get("tz"))
        self.first_weekday = self.config.get("first_weekday")
        self.clock = clock or self._now
        self.inky = inky or Palette
        self.selected_date = self.today
        self.cells = []
        self.range_available = True
        self.needs_redraw = True
        self._unsubscribe = state.subscribe(self._on_state_change)

    def _now(self):
        return datetime.now(self.tzinfo) if self.tzinfo else datetime.now()

    def _on_state_change(self, name, value):
        self.needs_redraw = True

    def close(self):
        self._unsubscribe()

    @property
    def today(self):
        return to_day(self.clock(), self.tzinfo)

    @property
    def mode(self):
        return self.state.mode

    def events_by_day(self):
        return group_reminders(self.state.reminders, self.tzinfo)

    @property
    def unscheduled(self):
        return self.events_by_day().get(UNSCHEDULED, [])

    def visible_days(self, mode=None):
        mode = mode or self.mode
        if mode == DisplayMode.MONTHLY:
            return days_in_month(self.today, self.first_weekday)
        if mode == DisplayMode.WEEKLY:
            return days_in_current_week(self.clock(), self.first_weekday, self.tzinfo)
        return [self.today]

    def calendar_colors(self):
        return {cal.name: cal.color for cal in calendars_from_config(self.state.calendars)}

    def select(self, day):
        day = to_day(day, self.tzinfo)
        if day == self.selected_date:
            return
        self.selected_date = day
        self.needs_redraw = True
        self._notify("selected_date", day)

    def cell_at(self, x, y):
        for cell in self.cells:
            if cell.contains(x, y):
                return cell
        return None

    def tap(self, x, y):
        cell = self.cell_at(x, y)
        if cell is not None:
            cell.activate()
        return cell

    def render(self, size=None):
        width, height = size or (self.config["width"], self.config["height"])
        img, draw = new_canvas((width, height), fill=self.inky.WHITE)
        scale = self.config["scale"]
        events_by_day = self.events_by_day()
        ctx = {
            "img": img,
            "draw": draw,
            "inky": self.inky,
            "fonts": load_fonts(scale),
            "scale": scale,
            "config": self.config,
            "selected": self.selected_date,
            "select": self.select,
            "unscheduled": events_by_day.get(UNSCHEDULED, []),
            "calendar_colors": self.calendar_colors(),
        }
        bbox = (0, 0, width - 1, height - 1)

        days = self.visible_days()
        self.range_available = bool(days)
        cells = []
        if not days:
            draw_error(ctx, bbox, "No dates available for this view", title="Calendar")
        else:
            renderer = VIEW_REGISTRY[self.mode]
            try:
                cells = renderer(ctx, bbox, days, events_by_day, self.config)
            except Exception as exc:
                draw_error(ctx, bbox, str(exc))
        self.cells = cells
        self.needs_redraw = False
        return img
