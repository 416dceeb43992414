from utils import get_timezone

from .day import draw_day_view
from .grid import parse_weekday
from .modes import DisplayMode
from .month import draw_month_view
from .week import draw_week_view

VIEW_REGISTRY = {
    DisplayMode.MONTHLY: draw_month_view,
    DisplayMode.WEEKLY: draw_week_view,
    DisplayMode.DAILY: draw_day_view,
}

VIEW_NAMES = {
    DisplayMode.MONTHLY.value: "Month",
    DisplayMode.WEEKLY.value: "Week",
    DisplayMode.DAILY.value: "Day",
}

DEFAULT_CALENDAR_CONFIG = {
    "mode": DisplayMode.MONTHLY.value,
    "calendars": [],
    "tz": None,
    "first_weekday": None,
    "scale": 1,
    "pad": 8,
    "width": 240,
    "height": 200,
    "show_calendar": False,
    "show_unscheduled": True,
    "include_completed": False,
}

CALENDAR_SCHEMA = {
    "mode": {"type": "enum", "label": "View", "options": [mode.value for mode in DisplayMode]},
    "tz": {"type": "string", "label": "Timezone"},
    "first_weekday": {
        "type": "enum",
        "label": "First Day of Week",
        "options": ["", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"],
    },
    "scale": {"type": "number", "label": "Scale", "min": 1, "max": 4},
    "pad": {"type": "number", "label": "Padding", "min": 0, "max": 30},
    "width": {"type": "number", "label": "Width", "min": 120, "max": 1600},
    "height": {"type": "number", "label": "Height", "min": 80, "max": 1200},
    "show_calendar": {"type": "boolean", "label": "Show Calendar Name"},
    "show_unscheduled": {"type": "boolean", "label": "List Reminders Without Due Date"},
    "include_completed": {"type": "boolean", "label": "Include Completed Reminders"},
    "calendars": {
        "type": "list",
        "label": "Calendars",
        "help": "Add one or more reminder sources. Fill only the fields that match the selected Type.",
        "itemType": "object",
        "itemFields": [
            {"key": "type", "label": "Type", "type": "enum", "options": ["ical_url", "local"]},
            {"key": "name", "label": "Name", "type": "text", "placeholder": "Label"},
            {"key": "color", "label": "Color", "type": "enum", "options": ["black", "blue", "red", "yellow", "orange", "green", "white"]},
            {"key": "url", "label": "iCal URL", "type": "text", "placeholder": "https://.../reminders.ics"},
            {"key": "path", "label": "Local .ics path", "type": "text", "placeholder": "/path/to/reminders.ics"},
        ],
    },
}

_INT_LIMITS = {
    "scale": (1, 4),
    "pad": (0, 30),
    "width": (120, 1600),
    "height": (80, 1200),
}

_FLAGS = ("show_calendar", "show_unscheduled", "include_completed")


def _coerce_int(value, default, low, high):
    try:
        value = int(value)
    except (TypeError, ValueError):
        value = default
    return max(low, min(high, value))


def normalize_calendar_config(config):
    cfg = {**DEFAULT_CALENDAR_CONFIG, **(config or {})}
    cfg["mode"] = DisplayMode.parse(cfg.get("mode"), default=DisplayMode.MONTHLY).value
    cfg["first_weekday"] = parse_weekday(cfg.get("first_weekday"))
    for key, (low, high) in _INT_LIMITS.items():
        cfg[key] = _coerce_int(cfg.get(key), DEFAULT_CALENDAR_CONFIG[key], low, high)
    for key in _FLAGS:
        cfg[key] = bool(cfg.get(key))
    calendars = cfg.get("calendars") or []
    if not isinstance(calendars, list):
        raise ValueError("calendars must be a list")
    cfg["calendars"] = calendars
    tz = (cfg.get("tz") or "").strip() or None
    if tz and get_timezone(tz) is None:
        raise ValueError(f"Unknown timezone: {tz}")
    cfg["tz"] = tz
    return cfg
