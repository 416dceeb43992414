from enum import Enum


class DisplayMode(Enum):
    MONTHLY = "month"
    WEEKLY = "week"
    DAILY = "day"

    @classmethod
    def parse(cls, value, default=None):
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for mode in cls:
            if key in (mode.value, mode.name.lower()):
                return mode
        if default is not None:
            return default
        raise ValueError(f"Unknown display mode: {value!r}")
