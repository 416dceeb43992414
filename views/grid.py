import calendar
from datetime import date, datetime, timedelta

WEEKDAY_NAMES = {
    "monday": calendar.MONDAY,
    "tuesday": calendar.TUESDAY,
    "wednesday": calendar.WEDNESDAY,
    "thursday": calendar.THURSDAY,
    "friday": calendar.FRIDAY,
    "saturday": calendar.SATURDAY,
    "sunday": calendar.SUNDAY,
}


def parse_weekday(value):
    """Map a weekday name or 0-6 index to the ``calendar`` module constant.

    ``None`` defers to the host calendar's first weekday.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        key = value.strip().lower()
        if key in WEEKDAY_NAMES:
            return WEEKDAY_NAMES[key]
        try:
            value = int(key)
        except ValueError:
            raise ValueError(f"Unknown weekday: {value}") from None
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 6:
        raise ValueError(f"Weekday must be 0-6, got {value!r}")
    return value


def resolve_first_weekday(first_weekday):
    if first_weekday is None:
        return calendar.firstweekday()
    return first_weekday


def today(tzinfo=None):
    return datetime.now(tzinfo).date() if tzinfo else datetime.now().date()


def to_day(value, tzinfo=None):
    if isinstance(value, datetime):
        # Aware values land on the host local day when no zone is configured.
        if value.tzinfo is not None:
            value = value.astimezone(tzinfo)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def days_in_month(reference, first_weekday=None, tzinfo=None):
    """Return full weeks covering the month that contains ``reference``.

    The list starts on the first weekday of the week holding the 1st and ends
    on the last day of the week holding the month's final day. An empty list
    means the weeks could not be resolved.
    """
    first_weekday = resolve_first_weekday(first_weekday)
    try:
        day = to_day(reference, tzinfo)
        cal = calendar.Calendar(first_weekday)
        return list(cal.itermonthdates(day.year, day.month))
    except (TypeError, ValueError, OverflowError):
        return []


def days_in_current_week(now=None, first_weekday=None, tzinfo=None):
    first_weekday = resolve_first_weekday(first_weekday)
    try:
        day = to_day(now, tzinfo) if now is not None else today(tzinfo)
        start = day - timedelta(days=(day.weekday() - first_weekday) % 7)
        return [start + timedelta(days=offset) for offset in range(7)]
    except (TypeError, ValueError, OverflowError):
        return []


def weekday_labels(first_weekday=None):
    first_weekday = resolve_first_weekday(first_weekday)
    return [calendar.day_abbr[(first_weekday + idx) % 7] for idx in range(7)]
