from datetime import date

from .grid import to_day

# Bucket for reminders without a due date.
UNSCHEDULED = date.min


def day_key(reminder, tzinfo=None):
    due = getattr(reminder, "due", None)
    if due is None:
        return UNSCHEDULED
    return to_day(due, tzinfo)


def group_reminders(reminders, tzinfo=None):
    grouped = {}
    for reminder in reminders or []:
        grouped.setdefault(day_key(reminder, tzinfo), []).append(reminder)
    return grouped
