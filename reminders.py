from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
import os
import time as time_mod
from typing import List, Optional, Union

from icalendar import Calendar
import recurring_ical_events

from utils import fetch_bytes

DueValue = Union[date, datetime]

DEFAULT_COLORS = ["blue", "red", "green", "orange", "yellow", "black"]

_CAL_CACHE = {}
_CAL_CACHE_TTL = 300


@dataclass(frozen=True)
class ReminderItem:
    title: str
    due: Optional[DueValue] = None
    calendar: Optional[str] = None
    color: Optional[str] = None
    completed: bool = False
    uid: Optional[str] = None


@dataclass(frozen=True)
class CalendarInfo:
    name: str
    color: Optional[str] = None
    type: str = "local"
    url: Optional[str] = None
    path: Optional[str] = None


def calendars_from_config(items):
    calendars = []
    for idx, item in enumerate(items or []):
        if isinstance(item, CalendarInfo):
            calendars.append(item)
            continue
        if isinstance(item, str):
            item = {"type": "ical_url", "url": item}
        if not isinstance(item, dict):
            continue
        color = (item.get("color") or "").lower() or DEFAULT_COLORS[idx % len(DEFAULT_COLORS)]
        calendars.append(
            CalendarInfo(
                name=item.get("name") or "",
                color=color,
                type=(item.get("type") or "local").lower(),
                url=item.get("url"),
                path=item.get("path"),
            )
        )
    return calendars


def normalize_due(value, tzinfo):
    if isinstance(value, datetime):
        if value.tzinfo is None and tzinfo:
            return value.replace(tzinfo=tzinfo)
        if tzinfo:
            return value.astimezone(tzinfo)
        return value
    if isinstance(value, date):
        return value
    return None


def _is_completed(todo):
    status = str(todo.get("status") or "").upper()
    return status == "COMPLETED" or todo.get("completed") is not None


def _reminder_from_todo(todo, tzinfo, cal_name, color):
    due = todo.get("due")
    return ReminderItem(
        title=str(todo.get("summary") or "Untitled"),
        due=normalize_due(due.dt, tzinfo) if due is not None else None,
        calendar=cal_name,
        color=color,
        completed=_is_completed(todo),
        uid=str(todo.get("uid")) if todo.get("uid") else None,
    )


def parse_ical_reminders(ical_text, tzinfo, start_dt, end_dt, cal_name=None, color=None,
                         include_completed=False):
    """Read VTODO components from an iCalendar document.

    One-off todos are returned whether or not they fall inside the window so
    that undated items still reach the caller. Recurring todos are expanded
    over ``start_dt``..``end_dt``.
    """
    cal = Calendar.from_ical(ical_text)
    series = Calendar()
    reminders = []
    for todo in cal.walk("VTODO"):
        if todo.get("rrule") is not None:
            series.add_component(todo)
            continue
        reminders.append(_reminder_from_todo(todo, tzinfo, cal_name, color))
    if series.subcomponents:
        for todo in recurring_ical_events.of(series, components=["VTODO"]).between(start_dt, end_dt):
            reminders.append(_reminder_from_todo(todo, tzinfo, cal_name, color))
    if not include_completed:
        reminders = [r for r in reminders if not r.completed]
    return reminders


def _read_source(cal):
    if cal.type == "ical_url":
        url = cal.url
        if not url:
            return None
        if url.startswith("webcal://"):
            url = "https://" + url[len("webcal://"):]
        cache_key = f"url:{url}"
        cached = _CAL_CACHE.get(cache_key)
        if cached and time_mod.time() - cached["ts"] < _CAL_CACHE_TTL:
            return cached["data"]
        data = fetch_bytes(url, retries=2, delay=2)
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="ignore")
        _CAL_CACHE[cache_key] = {"ts": time_mod.time(), "data": data}
        return data
    if cal.type == "local":
        path = cal.path
        if not path:
            return None
        try:
            mtime = os.path.getmtime(path)
        except OSError:
            return None
        cache_key = f"file:{path}"
        cached = _CAL_CACHE.get(cache_key)
        if cached and cached.get("mtime") == mtime:
            return cached["data"]
        with open(path, "rb") as handle:
            data = handle.read().decode("utf-8", errors="ignore")
        _CAL_CACHE[cache_key] = {"ts": time_mod.time(), "data": data, "mtime": mtime}
        return data
    return None


def fetch_reminders(calendars, tzinfo, start_dt, end_dt, include_completed=False) -> List[ReminderItem]:
    reminders = []
    for cal in calendars_from_config(calendars):
        try:
            ical_text = _read_source(cal)
        except OSError as exc:
            print(f"warning: could not read calendar {cal.name or cal.path}: {exc}")
            continue
        if not ical_text:
            continue
        try:
            reminders.extend(
                parse_ical_reminders(
                    ical_text,
                    tzinfo,
                    start_dt,
                    end_dt,
                    cal_name=cal.name,
                    color=cal.color,
                    include_completed=include_completed,
                )
            )
        except ValueError as exc:
            print(f"warning: skipping calendar {cal.name or cal.url or cal.path}: {exc}")
    return reminders


def sample_reminders(today, tzinfo=None):
    base = datetime.combine(today, time(9, 0), tzinfo)
    return [
        ReminderItem(title="Water the plants", due=base, calendar="Home", color="green"),
        ReminderItem(title="Submit report", due=base + timedelta(hours=8), calendar="Work", color="blue"),
        ReminderItem(title="Call the dentist", due=today + timedelta(days=2), calendar="Personal", color="red"),
        ReminderItem(title="Pay rent", due=base + timedelta(days=9), calendar="Home", color="green"),
        ReminderItem(title="Read a book", calendar="Personal", color="red"),
    ]
