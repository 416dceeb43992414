import argparse
import json
from datetime import datetime, time, timedelta
from pathlib import Path

from reminders import fetch_reminders, sample_reminders
from utils import get_env
from views import DEFAULT_CALENDAR_CONFIG, DisplayMode, normalize_calendar_config
from views.calendar_view import CalendarView
from views.grid import days_in_current_week, days_in_month
from views.state import CalendarState

CONFIG_VERSION = 1

BASE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = BASE_DIR / "config.json"
OUTPUT_DIR = BASE_DIR / ".generated"


def default_config():
    return {"version": CONFIG_VERSION, **DEFAULT_CALENDAR_CONFIG}


def normalize_config(cfg):
    cfg = dict(cfg or {})
    version = cfg.pop("version", CONFIG_VERSION)
    try:
        version = int(version)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid config version: {version!r}") from None
    if version > CONFIG_VERSION:
        raise ValueError(f"Config version {version} is newer than supported ({CONFIG_VERSION})")
    if not cfg.get("tz"):
        cfg["tz"] = get_env("COMFY_CALENDAR_TZ")
    if not cfg.get("calendars"):
        source = get_env("COMFY_CALENDAR_ICS")
        if source:
            kind = "ical_url" if "://" in source else "local"
            cfg["calendars"] = [{"type": kind, "name": "Reminders", "url": source, "path": source}]
    return {"version": CONFIG_VERSION, **normalize_calendar_config(cfg)}


def load_config(path=CONFIG_PATH):
    path = Path(path)
    if not path.exists():
        return normalize_config(default_config())
    try:
        raw = json.loads(path.read_text())
    except (OSError, ValueError) as exc:
        print(f"warning: could not read {path}: {exc}; using defaults")
        return normalize_config(default_config())
    return normalize_config(raw)


def reminder_window(today, modes=None, first_weekday=None, tzinfo=None):
    """Datetime span covering every day the given modes can show.

    ``modes`` defaults to all of them so a later mode switch needs no reload.
    """
    days = [today]
    for mode in modes or list(DisplayMode):
        mode = DisplayMode.parse(mode)
        if mode == DisplayMode.MONTHLY:
            days.extend(days_in_month(today, first_weekday))
        elif mode == DisplayMode.WEEKLY:
            days.extend(days_in_current_week(today, first_weekday))
    start_dt = datetime.combine(min(days), time.min, tzinfo)
    end_dt = datetime.combine(max(days), time.min, tzinfo) + timedelta(days=1)
    return start_dt, end_dt


def build_state(cfg, view_clock=None, preview=False):
    mode = DisplayMode.parse(cfg.get("mode"), default=DisplayMode.MONTHLY)
    state = CalendarState(calendars=cfg.get("calendars"), mode=mode)
    view = CalendarView(state, cfg, clock=view_clock)
    if preview:
        state.reminders = sample_reminders(view.today, view.tzinfo)
    else:
        start_dt, end_dt = reminder_window(view.today, first_weekday=view.first_weekday, tzinfo=view.tzinfo)
        state.reminders = fetch_reminders(
            cfg.get("calendars"),
            view.tzinfo,
            start_dt,
            end_dt,
            include_completed=cfg.get("include_completed", False),
        )
    return state, view


def get_display():
    from inky.auto import auto

    return auto()


def render_calendar(cfg=None, view=None, output_path=None, upload=False, preview=False):
    cfg = normalize_config(cfg or default_config())
    if view is None:
        _state, view = build_state(cfg, preview=preview)
    display = None
    size = None
    if upload:
        display = get_display()
        size = display.resolution
        view.inky = display
    img = view.render(size)

    if output_path:
        try:
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            img.convert("RGB").save(output_path, format="PNG")
        except OSError as exc:
            print(f"warning: could not save {output_path}: {exc}")

    if display is not None:
        display.set_image(img)
        display.show()

    return img


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render the reminder calendar")
    parser.add_argument("--config", default=str(CONFIG_PATH))
    parser.add_argument("--mode", choices=[mode.value for mode in DisplayMode])
    parser.add_argument("--output", default=str(OUTPUT_DIR / "calendar.png"))
    parser.add_argument("--upload", action="store_true", help="Show the result on an attached Inky display")
    parser.add_argument("--preview", action="store_true", help="Use sample reminders instead of the configured calendars")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    if args.mode:
        cfg["mode"] = args.mode
    if not cfg.get("calendars") and not args.preview:
        print("warning: no calendars configured, rendering an empty calendar")
    render_calendar(cfg, output_path=args.output, upload=args.upload, preview=args.preview)
    print(f"saved {args.output}")


if __name__ == "__main__":
    main()
