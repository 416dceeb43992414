#!/usr/bin/env python3
import argparse
import base64
import json
import threading
from datetime import date
from io import BytesIO
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from comfy_calendar import CONFIG_PATH, OUTPUT_DIR, build_state, load_config, normalize_config
from views import CALENDAR_SCHEMA, DEFAULT_CALENDAR_CONFIG, VIEW_NAMES

_lock = threading.RLock()
_state = None
_view = None
_sample = False
_sample_default = False


def on_selection(name, value):
    if name == "selected_date":
        print(f"selected {value.isoformat()}")


def init_view(cfg=None, preview=False):
    global _state, _view, _sample
    cfg = cfg or load_config(CONFIG_PATH)
    with _lock:
        if _view is not None:
            _view.close()
        _state, _view = build_state(cfg, preview=preview)
        _sample = preview
        _view.subscribe(on_selection)
    return _view


def get_view():
    if _view is None:
        return init_view()
    return _view


def view_state(view):
    return {
        "mode": view.mode.value,
        "selected": view.selected_date.isoformat(),
        "today": view.today.isoformat(),
        "range_available": view.range_available,
        "days": [
            {
                "date": cell.day.isoformat(),
                "bbox": list(cell.bbox),
                "selected": cell.selected,
                "reminders": len(cell.reminders),
            }
            for cell in view.cells
        ],
        "unscheduled": [r.title for r in view.unscheduled],
    }


def render_png(view):
    image = view.render()
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    image.convert("RGB").save(OUTPUT_DIR / "preview.png", format="PNG")
    buffer = BytesIO()
    image.convert("RGB").save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


class CalendarHandler(SimpleHTTPRequestHandler):
    def __init__(self, *args, directory=None, **kwargs):
        super().__init__(*args, directory=str(OUTPUT_DIR), **kwargs)

    def translate_path(self, path):
        clean_path = path.split("?", 1)[0].split("#", 1)[0]
        if clean_path.startswith("/generated/"):
            rel = clean_path[len("/generated/"):]
            return str((OUTPUT_DIR / rel).resolve())
        return super().translate_path(clean_path)

    def _read_json(self):
        length = int(self.headers.get("Content-Length", "0"))
        if length <= 0:
            return None
        data = self.rfile.read(length)
        try:
            data = json.loads(data.decode("utf-8"))
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def _send_json(self, payload, status=200):
        body = json.dumps(payload).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path.startswith("/api/config"):
            return self._send_json(load_config(CONFIG_PATH))
        if self.path.startswith("/api/state"):
            with _lock:
                view = get_view()
                if view.needs_redraw:
                    view.render()
                return self._send_json(view_state(view))
        if self.path.startswith("/api/views"):
            return self._send_json({
                "defaults": DEFAULT_CALENDAR_CONFIG,
                "schema": CALENDAR_SCHEMA,
                "names": VIEW_NAMES,
            })
        if self.path.startswith("/generated/"):
            return super().do_GET()
        return self._send_json({"error": "Not found"}, status=404)

    def do_POST(self):
        if self.path.startswith("/api/config"):
            payload = self._read_json()
            if payload is None:
                return self._send_json({"error": "Invalid JSON"}, status=400)
            try:
                cfg = normalize_config(payload)
            except ValueError as exc:
                return self._send_json({"error": str(exc)}, status=400)
            try:
                CONFIG_PATH.write_text(json.dumps(cfg, indent=2))
            except OSError:
                return self._send_json({"error": "Failed to save config"}, status=500)
            init_view(cfg)
            return self._send_json({"ok": True})

        if self.path.startswith("/api/mode"):
            payload = self._read_json()
            if payload is None:
                return self._send_json({"error": "Invalid JSON"}, status=400)
            with _lock:
                view = get_view()
                try:
                    mode = view.state.set_mode(payload.get("mode"))
                except ValueError as exc:
                    return self._send_json({"error": str(exc)}, status=400)
            return self._send_json({"ok": True, "mode": mode.value})

        if self.path.startswith("/api/select"):
            payload = self._read_json()
            if payload is None:
                return self._send_json({"error": "Invalid JSON"}, status=400)
            try:
                day = date.fromisoformat(str(payload.get("date") or ""))
            except ValueError:
                return self._send_json({"error": "Invalid date"}, status=400)
            with _lock:
                view = get_view()
                view.select(day)
            return self._send_json({"ok": True, "selected": day.isoformat()})

        if self.path.startswith("/api/tap"):
            payload = self._read_json()
            if payload is None:
                return self._send_json({"error": "Invalid JSON"}, status=400)
            try:
                x = int(payload.get("x"))
                y = int(payload.get("y"))
            except (TypeError, ValueError):
                return self._send_json({"error": "x and y must be integers"}, status=400)
            with _lock:
                view = get_view()
                if view.needs_redraw:
                    view.render()
                cell = view.tap(x, y)
            if cell is None:
                return self._send_json({"ok": True, "selected": None})
            return self._send_json({"ok": True, "selected": cell.day.isoformat()})

        if self.path.startswith("/api/preview"):
            payload = self._read_json() or {}
            sample = bool(payload.get("sample", _sample_default))
            if sample != _sample:
                init_view(preview=sample)
            with _lock:
                encoded = render_png(get_view())
            return self._send_json({
                "ok": True,
                "image": "/generated/preview.png",
                "image_data": f"data:image/png;base64,{encoded}",
            })

        return self._send_json({"error": "Not found"}, status=404)


def main():
    parser = argparse.ArgumentParser(description="Comfy Calendar preview server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--preview", action="store_true", help="Serve sample reminders")
    args = parser.parse_args()

    global _sample_default
    _sample_default = args.preview
    init_view(preview=args.preview)
    server = ThreadingHTTPServer((args.host, args.port), CalendarHandler)
    print(f"Serving on http://{args.host}:{args.port}")
    server.serve_forever()


if __name__ == "__main__":
    main()
