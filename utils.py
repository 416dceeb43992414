import os
import time
from pathlib import Path
from urllib.request import Request, urlopen

from PIL import Image, ImageDraw, ImageFont

PALETTE_COLORS = [
    (0, 0, 0),        # black (index 0)
    (255, 255, 255),  # white (index 1)
    (0, 128, 0),      # green (index 2)
    (0, 0, 255),      # blue (index 3)
    (255, 0, 0),      # red (index 4)
    (255, 255, 0),    # yellow (index 5)
    (255, 165, 0),    # orange (index 6)
]
PALETTE_IMAGE = Image.new("P", (1, 1))
_palette = []
for color in PALETTE_COLORS:
    _palette.extend(color)
_palette.extend([0, 0, 0] * (256 - len(PALETTE_COLORS)))
PALETTE_IMAGE.putpalette(_palette)


class Palette:
    """Colour indices matching the Inky display constants."""

    BLACK = 0
    WHITE = 1
    GREEN = 2
    BLUE = 3
    RED = 4
    YELLOW = 5
    ORANGE = 6


_ENV_PATH = Path(__file__).resolve().parent / ".env"
_ENV_CACHE = (None, {})


def fetch_bytes(url, timeout=10, retries=3, delay=10):
    req = Request(url, headers={"User-Agent": "comfy-calendar/1.0"})
    for attempt in range(1, retries + 1):
        try:
            with urlopen(req, timeout=timeout) as response:
                data = response.read()
        except (OSError, ValueError) as exc:
            print(f"Fetch {url} failed ({attempt}/{retries}): {exc}")
        else:
            if data:
                return data
            print(f"Fetch {url} returned nothing ({attempt}/{retries})")
        if attempt < retries:
            time.sleep(delay)
    return None


def _read_env_file(path=_ENV_PATH):
    data = {}
    try:
        text = path.read_text()
    except OSError:
        return data
    for line in text.splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if sep and key and not key.startswith("#"):
            data[key] = value.strip().strip("\"'")
    return data


def get_env(key, default=None):
    """Look ``key`` up in the environment first, then in the ``.env`` file."""
    global _ENV_CACHE
    if key in os.environ:
        return os.environ[key]
    try:
        mtime = _ENV_PATH.stat().st_mtime
    except OSError:
        return default
    if _ENV_CACHE[0] != mtime:
        _ENV_CACHE = (mtime, _read_env_file(_ENV_PATH))
    return _ENV_CACHE[1].get(key, default)


def get_timezone(name):
    if not name:
        return None
    try:
        from zoneinfo import ZoneInfo
    except Exception:
        return None
    try:
        return ZoneInfo(name)
    except Exception:
        return None


def new_canvas(size, fill=Palette.WHITE):
    img = Image.new("P", size)
    img.putpalette(PALETTE_IMAGE.getpalette())
    draw = ImageDraw.Draw(img)
    draw.rectangle((0, 0, size[0] - 1, size[1] - 1), fill=fill)
    return img, draw


def load_font(name, size):
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default()


def load_fonts(scale=1):
    # Day numbers are monospaced so single and double digits line up.
    return {
        "day_month": load_font("DejaVuSansMono.ttf", 10 * scale),
        "day_week": load_font("DejaVuSansMono.ttf", 15 * scale),
        "day_day": load_font("DejaVuSansMono.ttf", 24 * scale),
        "sub": load_font("DejaVuSans.ttf", 14 * scale),
        "body": load_font("DejaVuSans.ttf", 12 * scale),
        "meta": load_font("DejaVuSans.ttf", 9 * scale),
    }


def color_value(inky, name):
    name = (name or "black").lower()
    return getattr(inky, name.upper(), inky.BLACK)


def text_color_for(bg_name, inky):
    name = (bg_name or "black").lower()
    if name in ("yellow", "white"):
        return inky.BLACK
    return inky.WHITE


def text_size(draw, text, font):
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


def line_height(draw, font):
    try:
        return sum(font.getmetrics())
    except AttributeError:
        return text_size(draw, "Ag", font)[1]


def draw_centered_text(draw, center, text, fill, font):
    cx, cy = center
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = cx - (left + right) // 2
    y = cy - (top + bottom) // 2
    draw.text((x, y), text, fill, font=font)


def truncate_text(draw, text, max_width, font, ellipsis="…"):
    if text_size(draw, text, font)[0] <= max_width:
        return text
    for end in range(len(text) - 1, 0, -1):
        candidate = text[:end].rstrip() + ellipsis
        if text_size(draw, candidate, font)[0] <= max_width:
            return candidate
    return ""


def wrap_text(draw, text, max_width, font):
    words = str(text).replace("\n", " ").split()
    if not words:
        return [""]
    lines = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if text_size(draw, candidate, font)[0] <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return [truncate_text(draw, line, max_width, font) for line in lines]


def draw_error(ctx, bbox, message, title="Error"):
    draw = ctx["draw"]
    inky = ctx["inky"]
    fonts = ctx["fonts"]
    font_title = fonts["sub"]
    font_body = fonts["body"]
    x0, y0, x1, y1 = bbox
    pad = 6
    draw.rectangle((x0, y0, x1, y1), outline=inky.BLACK, fill=inky.WHITE)
    draw.text((x0 + pad, y0 + pad), title, inky.RED, font=font_title)
    title_h = text_size(draw, "Ag", font_title)[1]
    y = y0 + pad + title_h + 4
    line_h = text_size(draw, "Ag", font_body)[1] + 2
    max_width = max(0, (x1 - x0) - (pad * 2))
    max_y = y1 - pad
    for line in wrap_text(draw, message, max_width, font_body):
        if y + line_h > max_y:
            break
        draw.text((x0 + pad, y), line, inky.BLACK, font=font_body)
        y += line_h
