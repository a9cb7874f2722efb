from pathlib import Path
from fastapi.templating import Jinja2Templates

from models.jobs import COMMON_STATUSES

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def format_date(value):
    if not value:
        return ""
    return f"{value:%b} {value.day}, {value.year}"   # Jan 2, 2006


def format_datetime(value):
    if not value:
        return ""
    hour = value.hour % 12 or 12
    return f"{format_date(value)} at {hour}:{value:%M %p}"


def status_class(value):
    """CSS class for a status badge, e.g. "Phone Screen" -> "status-phone-screen"."""
    return "status-" + (value or "").strip().lower().replace(" ", "-")


def http_url(value):
    """Return `value` only when it is an http(s) URL, so it is safe in an href."""
    url = (value or "").strip()
    if url.lower().startswith(("http://", "https://")):
        return url
    return None


templates.env.filters["format_date"] = format_date
templates.env.filters["format_datetime"] = format_datetime
templates.env.filters["status_class"] = status_class
templates.env.filters["http_url"] = http_url
templates.env.globals["statuses"] = COMMON_STATUSES
