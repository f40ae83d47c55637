# utils/time_utils.py
from datetime import datetime, timezone, date
from email.utils import format_datetime


def utcnow():
    return datetime.now(timezone.utc)


def today_iso() -> str:
    return utcnow().date().isoformat()


def parse_published_at(value: str) -> datetime:
    """
    "2024-06-03" / "2024-06-03T10:00:00" / "...Z" -> aware UTC datetime.
    Date-only values are taken as midnight UTC.
    """
    s = (value or "").strip()
    if "T" not in s and " " not in s:
        s = f"{s}T00:00:00"
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso_string(value) -> str:
    # yaml.safe_load turns bare dates into date/datetime objects
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def rfc822(value: str) -> str:
    return format_datetime(parse_published_at(value), usegmt=True)


def format_date(value: str, include_relative: bool = False, now=None) -> str:
    target = parse_published_at(value)
    now = now or utcnow()

    years_ago = now.year - target.year
    months_ago = now.month - target.month
    days_ago = now.day - target.day

    if years_ago > 0:
        relative = f"{years_ago}y ago"
    elif months_ago > 0:
        relative = f"{months_ago}mo ago"
    elif days_ago > 0:
        relative = f"{days_ago}d ago"
    else:
        relative = "Today"

    full = f"{target.strftime('%B')} {target.day}, {target.year}"
    if not include_relative:
        return full
    return f"{full} ({relative})"
