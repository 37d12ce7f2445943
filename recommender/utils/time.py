"""
Time helpers: timestamp coercion and coarse "time ago" strings.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Numbers above this are treated as epoch milliseconds rather than seconds
_MILLIS_THRESHOLD = 1e11


def _aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Coerce a stored timestamp to an aware UTC datetime.

    Accepts datetime (Firestore returns DatetimeWithNanoseconds, a subclass),
    ISO-8601 strings, epoch seconds or milliseconds, and
    {"seconds"/"_seconds", "nanoseconds"} maps. Returns None for anything else.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _aware(value)
    if isinstance(value, (int, float)):
        seconds = value / 1000.0 if abs(value) > _MILLIS_THRESHOLD else float(value)
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return _aware(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None
    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if not isinstance(seconds, (int, float)) or isinstance(seconds, bool):
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(
                microseconds=int(nanos) // 1000
            )
        except (OverflowError, OSError, ValueError, TypeError):
            return None
    return None


def time_ago(when: datetime, now: Optional[datetime] = None) -> str:
    """
    Coarse relative time: "<N> minutes ago" under an hour, "<N> hours ago"
    under a day, otherwise "<N> days ago". N is floored, never rounded.
    """
    now = _aware(now) if now is not None else datetime.now(timezone.utc)
    delta = now - _aware(when)
    minutes = delta // timedelta(minutes=1)
    hours = delta // timedelta(hours=1)
    days = delta // timedelta(days=1)
    if minutes < 60:
        return f"{minutes} minutes ago"
    if hours < 24:
        return f"{hours} hours ago"
    return f"{days} days ago"
