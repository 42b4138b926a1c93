"""Calendar helpers: business-timezone 'today' and date coercion."""
from datetime import datetime, date, timezone

import pytz

from .constants import DEFAULT_TIMEZONE


def local_today(tz_name: str = DEFAULT_TIMEZONE) -> date:
    """
    Today's calendar date in the business timezone.
    The rental day boundary follows the shop's wall clock, not the server's.
    """
    tz = pytz.timezone(tz_name)
    return datetime.now(timezone.utc).astimezone(tz).date()


def as_date(x) -> date:
    """Coerce any date-like to a naive date (supports 'YYYY-MM-DD' or ISO with T)."""
    if isinstance(x, date) and not isinstance(x, datetime):
        return x
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, str):
        base = x.split("T", 1)[0].strip()
        return date.fromisoformat(base)
    raise ValueError(f"Unsupported date: {x!r}")


def whole_days_late(expected: date, actual: date) -> int:
    """Whole calendar days from expected to actual; 0 when not late."""
    delta = (as_date(actual) - as_date(expected)).days
    return delta if delta > 0 else 0


def valid_timezone(tz_name: str) -> bool:
    try:
        pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return False
    return True
