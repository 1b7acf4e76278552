"""UTC timestamp helpers.

Everything stored on a posting is timezone-aware UTC. Providers hand us a mix
of ISO-8601 strings and relative phrases ("3 days ago"); both are resolved
here against an explicit reference time so results are reproducible in tests.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

_RELATIVE_RE = re.compile(
    r"(\d+)\s*\+?\s*(minute|min|hour|hr|day|week|wk|month|mo|year|yr)s?\b", re.IGNORECASE
)

_UNIT_DELTAS = {
    "minute": timedelta(minutes=1),
    "min": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "hr": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "wk": timedelta(weeks=1),
    # Calendar months are approximated; postings older than a month are filtered anyway
    "month": timedelta(days=30),
    "mo": timedelta(days=30),
    "year": timedelta(days=365),
    "yr": timedelta(days=365),
}


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 datetime or date string into UTC.

    Accepts a trailing ``Z`` and date-only values. Returns None when the
    string is empty or not ISO-8601.

    Example:
        >>> parse_iso_datetime("2025-11-04T12:00:00Z").hour
        12
    """
    if not value or not value.strip():
        return None
    cleaned = value.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass
    try:
        return ensure_utc(datetime.strptime(cleaned[:10], "%Y-%m-%d"))
    except ValueError:
        return None


def parse_relative_date(phrase: Optional[str], now: datetime) -> Optional[datetime]:
    """Resolve phrases such as "2 days ago" or "Posted 3 weeks ago".

    Args:
        phrase: Relative phrase as scraped
        now: Reference time the phrase is relative to

    Returns:
        Absolute UTC datetime, or None if the phrase is not recognised

    Example:
        >>> ref = datetime(2025, 11, 10, tzinfo=timezone.utc)
        >>> parse_relative_date("2 days ago", ref).day
        8
    """
    if not phrase:
        return None
    now = ensure_utc(now)
    lowered = phrase.strip().lower()
    if any(marker in lowered for marker in ("just now", "just posted", "today", "moments ago")):
        return now
    if "yesterday" in lowered:
        return now - timedelta(days=1)

    match = _RELATIVE_RE.search(lowered)
    if not match:
        return None
    amount = int(match.group(1))
    unit = match.group(2).lower()
    return now - amount * _UNIT_DELTAS[unit]


def parse_posted_date(value: Optional[str], now: datetime) -> Optional[datetime]:
    """Parse either an ISO timestamp or a relative phrase."""
    return parse_iso_datetime(value) or parse_relative_date(value, now)


def format_timestamp(dt: datetime) -> str:
    """ISO-8601 UTC string with a ``Z`` suffix, second precision."""
    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_display_date(dt: datetime) -> str:
    """Short human-readable date, e.g. ``Nov 4, 2025``."""
    dt = ensure_utc(dt)
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}"
