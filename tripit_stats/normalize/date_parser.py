"""Naive local-date parsing and interval arithmetic for TripIt exports."""

import re
from datetime import date, datetime, time, timedelta
from typing import Any, List, Optional

from dateutil import parser as dateutil_parser

EPOCH = datetime(1970, 1, 1)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?")


def parse_date(raw: Any) -> Optional[date]:
    """Parse an ISO date string, returning a date or None.

    Handles:
      - YYYY-MM-DD (the TripIt format)
      - full ISO 8601 timestamps ("2024-03-01T10:00:00") via dateutil
    Anything else, including impossible calendar dates, yields None.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not raw or not isinstance(raw, str):
        return None

    raw = raw.strip()

    # 1. YYYY-MM-DD
    m = _ISO_DATE_RE.match(raw)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return None

    # 2. dateutil's strict ISO parser as fallback
    try:
        return dateutil_parser.isoparse(raw).date()
    except (ValueError, OverflowError):
        return None


def parse_time(raw: Any) -> Optional[time]:
    """Parse "HH:MM" or "HH:MM:SS" into a time, or None."""
    if not raw or not isinstance(raw, str):
        return None
    m = _TIME_RE.match(raw.strip())
    if not m:
        return None
    try:
        return time(int(m.group(1)), int(m.group(2)), int(m.group(3) or 0))
    except ValueError:
        return None


def compose_instant(raw_date: Any, raw_time: Any = None) -> datetime:
    """Combine a date and optional time into one sortable instant.

    Missing or invalid dates collapse to the epoch so partial data still sorts.
    """
    d = parse_date(raw_date)
    if d is None:
        return EPOCH
    return datetime.combine(d, parse_time(raw_time) or time(0, 0))


def inclusive_days(start: Any, end: Any) -> int:
    """Number of calendar days from start to end, both included. 0 if unusable."""
    start_d = parse_date(start)
    end_d = parse_date(end)
    if start_d is None or end_d is None or end_d < start_d:
        return 0
    return (end_d - start_d).days + 1


def each_day(start: date, end: date) -> List[date]:
    """Every date in [start, end].

    Raises ValueError when end precedes start.
    """
    if end < start:
        raise ValueError(f"Invalid interval: {start.isoformat()} → {end.isoformat()}")
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
