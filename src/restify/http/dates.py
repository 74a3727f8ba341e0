"""RFC 5322 date handling for cookie and response headers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime, parsedate_to_datetime

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_rfc5322(value: str | None) -> datetime | None:
    """Parse an RFC 5322 date, returning None for anything unparseable.

    Servers send all kinds of broken dates, so failures are never raised.
    Dates without zone information are taken as UTC.
    """
    if not value or not value.strip():
        return None
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError, IndexError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_rfc5322(value: datetime) -> str:
    """Format a datetime as an RFC 5322 date in GMT, e.g. ``Wed, 21 Oct 2015 07:28:00 GMT``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def to_epoch_millis(value: datetime) -> int:
    """Return the epoch milliseconds of ``value``; naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - _EPOCH) // timedelta(milliseconds=1)
