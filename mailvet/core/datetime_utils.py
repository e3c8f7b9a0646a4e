"""Centralized datetime utilities for consistent timezone handling.

Validation results carry aware UTC timestamps so they serialize to
unambiguous ISO-8601 strings.

Usage:
    from mailvet.core.datetime_utils import utc_now

    result = result.model_copy(update={"timestamp": utc_now()})
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(UTC)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to aware UTC.

    Args:
        dt: Datetime to convert (naive values are assumed to be UTC)

    Returns:
        Aware UTC datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
