"""
Core Utilities.

Shared utility functions used across the client.
All datetime values are timezone-naive and assumed to be UTC.
"""

from datetime import datetime, timezone


def utc_from_timestamp(timestamp: int | float) -> datetime:
    """
    Convert epoch seconds to a timezone-naive UTC datetime.

    Args:
        timestamp: Seconds since the Unix epoch

    Returns:
        UTC datetime with tzinfo stripped
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).replace(tzinfo=None)


def to_epoch_seconds(value: datetime) -> int:
    """Interpret a naive datetime as UTC and return whole epoch seconds."""
    return int(value.replace(tzinfo=timezone.utc).timestamp())
