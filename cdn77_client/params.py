"""
Parameter Normalization.

Network-free parsing of raw CLI strings into request values. Every function
here raises InvalidInputError on bad input, so a command aborts before any
request is built.
"""

import re
from dataclasses import dataclass
from datetime import datetime

from cdn77_client.core.exceptions import InvalidInputError
from cdn77_client.core.utils import to_epoch_seconds

DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"
"""Accepted date/time format, interpreted as UTC."""

MAX_RESOURCE_ID = 2**64 - 1

_DATE_TIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", re.ASCII)
_DECIMAL_PATTERN = re.compile(r"\d+", re.ASCII)
_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*", re.ASCII)


def split_list(raw: str) -> list[str]:
    """Split a comma separated list, trimming whitespace and dropping empty segments."""
    return [segment.strip() for segment in raw.split(",") if segment.strip()]


def parse_resource_id(raw: str) -> int:
    """
    Parse a CDN resource ID.

    Resource IDs are unsigned 64-bit integers written in decimal.

    Raises:
        InvalidInputError: If the value is not a valid resource ID
    """
    value = raw.strip()
    if not _DECIMAL_PATTERN.fullmatch(value) or int(value) > MAX_RESOURCE_ID:
        raise InvalidInputError(f"Please provide a valid resource ID, got '{raw}'")
    return int(value)


def parse_resource_ids(raw: str) -> list[int]:
    """Parse a comma separated list of resource IDs, keeping their order."""
    return [parse_resource_id(segment) for segment in split_list(raw)]


def parse_resource_ids_optional(raw: str | None) -> list[int] | None:
    """Parse an optional resource ID filter. Absent or empty input means no filter."""
    if raw is None:
        return None
    return parse_resource_ids(raw) or None


def parse_location_ids(raw: str | None) -> list[str] | None:
    """Parse an optional data center location filter. IDs are kept as strings."""
    if raw is None:
        return None
    return split_list(raw) or None


def parse_identifier(raw: str, name: str) -> str:
    """
    Parse an ID that is sent as a single URL path segment, such as a job or
    storage location ID.

    Only ASCII letters, digits, "_", "." and "-" are accepted, starting with a
    letter or digit, so the value can never change the endpoint it is sent to.

    Raises:
        InvalidInputError: If the value is empty or contains other characters
    """
    value = raw.strip()
    if not value:
        raise InvalidInputError(f"Please provide a {name}")
    if not _IDENTIFIER_PATTERN.fullmatch(value):
        raise InvalidInputError(f"Please provide a valid {name}, got '{raw}'")
    return value


def parse_paths(raw: str) -> list[str]:
    """
    Parse the paths of a purge or prefetch job.

    Raises:
        InvalidInputError: If no path remains after splitting
    """
    paths = split_list(raw)
    if not paths:
        raise InvalidInputError("Please provide at least one path")
    return paths


def parse_date_time(raw: str, error_message: str) -> datetime:
    """
    Parse a 'YYYY-MM-DD hh:mm' string into a naive UTC datetime.

    The value must match the format exactly; surrounding whitespace is not stripped.

    Args:
        raw: Value given on the command line
        error_message: Message reported when the value is rejected

    Raises:
        InvalidInputError: If the value does not match the format or is not a real date
    """
    if not _DATE_TIME_PATTERN.fullmatch(raw):
        raise InvalidInputError(f"{error_message}: '{raw}' (expected YYYY-MM-DD hh:mm)")
    try:
        return datetime.strptime(raw, DATE_TIME_FORMAT)
    except ValueError as e:
        raise InvalidInputError(f"{error_message}: '{raw}' ({e})") from e


@dataclass(frozen=True)
class TimeRange:
    """Statistics query window, both bounds UTC."""

    start: datetime
    end: datetime

    @property
    def start_timestamp(self) -> int:
        return to_epoch_seconds(self.start)

    @property
    def end_timestamp(self) -> int:
        return to_epoch_seconds(self.end)


def parse_time_range(start: str, end: str) -> TimeRange:
    """Parse both bounds of a statistics query window."""
    return TimeRange(
        start=parse_date_time(start, "Start date/time is not in a correct format"),
        end=parse_date_time(end, "End date/time is not in a correct format"),
    )
