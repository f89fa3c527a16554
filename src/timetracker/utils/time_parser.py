"""Timestamp parsing and formatting utilities."""

from datetime import datetime
from dateutil import parser as date_parser
from dateutil import tz

from timetracker.domain.errors import TimeParseError, invalid_timestamp

DATETIME_FORMAT = "%Y-%m-%d %H:%M"


def local_now() -> datetime:
    """Return the current time as an aware datetime in the local zone."""
    return datetime.now(tz.tzlocal())


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to the local zone."""
    return value.astimezone(tz.tzlocal())


def parse_timestamp(value: str, fmt: str = DATETIME_FORMAT) -> datetime:
    """Parse a user supplied timestamp in local time.

    Args:
        value: Timestamp string, e.g. "2024-01-15 09:30"
        fmt: strptime format the string must match exactly

    Returns:
        Aware datetime in the local zone

    Raises:
        TimeParseError: If the string does not match the format
    """
    try:
        naive = datetime.strptime(value.strip(), fmt)
    except (ValueError, TypeError, AttributeError):
        raise TimeParseError(invalid_timestamp(str(value), fmt))
    return naive.replace(tzinfo=tz.tzlocal())


def format_timestamp(value: datetime, fmt: str = DATETIME_FORMAT) -> str:
    """Render a timestamp for display in local time."""
    return to_local(value).strftime(fmt)


def serialize_timestamp(value: datetime) -> str:
    """Serialize a zoned timestamp for storage (ISO 8601 with offset)."""
    return value.isoformat()


def deserialize_timestamp(value: str) -> datetime:
    """Parse a stored ISO 8601 timestamp.

    Fractions longer than microseconds (as written by older versions) are
    truncated. Naive values are interpreted as local time.

    Raises:
        ValueError: If the string is not ISO 8601
    """
    if not isinstance(value, str):
        raise ValueError(f"Expected timestamp string, got {type(value).__name__}")
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.tzlocal())
    return parsed
