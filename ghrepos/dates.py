"""Timestamp utilities."""

from __future__ import annotations

from datetime import UTC, datetime

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
TIMESTAMP_FORMAT_FRACTION = "%Y-%m-%dT%H:%M:%S.%fZ"


def parse_timestamp(value: str | int | float) -> datetime:
    """Parse a timestamp as returned by the GitHub API.

    Accepts ISO-8601 strings (``2013-02-27T19:35:32Z``) and Unix epoch
    seconds, which some endpoints use instead. The result is always
    timezone-aware UTC.

    Raises:
        ValueError: If the value is not a valid or representable timestamp.
        TypeError: If the value is neither a string nor a number.
    """
    if isinstance(value, bool):
        raise TypeError("timestamp cannot be a boolean")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, UTC)
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp out of range: {value}") from e
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string or number, got {type(value).__name__}")

    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Format a datetime the way the GitHub API writes it, in UTC.

    Fractional seconds are written only when present.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    if value.microsecond:
        return value.strftime(TIMESTAMP_FORMAT_FRACTION)
    return value.strftime(TIMESTAMP_FORMAT)
