"""Datetime utilities."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def parse_datetime(value) -> datetime:
    """
    Parse datetime from ISO string or datetime, normalized to UTC.

    None becomes the current time; naive values are taken as UTC.
    """
    if value is None:
        return utcnow()
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif not isinstance(value, datetime):
        raise ValueError(f"Unsupported datetime value: {value!r}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
