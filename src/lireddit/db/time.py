"""Time utilities for database models.

Post timestamps double as feed cursors, which clients receive as epoch
milliseconds. Values are therefore truncated to whole milliseconds before they
are stored so a cursor always compares equal to the row it came from.
"""

from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime, truncated to milliseconds."""
    now = datetime.now(UTC)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_epoch_ms(value: datetime) -> int:
    """Convert a datetime to integer milliseconds since the Unix epoch.

    Naive values (SQLite drops offsets) are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return (value - EPOCH) // _ONE_MS


def from_epoch_ms(value: int) -> datetime:
    """Inverse of :func:`to_epoch_ms`."""
    return EPOCH + timedelta(milliseconds=value)
