"""
Time helpers shared by the engine.

All engine arithmetic happens on timezone-aware UTC datetimes truncated to
millisecond precision, which is the resolution timestamps have on the wire.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

ONE_DAY = timedelta(days=1)
SECONDS_PER_DAY = 86400.0


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and drop sub-millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    else:
        value = value.astimezone(UTC)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utc_now() -> datetime:
    return ensure_utc(datetime.now(UTC))


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now`` normalized to UTC, or the current time if not given."""
    if now is None:
        return utc_now()
    return ensure_utc(now)


def to_epoch_ms(value: datetime) -> int:
    return int(round(ensure_utc(value).timestamp() * 1000))


def days_between(start: datetime, end: datetime) -> float:
    """Elapsed days from ``start`` to ``end`` (negative if ``end`` is earlier)."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / SECONDS_PER_DAY
