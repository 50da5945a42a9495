"""Time utilities for UTC timestamp handling."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc_z(dt: datetime) -> str:
    """
    Convert datetime to ISO 8601 UTC string with Z suffix.

    Args:
        dt: Datetime object (must be timezone-aware)

    Returns:
        ISO 8601 UTC timestamp ending with 'Z' (e.g., '2025-12-23T00:27:07.804867Z')

    Raises:
        ValueError: If datetime is naive (not timezone-aware)
    """
    if dt.tzinfo is None:
        raise ValueError(
            f"Naive datetime not allowed. Got {dt}. "
            "Use datetime.now(timezone.utc) or dt.replace(tzinfo=timezone.utc)"
        )

    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.isoformat().replace("+00:00", "Z")


def format_round_trip(dt: datetime) -> str:
    """
    Render a datetime in a round-trippable ISO 8601 form.

    Aware values are normalized to UTC with a 'Z' suffix; naive values are
    rendered as-is, without an offset.
    """
    if dt.tzinfo is None:
        return dt.isoformat()
    return to_utc_z(dt)


def assume_utc(dt: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values are returned unchanged."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
