"""UTC datetime utilities."""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def age_of(moment: datetime | None, now: datetime) -> timedelta:
    """Elapsed time since `moment`. A missing moment counts from the Unix epoch."""
    if moment is None:
        moment = EPOCH
    return now - moment
