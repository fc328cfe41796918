from datetime import UTC, date, datetime

__all__ = ["now", "today"]


def now() -> datetime:
    """Current instant as naive UTC, the representation every metric works in."""
    return datetime.now(UTC).replace(tzinfo=None)


def today() -> date:
    return now().date()
