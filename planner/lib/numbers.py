from collections.abc import Iterable
from datetime import datetime

__all__ = ["hours_between", "mean", "pct", "round1"]


def round1(value: float) -> float:
    return round(value, 1)


def pct(part: int | float, whole: int | float) -> float:
    """part/whole as a 0-100 percentage, 0 when there is nothing to divide by."""
    if not whole:
        return 0.0
    return part / whole * 100


def mean(values: Iterable[float]) -> float:
    items = list(values)
    return sum(items) / len(items) if items else 0.0


def hours_between(start: datetime | None, end: datetime | None) -> float | None:
    if start is None or end is None:
        return None
    return (end - start).total_seconds() / 3600
