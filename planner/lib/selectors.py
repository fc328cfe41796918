from datetime import datetime

from planner.core.models import UNCATEGORIZED, Task

from .numbers import hours_between

__all__ = [
    "age_days",
    "completion_hours",
    "completions_in_order",
    "days_overdue",
    "is_done",
    "is_late",
    "is_missed",
    "is_overdue",
    "primary_category",
]


def is_done(t: Task) -> bool:
    """Completed with a usable completion timestamp."""
    return t.completed and t.completed_at is not None


def is_overdue(t: Task, now: datetime) -> bool:
    return not t.completed and t.due_date is not None and t.due_date < now


def days_overdue(t: Task, now: datetime) -> float:
    if t.due_date is None or not is_overdue(t, now):
        return 0.0
    return (now - t.due_date).total_seconds() / 86400


def is_late(t: Task) -> bool:
    """Completed after its due date."""
    return (
        is_done(t)
        and t.due_date is not None
        and t.completed_at is not None
        and t.completed_at > t.due_date
    )


def is_missed(t: Task, now: datetime) -> bool:
    return is_late(t) or is_overdue(t, now)


def completion_hours(t: Task) -> float | None:
    """Hours from creation to completion; None when either side is unusable."""
    if not t.completed:
        return None
    hours = hours_between(t.created_at, t.completed_at)
    if hours is None or hours < 0:
        return None
    return hours


def primary_category(t: Task) -> str:
    return t.categories[0] if t.categories else UNCATEGORIZED


def completions_in_order(tasks: list[Task]) -> list[Task]:
    """Completed tasks by completion time; input order breaks ties."""
    done = [(t.completed_at, i, t) for i, t in enumerate(tasks) if is_done(t)]
    done.sort(key=lambda item: (item[0], item[1]))
    return [t for _, _, t in done]


def age_days(t: Task, now: datetime) -> float | None:
    if t.created_at is None:
        return None
    return (now - t.created_at).total_seconds() / 86400
