import dataclasses
from datetime import datetime

PRIORITIES = ("high", "medium", "low")
DEFAULT_PRIORITY = "medium"
UNCATEGORIZED = "uncategorized"


@dataclasses.dataclass(frozen=True)
class Task:
    id: str
    title: str
    priority: str = DEFAULT_PRIORITY
    categories: tuple[str, ...] = ()
    completed: bool = False
    created_at: datetime | None = None
    completed_at: datetime | None = None
    due_date: datetime | None = None
    started_at: datetime | None = None
    description: str | None = None
    postpone_count: int = 0
    reopen_count: int = 0


@dataclasses.dataclass(frozen=True)
class Thresholds:
    reopen_threshold: int = 2
    stale_days: int = 7
    never_started_days: int = 3
    frequent_postpone: int = 3
    severe_overdue_days: int = 7
    list_limit: int = 10
    streak_days: int = 30
    weeks: int = 4


@dataclasses.dataclass(frozen=True)
class TaskRef:
    """Short reference to a task inside a metric list."""

    id: str
    title: str
    priority: str
    value: float
