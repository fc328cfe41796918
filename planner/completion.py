from dataclasses import dataclass
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

from .core.errors import ValidationError
from .core.models import Task
from .lib.numbers import mean, pct, round1
from .lib.selectors import completion_hours, is_done, is_overdue

__all__ = ["PERIODS", "CompletionMetrics", "DayCount", "completion_metrics", "period_start"]

PERIODS: dict[str, relativedelta] = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(weeks=1),
    "monthly": relativedelta(months=1),
}


@dataclass(frozen=True)
class DayCount:
    date: date
    created: int
    completed: int


@dataclass(frozen=True)
class CompletionMetrics:
    period: str
    tasks_created: int
    tasks_completed: int
    total_tasks: int
    total_completed: int
    total_overdue: int
    completion_rate: float
    overdue_percentage: float
    avg_completion_time_hours: float
    min_completion_time_hours: float
    max_completion_time_hours: float
    daily_breakdown: list[DayCount]
    interpretation: str


def period_start(now: datetime, period: str) -> datetime:
    try:
        return now - PERIODS[period]
    except KeyError:
        raise ValidationError(
            f"unknown period '{period}' (use {', '.join(PERIODS)})"
        ) from None


def _in_window(ts: datetime | None, start: datetime, end: datetime) -> bool:
    return ts is not None and start <= ts <= end


def _daily_breakdown(tasks: list[Task], start: datetime, now: datetime) -> list[DayCount]:
    created: dict[date, int] = {}
    completed: dict[date, int] = {}
    for t in tasks:
        if _in_window(t.created_at, start, now) and t.created_at is not None:
            day = t.created_at.date()
            created[day] = created.get(day, 0) + 1
        if is_done(t) and _in_window(t.completed_at, start, now) and t.completed_at is not None:
            day = t.completed_at.date()
            completed[day] = completed.get(day, 0) + 1

    days: list[DayCount] = []
    day = start.date()
    while day <= now.date():
        days.append(DayCount(date=day, created=created.get(day, 0), completed=completed.get(day, 0)))
        day += timedelta(days=1)
    return days


def _interpret(completion_rate: float, overdue_percentage: float, created: int, completed: int) -> str:
    parts = []
    if completion_rate >= 80:
        parts.append(
            f"Strong completion rate of {completion_rate:.1f}% indicates effective task execution."
        )
    elif completion_rate >= 50:
        parts.append(f"Completion rate of {completion_rate:.1f}% shows moderate task throughput.")
    else:
        parts.append(
            f"Low completion rate of {completion_rate:.1f}% suggests task overload or scope issues."
        )

    if overdue_percentage > 30:
        parts.append(
            f"High overdue rate ({overdue_percentage:.1f}%) indicates deadline management issues."
        )

    if created > completed * 2:
        parts.append(
            f"Creating tasks faster than completing them ({created} created vs {completed} completed)."
        )
    return " ".join(parts)


def completion_metrics(tasks: list[Task], now: datetime, period: str = "weekly") -> CompletionMetrics:
    start = period_start(now, period)

    total = len(tasks)
    total_completed = sum(1 for t in tasks if t.completed)
    total_overdue = sum(1 for t in tasks if is_overdue(t, now))
    created = sum(1 for t in tasks if _in_window(t.created_at, start, now))
    completed = sum(1 for t in tasks if is_done(t) and _in_window(t.completed_at, start, now))

    durations = [h for h in (completion_hours(t) for t in tasks) if h is not None]

    completion_rate = round1(pct(total_completed, total))
    overdue_percentage = round1(pct(total_overdue, total))

    return CompletionMetrics(
        period=period,
        tasks_created=created,
        tasks_completed=completed,
        total_tasks=total,
        total_completed=total_completed,
        total_overdue=total_overdue,
        completion_rate=completion_rate,
        overdue_percentage=overdue_percentage,
        avg_completion_time_hours=round1(mean(durations)),
        min_completion_time_hours=round1(min(durations, default=0.0)),
        max_completion_time_hours=round1(max(durations, default=0.0)),
        daily_breakdown=_daily_breakdown(tasks, start, now),
        interpretation=_interpret(completion_rate, overdue_percentage, created, completed),
    )
