from dataclasses import dataclass
from datetime import datetime

from .core.models import PRIORITIES, Task
from .lib.numbers import hours_between, mean, pct, round1
from .lib.selectors import completion_hours, is_done, is_missed

__all__ = [
    "PRIORITY_WEIGHT",
    "PriorityAnalysis",
    "PriorityStats",
    "effectiveness_score",
    "priority_analysis",
]

PRIORITY_WEIGHT: dict[str, int] = {"high": 3, "medium": 2, "low": 1}
DEFAULT_WEIGHT = 1


@dataclass(frozen=True)
class PriorityStats:
    priority: str
    total: int
    completed: int
    completion_rate: float
    with_due_date: int
    missed_deadlines: int
    missed_deadline_rate: float
    avg_completion_time_hours: float
    avg_delay_hours: float
    avg_time_to_first_action_hours: float


@dataclass(frozen=True)
class PriorityAnalysis:
    by_priority: list[PriorityStats]
    effectiveness_score: int
    interpretation: str


def _first_action_hours(t: Task) -> float | None:
    first = t.started_at or (t.completed_at if t.completed else None)
    hours = hours_between(t.created_at, first)
    if hours is None or hours < 0:
        return None
    return hours


def _delay_hours(t: Task) -> float | None:
    if not is_done(t):
        return None
    return hours_between(t.due_date, t.completed_at)


def _bucket_stats(priority: str, tasks: list[Task], now: datetime) -> PriorityStats:
    dated = [t for t in tasks if t.due_date is not None]
    missed = sum(1 for t in dated if is_missed(t, now))
    completed = sum(1 for t in tasks if t.completed)
    return PriorityStats(
        priority=priority,
        total=len(tasks),
        completed=completed,
        completion_rate=round1(pct(completed, len(tasks))),
        with_due_date=len(dated),
        missed_deadlines=missed,
        missed_deadline_rate=round1(pct(missed, len(dated))),
        avg_completion_time_hours=round1(
            mean(h for h in (completion_hours(t) for t in tasks) if h is not None)
        ),
        avg_delay_hours=round1(mean(h for h in (_delay_hours(t) for t in tasks) if h is not None)),
        avg_time_to_first_action_hours=round1(
            mean(h for h in (_first_action_hours(t) for t in tasks) if h is not None)
        ),
    )


def effectiveness_score(stats: list[PriorityStats]) -> int:
    """Weighted reliability across priority buckets, heavier buckets counting more.

    Reliability of a bucket is the mean of its completion rate and its
    on-deadline rate, so raising either never lowers the score.
    """
    earned = 0.0
    possible = 0
    for s in stats:
        if s.total == 0:
            continue
        weight = PRIORITY_WEIGHT.get(s.priority, DEFAULT_WEIGHT)
        reliability = 0.5 * s.completion_rate + 0.5 * (100 - s.missed_deadline_rate)
        earned += weight * reliability
        possible += weight
    if not possible:
        return 0
    return min(100, max(0, round(earned / possible)))


def _interpret(stats: list[PriorityStats], score: int) -> str:
    if not any(s.total for s in stats):
        return "No tasks to compare across priorities yet."

    parts = []
    if score >= 70:
        parts.append(
            "Priority system is working well - high priority tasks are being handled appropriately."
        )
    elif score >= 50:
        parts.append("Priority system is moderately effective.")
    else:
        parts.append("Priority assignments may not reflect actual task importance or urgency.")

    by_name = {s.priority: s for s in stats}
    high, low = by_name.get("high"), by_name.get("low")
    if high and low and high.total and low.total:
        if high.avg_completion_time_hours > low.avg_completion_time_hours:
            parts.append(
                "High priority tasks take longer than low priority - consider if they are appropriately scoped."
            )
        if high.missed_deadline_rate > low.missed_deadline_rate:
            parts.append(
                "High priority tasks miss more deadlines - may indicate unrealistic expectations."
            )
    return " ".join(parts)


def priority_analysis(tasks: list[Task], now: datetime) -> PriorityAnalysis:
    groups: dict[str, list[Task]] = {p: [] for p in PRIORITIES}
    for t in tasks:
        groups.setdefault(t.priority, []).append(t)

    order = list(PRIORITIES) + sorted(p for p in groups if p not in PRIORITIES)
    stats = [_bucket_stats(p, groups[p], now) for p in order]
    score = effectiveness_score(stats)
    return PriorityAnalysis(
        by_priority=stats,
        effectiveness_score=score,
        interpretation=_interpret(stats, score),
    )
