from dataclasses import dataclass
from datetime import datetime

from .core.models import PRIORITIES, Task, TaskRef, Thresholds
from .lib.numbers import mean, pct, round1
from .lib.selectors import age_days, days_overdue, is_overdue

__all__ = [
    "SCORE_WEIGHTS",
    "PriorityProcrastination",
    "ProcrastinationAnalysis",
    "ProcrastinationStats",
    "procrastination_analysis",
    "procrastination_score",
]

# share of each avoidance signal in the 0-100 score
SCORE_WEIGHTS: dict[str, float] = {
    "postponed": 0.3,
    "overdue": 0.2,
    "severely_overdue": 0.2,
    "never_started": 0.3,
}


@dataclass(frozen=True)
class ProcrastinationStats:
    total_tasks: int
    postponed: int
    frequently_postponed: int
    never_started: int
    overdue: int
    severely_overdue: int
    avg_postpone_count: float


@dataclass(frozen=True)
class PriorityProcrastination:
    priority: str
    postponed: int
    avg_postpone_count: float
    overdue: int


@dataclass(frozen=True)
class ProcrastinationAnalysis:
    stats: ProcrastinationStats
    score: int
    frequently_postponed: list[TaskRef]
    severely_overdue: list[TaskRef]
    never_started: list[TaskRef]
    by_priority: list[PriorityProcrastination]
    interpretation: str


def _never_started(t: Task, now: datetime, grace_days: int) -> bool:
    if t.completed or t.started_at is not None:
        return False
    age = age_days(t, now)
    return age is not None and age > grace_days


def procrastination_score(stats: ProcrastinationStats) -> int:
    total = stats.total_tasks
    if not total:
        return 0
    weighted = (
        pct(stats.postponed, total) * SCORE_WEIGHTS["postponed"]
        + pct(stats.overdue, total) * SCORE_WEIGHTS["overdue"]
        + pct(stats.severely_overdue, total) * SCORE_WEIGHTS["severely_overdue"]
        + pct(stats.never_started, total) * SCORE_WEIGHTS["never_started"]
    )
    return min(100, round(weighted))


def _by_priority(tasks: list[Task], now: datetime) -> list[PriorityProcrastination]:
    groups: dict[str, list[Task]] = {p: [] for p in PRIORITIES}
    for t in tasks:
        groups.setdefault(t.priority, []).append(t)
    order = list(PRIORITIES) + sorted(p for p in groups if p not in PRIORITIES)
    return [
        PriorityProcrastination(
            priority=p,
            postponed=sum(1 for t in groups[p] if t.postpone_count > 0),
            avg_postpone_count=round1(mean(t.postpone_count for t in groups[p])),
            overdue=sum(1 for t in groups[p] if is_overdue(t, now)),
        )
        for p in order
    ]


def _interpret(score: int, stats: ProcrastinationStats, by_priority: list[PriorityProcrastination], frequent: int) -> str:
    parts = []
    if score <= 20:
        parts.append("Minimal procrastination detected - good task initiation habits.")
    elif score <= 50:
        parts.append("Moderate procrastination patterns - some tasks are being avoided.")
    else:
        parts.append("Significant procrastination detected - consider addressing root causes.")

    if stats.frequently_postponed:
        parts.append(
            f"{stats.frequently_postponed} tasks have been postponed {frequent} or more times."
        )
    if stats.never_started:
        parts.append(f"{stats.never_started} tasks were created but never started.")

    high = next((p for p in by_priority if p.priority == "high"), None)
    if high and high.avg_postpone_count > 2:
        parts.append(
            "High priority tasks are being postponed frequently - may indicate task anxiety or unclear requirements."
        )
    return " ".join(parts)


def _ref(t: Task, value: float) -> TaskRef:
    return TaskRef(id=t.id, title=t.title, priority=t.priority, value=round1(value))


def procrastination_analysis(
    tasks: list[Task], now: datetime, thresholds: Thresholds
) -> ProcrastinationAnalysis:
    frequent = [t for t in tasks if t.postpone_count >= thresholds.frequent_postpone]
    frequent.sort(key=lambda t: -t.postpone_count)

    severe = [
        (overdue, t)
        for t in tasks
        if (overdue := days_overdue(t, now)) >= thresholds.severe_overdue_days and is_overdue(t, now)
    ]
    severe.sort(key=lambda item: -item[0])

    never = [
        (age_days(t, now) or 0.0, t)
        for t in tasks
        if _never_started(t, now, thresholds.never_started_days)
    ]
    never.sort(key=lambda item: -item[0])

    stats = ProcrastinationStats(
        total_tasks=len(tasks),
        postponed=sum(1 for t in tasks if t.postpone_count > 0),
        frequently_postponed=len(frequent),
        never_started=len(never),
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        severely_overdue=len(severe),
        avg_postpone_count=round1(mean(t.postpone_count for t in tasks)),
    )
    score = procrastination_score(stats)
    by_priority = _by_priority(tasks, now)

    limit = thresholds.list_limit
    return ProcrastinationAnalysis(
        stats=stats,
        score=score,
        frequently_postponed=[_ref(t, t.postpone_count) for t in frequent[:limit]],
        severely_overdue=[_ref(t, days) for days, t in severe[:limit]],
        never_started=[_ref(t, days) for days, t in never[:limit]],
        by_priority=by_priority,
        interpretation=_interpret(score, stats, by_priority, thresholds.frequent_postpone),
    )
