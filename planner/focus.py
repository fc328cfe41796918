from dataclasses import dataclass
from datetime import datetime

from .core.models import UNCATEGORIZED, Task, TaskRef, Thresholds
from .lib.numbers import mean, pct, round1
from .lib.selectors import age_days, completion_hours, completions_in_order, primary_category

__all__ = ["CategoryStats", "FocusAnalysis", "context_switches", "focus_analysis"]


@dataclass(frozen=True)
class CategoryStats:
    category: str
    total: int
    completed: int
    avg_completion_time_hours: float


@dataclass(frozen=True)
class FocusAnalysis:
    context_switches: int
    context_switch_rate: float
    avg_focus_streak: float
    max_focus_streak: int
    completions_analyzed: int
    categories: list[CategoryStats]
    reopened_count: int
    frequently_reopened: list[TaskRef]
    stale_count: int
    stale: list[TaskRef]
    interpretation: str


def context_switches(sequence: list[str]) -> tuple[int, list[int]]:
    """Count category changes in a completion sequence and the focus streaks between them."""
    if not sequence:
        return 0, []
    switches = 0
    streaks: list[int] = []
    current = 1
    for prev, curr in zip(sequence, sequence[1:]):
        if prev != curr:
            switches += 1
            streaks.append(current)
            current = 1
        else:
            current += 1
    streaks.append(current)
    return switches, streaks


def _category_stats(tasks: list[Task]) -> list[CategoryStats]:
    totals: dict[str, int] = {}
    done: dict[str, int] = {}
    durations: dict[str, list[float]] = {}
    for t in tasks:
        hours = completion_hours(t)
        for label in t.categories or (UNCATEGORIZED,):
            totals[label] = totals.get(label, 0) + 1
            if t.completed:
                done[label] = done.get(label, 0) + 1
            if hours is not None:
                durations.setdefault(label, []).append(hours)

    rows = [
        CategoryStats(
            category=label,
            total=total,
            completed=done.get(label, 0),
            avg_completion_time_hours=round1(mean(durations.get(label, []))),
        )
        for label, total in totals.items()
    ]
    rows.sort(key=lambda c: (-c.total, c.category))
    return rows


def _interpret(rate: float, avg_streak: float, reopened: int, stale: int, analyzed: int) -> str:
    if analyzed < 2:
        parts = ["Not enough completions yet to measure context switching."]
    elif rate < 30:
        parts = ["Low context switching indicates good focus discipline."]
    elif rate < 60:
        parts = ["Moderate context switching - some room for improvement in batching similar tasks."]
    else:
        parts = ["High context switching rate reduces deep work effectiveness."]

    if avg_streak >= 5:
        parts.append(f"Strong focus streaks (avg {avg_streak:.1f} tasks) before switching categories.")
    if reopened > 3:
        parts.append(
            "Multiple reopened tasks suggest unclear completion criteria or premature marking as done."
        )
    if stale > 5:
        parts.append("Several stale tasks may indicate over-commitment or unclear priorities.")
    return " ".join(parts)


def focus_analysis(tasks: list[Task], now: datetime, thresholds: Thresholds) -> FocusAnalysis:
    sequence = [primary_category(t) for t in completions_in_order(tasks)]
    switches, streaks = context_switches(sequence)
    rate = round1(pct(switches, len(sequence) - 1)) if len(sequence) > 1 else 0.0
    avg_streak = round1(mean(streaks))

    reopened = [t for t in tasks if t.reopen_count >= thresholds.reopen_threshold]
    reopened.sort(key=lambda t: -t.reopen_count)

    stale = [
        (age, t)
        for t in tasks
        if not t.completed and (age := age_days(t, now)) is not None and age > thresholds.stale_days
    ]
    stale.sort(key=lambda item: -item[0])

    limit = thresholds.list_limit
    return FocusAnalysis(
        context_switches=switches,
        context_switch_rate=rate,
        avg_focus_streak=avg_streak,
        max_focus_streak=max(streaks, default=0),
        completions_analyzed=len(sequence),
        categories=_category_stats(tasks),
        reopened_count=len(reopened),
        frequently_reopened=[
            TaskRef(id=t.id, title=t.title, priority=t.priority, value=float(t.reopen_count))
            for t in reopened[:limit]
        ],
        stale_count=len(stale),
        stale=[
            TaskRef(id=t.id, title=t.title, priority=t.priority, value=round1(age))
            for age, t in stale[:limit]
        ],
        interpretation=_interpret(rate, avg_streak, len(reopened), len(stale), len(sequence)),
    )
