from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .core.models import Task, Thresholds
from .lib.selectors import completions_in_order, primary_category

__all__ = ["DayActivity", "Trends", "WeekSummary", "streaks", "trends", "weekly_summary"]


@dataclass(frozen=True)
class DayActivity:
    date: date
    completed: int


@dataclass(frozen=True)
class WeekSummary:
    label: str
    start: datetime
    end: datetime
    completed: int
    categories: list[str]


@dataclass(frozen=True)
class Trends:
    heatmap: list[DayActivity]
    current_streak: int
    longest_streak: int
    active_days: int
    weekly: list[WeekSummary]
    interpretation: str


def _heatmap(done: list[Task], today: date, days: int) -> list[DayActivity]:
    counts: dict[date, int] = {}
    for t in done:
        if t.completed_at is not None:
            day = t.completed_at.date()
            counts[day] = counts.get(day, 0) + 1
    return [
        DayActivity(date=day, completed=counts.get(day, 0))
        for day in (today - timedelta(days=i) for i in range(days - 1, -1, -1))
    ]


def streaks(heatmap: list[DayActivity]) -> tuple[int, int]:
    """(current, longest) runs of active days; current must end on the last day."""
    longest = run = 0
    for day in heatmap:
        run = run + 1 if day.completed else 0
        longest = max(longest, run)
    return run, longest


def weekly_summary(done: list[Task], now: datetime, weeks: int) -> list[WeekSummary]:
    out = []
    for i in range(weeks - 1, -1, -1):
        end = now - timedelta(days=7 * i)
        start = end - timedelta(days=7)
        in_week = [t for t in done if t.completed_at is not None and start < t.completed_at <= end]
        categories: list[str] = []
        for t in in_week:
            label = primary_category(t)
            if label not in categories:
                categories.append(label)
        out.append(
            WeekSummary(
                label=f"Week {weeks - i}",
                start=start,
                end=end,
                completed=len(in_week),
                categories=categories,
            )
        )
    return out


def _interpret(current: int, longest: int, active: int, window: int, weekly: list[WeekSummary]) -> str:
    if not active:
        return f"No completions in the last {window} days."
    parts = [f"Active on {active} of the last {window} days."]
    if current:
        parts.append(f"Current streak: {current} day{'s' if current != 1 else ''}.")
    else:
        parts.append("Nothing completed today, so the current streak is 0.")
    if longest >= 7:
        parts.append(f"Longest streak of {longest} days shows strong consistency.")
    if len(weekly) >= 2:
        this_week, last_week = weekly[-1].completed, weekly[-2].completed
        if this_week > last_week:
            parts.append(f"Up from {last_week} to {this_week} completions week over week.")
        elif this_week < last_week:
            parts.append(f"Down from {last_week} to {this_week} completions week over week.")
    return " ".join(parts)


def trends(tasks: list[Task], now: datetime, thresholds: Thresholds) -> Trends:
    done = completions_in_order(tasks)
    heatmap = _heatmap(done, now.date(), thresholds.streak_days)
    current, longest = streaks(heatmap)
    active = sum(1 for d in heatmap if d.completed)
    weekly = weekly_summary(done, now, thresholds.weeks)
    return Trends(
        heatmap=heatmap,
        current_streak=current,
        longest_streak=longest,
        active_days=active,
        weekly=weekly,
        interpretation=_interpret(current, longest, active, thresholds.streak_days, weekly),
    )
