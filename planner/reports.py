"""Weekly and monthly reports.

Every sentence is tied to a computed metric; nothing here is generic advice.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .analytics import AnalyticsReport, compute_analytics
from .core.errors import ValidationError
from .core.models import Task, Thresholds

__all__ = ["REPORT_KINDS", "Bottleneck", "Report", "Suggestion", "Win", "generate_report"]

REPORT_KINDS = ("weekly", "monthly")


@dataclass(frozen=True)
class Win:
    metric: str
    value: str
    detail: str


@dataclass(frozen=True)
class Bottleneck:
    metric: str
    value: str
    detail: str
    severity: str


@dataclass(frozen=True)
class Suggestion:
    action: str
    detail: str
    based_on: str


@dataclass(frozen=True)
class Report:
    kind: str
    generated_at: datetime
    tasks_analyzed: int
    summary: str
    score: int
    grade: str
    grade_description: str
    key_wins: list[Win]
    bottlenecks: list[Bottleneck]
    suggestions: list[Suggestion]
    analytics: AnalyticsReport


def _summary(kind: str, a: AnalyticsReport) -> str:
    c = a.completion
    parts = [
        f"This {kind} period, you completed {c.tasks_completed} tasks and created {c.tasks_created}, "
        f"with an overall completion rate of {c.completion_rate}%."
    ]
    day = a.time_patterns.most_productive_day
    if day is not None:
        parts.append(f"Your most productive day was {day.label} with {day.completions} completions.")
    hour = a.time_patterns.most_productive_hour
    if hour is not None:
        parts.append(f"Peak productivity occurred at {hour.label}.")
    if c.avg_completion_time_hours > 0:
        parts.append(f"Average task completion time was {c.avg_completion_time_hours} hours.")
    return " ".join(parts)


def _wins(a: AnalyticsReport) -> list[Win]:
    wins = []
    c = a.completion
    if c.total_tasks and c.completion_rate >= 70:
        wins.append(
            Win("High Completion Rate", f"{c.completion_rate}%", "You completed more than 70% of your tasks")
        )
    p = a.productivity
    if c.total_tasks and p.score >= 70:
        wins.append(Win("Strong Productivity Score", f"{p.score}/100 ({p.grade})", p.grade_description))
    if a.focus.avg_focus_streak >= 3:
        wins.append(
            Win(
                "Good Focus Consistency",
                f"{a.focus.avg_focus_streak} tasks average",
                "You maintained focus on similar tasks before switching",
            )
        )
    high = next((s for s in a.priority.by_priority if s.priority == "high"), None)
    if high and high.total and high.completion_rate >= 80:
        wins.append(
            Win(
                "High Priority Execution",
                f"{high.completion_rate}% completion",
                "You effectively handled high-priority tasks",
            )
        )
    if c.total_tasks and a.procrastination.score <= 20:
        wins.append(
            Win(
                "Low Procrastination",
                f"Score: {a.procrastination.score}/100",
                "Minimal task avoidance behavior detected",
            )
        )
    if a.trends.current_streak >= 3:
        wins.append(
            Win(
                "Active Streak",
                f"{a.trends.current_streak} days",
                "You completed something every day of the current streak",
            )
        )
    return wins


def _bottlenecks(a: AnalyticsReport, thresholds: Thresholds) -> list[Bottleneck]:
    out = []
    c = a.completion
    if c.overdue_percentage > 20:
        out.append(
            Bottleneck(
                "High Overdue Rate",
                f"{c.overdue_percentage}%",
                f"{c.total_overdue} tasks are past their due date",
                "high" if c.overdue_percentage > 40 else "medium",
            )
        )
    stats = a.procrastination.stats
    if stats.frequently_postponed:
        out.append(
            Bottleneck(
                "Frequently Postponed Tasks",
                f"{stats.frequently_postponed} tasks",
                f"Tasks postponed {thresholds.frequent_postpone} or more times indicate avoidance",
                "high" if stats.frequently_postponed > 5 else "medium",
            )
        )
    if a.focus.context_switch_rate > 50:
        out.append(
            Bottleneck(
                "High Context Switching",
                f"{a.focus.context_switch_rate}% switch rate",
                "Frequent category changes reduce deep work efficiency",
                "high" if a.focus.context_switch_rate > 70 else "medium",
            )
        )
    if stats.never_started > 3:
        out.append(
            Bottleneck(
                "Stale Tasks",
                f"{stats.never_started} tasks",
                f"Tasks created but never started for over {thresholds.never_started_days} days",
                "high" if stats.never_started > 10 else "medium",
            )
        )
    out.sort(key=lambda b: b.severity != "high")
    return out


def _suggestions(a: AnalyticsReport) -> list[Suggestion]:
    out = []
    hour = a.time_patterns.most_productive_hour
    if hour is not None:
        out.append(
            Suggestion(
                "Schedule Important Tasks",
                f"Block {hour.label} for high-priority work based on your completion patterns",
                f"{hour.completions} tasks completed at this hour",
            )
        )
    postponed = a.procrastination.frequently_postponed
    if postponed:
        top = postponed[0]
        out.append(
            Suggestion(
                "Address Avoided Task",
                f'"{top.title}" has been postponed {top.value:.0f} times. '
                "Consider breaking it into smaller subtasks or delegating.",
                "Frequently postponed task analysis",
            )
        )
    if a.focus.context_switch_rate > 40:
        out.append(
            Suggestion(
                "Batch Similar Tasks",
                "Group tasks by category and complete them in focused blocks to reduce context switching",
                f"Current context switch rate: {a.focus.context_switch_rate}%",
            )
        )
    high = next((s for s in a.priority.by_priority if s.priority == "high"), None)
    if high and high.avg_time_to_first_action_hours > 24:
        out.append(
            Suggestion(
                "Start High-Priority Tasks Sooner",
                f"High-priority tasks take {high.avg_time_to_first_action_hours} hours on average to start. "
                "Consider tackling them first thing.",
                "Priority vs reality analysis",
            )
        )
    return out


def generate_report(
    tasks: Iterable[Task | Mapping[str, Any]],
    now: datetime | None = None,
    kind: str = "weekly",
    thresholds: Thresholds | None = None,
) -> Report:
    if kind not in REPORT_KINDS:
        raise ValidationError(f"unknown report kind '{kind}' (use {', '.join(REPORT_KINDS)})")
    limits = thresholds or Thresholds()
    analytics = compute_analytics(tasks, now, period=kind, thresholds=limits)
    p = analytics.productivity
    return Report(
        kind=kind,
        generated_at=analytics.generated_at,
        tasks_analyzed=analytics.completion.total_tasks,
        summary=_summary(kind, analytics),
        score=p.score,
        grade=p.grade,
        grade_description=p.grade_description,
        key_wins=_wins(analytics),
        bottlenecks=_bottlenecks(analytics, limits),
        suggestions=_suggestions(analytics),
        analytics=analytics,
    )
