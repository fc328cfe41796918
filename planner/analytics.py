import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .completion import CompletionMetrics, completion_metrics
from .core.models import Task, Thresholds
from .focus import FocusAnalysis, focus_analysis
from .lib import clock
from .lib.converters import normalize_datetime, to_task
from .patterns import TimePatterns, time_patterns
from .priority import PriorityAnalysis, priority_analysis
from .procrastination import ProcrastinationAnalysis, procrastination_analysis
from .score import ProductivityScore, productivity_score
from .trends import Trends, trends

__all__ = ["AnalyticsReport", "compute_analytics", "report_to_dict"]


@dataclass(frozen=True)
class AnalyticsReport:
    generated_at: datetime
    completion: CompletionMetrics
    time_patterns: TimePatterns
    priority: PriorityAnalysis
    focus: FocusAnalysis
    procrastination: ProcrastinationAnalysis
    trends: Trends
    productivity: ProductivityScore


def compute_analytics(
    tasks: Iterable[Task | Mapping[str, Any]],
    now: datetime | None = None,
    *,
    period: str = "weekly",
    thresholds: Thresholds | None = None,
) -> AnalyticsReport:
    """Compute every metric group over one task snapshot.

    Pure: the same snapshot and `now` always give the same report. Raw store
    documents are converted on the way in; `now` defaults to the current UTC
    instant.
    """
    snapshot = [to_task(t) for t in tasks]
    at = normalize_datetime(now) if now is not None else clock.now()
    limits = thresholds or Thresholds()

    completion = completion_metrics(snapshot, at, period)
    focus = focus_analysis(snapshot, at, limits)
    return AnalyticsReport(
        generated_at=at,
        completion=completion,
        time_patterns=time_patterns(snapshot),
        priority=priority_analysis(snapshot, at),
        focus=focus,
        procrastination=procrastination_analysis(snapshot, at, limits),
        trends=trends(snapshot, at, limits),
        productivity=productivity_score(snapshot, completion, focus),
    )


def _jsonable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def report_to_dict(report: Any) -> dict[str, Any]:
    """Dataclass report (or any metric group) to JSON-ready data."""
    return _jsonable(dataclasses.asdict(report))
