"""Boundary with external AI providers.

Providers are called elsewhere; this module only builds the numeric context
they receive, reads their JSON reply, and turns their failures into
recognizable error kinds. Nothing here can break the numeric report.
"""

import json
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import requests

from .analytics import AnalyticsReport
from .core.errors import (
    InsightError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderNetworkError,
    QuotaExceededError,
)

__all__ = ["Insights", "classify_failure", "insight_context", "parse_insights", "safe_insights"]

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


@dataclass(frozen=True)
class Insights:
    summary: str
    recommendations: list[str]
    focus_areas: list[str]


def insight_context(report: AnalyticsReport) -> dict[str, Any]:
    """Numbers handed to a provider; the report itself stays local."""
    c = report.completion
    hour = report.time_patterns.most_productive_hour
    day = report.time_patterns.most_productive_day
    return {
        "total_tasks": c.total_tasks,
        "completion_rate": c.completion_rate,
        "overdue_percentage": c.overdue_percentage,
        "avg_completion_time_hours": c.avg_completion_time_hours,
        "most_productive_hour": hour.label if hour else None,
        "most_productive_day": day.label if day else None,
        "context_switch_rate": report.focus.context_switch_rate,
        "procrastination_score": report.procrastination.score,
        "current_streak": report.trends.current_streak,
        "productivity_score": report.productivity.score,
        "grade": report.productivity.grade,
    }


def _status_error(status: int, detail: str) -> InsightError | None:
    if status in (401, 403):
        return MissingCredentialError(detail)
    if status == 429:
        return QuotaExceededError(detail)
    return None


def classify_failure(exc: BaseException) -> InsightError:
    """Map a provider failure onto one of the insight error kinds."""
    if isinstance(exc, InsightError):
        return exc
    detail = str(exc)

    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        err = _status_error(exc.response.status_code, detail)
        if err is not None:
            return err
    if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        return ProviderNetworkError(detail)
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError, requests.exceptions.InvalidJSONError)):
        return MalformedResponseError(detail)

    lowered = detail.lower()
    if "api key" in lowered or "api_key" in lowered or "unauthorized" in lowered:
        return MissingCredentialError(detail)
    if "quota" in lowered or "rate limit" in lowered:
        return QuotaExceededError(detail)
    if "network" in lowered:
        return ProviderNetworkError(detail)
    return InsightError(detail=detail)


def _strings(val: Any) -> list[str]:
    if isinstance(val, str):
        return [val.strip()] if val.strip() else []
    if isinstance(val, list):
        return [str(v).strip() for v in val if str(v).strip()]
    return []


def parse_insights(payload: str | bytes | dict[str, Any]) -> Insights:
    if isinstance(payload, (str, bytes)):
        try:
            text = payload.decode() if isinstance(payload, bytes) else payload
            data = json.loads(_FENCE_RE.sub("", text.strip()))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedResponseError(str(e)) from e
    else:
        data = payload

    if not isinstance(data, dict):
        raise MalformedResponseError(f"expected an object, got {type(data).__name__}")
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise MalformedResponseError("missing summary")
    return Insights(
        summary=summary.strip(),
        recommendations=_strings(data.get("recommendations")),
        focus_areas=_strings(data.get("focus_areas", data.get("focusAreas"))),
    )


def safe_insights(
    report: AnalyticsReport, fetch: Callable[[dict[str, Any]], str | bytes | dict[str, Any]]
) -> tuple[Insights | None, InsightError | None]:
    """Ask a provider via `fetch`; failures come back as a classified error, never raised."""
    try:
        return parse_insights(fetch(insight_context(report))), None
    except Exception as e:
        return None, classify_failure(e)
