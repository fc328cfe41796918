import json

import pytest
import requests

from planner.analytics import compute_analytics
from planner.core.errors import (
    InsightError,
    MalformedResponseError,
    MissingCredentialError,
    ProviderNetworkError,
    QuotaExceededError,
)
from planner.insights import classify_failure, insight_context, parse_insights, safe_insights
from tests.conftest import NOW, task


def http_error(status: int) -> requests.HTTPError:
    response = requests.Response()
    response.status_code = status
    return requests.HTTPError(f"{status} error", response=response)


@pytest.mark.parametrize(
    ("exc", "kind"),
    [
        (http_error(401), MissingCredentialError),
        (http_error(403), MissingCredentialError),
        (http_error(429), QuotaExceededError),
        (requests.ConnectionError("refused"), ProviderNetworkError),
        (requests.Timeout("slow"), ProviderNetworkError),
        (json.JSONDecodeError("bad", "doc", 0), MalformedResponseError),
        (RuntimeError("Invalid API key provided"), MissingCredentialError),
        (RuntimeError("Quota exceeded for this month"), QuotaExceededError),
        (RuntimeError("rate limit reached"), QuotaExceededError),
        (OSError("network unreachable"), ProviderNetworkError),
    ],
)
def test_classify_failure(exc, kind):
    err = classify_failure(exc)
    assert type(err) is kind
    assert err.detail == str(exc)


def test_classify_unknown_failure_is_generic():
    err = classify_failure(ValueError("weird"))
    assert type(err) is InsightError
    assert err.kind == "request_failed"
    assert str(err) == "AI request failed, try again"


def test_classify_server_error_is_generic():
    assert type(classify_failure(http_error(500))) is InsightError


def test_classify_passes_insight_errors_through():
    err = QuotaExceededError("slow down")
    assert classify_failure(err) is err


def test_parse_fenced_reply():
    reply = '```json\n{"summary": " ok ", "recommendations": ["a", ""], "focusAreas": "deep work"}\n```'
    insights = parse_insights(reply)
    assert insights.summary == "ok"
    assert insights.recommendations == ["a"]
    assert insights.focus_areas == ["deep work"]


@pytest.mark.parametrize("reply", ["[1, 2]", '{"recommendations": []}', "{not json", '{"summary": ""}'])
def test_parse_rejects_malformed(reply):
    with pytest.raises(MalformedResponseError):
        parse_insights(reply)


def test_insight_context_is_numeric_summary():
    report = compute_analytics([task(completed=True)], NOW)
    ctx = insight_context(report)
    assert ctx["total_tasks"] == 1
    assert ctx["completion_rate"] == 100.0
    assert ctx["grade"] == report.productivity.grade
    json.dumps(ctx)


def test_safe_insights_success():
    report = compute_analytics([], NOW)
    seen = {}

    def fetch(ctx):
        seen.update(ctx)
        return {"summary": "steady", "recommendations": ["plan"], "focus_areas": ["mornings"]}

    insights, err = safe_insights(report, fetch)
    assert err is None
    assert insights.summary == "steady"
    assert seen["productivity_score"] == report.productivity.score


def test_safe_insights_failure_is_returned_not_raised():
    report = compute_analytics([], NOW)

    def fetch(ctx):
        raise requests.ConnectionError("down")

    insights, err = safe_insights(report, fetch)
    assert insights is None
    assert isinstance(err, ProviderNetworkError)
    assert err.kind == "network"


def test_parse_rejects_undecodable_bytes():
    with pytest.raises(MalformedResponseError):
        parse_insights(b"\xff\xfe{")


def test_classify_decode_error_is_malformed():
    exc = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    assert isinstance(classify_failure(exc), MalformedResponseError)


def test_safe_insights_undecodable_reply_is_malformed():
    insights, err = safe_insights(compute_analytics([], NOW), lambda ctx: b"\xff\xfe{")
    assert insights is None
    assert err.kind == "malformed"
