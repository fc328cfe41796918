from datetime import timedelta

import pytest

from planner.core.errors import ValidationError
from planner.reports import generate_report
from tests.conftest import NOW, task


def strong_week():
    return [
        task(
            f"w{i}",
            priority="high",
            categories=("work",),
            created_at=NOW - timedelta(days=i, hours=2),
            completed=True,
            completed_at=NOW - timedelta(days=i, hours=1),
        )
        for i in range(5)
    ]


def backlog():
    return [
        task(
            f"b{i}",
            title=f"backlog {i}",
            created_at=NOW - timedelta(days=20),
            due_date=NOW - timedelta(days=10),
            postpone_count=4 + i,
        )
        for i in range(10)
    ]


def test_unknown_kind():
    with pytest.raises(ValidationError):
        generate_report([], NOW, "yearly")


def test_empty_report():
    r = generate_report([], NOW)
    assert r.tasks_analyzed == 0
    assert r.key_wins == []
    assert r.bottlenecks == []
    assert r.suggestions == []
    assert r.summary.startswith("This weekly period, you completed 0 tasks and created 0")


def test_strong_week_wins():
    r = generate_report(strong_week(), NOW)
    wins = [w.metric for w in r.key_wins]
    assert wins == [
        "High Completion Rate",
        "Strong Productivity Score",
        "Good Focus Consistency",
        "High Priority Execution",
        "Low Procrastination",
        "Active Streak",
    ]
    assert r.grade == "A"
    assert r.bottlenecks == []
    assert "Peak productivity occurred at 11:00." in r.summary


def test_backlog_bottlenecks():
    r = generate_report(backlog(), NOW)
    metrics = {b.metric: b for b in r.bottlenecks}
    assert metrics["High Overdue Rate"].severity == "high"
    assert metrics["Frequently Postponed Tasks"].severity == "high"
    assert metrics["Stale Tasks"].severity == "medium"
    severities = [b.severity for b in r.bottlenecks]
    assert severities == sorted(severities, key=lambda s: s != "high")


def test_backlog_suggests_the_most_avoided_task():
    r = generate_report(backlog(), NOW)
    avoided = next(s for s in r.suggestions if s.action == "Address Avoided Task")
    assert '"backlog 9" has been postponed 13 times.' in avoided.detail


def test_monthly_report_uses_monthly_window():
    r = generate_report(strong_week(), NOW, "monthly")
    assert r.kind == "monthly"
    assert r.analytics.completion.period == "monthly"
    assert r.summary.startswith("This monthly period")


def test_headline_matches_analytics():
    r = generate_report(strong_week() + backlog(), NOW)
    assert r.score == r.analytics.productivity.score
    assert r.tasks_analyzed == 15
