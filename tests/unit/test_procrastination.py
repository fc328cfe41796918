from datetime import timedelta

from planner.core.models import Thresholds
from planner.procrastination import (
    ProcrastinationStats,
    procrastination_analysis,
    procrastination_score,
)
from tests.conftest import NOW, task


def snapshot():
    return [
        task("frequent", postpone_count=4),
        task("once", postpone_count=1),
        task(
            "late",
            created_at=NOW - timedelta(days=20),
            started_at=NOW - timedelta(days=19),
            due_date=NOW - timedelta(days=10),
        ),
        task("untouched", created_at=NOW - timedelta(days=5)),
    ]


def test_empty():
    pa = procrastination_analysis([], NOW, Thresholds())
    assert pa.score == 0
    assert pa.stats.total_tasks == 0
    assert pa.frequently_postponed == []


def test_stats():
    s = procrastination_analysis(snapshot(), NOW, Thresholds()).stats
    assert s.total_tasks == 4
    assert s.postponed == 2
    assert s.frequently_postponed == 1
    assert s.overdue == 1
    assert s.severely_overdue == 1
    assert s.never_started == 1
    assert s.avg_postpone_count == 1.2


def test_lists():
    pa = procrastination_analysis(snapshot(), NOW, Thresholds())
    assert [(r.id, r.value) for r in pa.frequently_postponed] == [("frequent", 4.0)]
    assert [(r.id, r.value) for r in pa.severely_overdue] == [("late", 10.0)]
    assert [(r.id, r.value) for r in pa.never_started] == [("untouched", 5.0)]


def test_frequent_threshold_is_inclusive():
    pa = procrastination_analysis([task(postpone_count=3)], NOW, Thresholds())
    assert pa.stats.frequently_postponed == 1


def test_thresholds_are_configurable():
    pa = procrastination_analysis(snapshot(), NOW, Thresholds(never_started_days=10, severe_overdue_days=14))
    assert pa.stats.never_started == 0
    assert pa.stats.severely_overdue == 0


def test_completed_tasks_never_flagged():
    t = task(completed=True, created_at=NOW - timedelta(days=30), postpone_count=0)
    pa = procrastination_analysis([t], NOW, Thresholds())
    assert pa.stats.never_started == 0
    assert pa.score == 0


def test_score():
    assert procrastination_score(ProcrastinationStats(10, 5, 0, 0, 0, 0, 0.5)) == 15
    assert procrastination_score(ProcrastinationStats(10, 10, 10, 10, 10, 10, 4.0)) == 100
    assert procrastination_score(ProcrastinationStats(0, 0, 0, 0, 0, 0, 0.0)) == 0


def test_by_priority():
    tasks = [task("a", priority="high", postpone_count=3), task("b", priority="high", postpone_count=5)]
    pa = procrastination_analysis(tasks, NOW, Thresholds())
    high = pa.by_priority[0]
    assert high.priority == "high"
    assert high.postponed == 2
    assert high.avg_postpone_count == 4.0
    assert "High priority tasks are being postponed frequently" in pa.interpretation
