from datetime import timedelta

from planner.core.models import Thresholds
from planner.trends import DayActivity, streaks, trends, weekly_summary
from tests.conftest import NOW, task


def heatmap(*counts):
    start = NOW.date() - timedelta(days=len(counts) - 1)
    return [DayActivity(date=start + timedelta(days=i), completed=c) for i, c in enumerate(counts)]


def done(days_ago: float, **kw):
    return task(f"d{days_ago}", completed=True, completed_at=NOW - timedelta(days=days_ago), **kw)


def test_streaks():
    assert streaks(heatmap(1, 0, 1, 1)) == (2, 2)
    assert streaks(heatmap(1, 1, 1, 0)) == (0, 3)
    assert streaks(heatmap()) == (0, 0)


def test_current_streak_ends_today():
    tr = trends([done(0), done(1), done(2), done(4)], NOW, Thresholds())
    assert tr.current_streak == 3
    assert tr.longest_streak == 3
    assert tr.active_days == 4
    assert len(tr.heatmap) == 30
    assert tr.heatmap[-1].date == NOW.date()


def test_nothing_today_breaks_streak():
    tr = trends([done(1), done(2)], NOW, Thresholds())
    assert tr.current_streak == 0
    assert tr.longest_streak == 2
    assert "Nothing completed today" in tr.interpretation


def test_weekly_windows_oldest_first():
    weeks = weekly_summary([done(1, categories=("work",)), done(8), done(7)], NOW, 4)
    assert [w.label for w in weeks] == ["Week 1", "Week 2", "Week 3", "Week 4"]
    assert weeks[-1].completed == 1
    assert weeks[-1].categories == ["work"]
    # exactly seven days ago belongs to the previous week
    assert weeks[-2].completed == 2
    assert weeks[-2].categories == ["uncategorized"]


def test_empty():
    tr = trends([], NOW, Thresholds())
    assert tr.current_streak == 0
    assert tr.active_days == 0
    assert tr.interpretation == "No completions in the last 30 days."


def test_week_over_week_interpretation():
    tr = trends([done(0), done(0.5), done(9)], NOW, Thresholds())
    assert "Up from 1 to 2 completions week over week." in tr.interpretation
