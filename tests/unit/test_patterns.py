from datetime import datetime, timedelta

import pytest

from planner.patterns import time_of_day, time_patterns
from tests.conftest import task


def completed_at(dt: datetime, **kw):
    return task(dt.isoformat(), completed=True, created_at=dt - timedelta(hours=2), completed_at=dt, **kw)


def test_hour_nine_peak():
    tasks = [completed_at(datetime(2024, 5, d, 9, 0)) for d in (12, 13, 14)]
    tp = time_patterns(tasks)
    assert tp.most_productive_hour.index == 9
    assert tp.most_productive_hour.label == "09:00"
    assert tp.most_productive_hour.completions == 3
    assert tp.hourly[9].completions == 3
    assert sum(h.completions for h in tp.hourly) == 3
    assert tp.hourly[9].avg_completion_time_hours == 2.0


def test_day_peak_tie_goes_to_earliest_day():
    # Sunday, Monday, Tuesday
    tasks = [completed_at(datetime(2024, 5, d, 9, 0)) for d in (12, 13, 14)]
    tp = time_patterns(tasks)
    assert tp.most_productive_day.index == 0
    assert tp.most_productive_day.label == "Sunday"


def test_day_of_week_is_sunday_first():
    tp = time_patterns([completed_at(datetime(2024, 5, 17, 15, 0)), completed_at(datetime(2024, 5, 10, 15, 0))])
    assert tp.daily[5].day_name == "Friday"
    assert tp.daily[5].completions == 2
    assert "Friday productivity" in tp.interpretation


def test_empty():
    tp = time_patterns([])
    assert tp.most_productive_hour is None
    assert tp.most_productive_day is None
    assert len(tp.hourly) == 24
    assert len(tp.daily) == 7
    assert tp.interpretation == "Insufficient data to determine time patterns."


def test_incomplete_tasks_ignored():
    tp = time_patterns([task("open", created_at=datetime(2024, 5, 14, 9, 0))])
    assert tp.most_productive_hour is None


@pytest.mark.parametrize(
    ("hour", "bucket"),
    [(5, "night"), (6, "morning"), (11, "morning"), (12, "afternoon"), (18, "evening"), (21, "evening"), (22, "night"), (0, "night")],
)
def test_time_of_day(hour, bucket):
    assert time_of_day(hour) == bucket


def test_time_of_day_buckets_and_interpretation():
    tasks = [completed_at(datetime(2024, 5, 14, 7, 0)), completed_at(datetime(2024, 5, 14, 23, 0))]
    tasks.append(completed_at(datetime(2024, 5, 13, 7, 30)))
    tp = time_patterns(tasks)
    buckets = {b.bucket: b.completions for b in tp.by_time_of_day}
    assert buckets == {"morning": 2, "afternoon": 0, "evening": 0, "night": 1}
    assert "morning person" in tp.interpretation
