from dataclasses import dataclass
from datetime import datetime

from .core.models import Task
from .lib.format import DAY_NAMES, hour_label
from .lib.numbers import mean, round1
from .lib.selectors import completion_hours, is_done

__all__ = [
    "TIME_OF_DAY",
    "DayBucket",
    "HourBucket",
    "Peak",
    "TimeOfDayBucket",
    "TimePatterns",
    "time_of_day",
    "time_patterns",
]

# (name, start hour, end hour); night wraps past midnight
TIME_OF_DAY: tuple[tuple[str, int, int], ...] = (
    ("morning", 6, 12),
    ("afternoon", 12, 18),
    ("evening", 18, 22),
    ("night", 22, 6),
)


@dataclass(frozen=True)
class HourBucket:
    hour: int
    label: str
    completions: int
    avg_completion_time_hours: float


@dataclass(frozen=True)
class DayBucket:
    day_of_week: int
    day_name: str
    completions: int
    avg_completion_time_hours: float


@dataclass(frozen=True)
class TimeOfDayBucket:
    bucket: str
    label: str
    completions: int
    avg_completion_time_hours: float


@dataclass(frozen=True)
class Peak:
    index: int
    label: str
    completions: int


@dataclass(frozen=True)
class TimePatterns:
    most_productive_hour: Peak | None
    most_productive_day: Peak | None
    hourly: list[HourBucket]
    daily: list[DayBucket]
    by_time_of_day: list[TimeOfDayBucket]
    interpretation: str


def time_of_day(hour: int) -> str:
    for name, start, end in TIME_OF_DAY:
        if start < end and start <= hour < end:
            return name
    return "night"


def _day_of_week(dt: datetime) -> int:
    """Sunday=0 .. Saturday=6."""
    return (dt.weekday() + 1) % 7


def _peak(counts: list[int], labels: list[str]) -> Peak | None:
    best: int | None = None
    for i, count in enumerate(counts):
        if count > 0 and (best is None or count > counts[best]):
            best = i
    if best is None:
        return None
    return Peak(index=best, label=labels[best], completions=counts[best])


def _interpret(hour: Peak | None, day: Peak | None) -> str:
    parts = []
    if hour is not None:
        bucket = time_of_day(hour.index)
        if bucket == "morning":
            parts.append("Morning productivity peak suggests you are a morning person.")
        elif bucket == "afternoon":
            parts.append("Afternoon productivity peak indicates post-lunch effectiveness.")
        elif bucket == "evening":
            parts.append("Evening productivity peak suggests you work better later in the day.")
        else:
            parts.append(
                "Late night productivity peak - consider if this aligns with your health goals."
            )

    if day is not None:
        if day.index in (0, 6):
            parts.append("Weekend productivity is high - you may be catching up on tasks.")
        elif day.index == 1:
            parts.append("Monday productivity suggests strong week starts.")
        elif day.index == 5:
            parts.append("Friday productivity indicates end-of-week push to complete tasks.")

    return " ".join(parts) or "Insufficient data to determine time patterns."


def time_patterns(tasks: list[Task]) -> TimePatterns:
    hour_counts = [0] * 24
    hour_durations: list[list[float]] = [[] for _ in range(24)]
    day_counts = [0] * 7
    day_durations: list[list[float]] = [[] for _ in range(7)]

    for t in tasks:
        if not is_done(t) or t.completed_at is None:
            continue
        hour = t.completed_at.hour
        dow = _day_of_week(t.completed_at)
        hour_counts[hour] += 1
        day_counts[dow] += 1
        duration = completion_hours(t)
        if duration is not None:
            hour_durations[hour].append(duration)
            day_durations[dow].append(duration)

    hourly = [
        HourBucket(
            hour=h,
            label=hour_label(h),
            completions=hour_counts[h],
            avg_completion_time_hours=round1(mean(hour_durations[h])),
        )
        for h in range(24)
    ]
    daily = [
        DayBucket(
            day_of_week=d,
            day_name=DAY_NAMES[d],
            completions=day_counts[d],
            avg_completion_time_hours=round1(mean(day_durations[d])),
        )
        for d in range(7)
    ]

    buckets = []
    for name, _start, _end in TIME_OF_DAY:
        hours = [h for h in range(24) if time_of_day(h) == name]
        buckets.append(
            TimeOfDayBucket(
                bucket=name,
                label=name.capitalize(),
                completions=sum(hour_counts[h] for h in hours),
                avg_completion_time_hours=round1(
                    mean(d for h in hours for d in hour_durations[h])
                ),
            )
        )

    hour_peak = _peak(hour_counts, [hour_label(h) for h in range(24)])
    day_peak = _peak(day_counts, list(DAY_NAMES))

    return TimePatterns(
        most_productive_hour=hour_peak,
        most_productive_day=day_peak,
        hourly=hourly,
        daily=daily,
        by_time_of_day=buckets,
        interpretation=_interpret(hour_peak, day_peak),
    )
