__all__ = [
    "DAY_NAMES",
    "format_hours",
    "format_pct",
    "hour_label",
]

# Sunday-first, matching the day-of-week histogram
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


def format_pct(value: float) -> str:
    return f"{value:.1f}%"


def format_hours(hours: float) -> str:
    if hours < 1:
        return f"{hours * 60:.0f}m"
    if hours < 48:
        return f"{hours:.1f}h"
    return f"{hours / 24:.1f}d"

