import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from .analytics import AnalyticsReport, compute_analytics
from .core.models import Task, Thresholds
from .lib import clock
from .lib.converters import normalize_datetime, to_task

__all__ = ["DEFAULT_TTL", "CacheEntry", "ReportCache", "cached_analytics", "snapshot_key"]

DEFAULT_TTL = timedelta(minutes=15)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    report: AnalyticsReport
    computed_at: datetime


def _ts(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


def snapshot_key(
    tasks: list[Task], period: str = "weekly", thresholds: Thresholds | None = None
) -> str:
    """Fingerprint of every field the engine reads, so any edit changes the key."""
    rows = [
        json.dumps(
            [
                t.id,
                t.title,
                t.priority,
                list(t.categories),
                t.completed,
                _ts(t.created_at),
                _ts(t.completed_at),
                _ts(t.due_date),
                _ts(t.started_at),
                t.postpone_count,
                t.reopen_count,
            ]
        )
        for t in tasks
    ]
    digest = hashlib.sha256()
    digest.update(period.encode())
    digest.update(repr(thresholds or Thresholds()).encode())
    for row in rows:
        digest.update(b"\n")
        digest.update(row.encode())
    return digest.hexdigest()


class ReportCache:
    """Report cache owned by the caller: key -> report + computed-at, expired by TTL."""

    def __init__(self, ttl: timedelta = DEFAULT_TTL):
        self.ttl = ttl
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str, now: datetime) -> AnalyticsReport | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if now - entry.computed_at >= self.ttl or now < entry.computed_at:
            del self._entries[key]
            return None
        return entry.report

    def put(self, key: str, report: AnalyticsReport, now: datetime) -> None:
        self._entries[key] = CacheEntry(key=key, report=report, computed_at=now)

    def invalidate(self, key: str | None = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)


def cached_analytics(
    cache: ReportCache,
    tasks: Iterable[Task | Mapping[str, Any]],
    now: datetime | None = None,
    *,
    period: str = "weekly",
    thresholds: Thresholds | None = None,
) -> AnalyticsReport:
    snapshot = [to_task(t) for t in tasks]
    at = normalize_datetime(now) if now is not None else clock.now()
    key = snapshot_key(snapshot, period, thresholds)
    hit = cache.get(key, at)
    if hit is not None:
        return hit
    report = compute_analytics(snapshot, at, period=period, thresholds=thresholds)
    cache.put(key, report, at)
    return report
