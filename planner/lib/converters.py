import dataclasses
import re
from collections.abc import Mapping
from datetime import UTC, date, datetime, time
from typing import Any

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from planner.core.errors import ValidationError
from planner.core.models import DEFAULT_PRIORITY, Task

__all__ = [
    "doc_to_task",
    "normalize_categories",
    "normalize_datetime",
    "parse_due",
    "parse_timestamp",
    "to_task",
    "validate_task",
]

TITLE_MAX = 200
DESCRIPTION_MAX = 1000

_DATE_ONLY_RE = re.compile(r"^\d{4}-?\d{2}-?\d{2}$")
# ISO 8601 basic dates (20240515) look numeric but are not epochs
_BASIC_DATE_RE = re.compile(r"^\d{8}$")
_DATETIME_FIELDS = ("created_at", "completed_at", "due_date", "started_at")
# anything this large is a JS millisecond epoch, not seconds
_EPOCH_MS_CUTOFF = 100_000_000_000
_TRUTHY = {"true", "1", "yes", "y"}


def normalize_datetime(dt: datetime) -> datetime:
    """Aware datetimes become naive UTC; naive ones are already taken as UTC."""
    if dt.tzinfo is not None:
        return dt.astimezone(UTC).replace(tzinfo=None)
    return dt


def _unwrap_extended_json(val: Any) -> Any:
    if isinstance(val, Mapping):
        val = val.get("$date", val.get("$numberLong"))
        if isinstance(val, Mapping):
            val = val.get("$numberLong")
    return val


def parse_timestamp(val: Any) -> datetime | None:
    """Read a timestamp in any of the shapes a task store hands out.

    Handles datetime/date objects, ISO and free-form strings, epoch seconds or
    milliseconds (numeric or numeric string) and Mongo extended JSON. Returns
    None for anything unreadable instead of raising.
    """
    val = _unwrap_extended_json(val)
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, datetime):
        return normalize_datetime(val)
    if isinstance(val, date):
        return datetime.combine(val, time.min)
    if isinstance(val, (int, float)):
        seconds = val / 1000 if abs(val) >= _EPOCH_MS_CUTOFF else val
        try:
            return datetime.fromtimestamp(seconds, UTC).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(val, str):
        return None
    text = val.strip()
    if not text:
        return None
    if not _BASIC_DATE_RE.match(text) and text.lstrip("-").replace(".", "", 1).isdigit():
        return parse_timestamp(float(text))
    try:
        return normalize_datetime(dateutil_parser.isoparse(text))
    except (ValueError, OverflowError):
        pass
    try:
        return normalize_datetime(dateutil_parser.parse(text))
    except (ParserError, ValueError, OverflowError):
        return None


def parse_due(val: Any) -> datetime | None:
    """Like parse_timestamp, but a bare date means the end of that day."""
    val = _unwrap_extended_json(val)
    if isinstance(val, date) and not isinstance(val, datetime):
        return datetime.combine(val, time.max)
    if isinstance(val, str) and _DATE_ONLY_RE.match(val.strip()):
        try:
            return datetime.combine(date.fromisoformat(val.strip()), time.max)
        except ValueError:
            return None
    return parse_timestamp(val)


def _label(val: Any) -> str | None:
    if val is None:
        return None
    if isinstance(val, Mapping):
        for key in ("name", "_id", "id", "$oid"):
            inner = val.get(key)
            if isinstance(inner, Mapping):
                inner = inner.get("$oid")
            if inner is not None:
                return _label(inner)
        return None
    label = str(val).strip()
    return label or None


def normalize_categories(doc: Mapping[str, Any]) -> tuple[str, ...]:
    """Fold `category` and `categories` (strings or objects) into one ordered tuple."""
    raw: list[Any] = []
    if doc.get("category") is not None:
        raw.append(doc["category"])
    cats = doc.get("categories")
    if isinstance(cats, (list, tuple)):
        raw.extend(cats)
    elif cats is not None:
        raw.append(cats)

    labels: list[str] = []
    for item in raw:
        label = _label(item)
        if label and label not in labels:
            labels.append(label)
    return tuple(labels)


def _get(doc: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        val = doc.get(key)
        if val is not None:
            return val
    return None


def _count(val: Any) -> int:
    try:
        return max(0, int(val))
    except (TypeError, ValueError):
        return 0


def _tally(doc: Mapping[str, Any], count_keys: tuple[str, ...], history_keys: tuple[str, ...]) -> int:
    """Stored counter, else the length of the matching history array."""
    count = _get(doc, *count_keys)
    if count is not None:
        return _count(count)
    history = _get(doc, *history_keys)
    return len(history) if isinstance(history, (list, tuple)) else 0


def _flag(val: Any) -> bool:
    if isinstance(val, str):
        return val.strip().lower() in _TRUTHY
    return bool(val)


def _priority(val: Any) -> str:
    if val is None:
        return DEFAULT_PRIORITY
    priority = str(val).strip().lower()
    return priority or DEFAULT_PRIORITY


def doc_to_task(doc: Mapping[str, Any]) -> Task:
    """
    Converts a persistence document into a Task.
    Accepts camelCase or snake_case keys, `_id` or `id`; unknown keys are ignored.
    """
    completed_raw = _get(doc, "completed")
    if completed_raw is None:
        completed = str(doc.get("status") or "").lower() == "completed"
    else:
        completed = _flag(completed_raw)

    description = _get(doc, "description")
    return Task(
        id=_label(_get(doc, "id", "_id")) or "",
        title=str(_get(doc, "title", "content") or ""),
        priority=_priority(doc.get("priority")),
        categories=normalize_categories(doc),
        completed=completed,
        created_at=parse_timestamp(_get(doc, "createdAt", "created_at", "created")),
        completed_at=(
            parse_timestamp(_get(doc, "completedAt", "completed_at")) if completed else None
        ),
        due_date=parse_due(_get(doc, "dueDate", "due_date", "due")),
        started_at=parse_timestamp(_get(doc, "startedAt", "started_at")),
        description=str(description) if description is not None else None,
        postpone_count=_tally(doc, ("postponeCount", "postpone_count"), ("postponeHistory", "postpone_history")),
        reopen_count=_tally(doc, ("reopenCount", "reopen_count"), ("reopenHistory", "reopen_history")),
    )


def to_task(item: Task | Mapping[str, Any]) -> Task:
    if isinstance(item, Task):
        aware = {
            name: normalize_datetime(val)
            for name in _DATETIME_FIELDS
            if (val := getattr(item, name)) is not None and val.tzinfo is not None
        }
        return dataclasses.replace(item, **aware) if aware else item
    if isinstance(item, Mapping):
        return doc_to_task(item)
    raise ValidationError(f"unsupported task record: {type(item).__name__}")


def validate_task(task: Task) -> list[str]:
    problems: list[str] = []
    if not task.title.strip():
        problems.append("title is empty")
    elif len(task.title) > TITLE_MAX:
        problems.append(f"title exceeds {TITLE_MAX} characters")
    if task.description and len(task.description) > DESCRIPTION_MAX:
        problems.append(f"description exceeds {DESCRIPTION_MAX} characters")
    if task.completed_at is not None and not task.completed:
        problems.append("completed_at set on an incomplete task")
    if task.completed_at and task.created_at and task.completed_at < task.created_at:
        problems.append("completed before it was created")
    return problems
