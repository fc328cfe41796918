import json as _json
from pathlib import Path

from fncli import UsageError, cli

from . import config
from .analytics import AnalyticsReport, compute_analytics, report_to_dict
from .core.models import Task
from .lib import clock
from .lib.converters import doc_to_task, validate_task
from .lib.errors import echo
from .render import (
    render_completion,
    render_dashboard,
    render_focus,
    render_patterns,
    render_priority,
    render_procrastination,
    render_report,
    render_score,
    render_trends,
)
from .reports import REPORT_KINDS, generate_report
from .store import load_documents, load_tasks


def _snapshot(path: str | None) -> list[Task]:
    return load_tasks(Path(path).expanduser() if path else None)


def _analytics(path: str | None, period: str | None = None) -> AnalyticsReport:
    return compute_analytics(
        _snapshot(path),
        clock.now(),
        period=period or config.get_period(),
        thresholds=config.get_thresholds(),
    )


@cli("planner")
def dashboard(path: str | None = None) -> None:
    """Score, completion and streak at a glance"""
    print(render_dashboard(_analytics(path)))


@cli("planner")
def score(path: str | None = None) -> None:
    """Weighted productivity score and grade"""
    print("\n".join(render_score(_analytics(path).productivity)))


@cli("planner", flags={"period": ["-p", "--period"]})
def completion(period: str | None = None, path: str | None = None) -> None:
    """Completion metrics for a daily, weekly or monthly window"""
    print("\n".join(render_completion(_analytics(path, period).completion)))


@cli("planner")
def patterns(path: str | None = None) -> None:
    """Most productive hour, day and time of day"""
    print("\n".join(render_patterns(_analytics(path).time_patterns)))


@cli("planner")
def priority(path: str | None = None) -> None:
    """Completion and deadlines by priority"""
    print("\n".join(render_priority(_analytics(path).priority)))


@cli("planner")
def focus(path: str | None = None) -> None:
    """Context switching, reopened and stale tasks"""
    print("\n".join(render_focus(_analytics(path).focus)))


@cli("planner")
def procrastination(path: str | None = None) -> None:
    """Postponed, overdue and untouched tasks"""
    print("\n".join(render_procrastination(_analytics(path).procrastination)))


@cli("planner")
def streaks(path: str | None = None) -> None:
    """Completion heatmap, streaks and weekly trend"""
    print("\n".join(render_trends(_analytics(path).trends)))


@cli("planner", flags={"kind": ["-k", "--kind"]})
def report(kind: str = "weekly", json: bool = False, path: str | None = None) -> None:
    """Weekly or monthly report with wins, bottlenecks and suggestions"""
    if kind not in REPORT_KINDS:
        raise UsageError(f"unknown report kind '{kind}' (use {', '.join(REPORT_KINDS)})")
    result = generate_report(_snapshot(path), clock.now(), kind, config.get_thresholds())
    if json:
        print(_json.dumps(report_to_dict(result), indent=2))
        return
    print(render_report(result))


@cli("planner", flags={"output": ["-o", "--output"]})
def export(output: str | None = None, path: str | None = None) -> None:
    """Full analytics as JSON"""
    data = _json.dumps(report_to_dict(_analytics(path)), indent=2)
    if not output:
        print(data)
        return
    target = Path(output).expanduser()
    target.write_text(data + "\n")
    echo(f"exported → {target}")


@cli("planner")
def check(path: str | None = None) -> None:
    """Validate task documents in the snapshot"""
    docs = load_documents(Path(path).expanduser() if path else None)
    tasks = [doc_to_task(d) for d in docs]
    problems = 0
    for doc, task in zip(docs, tasks, strict=True):
        for msg in validate_task(task):
            problems += 1
            echo(f"  {task.id or doc.get('title', '?')}: {msg}")
    if problems:
        echo(f"{problems} problem(s) in {len(tasks)} tasks")
        return
    echo(f"ok: {len(tasks)} tasks")


@cli("planner", name="use")
def use_snapshot(snapshot: str) -> None:
    """Set the default snapshot file"""
    target = Path(snapshot).expanduser()
    config.set_tasks_path(str(target))
    echo(f"snapshot → {target}")
