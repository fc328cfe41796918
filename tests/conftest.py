import contextlib
import io
import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

import fncli
import pytest

from planner import config
from planner.core.errors import PlannerError
from planner.core.models import Task
from planner.lib import ansi

PACKAGE_DIR = Path(__file__).resolve().parent.parent / "planner"

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0)


def task(id: str = "t1", **kw) -> Task:
    """Task with sensible defaults; completed tasks get a completion time unless given."""
    kw.setdefault("title", f"task {id}")
    kw.setdefault("created_at", NOW - timedelta(days=1))
    if kw.get("completed") and "completed_at" not in kw:
        kw["completed_at"] = NOW - timedelta(hours=1)
    return Task(id=id, **kw)


@dataclass
class Result:
    exit_code: int
    stdout: str
    stderr: str


_discovered = False


class FnCLIRunner:
    """Runs `planner ...` in-process and captures what it printed."""

    def invoke(self, args: list[str]) -> Result:
        global _discovered
        if not _discovered:
            fncli.autodiscover(PACKAGE_DIR, "planner")
            _discovered = True

        out, err = io.StringIO(), io.StringIO()
        code: int | None = 0
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            try:
                code = fncli.dispatch(["planner", *args])
            except PlannerError as e:
                err.write(f"{e}\n")
                code = 1
            except fncli.UsageError as e:
                err.write(f"{e}\n")
                code = 2
            except SystemExit as e:
                code = e.code if isinstance(e.code, int) else 1
        return Result(exit_code=code or 0, stdout=out.getvalue(), stderr=err.getvalue())


@pytest.fixture(autouse=True)
def plain_output():
    ansi.use(ansi.PLAIN)
    yield
    ansi.use(ansi.DEFAULT)


@pytest.fixture
def tmp_planner_dir(tmp_path, monkeypatch):
    planner_dir = tmp_path / ".planner"
    planner_dir.mkdir()
    monkeypatch.setattr(config, "PLANNER_DIR", planner_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", planner_dir / "config.yaml")
    monkeypatch.setattr(config, "TASKS_PATH", planner_dir / "tasks.json")
    config.Config.reset()
    yield planner_dir
    config.Config.reset()


@pytest.fixture
def write_snapshot(tmp_planner_dir):
    def _write(docs: list[dict], name: str = "tasks.json") -> Path:
        path = tmp_planner_dir / name
        path.write_text(json.dumps(docs))
        return path

    return _write
