import json
from pathlib import Path
from typing import Any

import yaml

from . import config
from .core.errors import NotFoundError, ValidationError
from .core.models import Task
from .lib.converters import doc_to_task

__all__ = ["load_documents", "load_tasks"]

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_documents(path: Path | None = None) -> list[dict[str, Any]]:
    """Read a snapshot file: a list of task documents or {"tasks": [...]}."""
    path = path if path else config.get_tasks_path()
    if not path.exists():
        raise NotFoundError(f"no task snapshot at {path}")

    text = path.read_text()
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"unreadable snapshot {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("tasks", data.get("data"))
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValidationError(f"{path} must hold a list of tasks")
    docs = [d for d in data if isinstance(d, dict)]
    if len(docs) != len(data):
        raise ValidationError(f"{path} holds {len(data) - len(docs)} entries that are not task objects")
    return docs


def load_tasks(path: Path | None = None) -> list[Task]:
    return [doc_to_task(d) for d in load_documents(path)]
