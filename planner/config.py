import dataclasses
from pathlib import Path

import yaml

from .core.errors import ValidationError
from .core.models import Thresholds

PLANNER_DIR = Path.home() / ".planner"
CONFIG_PATH = PLANNER_DIR / "config.yaml"
TASKS_PATH = PLANNER_DIR / "tasks.json"

DEFAULT_PERIOD = "weekly"


class Config:
    """Single-instance config manager. Load once, cache in memory."""

    _instance: "Config | None" = None
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._data = {}
            instance._load()
            cls._instance = instance
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next access reloads from disk."""
        cls._instance = None

    def _load(self) -> None:
        """Load config from disk."""
        if not CONFIG_PATH.exists():
            self._data = {}
            return
        try:
            with CONFIG_PATH.open() as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"unreadable config {CONFIG_PATH}: {e}") from e
        self._data = loaded if isinstance(loaded, dict) else {}

    def _save(self) -> None:
        """Persist config to disk."""
        PLANNER_DIR.mkdir(exist_ok=True)
        with CONFIG_PATH.open("w") as f:
            yaml.dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        """Get config value."""
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        """Set config value and persist."""
        self._data[key] = value
        self._save()


def get_tasks_path() -> Path:
    """Snapshot file to analyse; `tasks_path` in config overrides the default."""
    val = Config().get("tasks_path")
    return Path(str(val)).expanduser() if val else TASKS_PATH


def get_period() -> str:
    val = Config().get("period")
    return str(val).strip() if val else DEFAULT_PERIOD


def get_thresholds() -> Thresholds:
    """Thresholds with any overrides from the `thresholds` config section."""
    val = Config().get("thresholds")
    if not isinstance(val, dict):
        return Thresholds()
    known = {f.name for f in dataclasses.fields(Thresholds)}
    overrides: dict[str, int] = {}
    for key, raw in val.items():
        if key not in known:
            raise ValidationError(f"unknown threshold '{key}'")
        try:
            overrides[key] = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"threshold '{key}' must be an integer, got {raw!r}") from None
        if overrides[key] < 0:
            raise ValidationError(f"threshold '{key}' must not be negative")
    return dataclasses.replace(Thresholds(), **overrides)


def set_tasks_path(path: str) -> None:
    Config().set("tasks_path", path)
