import re
from collections.abc import Callable
from dataclasses import dataclass

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Theme:
    red: str = "\033[38;5;203m"
    green: str = "\033[38;5;114m"
    yellow: str = "\033[38;5;221m"
    orange: str = "\033[38;5;208m"
    gray: str = "\033[38;5;245m"
    white: str = "\033[38;5;252m"
    muted: str = "\033[90m"  # dim gray for secondary text
    bold: str = "\033[1m"
    reset: str = "\033[0m"


DEFAULT = Theme()
PLAIN = Theme(**{name: "" for name in Theme.__dataclass_fields__})
_active: Theme = DEFAULT


def use(theme: Theme) -> None:
    global _active
    _active = theme


_COLORS = {"red", "green", "yellow", "orange", "gray", "white", "muted"}

# grade letter -> theme color
GRADE_COLORS = {"A": "green", "B": "green", "C": "yellow", "D": "orange", "F": "red"}


def __getattr__(name: str) -> Callable[[str], str]:
    if name in _COLORS:

        def _wrap(text: str) -> str:
            return f"{getattr(_active, name)}{text}{_active.reset}"

        _wrap.__name__ = name
        return _wrap
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def bold(text: str) -> str:
    return f"{_active.bold}{text}{_active.reset}"


def graded(letter: str, text: str | None = None) -> str:
    color = getattr(_active, GRADE_COLORS.get(letter, "white"))
    return f"{_active.bold}{color}{text if text is not None else letter}{_active.reset}"


def strip(text: str) -> str:
    return _ANSI_RE.sub("", text)
