"""Single weighted productivity score.

Score = CompletionRate x 0.30 + OnTimeRate x 0.25 + Focus x 0.20 + AntiProcrastination x 0.25

Every component is normalized to 0-100 before weighting:

- completion rate: completed / total tasks
- on-time rate: completed tasks with a due date finished on or before it
  (100 when no completed task had a due date)
- focus: 100 - context switch rate (neutral 50 with fewer than two completions)
- anti-procrastination: 100 - overdue percentage
"""

from dataclasses import dataclass

from .completion import CompletionMetrics
from .core.models import Task
from .focus import FocusAnalysis
from .lib.numbers import pct, round1
from .lib.selectors import is_done, is_late

__all__ = [
    "GRADES",
    "NEUTRAL_FOCUS",
    "WEIGHTS",
    "ProductivityScore",
    "ScoreComponent",
    "grade",
    "on_time_rate",
    "productivity_score",
    "weighted_score",
]

WEIGHTS: dict[str, float] = {
    "completion": 0.30,
    "on_time": 0.25,
    "focus": 0.20,
    "anti_procrastination": 0.25,
}

NEUTRAL_FOCUS = 50.0

# (minimum score, letter, description), highest first
GRADES: tuple[tuple[int, str, str], ...] = (
    (90, "A", "Exceptional productivity"),
    (75, "B", "Strong productivity"),
    (60, "C", "Steady productivity"),
    (40, "D", "Below average productivity"),
    (0, "F", "Needs significant improvement"),
)

_LABELS = {
    "completion": ("Completion Rate", "Percentage of tasks completed"),
    "on_time": ("On-Time Rate", "Percentage of dated tasks completed by their deadline"),
    "focus": ("Focus", "Sustained focus measured as low context switching"),
    "anti_procrastination": ("Anti-Procrastination", "Inverse of the overdue percentage"),
}


@dataclass(frozen=True)
class ScoreComponent:
    key: str
    name: str
    value: float
    weight: float
    contribution: float
    description: str


@dataclass(frozen=True)
class ProductivityScore:
    score: int
    grade: str
    grade_description: str
    on_time_rate: float
    components: list[ScoreComponent]
    formula: str
    interpretation: str


def grade(score: int) -> tuple[str, str]:
    for minimum, letter, description in GRADES:
        if score >= minimum:
            return letter, description
    _, letter, description = GRADES[-1]
    return letter, description


def on_time_rate(tasks: list[Task]) -> float:
    dated = [t for t in tasks if is_done(t) and t.due_date is not None]
    if not dated:
        return 100.0
    return round1(pct(sum(1 for t in dated if not is_late(t)), len(dated)))


def focus_component(focus: FocusAnalysis) -> float:
    if focus.completions_analyzed < 2:
        return NEUTRAL_FOCUS
    return max(0.0, min(100.0, 100 - focus.context_switch_rate))


def weighted_score(values: dict[str, float]) -> int:
    total = sum(max(0.0, min(100.0, values[key])) * weight for key, weight in WEIGHTS.items())
    return max(0, min(100, round(total)))


def _formula() -> str:
    terms = [f"{_LABELS[key][0].replace(' ', '').replace('-', '')} x {w:.2f}" for key, w in WEIGHTS.items()]
    return "Score = " + " + ".join(terms)


def _interpret(score: int, components: list[ScoreComponent]) -> str:
    if score >= 80:
        parts = ["Excellent overall productivity."]
    elif score >= 60:
        parts = ["Good productivity with room for improvement."]
    elif score >= 40:
        parts = ["Moderate productivity - focus on the weakest component."]
    else:
        parts = ["Productivity needs attention across multiple areas."]

    weakest = min(components, key=lambda c: c.value)
    if weakest.value < 50:
        parts.append(f"Weakest area: {weakest.name} ({weakest.value:.1f}%).")
    return " ".join(parts)


def productivity_score(
    tasks: list[Task], completion: CompletionMetrics, focus: FocusAnalysis
) -> ProductivityScore:
    on_time = on_time_rate(tasks)
    values = {
        "completion": completion.completion_rate,
        "on_time": on_time,
        "focus": focus_component(focus),
        "anti_procrastination": max(0.0, 100 - completion.overdue_percentage),
    }
    score = weighted_score(values)
    letter, description = grade(score)
    components = [
        ScoreComponent(
            key=key,
            name=_LABELS[key][0],
            value=round1(values[key]),
            weight=weight,
            contribution=round1(values[key] * weight),
            description=_LABELS[key][1],
        )
        for key, weight in WEIGHTS.items()
    ]
    return ProductivityScore(
        score=score,
        grade=letter,
        grade_description=description,
        on_time_rate=on_time,
        components=components,
        formula=_formula(),
        interpretation=_interpret(score, components),
    )
