from .analytics import AnalyticsReport
from .completion import CompletionMetrics
from .core.models import TaskRef
from .focus import FocusAnalysis
from .lib.ansi import bold, graded, muted, red, yellow
from .lib.format import format_hours, format_pct
from .patterns import TimePatterns
from .priority import PriorityAnalysis
from .procrastination import ProcrastinationAnalysis
from .reports import Report
from .score import ProductivityScore
from .trends import Trends

__all__ = [
    "render_completion",
    "render_dashboard",
    "render_focus",
    "render_patterns",
    "render_priority",
    "render_procrastination",
    "render_report",
    "render_score",
    "render_trends",
]

_HEAT = " ░▒▓█"
_BAR_WIDTH = 20


def _bar(count: int, peak: int) -> str:
    if not peak:
        return ""
    return "█" * max(1, round(count / peak * _BAR_WIDTH)) if count else ""


def _refs(title: str, refs: list[TaskRef], unit: str) -> list[str]:
    if not refs:
        return []
    lines = [f"  {title}:"]
    lines += [f"    {r.title or r.id}  {muted(f'{r.value:g}{unit}')}" for r in refs]
    return lines


def render_score(p: ProductivityScore) -> list[str]:
    lines = [
        f"{bold('SCORE:')} {graded(p.grade, f'{p.score}/100 {p.grade}')}  {muted(p.grade_description)}",
    ]
    for c in p.components:
        lines.append(
            f"  {c.name.lower():<22} {c.value:>5.1f}  x{c.weight:.2f} = {c.contribution:>4.1f}"
        )
    lines.append(f"  {muted(p.interpretation)}")
    return lines


def render_completion(c: CompletionMetrics) -> list[str]:
    lines = [
        f"{bold(f'COMPLETION ({c.period}):')}",
        f"  created:    {c.tasks_created}",
        f"  completed:  {c.tasks_completed}",
        f"  rate:       {format_pct(c.completion_rate)} ({c.total_completed}/{c.total_tasks})",
        f"  overdue:    {c.total_overdue} ({format_pct(c.overdue_percentage)})",
        f"  avg time:   {format_hours(c.avg_completion_time_hours)}",
    ]
    for day in c.daily_breakdown:
        lines.append(f"    {day.date.strftime('%a %d/%m')}  +{day.created:<3} ✓{day.completed}")
    lines.append(f"  {muted(c.interpretation)}")
    return lines


def render_patterns(tp: TimePatterns) -> list[str]:
    lines = [bold("TIME PATTERNS:")]
    if tp.most_productive_hour:
        lines.append(f"  peak hour:  {tp.most_productive_hour.label} ({tp.most_productive_hour.completions})")
    if tp.most_productive_day:
        lines.append(f"  peak day:   {tp.most_productive_day.label} ({tp.most_productive_day.completions})")
    peak = max((h.completions for h in tp.hourly), default=0)
    for h in tp.hourly:
        if h.completions:
            lines.append(f"    {h.label}  {_bar(h.completions, peak)} {h.completions}")
    for b in tp.by_time_of_day:
        lines.append(f"  {b.bucket:<10}  {b.completions}")
    lines.append(f"  {muted(tp.interpretation)}")
    return lines


def render_priority(pa: PriorityAnalysis) -> list[str]:
    lines = [f"{bold('PRIORITY:')} effectiveness {pa.effectiveness_score}/100"]
    for s in pa.by_priority:
        lines.append(
            f"  {s.priority:<8} {s.completed}/{s.total} done ({format_pct(s.completion_rate)})"
            f"  missed {s.missed_deadlines}/{s.with_due_date} ({format_pct(s.missed_deadline_rate)})"
            f"  avg {format_hours(s.avg_completion_time_hours)}"
        )
    lines.append(f"  {muted(pa.interpretation)}")
    return lines


def render_focus(f: FocusAnalysis) -> list[str]:
    lines = [
        bold("FOCUS:"),
        f"  switches:   {f.context_switches} ({format_pct(f.context_switch_rate)})",
        f"  streaks:    avg {f.avg_focus_streak:g}, max {f.max_focus_streak}",
    ]
    for c in f.categories:
        lines.append(f"    {c.category:<16} {c.completed}/{c.total}")
    lines += _refs(f"reopened ({f.reopened_count})", f.frequently_reopened, "x")
    lines += _refs(f"stale ({f.stale_count})", f.stale, "d")
    lines.append(f"  {muted(f.interpretation)}")
    return lines


def render_procrastination(pr: ProcrastinationAnalysis) -> list[str]:
    s = pr.stats
    score = red(str(pr.score)) if pr.score > 50 else yellow(str(pr.score)) if pr.score > 20 else str(pr.score)
    lines = [
        f"{bold('PROCRASTINATION:')} {score}/100",
        f"  postponed:  {s.postponed} ({s.frequently_postponed} frequently)",
        f"  overdue:    {s.overdue} ({s.severely_overdue} severely)",
        f"  untouched:  {s.never_started}",
    ]
    lines += _refs("postponed most", pr.frequently_postponed, "x")
    lines += _refs("severely overdue", pr.severely_overdue, "d")
    lines += _refs("never started", pr.never_started, "d")
    lines.append(f"  {muted(pr.interpretation)}")
    return lines


def render_trends(tr: Trends) -> list[str]:
    peak = max((d.completed for d in tr.heatmap), default=0)
    cells = []
    for d in tr.heatmap:
        level = 0 if not d.completed else 1 + min(3, (d.completed * 3) // max(peak, 1))
        cells.append(_HEAT[min(level, len(_HEAT) - 1)])
    lines = [
        f"{bold('STREAKS:')} current {tr.current_streak}d, longest {tr.longest_streak}d",
        f"  [{''.join(cells)}]",
    ]
    for w in tr.weekly:
        cats = f"  {muted(', '.join(w.categories))}" if w.categories else ""
        lines.append(f"  {w.label}: {w.completed}{cats}")
    lines.append(f"  {muted(tr.interpretation)}")
    return lines


def render_report(r: Report) -> str:
    lines = [
        bold(f"{r.kind.upper()} REPORT"),
        r.summary,
        "",
        f"score: {graded(r.grade, f'{r.score}/100 {r.grade}')}  {muted(r.grade_description)}",
    ]
    if r.key_wins:
        lines.append(bold("\nWINS:"))
        lines += [f"  + {w.metric}: {w.value}  {muted(w.detail)}" for w in r.key_wins]
    if r.bottlenecks:
        lines.append(bold("\nBOTTLENECKS:"))
        for b in r.bottlenecks:
            mark = red("!") if b.severity == "high" else yellow("·")
            lines.append(f"  {mark} {b.metric}: {b.value}  {muted(b.detail)}")
    if r.suggestions:
        lines.append(bold("\nNEXT:"))
        lines += [f"  → {s.action}: {s.detail}" for s in r.suggestions]
    return "\n".join(lines)


def render_dashboard(a: AnalyticsReport) -> str:
    if not a.completion.total_tasks:
        return "no tasks in snapshot"
    sections = [
        render_score(a.productivity),
        render_completion(a.completion)[:6],
        render_trends(a.trends)[:2],
    ]
    return "\n\n".join("\n".join(s) for s in sections)
