"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans, logs, progress and AI replies.
"""

from datetime import datetime

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.analytics import ProgressAnalytics
from ..core.ascii_plot import create_max_weight_plot
from ..core.assistant import AssistantReply, PlanProposal
from ..core.logging_flow import DraftSet
from ..core.models import DayPlan, LoggedExercise, WorkoutPlan
from ..core.parsing import exercise_key
from ..core.progress_log import ProgressLog

console = Console()


def format_clock(now: datetime) -> str:
    """Header clock line, e.g. "Monday, March 4, 2024 | 09:05 AM"."""
    return f"{now.strftime('%A, %B')} {now.day}, {now.year} | {now.strftime('%I:%M %p')}"


def print_header(now: datetime | None = None) -> None:
    console.print()
    console.print("[bold white]AI Fitness Suite[/bold white]")
    console.print("[dim]Your personalized path to peak performance.[/dim]")
    console.print(f"[dim]{format_clock(now or datetime.now())}[/dim]")
    console.print()


def play_cue() -> None:
    """Rest-over cue: terminal bell."""
    console.bell()


def print_today_focus(plan: WorkoutPlan, now: datetime | None = None) -> None:
    weekday = (now or datetime.now()).strftime("%A")
    day = plan.get(weekday)
    focus = escape(day.title) if day is not None else "Rest Day"
    console.print(f"[bold]Today's Focus:[/bold] [cyan]{focus}[/cyan]")
    console.print("  " + "  ".join(escape(f"{d.emoji} {name}") for name, d in plan.items()))
    console.print()


def format_day_table(day: DayPlan, progress: ProgressLog, date: str) -> list[Table]:
    """
    One table per section of the day. Completed rows (for ``date``) are marked.

    Args:
        day: Day to render
        progress: Progress log used for completion marks
        date: ISO date whose completions are shown
    """
    tables = []
    for section in day.sections:
        title = escape(section.title)
        if section.details:
            title += f"\n[dim]{escape(section.details)}[/dim]"
        table = Table(title=title, title_justify="left")
        table.add_column("Key", style="dim")
        table.add_column("Exercise", style="bold")
        table.add_column("Sets", justify="center")
        table.add_column("Reps", justify="center")
        table.add_column("Rest", justify="center")
        table.add_column("Done", justify="center")
        for i, ex in enumerate(section.exercises):
            key = exercise_key(section.title, i)
            done = progress.is_completed(date, key)
            table.add_row(
                key,
                escape(ex.name),
                escape(ex.sets),
                escape(ex.reps),
                escape(ex.rest_label),
                "[green]✓[/green]" if done else "",
                style="on grey15" if done else None,
            )
        tables.append(table)
    return tables


def print_day(day_name: str, day: DayPlan, progress: ProgressLog, date: str) -> None:
    console.print(f"[bold cyan]{escape(f'{day.emoji} {day_name} - {day.title}')}[/bold cyan]")
    if day.warm_up:
        console.print("[bold]Warm-up:[/bold] " + escape("; ".join(day.warm_up)))
    console.print()
    for table in format_day_table(day, progress, date):
        console.print(table)
        console.print()
    if day.cool_down:
        console.print(f"[bold]Cool-down:[/bold] {escape(day.cool_down)}")


def format_plan_summary(plan: WorkoutPlan) -> str:
    """Compact preview of a plan: one heading per day and one line per exercise."""
    lines = []
    for day_name, day in plan.items():
        lines.append(f"{day.emoji} {day_name} - {day.title}")
        for section in day.sections:
            for ex in section.exercises:
                lines.append(f"  • {ex.name}: {ex.sets} sets of {ex.reps}, {ex.rest_label} rest")
        lines.append("")
    return "\n".join(lines).rstrip()


def print_drafts(name: str, drafts: list[DraftSet]) -> None:
    table = Table(title=f"Log: {escape(name)}", title_justify="left")
    table.add_column("Set", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    for i, d in enumerate(drafts, 1):
        table.add_row(str(i), escape(d.weight) or "-", escape(d.reps) or "-")
    console.print(table)


def print_logged(entry: LoggedExercise) -> None:
    sets = ", ".join(f"{s.weight:g}×{s.reps}" for s in entry.sets)
    print_success(f"Logged {entry.name}: {sets}")


def format_progress_stats(analytics: ProgressAnalytics) -> Table:
    summary = analytics.summary()
    table = Table(show_header=False, box=None)
    table.add_column("Stat", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Total Workouts Logged", str(summary.total_workout_days))
    table.add_row(f"Best Lift ({escape(analytics.selected)})", f"{summary.best_lift:g} lbs/kg")
    return table


def print_progress(analytics: ProgressAnalytics) -> None:
    console.print()
    console.print(format_progress_stats(analytics))
    console.print()
    names = analytics.exercises()
    if not names:
        print_info("Log some workouts to see your progress here!")
        return

    console.print("[dim]Logged exercises:[/dim] " + escape(", ".join(names)))
    console.print()
    console.print(Text(create_max_weight_plot(analytics.series(), exercise_name=analytics.selected)))
    if analytics.needs_more_days():
        console.print()
        print_info("Log this exercise on another day to see a trend line.")


def print_reply(reply: AssistantReply) -> None:
    if reply.ok:
        console.print(Panel(Markdown(reply.text), title=escape(reply.title), title_align="left"))
    else:
        console.print(Panel(Text(reply.text, style="red"), title=escape(reply.title), title_align="left"))


def print_proposal(proposal: PlanProposal) -> None:
    if proposal.plan is None:
        console.print(Panel(Text(proposal.message, style="red"), title=escape(proposal.title), title_align="left"))
        return
    console.print(Panel(Text(format_plan_summary(proposal.plan)), title=escape(proposal.title), title_align="left"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{escape(message)} \\[y/N]: ")
    return response.lower() in ("y", "yes")
