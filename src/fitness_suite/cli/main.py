"""
CLI entry point using Typer.

Provides commands for the workout companion:
- plan: Show the plan for a day
- log: Log sets for one exercise
- progress: Max-weight chart and headline stats
- rest / stopwatch / clock: Timers
- explain / swap / nutrition: Ask the AI coach
- generate: Generate and adopt a new AI plan
"""

from pathlib import Path
from typing import Annotated

import typer

from ..core.config import DEFAULT_EXPERIENCE, DEFAULT_GOAL
from ..logging_config import configure_logging
from . import views
from .app import DataDirOption, app
from .commands.analysis import progress
from .commands.coach import explain, nutrition, swap
from .commands.planning import generate, plan
from .commands.sessions import log_sets
from .commands.timers import clock, rest, stopwatch


def _prompt(message: str) -> str:
    return views.console.input(message).strip()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging on stderr"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    AI fitness suite. Run without a command for interactive mode.
    """
    configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    views.print_header()

    menu = {
        "1": ("plan",      "Today's workout"),
        "2": ("log",       "Log sets for an exercise"),
        "3": ("progress",  "Progress chart"),
        "4": ("rest",      "Rest timer"),
        "5": ("stopwatch", "Stopwatch"),
        "e": ("explain",   "Explain an exercise"),
        "s": ("swap",      "Suggest an exercise swap"),
        "n": ("nutrition", "Ask the nutrition helper"),
        "g": ("generate",  "Generate a new plan"),
        "c": ("clock",     "Clock"),
        "0": ("quit",      "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = _prompt("Choose \\[1]: ") or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = menu.get(choice, (None, ""))[0]
    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "plan":
        ctx.invoke(plan, day=None, data_dir=data_dir)
    elif chosen == "log":
        key = _prompt("Exercise key (see 'plan', e.g. main-workout-0): ")
        if not key:
            views.print_info("Cancelled.")
            return
        ctx.invoke(log_sets, exercise_key=key, day=None, date=None, sets=None, rest=True, data_dir=data_dir)
    elif chosen == "progress":
        ctx.invoke(progress, exercise=None, json_out=False, data_dir=data_dir)
    elif chosen == "rest":
        raw = _prompt("Rest seconds \\[90]: ") or "90"
        try:
            seconds = int(raw)
        except ValueError:
            views.print_error("Enter a whole number of seconds")
            raise typer.Exit(1)
        ctx.invoke(rest, seconds=seconds)
    elif chosen == "stopwatch":
        ctx.invoke(stopwatch, seconds=None)
    elif chosen in ("explain", "swap"):
        name = _prompt("Exercise name: ")
        if not name:
            views.print_info("Cancelled.")
            return
        ctx.invoke(explain if chosen == "explain" else swap, name=name, data_dir=data_dir)
    elif chosen == "nutrition":
        ctx.invoke(nutrition, query=_prompt("Your question: "), data_dir=data_dir)
    elif chosen == "generate":
        _menu_generate(data_dir)
    elif chosen == "clock":
        ctx.invoke(clock, once=False)


def _menu_generate(data_dir: Path | None) -> None:
    """Prompt for generator inputs, then run ``generate``."""
    goal = _prompt(f"Primary goal \\[{DEFAULT_GOAL}]: ") or DEFAULT_GOAL
    experience = _prompt(f"Experience level \\[{DEFAULT_EXPERIENCE}]: ") or DEFAULT_EXPERIENCE
    equipment = _prompt("Available equipment \\[standard gym]: ")
    generate(goal=goal, experience=experience, equipment=equipment, yes=False, data_dir=data_dir)


if __name__ == "__main__":
    app()
