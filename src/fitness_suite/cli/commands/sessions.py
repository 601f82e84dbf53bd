"""Session commands: log and its interactive helpers."""

import asyncio
from typing import Annotated, Optional

import typer
from rich.markup import escape

from ...core.app_state import AppState
from ...core.logging_flow import SetLoggingSession
from ...core.models import ExerciseOccurrence, LoggedExercise
from ...core.parsing import day_occurrences
from ...core.progress_log import today_iso
from ...io.serializers import ValidationError, validate_date
from .. import views
from ..app import DataDirOption, app, get_state
from .timers import run_rest_countdown


def _find_occurrence(state: AppState, day_name: str, key: str) -> ExerciseOccurrence:
    day_plan = state.plans.day(day_name)
    if day_plan is None:
        views.print_error(f"No '{day_name}' in the plan. Days: {', '.join(state.plans.days())}")
        raise typer.Exit(1)
    occurrences = day_occurrences(day_plan)
    for occ in occurrences:
        if occ.key == key:
            return occ
    valid = ", ".join(f"{o.key} ({o.name})" for o in occurrences)
    views.print_error(f"No exercise '{key}' on {day_name}. Keys: {valid}")
    raise typer.Exit(1)


def _apply_set_options(session: SetLoggingSession, raw_sets: list[str]) -> None:
    """
    Fill draft rows from --set values ("WEIGHT,REPS", e.g. "100,8").

    Extra values beyond the prescribed set count are ignored with a warning.
    """
    for i, raw in enumerate(raw_sets):
        if i >= len(session.drafts):
            views.print_warning(f"Only {len(session.drafts)} sets prescribed; ignoring '{raw}'")
            continue
        weight, _, reps = raw.partition(",")
        session.update(i, weight=weight.strip(), reps=reps.strip())


def _interactive_sets(session: SetLoggingSession) -> None:
    """Prompt for weight and reps of each draft row; Enter keeps the shown value."""
    views.console.print()
    views.console.print("[bold]Enter weight and reps for each set.[/bold]")
    views.console.print("  Press [bold]Enter[/bold] to keep the value in brackets.\n")
    for i, draft in enumerate(session.drafts):
        weight = views.console.input(f"  Set {i + 1} weight \\[{escape(draft.weight) or '-'}]: ").strip()
        reps = views.console.input(f"  Set {i + 1} reps \\[{escape(draft.reps) or '-'}]: ").strip()
        session.update(i, weight=weight or None, reps=reps or None)


async def _commit_and_rest(state: AppState, session: SetLoggingSession, rest: bool) -> LoggedExercise:
    entry = session.commit()
    views.print_logged(entry)
    if rest and state.rest_timer.is_active:
        await run_rest_countdown(state.rest_timer)
    else:
        state.rest_timer.dispose()
    return entry


@app.command("log")
def log_sets(
    exercise_key: Annotated[str, typer.Argument(help="Exercise key from 'plan', e.g. main-workout-0")],
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Plan day the exercise belongs to (default: today)"),
    ] = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", help="Log date (YYYY-MM-DD, default: today)"),
    ] = None,
    sets: Annotated[
        Optional[list[str]],
        typer.Option("--set", "-s", help="WEIGHT,REPS for one set; repeat per set. Prompts if omitted."),
    ] = None,
    rest: Annotated[
        bool,
        typer.Option("--rest/--no-rest", help="Start the rest timer after logging"),
    ] = True,
    data_dir: DataDirOption = None,
) -> None:
    """
    Log weight and reps for one exercise and mark it complete.

    Logging the same exercise again on the same day overwrites the entry.
    """
    log_date = date or today_iso()
    try:
        validate_date(log_date)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    state = get_state(data_dir)
    day_name = day or state.plans.today_name()
    if day_name is None:
        views.print_error("The active plan has no days.")
        raise typer.Exit(1)

    occurrence = _find_occurrence(state, day_name, exercise_key)
    session = state.logging_session()
    session.begin(occurrence, log_date)

    if sets:
        _apply_set_options(session, sets)
    else:
        views.print_drafts(occurrence.name, session.drafts)
        _interactive_sets(session)

    try:
        asyncio.run(_commit_and_rest(state, session, rest))
    except KeyboardInterrupt:
        state.rest_timer.skip()
        views.print_info("Rest skipped.")
