"""Planning commands: plan, generate."""

import asyncio
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.config import DEFAULT_EXPERIENCE, DEFAULT_GOAL, EXPERIENCE_LEVELS, GOALS
from ...core.progress_log import today_iso
from .. import views
from ..app import DataDirOption, app, get_assistant, get_state


@app.command()
def plan(
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Day to show (default: today, or the plan's first day)"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show the workout plan for a day, with today's completed exercises marked.
    """
    state = get_state(data_dir)
    now = datetime.now()
    day_name = day or state.plans.today_name(now)

    views.print_header(now)
    views.print_today_focus(state.plans.get(), now)

    if day_name is None:
        views.print_warning("The active plan has no days. Run 'generate' to create one.")
        return

    day_plan = state.plans.day(day_name)
    if day_plan is None:
        views.print_error(f"No '{day_name}' in the plan. Days: {', '.join(state.plans.days())}")
        raise typer.Exit(1)

    views.print_day(day_name, day_plan, state.progress, today_iso(now))
    views.console.print()
    views.print_info("Log an exercise with: fitness-suite log <key> --day " + day_name)


@app.command()
def generate(
    goal: Annotated[
        str,
        typer.Option("--goal", "-g", help=f"Primary goal, e.g. {' | '.join(GOALS)}"),
    ] = DEFAULT_GOAL,
    experience: Annotated[
        str,
        typer.Option("--experience", "-x", help=f"Experience level: {' | '.join(EXPERIENCE_LEVELS)}"),
    ] = DEFAULT_EXPERIENCE,
    equipment: Annotated[
        str,
        typer.Option("--equipment", "-q", help="Available equipment (default: standard gym equipment)"),
    ] = "",
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Adopt the generated plan without asking"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Generate a new weekly plan with the AI coach.

    Adopting the new plan replaces the current one and clears the progress log.
    """
    assistant = get_assistant(data_dir)
    with views.console.status("AI is thinking..."):
        proposal = asyncio.run(assistant.generate_plan(goal, experience, equipment))

    views.print_proposal(proposal)
    if proposal.plan is None:
        raise typer.Exit(1)

    if not yes and not views.confirm_action("Use this plan? Your progress log will be cleared."):
        views.print_info("Kept the current plan.")
        return

    state = get_state(data_dir)
    state.adopt_plan(proposal.plan)
    views.print_success(f"New plan adopted: {', '.join(proposal.plan)}")
