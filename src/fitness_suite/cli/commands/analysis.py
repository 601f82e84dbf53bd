"""Analysis commands: progress."""

import json
from typing import Annotated, Optional

import typer

from .. import views
from ..app import DataDirOption, app, get_state


@app.command()
def progress(
    exercise: Annotated[
        Optional[str],
        typer.Option("--exercise", "-e", help="Exercise name (default: first logged exercise)"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show max weight lifted per day for an exercise, with headline stats.
    """
    state = get_state(data_dir)
    analytics = state.analytics
    names = analytics.exercises()

    if exercise is not None:
        if exercise not in names:
            logged = ", ".join(names) if names else "none yet"
            views.print_error(f"No logged sets for '{exercise}'. Logged exercises: {logged}")
            raise typer.Exit(1)
        analytics.select(exercise)

    if json_out:
        summary = analytics.summary()
        print(json.dumps({
            "exercise": analytics.selected,
            "exercises": names,
            "series": [{"date": p.date, "maxWeight": p.max_weight} for p in analytics.series()],
            "bestLift": summary.best_lift,
            "totalWorkoutDays": summary.total_workout_days,
        }, indent=2))
        return

    views.print_progress(analytics)
