"""AI coach commands: explain, swap, nutrition."""

import asyncio
from typing import Annotated

import typer

from ...core.assistant import AssistantReply
from .. import views
from ..app import DataDirOption, app, get_assistant


def _show(reply: AssistantReply) -> None:
    views.print_reply(reply)
    if not reply.ok:
        raise typer.Exit(1)


@app.command()
def explain(
    name: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Barbell Squat'")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Ask the AI coach how to perform an exercise.
    """
    assistant = get_assistant(data_dir)
    with views.console.status("AI is thinking..."):
        reply = asyncio.run(assistant.explain_exercise(name))
    _show(reply)


@app.command()
def swap(
    name: Annotated[str, typer.Argument(help="Exercise to replace")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Ask the AI coach for an alternative to an exercise.
    """
    assistant = get_assistant(data_dir)
    with views.console.status("AI is thinking..."):
        reply = asyncio.run(assistant.suggest_swap(name))
    _show(reply)


@app.command()
def nutrition(
    query: Annotated[str, typer.Argument(help="Nutrition question, e.g. 'post-workout snacks'")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Ask the AI nutrition helper a question.
    """
    assistant = get_assistant(data_dir)
    with views.console.status("AI is thinking..."):
        reply = asyncio.run(assistant.ask_nutrition(query))
    _show(reply)
