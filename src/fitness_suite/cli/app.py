"""Shared Typer app object, shared option types, and state helpers."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.app_state import AppState
from ..core.assistant import Assistant
from ..core.config_loader import Settings, load_settings
from ..core.timers import AsyncioTickScheduler, RestTimer
from ..llm.client import GeminiClient
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-D", help="Directory holding plan and log (default: ~/.fitness-suite)"),
]

app = typer.Typer(
    name="fitness-suite",
    help="Weekly workout plan, set logging, progress charts, rest timer and AI coach.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_settings(data_dir: Path | None) -> Settings:
    return load_settings(data_dir)


def get_state(data_dir: Path | None) -> AppState:
    """Open the app state for the given (or configured) data directory."""
    settings = get_settings(data_dir)
    scheduler = AsyncioTickScheduler()
    rest_timer = RestTimer(scheduler, cue=views.play_cue)
    return AppState.open_dir(settings.data_dir, scheduler, rest_timer=rest_timer)


def get_assistant(data_dir: Path | None) -> Assistant:
    settings = get_settings(data_dir)
    return Assistant(GeminiClient.from_settings(settings.llm))
