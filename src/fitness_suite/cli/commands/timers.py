"""Timer commands: rest, stopwatch, clock, and the live countdown helper."""

import asyncio
from datetime import datetime
from typing import Annotated, Optional

import typer
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ...core.config import CLOCK_TICK_SECONDS
from ...core.timers import AsyncioTickScheduler, RestTimer, Stopwatch
from .. import views
from ..app import app

_REFRESH_SECONDS = 0.05


def _rest_panel(timer: RestTimer) -> Panel:
    body = Text(timer.formatted(), style="bold cyan", justify="center")
    return Panel(body, title="Rest Timer", subtitle="Ctrl+C to skip", width=30)


def _stopwatch_panel(stopwatch: Stopwatch) -> Panel:
    body = Text(stopwatch.formatted(), style="bold cyan", justify="center")
    return Panel(body, title="Stopwatch", subtitle="Ctrl+C to stop", width=30)


async def run_rest_countdown(timer: RestTimer, seconds: int | None = None) -> None:
    """
    Show a live countdown until the rest timer completes or is skipped.

    Args:
        timer: Rest timer; started here when ``seconds`` is given, otherwise
            it must already be running on this event loop
        seconds: Duration to start the timer with
    """
    done = asyncio.Event()
    previous = timer.on_complete

    def _finished() -> None:
        done.set()
        if previous is not None:
            previous()

    timer.on_complete = _finished
    try:
        if seconds:
            timer.start(seconds)
        if not timer.is_active:
            return
        with Live(_rest_panel(timer), console=views.console, refresh_per_second=10, transient=True) as live:
            while not done.is_set():
                try:
                    await asyncio.wait_for(done.wait(), _REFRESH_SECONDS)
                except asyncio.TimeoutError:
                    pass
                live.update(_rest_panel(timer))
    finally:
        timer.on_complete = previous


def countdown_or_skip(timer: RestTimer, seconds: int) -> bool:
    """
    Run a countdown to completion; Ctrl+C skips it.

    Returns:
        True if the countdown ran out, False if it was skipped
    """
    try:
        asyncio.run(run_rest_countdown(timer, seconds))
    except KeyboardInterrupt:
        timer.skip()
        return False
    return True


async def run_stopwatch(stopwatch: Stopwatch, limit_seconds: float | None = None) -> None:
    """Run the stopwatch with a live display, for ``limit_seconds`` or until cancelled."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + limit_seconds if limit_seconds is not None else None
    stopwatch.start()
    try:
        with Live(_stopwatch_panel(stopwatch), console=views.console, refresh_per_second=20, transient=True) as live:
            while deadline is None or loop.time() < deadline:
                await asyncio.sleep(_REFRESH_SECONDS)
                live.update(_stopwatch_panel(stopwatch))
    finally:
        stopwatch.stop()


@app.command()
def rest(
    seconds: Annotated[int, typer.Argument(help="Rest duration in seconds")],
) -> None:
    """
    Run a rest countdown. Rings the terminal bell when rest is over.
    """
    if seconds <= 0:
        views.print_info("Nothing to time.")
        return

    timer = RestTimer(AsyncioTickScheduler(), cue=views.play_cue)
    if countdown_or_skip(timer, seconds):
        views.print_success("Rest over!")
    else:
        views.print_info("Rest skipped.")


@app.command()
def stopwatch(
    seconds: Annotated[
        Optional[float],
        typer.Option("--seconds", "-s", help="Stop automatically after this many seconds"),
    ] = None,
) -> None:
    """
    Stopwatch with hundredths. Ctrl+C stops; then resume, reset or quit.
    """
    watch = Stopwatch(AsyncioTickScheduler())

    if seconds is not None:
        asyncio.run(run_stopwatch(watch, seconds))
        views.console.print(f"[bold cyan]{watch.formatted()}[/bold cyan]")
        return

    while True:
        try:
            asyncio.run(run_stopwatch(watch))
        except KeyboardInterrupt:
            watch.stop()
        views.console.print(f"[bold cyan]{watch.formatted()}[/bold cyan]")
        choice = views.console.input("\\[Enter] resume  \\[r] reset  \\[q] quit: ").strip().lower()
        if choice == "q":
            return
        if choice == "r":
            watch.reset()
            views.console.print(f"[bold cyan]{watch.formatted()}[/bold cyan]")


@app.command()
def clock(
    once: Annotated[bool, typer.Option("--once", help="Print the time once and exit")] = False,
) -> None:
    """
    Show the current date and time, updating every second.
    """
    if once:
        views.console.print(views.format_clock(datetime.now()))
        return

    async def _tick() -> None:
        with Live(Text(views.format_clock(datetime.now())), console=views.console, refresh_per_second=2) as live:
            while True:
                await asyncio.sleep(CLOCK_TICK_SECONDS)
                live.update(Text(views.format_clock(datetime.now())))

    try:
        asyncio.run(_tick())
    except KeyboardInterrupt:
        pass

