"""
Rest timer and stopwatch.

Both clocks are small state machines advanced by ``tick()``. Ticks come
from a TickScheduler; the handle it returns is owned by the clock that
started it and is cancelled when the clock stops, restarts, or is disposed,
so no callback runs against a clock that is no longer in use.

AsyncioTickScheduler drives ticks from an asyncio event loop. Everything
runs on the loop's thread; there is no locking.
"""

import asyncio
import logging
from typing import Callable, Protocol

from .config import REST_TICK_SECONDS, STOPWATCH_TICK_MS

logger = logging.getLogger(__name__)


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    def every(self, interval_seconds: float, callback: Callable[[], None]) -> TickHandle:
        """Call ``callback`` every ``interval_seconds`` until the handle is cancelled."""
        ...


class _LoopTick:
    """Re-arming ``call_later`` chain on an event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._next_at = loop.time() + interval
        self._handle = loop.call_at(self._next_at, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Schedule against the ideal time so ticks do not drift with callback latency.
        self._next_at += self._interval
        self._handle = self._loop.call_at(self._next_at, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()


class AsyncioTickScheduler:
    """TickScheduler backed by the running (or a given) asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def every(self, interval_seconds: float, callback: Callable[[], None]) -> TickHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _LoopTick(loop, interval_seconds, callback)


def format_countdown(seconds: int) -> str:
    """90 -> "01:30"."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def format_elapsed(elapsed_ms: int) -> str:
    """Stopwatch display MM:SS.hh; minutes wrap at 60."""
    minutes = (elapsed_ms // 60000) % 60
    seconds = (elapsed_ms // 1000) % 60
    hundredths = (elapsed_ms // 10) % 100
    return f"{minutes:02d}:{seconds:02d}.{hundredths:02d}"


class RestTimer:
    """
    Countdown between sets.

    Inactive while ``seconds_remaining == 0``. ``start(n)`` runs it for n
    seconds, replacing any countdown already in progress. Reaching zero plays
    the completion cue and calls ``on_complete``; ``skip()`` calls
    ``on_complete`` without the cue. Either way the callback fires once per
    countdown.
    """

    def __init__(
        self,
        scheduler: TickScheduler,
        on_complete: Callable[[], None] | None = None,
        cue: Callable[[], None] | None = None,
        tick_seconds: float = REST_TICK_SECONDS,
    ):
        self.scheduler = scheduler
        self.on_complete = on_complete
        self.cue = cue
        self.tick_seconds = tick_seconds
        self.seconds_remaining = 0
        self._handle: TickHandle | None = None

    @property
    def is_active(self) -> bool:
        return self.seconds_remaining > 0

    def start(self, seconds: int) -> None:
        """Start counting down from ``seconds``. Non-positive values are ignored."""
        if seconds <= 0:
            return
        self._cancel_handle()
        self.seconds_remaining = int(seconds)
        self._handle = self.scheduler.every(self.tick_seconds, self.tick)
        logger.debug("Rest timer started: %ss", seconds)

    def tick(self) -> None:
        """Advance one second."""
        if not self.is_active:
            return
        self.seconds_remaining -= 1
        if self.seconds_remaining <= 0:
            self.seconds_remaining = 0
            self._cancel_handle()
            self._play_cue()
            self._complete()

    def skip(self) -> None:
        """End the countdown now, without the cue. No-op when inactive."""
        if not self.is_active:
            return
        self.seconds_remaining = 0
        self._cancel_handle()
        self._complete()

    def dispose(self) -> None:
        """Stop ticking without firing callbacks."""
        self._cancel_handle()
        self.seconds_remaining = 0

    def formatted(self) -> str:
        return format_countdown(self.seconds_remaining)

    def _play_cue(self) -> None:
        if self.cue is None:
            return
        try:
            self.cue()
        except Exception:
            logger.warning("Rest timer completion cue failed", exc_info=True)

    def _complete(self) -> None:
        if self.on_complete is not None:
            self.on_complete()

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class Stopwatch:
    """
    Free-running count-up clock.

    ``elapsed_ms`` grows by ``tick_ms`` on every tick while running.
    ``reset()`` stops and zeroes it from any state.
    """

    def __init__(self, scheduler: TickScheduler, tick_ms: int = STOPWATCH_TICK_MS):
        self.scheduler = scheduler
        self.tick_ms = tick_ms
        self.elapsed_ms = 0
        self._handle: TickHandle | None = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.is_running:
            return
        self._handle = self.scheduler.every(self.tick_ms / 1000, self.tick)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def reset(self) -> None:
        self.stop()
        self.elapsed_ms = 0

    def tick(self) -> None:
        if self.is_running:
            self.elapsed_ms += self.tick_ms

    def dispose(self) -> None:
        self.stop()

    def formatted(self) -> str:
        return format_elapsed(self.elapsed_ms)
