"""
Tests for the rest timer, stopwatch, and the asyncio tick scheduler.

Most tests drive ticks by hand through ManualScheduler so no real time
passes; TestAsyncioTickScheduler runs a short real event loop.
"""

import asyncio

from fitness_suite.core.timers import (
    AsyncioTickScheduler,
    RestTimer,
    Stopwatch,
    format_countdown,
    format_elapsed,
)


class ManualHandle:
    def __init__(self):
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Records scheduled callbacks; ``fire(n)`` runs the live ones n times."""

    def __init__(self):
        self.entries = []

    def every(self, interval_seconds, callback):
        handle = ManualHandle()
        self.entries.append((interval_seconds, callback, handle))
        return handle

    @property
    def live(self):
        return [e for e in self.entries if not e[2].cancelled]

    def fire(self, times=1):
        for _ in range(times):
            for _, callback, handle in list(self.entries):
                if not handle.cancelled:
                    callback()


class TestFormatting:
    def test_countdown(self):
        assert format_countdown(90) == "01:30"
        assert format_countdown(5) == "00:05"
        assert format_countdown(0) == "00:00"

    def test_elapsed(self):
        assert format_elapsed(0) == "00:00.00"
        assert format_elapsed(61_230) == "01:01.23"
        assert format_elapsed(3_600_000) == "00:00.00"


class TestRestTimer:
    def test_counts_down_and_completes_once(self):
        scheduler = ManualScheduler()
        completed = []
        cues = []
        timer = RestTimer(scheduler, on_complete=lambda: completed.append(1), cue=lambda: cues.append(1))

        timer.start(3)
        assert timer.is_active
        assert timer.formatted() == "00:03"
        scheduler.fire(2)
        assert timer.seconds_remaining == 1
        assert completed == []

        scheduler.fire(5)
        assert timer.seconds_remaining == 0
        assert not timer.is_active
        assert completed == [1]
        assert cues == [1]
        assert scheduler.live == []

    def test_non_positive_start_is_ignored(self):
        scheduler = ManualScheduler()
        timer = RestTimer(scheduler)
        timer.start(0)
        timer.start(-5)
        assert not timer.is_active
        assert scheduler.entries == []

    def test_restart_replaces_running_countdown(self):
        scheduler = ManualScheduler()
        timer = RestTimer(scheduler)
        timer.start(60)
        scheduler.fire(10)
        timer.start(90)
        assert timer.seconds_remaining == 90
        assert len(scheduler.live) == 1
        scheduler.fire()
        assert timer.seconds_remaining == 89

    def test_skip_completes_without_cue(self):
        scheduler = ManualScheduler()
        completed = []
        cues = []
        timer = RestTimer(scheduler, on_complete=lambda: completed.append(1), cue=lambda: cues.append(1))
        timer.start(60)
        timer.skip()
        assert timer.seconds_remaining == 0
        assert completed == [1]
        assert cues == []
        assert scheduler.live == []

    def test_skip_when_inactive_is_noop(self):
        completed = []
        timer = RestTimer(ManualScheduler(), on_complete=lambda: completed.append(1))
        timer.skip()
        assert completed == []

    def test_cue_failure_still_completes(self):
        completed = []

        def broken_cue():
            raise RuntimeError("no audio device")

        scheduler = ManualScheduler()
        timer = RestTimer(scheduler, on_complete=lambda: completed.append(1), cue=broken_cue)
        timer.start(1)
        scheduler.fire()
        assert completed == [1]

    def test_dispose_stops_without_callbacks(self):
        scheduler = ManualScheduler()
        completed = []
        timer = RestTimer(scheduler, on_complete=lambda: completed.append(1))
        timer.start(30)
        timer.dispose()
        assert not timer.is_active
        assert scheduler.live == []
        assert completed == []


class TestStopwatch:
    def test_runs_in_hundredths(self):
        scheduler = ManualScheduler()
        watch = Stopwatch(scheduler)
        watch.start()
        assert scheduler.entries[0][0] == 0.01
        scheduler.fire(150)
        assert watch.elapsed_ms == 1500
        assert watch.formatted() == "00:01.50"

    def test_start_is_idempotent(self):
        scheduler = ManualScheduler()
        watch = Stopwatch(scheduler)
        watch.start()
        watch.start()
        assert len(scheduler.live) == 1

    def test_stop_holds_value_and_resume_continues(self):
        scheduler = ManualScheduler()
        watch = Stopwatch(scheduler)
        watch.start()
        scheduler.fire(10)
        watch.stop()
        scheduler.fire(10)
        assert watch.elapsed_ms == 100
        assert not watch.is_running
        watch.start()
        scheduler.fire(5)
        assert watch.elapsed_ms == 150

    def test_reset_from_running(self):
        scheduler = ManualScheduler()
        watch = Stopwatch(scheduler)
        watch.start()
        scheduler.fire(42)
        watch.reset()
        assert watch.elapsed_ms == 0
        assert not watch.is_running
        assert scheduler.live == []


class TestAsyncioTickScheduler:
    def test_ticks_until_cancelled(self):
        ticks = []

        async def run():
            handle = AsyncioTickScheduler().every(0.01, lambda: ticks.append(1))
            await asyncio.sleep(0.055)
            handle.cancel()
            count = len(ticks)
            await asyncio.sleep(0.03)
            return count

        count = asyncio.run(run())
        assert count >= 2
        assert len(ticks) == count

    def test_rest_timer_on_event_loop(self):
        async def run():
            done = asyncio.Event()
            timer = RestTimer(AsyncioTickScheduler(), on_complete=done.set, tick_seconds=0.01)
            timer.start(3)
            await asyncio.wait_for(done.wait(), 2)
            return timer.seconds_remaining

        assert asyncio.run(run()) == 0
