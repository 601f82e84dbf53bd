"""Application state shared by every command and view."""

from dataclasses import dataclass
from pathlib import Path

from ..io.kv_store import FileKeyValueStore, KeyValueStore, PersistentStore
from .analytics import ProgressAnalytics
from .logging_flow import SetLoggingSession
from .models import WorkoutPlan
from .plan_repository import WorkoutPlanRepository
from .progress_log import ProgressLog
from .timers import RestTimer, Stopwatch, TickScheduler


@dataclass
class AppState:
    """
    Everything a session works with, passed explicitly to handlers.

    Plan and log mutations go through ``plans`` and ``progress``; the
    timers are ephemeral and never persisted.
    """

    store: PersistentStore
    progress: ProgressLog
    plans: WorkoutPlanRepository
    rest_timer: RestTimer
    stopwatch: Stopwatch
    analytics: ProgressAnalytics

    @classmethod
    def open(cls, backend: KeyValueStore, scheduler: TickScheduler, rest_timer: RestTimer | None = None) -> "AppState":
        """Load plan and log from ``backend`` and wire up timers on ``scheduler``."""
        store = PersistentStore(backend)
        progress = ProgressLog(store)
        return cls(
            store=store,
            progress=progress,
            plans=WorkoutPlanRepository(store, progress),
            rest_timer=rest_timer or RestTimer(scheduler),
            stopwatch=Stopwatch(scheduler),
            analytics=ProgressAnalytics(progress),
        )

    @classmethod
    def open_dir(cls, data_dir: Path, scheduler: TickScheduler, rest_timer: RestTimer | None = None) -> "AppState":
        return cls.open(FileKeyValueStore(data_dir), scheduler, rest_timer)

    def logging_session(self) -> SetLoggingSession:
        return SetLoggingSession(self.progress, self.rest_timer)

    def adopt_plan(self, plan: WorkoutPlan) -> None:
        """Make ``plan`` the active plan; the progress log starts over."""
        self.plans.replace(plan)

    def dispose(self) -> None:
        """Cancel any running timers."""
        self.rest_timer.dispose()
        self.stopwatch.dispose()
