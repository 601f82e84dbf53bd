"""
Set-logging flow.

One session captures weight/reps for a single exercise occurrence:

    IDLE --begin()--> EDITING --commit()--> COMMITTED
                        |
                        +--cancel()--> IDLE

Draft rows hold raw user text; numbers are coerced only on commit.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .models import ExerciseOccurrence, LoggedExercise
from .parsing import rest_seconds, set_count
from .progress_log import ProgressLog
from .timers import RestTimer

logger = logging.getLogger(__name__)


class FlowState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    COMMITTED = "committed"


class LoggingFlowError(Exception):
    """Raised when a logging operation is not valid in the current state."""

    pass


@dataclass
class DraftSet:
    """One editable set row; values are raw input strings."""

    weight: str = ""
    reps: str = ""


def _draft_value(value: float | int) -> str:
    # A stored 0 came from blank or junk input; show it blank again.
    if not value:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SetLoggingSession:
    """
    Logging session for one exercise occurrence at a time.

    Committing records the sets in the progress log and, when the exercise
    prescribes a rest period, starts the rest timer.
    """

    def __init__(self, progress_log: ProgressLog, rest_timer: RestTimer | None = None):
        self.progress_log = progress_log
        self.rest_timer = rest_timer
        self.state = FlowState.IDLE
        self.occurrence: ExerciseOccurrence | None = None
        self.date: str | None = None
        self.drafts: list[DraftSet] = []

    def begin(self, occurrence: ExerciseOccurrence, date: str) -> list[DraftSet]:
        """
        Open an editing session.

        The row count comes from the exercise's sets field (1 if it holds no
        number). Rows are pre-filled from the entry already logged for this
        exercise on ``date``, if any.

        Args:
            occurrence: Exercise and its log key
            date: ISO date the sets belong to

        Returns:
            The draft rows
        """
        if self.state == FlowState.EDITING:
            raise LoggingFlowError(
                f"Already logging {self.occurrence.name if self.occurrence else '?'}; commit or cancel first"
            )

        existing = self.progress_log.entry(date, occurrence.key)
        prior = existing.sets if existing is not None else []
        drafts = []
        for i in range(set_count(occurrence.exercise.sets)):
            if i < len(prior):
                drafts.append(DraftSet(weight=_draft_value(prior[i].weight), reps=_draft_value(prior[i].reps)))
            else:
                drafts.append(DraftSet())

        self.occurrence = occurrence
        self.date = date
        self.drafts = drafts
        self.state = FlowState.EDITING
        return drafts

    def update(self, index: int, weight: str | None = None, reps: str | None = None) -> None:
        """Edit one draft row; fields left as None are unchanged."""
        self._require_editing()
        if index < 0 or index >= len(self.drafts):
            raise LoggingFlowError(f"Set index {index} out of range (0-{len(self.drafts) - 1})")
        if weight is not None:
            self.drafts[index].weight = weight
        if reps is not None:
            self.drafts[index].reps = reps

    def commit(self) -> LoggedExercise:
        """
        Record the drafts, close the session, and start the rest timer.

        Returns:
            The stored LoggedExercise
        """
        self._require_editing()
        assert self.occurrence is not None and self.date is not None

        entry = self.progress_log.record_sets(
            self.date,
            self.occurrence.key,
            self.occurrence.name,
            [{"weight": d.weight, "reps": d.reps} for d in self.drafts],
        )
        self.state = FlowState.COMMITTED
        logger.info("Logged %s (%s) on %s", self.occurrence.name, self.occurrence.key, self.date)

        rest = rest_seconds(self.occurrence.exercise.rest)
        if rest > 0 and self.rest_timer is not None:
            self.rest_timer.start(rest)
        return entry

    def cancel(self) -> None:
        """Discard the drafts and return to idle."""
        self._require_editing()
        self._reset()

    def _reset(self) -> None:
        self.state = FlowState.IDLE
        self.occurrence = None
        self.date = None
        self.drafts = []

    def _require_editing(self) -> None:
        if self.state != FlowState.EDITING:
            raise LoggingFlowError(f"No exercise is being logged (state: {self.state.value})")
