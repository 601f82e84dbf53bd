"""
Progress log: the record of completed sets, keyed by date and exercise key.

Every mutation is saved synchronously through the PersistentStore. The log
is the only source for progress analytics.
"""

from datetime import date as Date
from datetime import datetime
from typing import Iterable, Mapping

from ..io.kv_store import PersistentStore
from ..io.serializers import dict_to_log, log_to_dict, validate_date
from .config import PROGRESS_LOG_KEY
from .models import LogData, LoggedExercise, ProgressSummary, SeriesPoint, SetEntry
from .parsing import coerce_reps, coerce_weight

# A set as captured from the user: a SetEntry or a {"weight": .., "reps": ..} mapping
RawSet = SetEntry | Mapping[str, object]


def today_iso(now: datetime | None = None) -> str:
    """Local calendar day as YYYY-MM-DD."""
    return (now or datetime.now()).strftime("%Y-%m-%d")


def _coerce_set(raw: RawSet) -> SetEntry:
    if isinstance(raw, SetEntry):
        return SetEntry(weight=coerce_weight(raw.weight), reps=coerce_reps(raw.reps))
    return SetEntry(weight=coerce_weight(raw.get("weight")), reps=coerce_reps(raw.get("reps")))


class ProgressLog:
    """
    Date -> exercise key -> LoggedExercise, persisted under ``progressLog``.

    At most one entry exists per (date, key); recording again overwrites.
    Entries are never removed individually, only by ``clear()``.
    """

    def __init__(self, store: PersistentStore, key: str = PROGRESS_LOG_KEY):
        self.store = store
        self.key = key
        self._data: LogData = store.load(key, {}, decode=dict_to_log)

    @property
    def data(self) -> LogData:
        return self._data

    def _save(self) -> None:
        self.store.save(self.key, self._data, encode=log_to_dict)

    def record_sets(self, date: str, exercise_key: str, name: str, sets: Iterable[RawSet]) -> LoggedExercise:
        """
        Upsert the entry for (date, exercise_key) and mark it completed.

        Non-numeric or empty weight/reps become 0.

        Args:
            date: ISO date (YYYY-MM-DD)
            exercise_key: Positional exercise key, e.g. "main-workout-0"
            name: Exercise name snapshot
            sets: Sets as entered

        Returns:
            The stored LoggedExercise
        """
        validate_date(date)
        entry = LoggedExercise(
            name=name,
            sets=[_coerce_set(s) for s in sets],
            is_completed=True,
        )
        self._data.setdefault(date, {})[exercise_key] = entry
        self._save()
        return entry

    def entry(self, date: str, exercise_key: str) -> LoggedExercise | None:
        return self._data.get(date, {}).get(exercise_key)

    def is_completed(self, date: str, exercise_key: str) -> bool:
        entry = self.entry(date, exercise_key)
        return entry is not None and entry.is_completed

    def clear(self) -> None:
        """Remove every date. Called when a new plan is adopted."""
        self._data = {}
        self._save()

    def distinct_exercise_names(self) -> list[str]:
        """Names of every logged exercise, without duplicates, in first-seen order."""
        seen: dict[str, None] = {}
        for day in self._data.values():
            for entry in day.values():
                seen.setdefault(entry.name, None)
        return list(seen)

    def series_for(self, exercise_name: str) -> list[SeriesPoint]:
        """
        Heaviest set per day for one exercise, oldest first.

        Every matching entry of a day contributes (the same exercise may sit
        in two sections). Days without a match are left out, not zero-filled.
        """
        points: list[tuple[Date, SeriesPoint]] = []
        for date, day in self._data.items():
            matches = [e for e in day.values() if e.name == exercise_name]
            if not matches:
                continue
            max_weight = max((s.weight for e in matches for s in e.sets), default=0.0)
            parsed = datetime.strptime(date, "%Y-%m-%d").date()
            points.append((parsed, SeriesPoint(date=date, max_weight=max_weight)))

        points.sort(key=lambda p: p[0])
        return [p for _, p in points]

    def total_workout_days(self) -> int:
        """Number of distinct dates with any logged exercise."""
        return len(self._data)

    def summary(self, exercise_name: str) -> ProgressSummary:
        """Best lift for ``exercise_name`` (0 if never logged) and total workout days."""
        best = max((p.max_weight for p in self.series_for(exercise_name)), default=0.0)
        return ProgressSummary(best_lift=best, total_workout_days=self.total_workout_days())
