"""
Data models for fitness-suite.

Dataclasses for the weekly workout plan, the progress log, and the values
derived from it. Plan fields (sets, reps, rest) stay free-form strings;
numeric interpretation lives in parsing.py.
"""

from dataclasses import dataclass, field
from typing import Literal

from .config import DEFAULT_DAY_EMOJI, MISSING_REST_LABEL, SECTION_KINDS

SectionKind = Literal["mainWorkout", "mainCircuit", "coreFinisher"]


@dataclass
class Exercise:
    """
    One prescribed exercise within a section.

    sets/reps/rest are authored free-form ("4", "8-10", "45s", "90s").
    """

    name: str
    sets: str = "1"
    reps: str = ""
    rest: str = ""

    @property
    def rest_label(self) -> str:
        return self.rest or MISSING_REST_LABEL


@dataclass
class Section:
    """A named group of exercises within a day (main workout, circuit, finisher)."""

    kind: SectionKind
    title: str
    exercises: list[Exercise] = field(default_factory=list)
    details: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in SECTION_KINDS:
            raise ValueError(f"Invalid section kind: {self.kind!r}")


@dataclass
class DayPlan:
    """
    One weekday's prescribed workout.

    ``sections`` is kept in canonical kind order (mainWorkout, mainCircuit,
    coreFinisher) with at most one section per kind.
    """

    title: str
    emoji: str = DEFAULT_DAY_EMOJI
    sections: list[Section] = field(default_factory=list)
    warm_up: list[str] = field(default_factory=list)
    cool_down: str = ""

    def __post_init__(self) -> None:
        kinds = [s.kind for s in self.sections]
        if len(set(kinds)) != len(kinds):
            raise ValueError(f"Duplicate section kinds in day {self.title!r}: {kinds}")
        self.sections.sort(key=lambda s: SECTION_KINDS.index(s.kind))

    def section(self, kind: SectionKind) -> Section | None:
        """Return the section of the given kind, or None if the day has none."""
        for s in self.sections:
            if s.kind == kind:
                return s
        return None


# Day name -> DayPlan, in plan order.
WorkoutPlan = dict[str, DayPlan]


@dataclass(frozen=True)
class ExerciseOccurrence:
    """One exercise at a specific position of a day's section, with its log key."""

    key: str
    section_title: str
    index: int
    exercise: Exercise

    @property
    def name(self) -> str:
        return self.exercise.name


@dataclass
class SetEntry:
    """A single logged set."""

    weight: float = 0.0
    reps: int = 0

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps < 0:
            raise ValueError("reps must be non-negative")


@dataclass
class LoggedExercise:
    """
    Completion record for one exercise occurrence on one day.

    ``name`` is a snapshot taken at log time, not a reference into the plan.
    """

    name: str
    sets: list[SetEntry] = field(default_factory=list)
    is_completed: bool = True

    @property
    def max_weight(self) -> float:
        return max((s.weight for s in self.sets), default=0.0)


# ISO date -> exercise key -> LoggedExercise
LogData = dict[str, dict[str, LoggedExercise]]


@dataclass(frozen=True)
class SeriesPoint:
    """Heaviest weight lifted for one exercise on one day."""

    date: str  # ISO format: YYYY-MM-DD
    max_weight: float


@dataclass(frozen=True)
class ProgressSummary:
    best_lift: float
    total_workout_days: int
