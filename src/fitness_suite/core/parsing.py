"""
Lenient parsing helpers for free-form plan fields and user input.

Plan authors write "4", "3-4 rounds", "90s" or "N/A"; users type whatever
they like into weight/reps prompts. None of these helpers raise: each one
documents the value it falls back to.
"""

import math
import re

from .config import DEFAULT_REST_SECONDS, DEFAULT_SET_COUNT
from .models import DayPlan, ExerciseOccurrence

_FIRST_INT = re.compile(r"\d+")
_LEADING_FLOAT = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")
_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


def parse_first_int(text: object, default: int) -> int:
    """
    Return the first run of digits embedded in ``text``.

    Non-string values are converted with ``str()`` first, so a numeric
    ``sets`` from a generated plan behaves like its string form.

    Args:
        text: Free-form field value ("4", "90s", "3-4 rounds")
        default: Value returned when no digits are present

    Returns:
        The parsed integer, or ``default``
    """
    if text is None:
        return default
    match = _FIRST_INT.search(str(text))
    return int(match.group()) if match else default


def set_count(sets_field: object) -> int:
    """Number of draft set rows for an exercise; 1 when none can be parsed."""
    n = parse_first_int(sets_field, DEFAULT_SET_COUNT)
    return n if n > 0 else DEFAULT_SET_COUNT


def rest_seconds(rest_field: object) -> int:
    """Rest duration in seconds; 0 (no timer) when none can be parsed."""
    return parse_first_int(rest_field, DEFAULT_REST_SECONDS)


def coerce_weight(value: object) -> float:
    """
    Coerce user weight input to a non-negative float.

    Reads the leading number the way a lenient form field would ("82.5kg"
    -> 82.5). Empty, non-numeric, non-finite and negative inputs become 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_FLOAT.match(str(value or ""))
        if not match:
            return 0.0
        number = float(match.group())
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_reps(value: object) -> int:
    """
    Coerce user reps input to a non-negative int.

    Floats truncate ("8.7" -> 8); empty, non-numeric and negative inputs
    become 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return 0
        number = int(value)
    else:
        match = _LEADING_INT.match(str(value or ""))
        if not match:
            return 0
        number = int(match.group())
    return number if number > 0 else 0


def exercise_key(section_title: str, index: int) -> str:
    """
    Build the log key for an exercise position.

    "Main Workout", 0 -> "main-workout-0". Keys are positional: reordering
    a section's exercises re-points existing log entries.
    """
    return f"{section_title.lower().replace(' ', '-')}-{index}"


def day_occurrences(day: DayPlan) -> list[ExerciseOccurrence]:
    """List every exercise of a day with its log key, in display order."""
    out: list[ExerciseOccurrence] = []
    for section in day.sections:
        for i, ex in enumerate(section.exercises):
            out.append(
                ExerciseOccurrence(
                    key=exercise_key(section.title, i),
                    section_title=section.title,
                    index=i,
                    exercise=ex,
                )
            )
    return out
