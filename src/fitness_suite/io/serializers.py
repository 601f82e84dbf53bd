"""
JSON serialization for plan and progress-log models.

Handles conversion between dataclasses and JSON-compatible dicts. The
stored field names are camelCase (``warmUp``, ``isCompleted``...) so that
plans produced by the LLM plan generator decode with the same code.
"""

import logging
import re
from datetime import datetime
from typing import Any

from ..core.config import DEFAULT_DAY_EMOJI, SECTION_KINDS
from ..core.models import (
    DayPlan,
    Exercise,
    LogData,
    LoggedExercise,
    Section,
    SetEntry,
    WorkoutPlan,
)
from ..core.parsing import coerce_reps, coerce_weight

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def _require_mapping(data: Any, what: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _require_str(data: dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"{what}.{key} must be a string, got {value!r}")
    return value


def _free_form(value: Any) -> str:
    """Plan fields may arrive as numbers (``"sets": 4``); keep their text form."""
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(f"Expected a string or number, got {value!r}")
    return str(value)


# =============================================================================
# PLAN
# =============================================================================


def exercise_to_dict(exercise: Exercise) -> dict[str, Any]:
    return {
        "name": exercise.name,
        "sets": exercise.sets,
        "reps": exercise.reps,
        "rest": exercise.rest,
    }


def dict_to_exercise(data: Any) -> Exercise:
    data = _require_mapping(data, "exercise")
    return Exercise(
        name=_require_str(data, "name", "exercise"),
        sets=_free_form(data.get("sets", "1")),
        reps=_free_form(data.get("reps")),
        rest=_free_form(data.get("rest")),
    )


def section_to_dict(section: Section) -> dict[str, Any]:
    out: dict[str, Any] = {"title": section.title}
    if section.details is not None:
        out["details"] = section.details
    out["exercises"] = [exercise_to_dict(e) for e in section.exercises]
    return out


def dict_to_section(kind: str, data: Any) -> Section:
    """
    Convert dict to Section of the given kind.

    Raises:
        ValidationError: If title or exercises are missing or malformed
    """
    data = _require_mapping(data, kind)
    exercises = data.get("exercises")
    if not isinstance(exercises, list):
        raise ValidationError(f"{kind}.exercises must be a list")
    details = data.get("details")
    if details is not None and not isinstance(details, str):
        raise ValidationError(f"{kind}.details must be a string")
    return Section(
        kind=kind,  # type: ignore[arg-type]
        title=_require_str(data, "title", kind),
        exercises=[dict_to_exercise(e) for e in exercises],
        details=details,
    )


def day_plan_to_dict(day: DayPlan) -> dict[str, Any]:
    out: dict[str, Any] = {"emoji": day.emoji, "title": day.title}
    for section in day.sections:
        out[section.kind] = section_to_dict(section)
    out["warmUp"] = list(day.warm_up)
    out["coolDown"] = day.cool_down
    return out


def dict_to_day_plan(data: Any) -> DayPlan:
    """
    Convert dict to DayPlan.

    Absent sections are simply absent; optional display fields fall back
    to defaults. A present-but-malformed section is an error.
    """
    data = _require_mapping(data, "day")
    warm_up = data.get("warmUp", [])
    if not isinstance(warm_up, list) or not all(isinstance(w, str) for w in warm_up):
        raise ValidationError("day.warmUp must be a list of strings")
    cool_down = data.get("coolDown", "")
    if not isinstance(cool_down, str):
        raise ValidationError("day.coolDown must be a string")
    title = data.get("title", "")
    if not isinstance(title, str):
        raise ValidationError("day.title must be a string")
    emoji = data.get("emoji")
    if emoji is None:
        emoji = DEFAULT_DAY_EMOJI
    if not isinstance(emoji, str):
        raise ValidationError("day.emoji must be a string")

    sections = [
        dict_to_section(kind, data[kind])
        for kind in SECTION_KINDS
        if data.get(kind) is not None
    ]
    return DayPlan(
        title=title,
        emoji=emoji,
        sections=sections,
        warm_up=list(warm_up),
        cool_down=cool_down,
    )


def plan_to_dict(plan: WorkoutPlan) -> dict[str, Any]:
    return {day: day_plan_to_dict(d) for day, d in plan.items()}


def dict_to_plan(data: Any) -> WorkoutPlan:
    """
    Convert dict to WorkoutPlan, preserving day order.

    Raises:
        ValidationError: If the payload is not a mapping of day -> day object.
            An empty mapping is a valid (empty) plan.
    """
    data = _require_mapping(data, "plan")
    plan: WorkoutPlan = {}
    for day, day_data in data.items():
        try:
            plan[str(day)] = dict_to_day_plan(day_data)
        except (ValidationError, ValueError) as e:
            raise ValidationError(f"{day}: {e}") from e
    return plan


# =============================================================================
# PROGRESS LOG
# =============================================================================


def set_entry_to_dict(entry: SetEntry) -> dict[str, Any]:
    return {"weight": entry.weight, "reps": entry.reps}


def dict_to_set_entry(data: Any) -> SetEntry:
    data = _require_mapping(data, "set")
    return SetEntry(
        weight=coerce_weight(data.get("weight", 0)),
        reps=coerce_reps(data.get("reps", 0)),
    )


def logged_exercise_to_dict(logged: LoggedExercise) -> dict[str, Any]:
    return {
        "name": logged.name,
        "sets": [set_entry_to_dict(s) for s in logged.sets],
        "isCompleted": logged.is_completed,
    }


def dict_to_logged_exercise(data: Any) -> LoggedExercise:
    data = _require_mapping(data, "logged exercise")
    sets = data.get("sets", [])
    if not isinstance(sets, list):
        raise ValidationError("logged exercise sets must be a list")
    return LoggedExercise(
        name=_require_str(data, "name", "logged exercise"),
        sets=[dict_to_set_entry(s) for s in sets],
        is_completed=bool(data.get("isCompleted", False)),
    )


def log_to_dict(log: LogData) -> dict[str, Any]:
    return {
        date: {key: logged_exercise_to_dict(entry) for key, entry in day.items()}
        for date, day in log.items()
    }


def dict_to_log(data: Any) -> LogData:
    """
    Convert dict to progress-log data.

    Malformed dates and entries are skipped with a warning so the rest of
    the history survives; a date left with no valid entries is dropped.

    Raises:
        ValidationError: If the payload is not a mapping
    """
    data = _require_mapping(data, "progress log")
    log: LogData = {}
    for date, day in data.items():
        try:
            validate_date(date)
            day = _require_mapping(day, f"progress log[{date}]")
        except ValidationError as e:
            logger.warning("Skipping progress log date %r: %s", date, e)
            continue

        entries = {}
        for key, entry in day.items():
            try:
                entries[str(key)] = dict_to_logged_exercise(entry)
            except (ValidationError, ValueError) as e:
                logger.warning("Skipping progress log entry %s/%s: %s", date, key, e)
        if entries:
            log[date] = entries
    return log
