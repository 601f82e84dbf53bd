"""Prompt templates and the plan response schema."""

from typing import Any

from ..core.config import DEFAULT_EQUIPMENT, GENERATED_PLAN_DAYS


def explain_exercise_prompt(name: str) -> str:
    return (
        f'Explain how to perform the exercise "{name}". Describe proper form, '
        "common mistakes, and primary muscles worked. Format with headings."
    )


def swap_exercise_prompt(name: str) -> str:
    return (
        f'Suggest one single alternative exercise for "{name}" that targets similar '
        "muscle groups. Provide only the name of the new exercise."
    )


def nutrition_prompt(query: str) -> str:
    return (
        "As a helpful nutrition assistant for a fitness app, answer the following "
        f'user query: "{query}". Provide a clear, helpful, and concise response. '
        "Format the response with markdown."
    )


def plan_prompt(goal: str, experience: str, equipment: str = "") -> str:
    days = ", ".join(GENERATED_PLAN_DAYS)
    return (
        f'Create a {len(GENERATED_PLAN_DAYS)}-day workout plan for a user with the goal of "{goal}". '
        f'The user\'s experience level is "{experience}" and they have access to the following '
        f'equipment: "{equipment or DEFAULT_EQUIPMENT}". The plan should be split over '
        f"{len(GENERATED_PLAN_DAYS)} distinct days ({days}). For each day, provide a title, a "
        "suitable emoji, a warm-up list, a cooldown description, and a list of main exercises. "
        "Each exercise must have a name, sets, reps, and rest period. Do not include video links."
    )


def _string() -> dict[str, Any]:
    return {"type": "STRING"}


def _day_schema() -> dict[str, Any]:
    exercise = {
        "type": "OBJECT",
        "properties": {k: _string() for k in ("name", "sets", "reps", "rest")},
    }
    return {
        "type": "OBJECT",
        "properties": {
            "emoji": _string(),
            "title": _string(),
            "warmUp": {"type": "ARRAY", "items": _string()},
            "coolDown": _string(),
            "mainWorkout": {
                "type": "OBJECT",
                "properties": {
                    "title": _string(),
                    "exercises": {"type": "ARRAY", "items": exercise},
                },
            },
        },
    }


def plan_schema(days: tuple[str, ...] = GENERATED_PLAN_DAYS) -> dict[str, Any]:
    """Gemini responseSchema for a generated plan: one day object per requested day."""
    return {"type": "OBJECT", "properties": {day: _day_schema() for day in days}}
