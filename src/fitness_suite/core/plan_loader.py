"""
Bundled default plan.

The starter plan lives in ``src/fitness_suite/default_plan.yaml`` and is
decoded with the same serializer as stored and generated plans. The
application cannot start without it, so a missing or invalid file raises
RuntimeError.
"""

from __future__ import annotations

import importlib.resources

import yaml

from ..io.serializers import ValidationError, dict_to_plan
from .models import WorkoutPlan

DEFAULT_PLAN_RESOURCE = "default_plan.yaml"


def load_default_plan() -> WorkoutPlan:
    """Return a fresh copy of the bundled starter plan."""
    ref = importlib.resources.files("fitness_suite").joinpath(DEFAULT_PLAN_RESOURCE)
    try:
        raw = yaml.safe_load(ref.read_text(encoding="utf-8"))
        return dict_to_plan(raw)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise RuntimeError(
            f"fitness-suite: bundled {DEFAULT_PLAN_RESOURCE} could not be loaded: {e}"
        ) from e
