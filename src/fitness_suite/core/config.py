"""
Configuration constants for fitness-suite.

All adjustable parameters are centralized here. User overrides are read
from ~/.fitness-suite/config.yaml by config_loader.py.
"""

from typing import Final

# =============================================================================
# STORAGE
# =============================================================================

PLAN_KEY: Final[str] = "workoutPlan"
PROGRESS_LOG_KEY: Final[str] = "progressLog"

DATA_DIR_NAME: Final[str] = ".fitness-suite"
DATA_DIR_ENV: Final[str] = "FITNESS_SUITE_HOME"
CONFIG_FILE_NAME: Final[str] = "config.yaml"

# =============================================================================
# PLAN FIELDS
# =============================================================================

# Section kinds in display order; a day holds at most one of each.
SECTION_KINDS: Final[tuple[str, ...]] = ("mainWorkout", "mainCircuit", "coreFinisher")

DEFAULT_DAY_EMOJI: Final[str] = "💪"
MISSING_REST_LABEL: Final[str] = "N/A"

DEFAULT_SET_COUNT: Final[int] = 1  # when an exercise's sets field has no integer
DEFAULT_REST_SECONDS: Final[int] = 0  # 0 = no rest timer

# =============================================================================
# TIMERS
# =============================================================================

REST_TICK_SECONDS: Final[float] = 1.0
STOPWATCH_TICK_MS: Final[int] = 10
CLOCK_TICK_SECONDS: Final[float] = 1.0

# =============================================================================
# LLM
# =============================================================================

GEMINI_BASE_URL: Final[str] = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL: Final[str] = "gemini-2.0-flash"
GEMINI_API_KEY_ENV: Final[str] = "GEMINI_API_KEY"
LLM_TIMEOUT_SECONDS: Final[float] = 60.0

# Days requested from the plan generator.
GENERATED_PLAN_DAYS: Final[tuple[str, ...]] = ("Monday", "Tuesday", "Thursday", "Friday")

GOALS: Final[tuple[str, ...]] = (
    "Build Muscle (Hypertrophy)",
    "Increase Strength (Powerlifting)",
    "Fat Loss & General Fitness",
    "Improve Athletic Performance",
)
DEFAULT_GOAL: Final[str] = "Fat Loss & General Fitness"

EXPERIENCE_LEVELS: Final[tuple[str, ...]] = ("Beginner", "Intermediate", "Advanced")
DEFAULT_EXPERIENCE: Final[str] = "Intermediate"

DEFAULT_EQUIPMENT: Final[str] = "standard gym equipment"
