"""
YAML -> Settings loader.

Defaults come from config.py; a user may override them in
~/.fitness-suite/config.yaml (or $FITNESS_SUITE_HOME/config.yaml):

    data_dir: ~/Dropbox/fitness
    llm:
      model: gemini-2.0-flash
      api_key_env: GEMINI_API_KEY
      timeout_seconds: 30

If the user file exists but cannot be parsed, a warning is logged and the
file is ignored.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .config import (
    CONFIG_FILE_NAME,
    DATA_DIR_ENV,
    DATA_DIR_NAME,
    GEMINI_API_KEY_ENV,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    LLM_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


@dataclass
class LLMSettings:
    base_url: str = GEMINI_BASE_URL
    model: str = GEMINI_MODEL
    api_key_env: str = GEMINI_API_KEY_ENV
    timeout_seconds: float = LLM_TIMEOUT_SECONDS


@dataclass
class Settings:
    data_dir: Path
    llm: LLMSettings


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; return {} (with a warning) on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level must be a mapping", path)
        return {}
    return data


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (non-destructive to base)."""
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_default_data_dir() -> Path:
    """Return $FITNESS_SUITE_HOME if set, else ~/.fitness-suite."""
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser()
    home = Path(os.environ.get("HOME", "~")).expanduser()
    return home / DATA_DIR_NAME


def default_settings_dict(data_dir: Path | None = None) -> dict[str, Any]:
    defaults = LLMSettings()
    return {
        "data_dir": str(data_dir or get_default_data_dir()),
        "llm": {
            "base_url": defaults.base_url,
            "model": defaults.model,
            "api_key_env": defaults.api_key_env,
            "timeout_seconds": defaults.timeout_seconds,
        },
    }


def load_settings(data_dir: Path | None = None) -> Settings:
    """
    Build Settings from defaults merged with the user's config.yaml.

    Args:
        data_dir: Explicit data directory (e.g. from --data-dir); takes
            precedence over both the default and the config file value

    Returns:
        Settings
    """
    base_dir = data_dir or get_default_data_dir()
    merged = default_settings_dict(base_dir)

    user_path = base_dir / CONFIG_FILE_NAME
    if user_path.exists():
        merged = _deep_merge(merged, _load_yaml_file(user_path))

    if data_dir is not None:
        merged["data_dir"] = str(data_dir)

    llm_raw = merged.get("llm") if isinstance(merged.get("llm"), dict) else {}
    defaults = LLMSettings()
    try:
        timeout = float(llm_raw.get("timeout_seconds", defaults.timeout_seconds))
    except (TypeError, ValueError):
        logger.warning("Invalid llm.timeout_seconds %r; using default", llm_raw.get("timeout_seconds"))
        timeout = defaults.timeout_seconds

    return Settings(
        data_dir=Path(str(merged.get("data_dir") or base_dir)).expanduser(),
        llm=LLMSettings(
            base_url=str(llm_raw.get("base_url", defaults.base_url)),
            model=str(llm_raw.get("model", defaults.model)),
            api_key_env=str(llm_raw.get("api_key_env", defaults.api_key_env)),
            timeout_seconds=timeout,
        ),
    )
