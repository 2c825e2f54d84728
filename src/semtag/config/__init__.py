"""Configuration helpers for semtag."""

from __future__ import annotations

from .defaults import DEFAULTS
from .env import (
    ENV_REGISTRY,
    EnvVarSpec,
    SemtagSettings,
    load_environment,
    settings_from_env,
)

__all__ = [
    "DEFAULTS",
    "ENV_REGISTRY",
    "EnvVarSpec",
    "SemtagSettings",
    "load_environment",
    "settings_from_env",
]
