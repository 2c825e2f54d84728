"""Loads semtag settings from the environment and `.env` files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os
from pathlib import Path
from typing import cast

from dotenv import load_dotenv

from semtag.config.defaults import DEFAULTS


@dataclass(frozen=True)
class EnvVarSpec:
    """Describes one environment variable understood by semtag."""

    setting: str
    env_var: str
    description: str


ENV_REGISTRY: tuple[EnvVarSpec, ...] = (
    EnvVarSpec("method", "SEMTAG_METHOD", "Backend used to resolve tags"),
    EnvVarSpec("git_executable", "SEMTAG_GIT", "git executable name or path"),
    EnvVarSpec("log_level", "SEMTAG_LOG_LEVEL", "Console log level"),
    EnvVarSpec("structured_logging", "SEMTAG_STRUCTURED_LOGS", "Emit JSON logs"),
)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SemtagSettings:
    """Resolved runtime settings."""

    method: str
    git_executable: str
    log_level: str
    structured_logging: bool


def load_environment(dotenv_path: str | Path | None = None) -> None:
    """Load `.env` files when available; existing variables win."""
    path = Path(dotenv_path) if dotenv_path else Path(".env")
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _env(spec_setting: str, environ: Mapping[str, str]) -> str | None:
    spec = next(spec for spec in ENV_REGISTRY if spec.setting == spec_setting)
    value = environ.get(spec.env_var)
    if value is None or not value.strip():
        return None
    return value.strip()


def settings_from_env(environ: Mapping[str, str] | None = None) -> SemtagSettings:
    """Build settings from environment variables layered over DEFAULTS."""
    environ = os.environ if environ is None else environ
    logging_defaults = cast(dict[str, object], DEFAULTS["logging"])
    structured = _env("structured_logging", environ)
    return SemtagSettings(
        method=_env("method", environ) or str(DEFAULTS["method"]),
        git_executable=_env("git_executable", environ)
        or str(DEFAULTS["git_executable"]),
        log_level=(
            _env("log_level", environ) or str(logging_defaults["log_level"])
        ).upper(),
        structured_logging=(
            structured.lower() in _TRUTHY
            if structured is not None
            else bool(logging_defaults["structured_logging"])
        ),
    )


__all__ = [
    "ENV_REGISTRY",
    "EnvVarSpec",
    "SemtagSettings",
    "load_environment",
    "settings_from_env",
]
