"""Support routines for the semtag CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from pathlib import Path
import sys
from typing import Any, cast

import yaml

from semtag.backends.factory import coerce_method
from semtag.config.defaults import DEFAULTS
from semtag.config.env import SemtagSettings
from semtag.enums import Method
from semtag.errors import (
    InvalidMethodError,
    NoMatchingTagError,
    SemtagError,
)
from semtag.resolver import SkippedTag, resolve
from semtag.schema import ComparisonReport, FailureReport, ResolutionReport
from semtag.utilities.logger_manager import LoggerConfig, LoggerManager

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NO_MATCH = 3


@dataclass(frozen=True)
class RunOptions:
    """Settings for one CLI invocation after all layers are merged."""

    method: str
    repository: str
    git_executable: str
    log_level: str
    log_dir: str | None
    structured_logging: bool


def load_config(config_path: str | None, logger: Any) -> dict[str, Any]:
    """Load configuration from a YAML file; a missing file means no overrides."""
    if not config_path:
        return {}
    path = Path(config_path)
    if not path.exists():
        logger.warning(f"Config file not found at {config_path}, using defaults")
        return {}

    try:
        with open(path, encoding="utf-8") as file:
            config = yaml.safe_load(file)
    except (OSError, yaml.YAMLError) as exc:
        logger.error(f"Failed to load config file {config_path}: {exc}")
        sys.exit(EXIT_FAILURE)
    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.error(f"Config file must contain a dictionary, got {type(config)}")
        sys.exit(EXIT_FAILURE)
    return config


def _first(*values: Any) -> Any:
    return next((value for value in values if value is not None), None)


def merge_options(
    cli_values: Mapping[str, Any],
    config: Mapping[str, Any],
    env: SemtagSettings,
) -> RunOptions:
    """Layer CLI flags over the YAML file over the environment."""
    logging_config = config.get("logging") or {}
    logging_defaults = cast(dict[str, Any], DEFAULTS["logging"])
    log_level = _first(
        cli_values.get("log_level"),
        logging_config.get("log_level"),
        env.log_level,
    )
    structured = _first(
        cli_values.get("structured_logging"),
        logging_config.get("structured_logging"),
        env.structured_logging,
    )
    return RunOptions(
        method=str(_first(cli_values.get("method"), config.get("method"), env.method)),
        repository=str(
            _first(
                cli_values.get("repository"),
                config.get("repository"),
                DEFAULTS["repository"],
            )
        ),
        git_executable=str(
            _first(
                cli_values.get("git_executable"),
                config.get("git_executable"),
                env.git_executable,
            )
        ),
        log_level=str(log_level).upper(),
        log_dir=_first(
            cli_values.get("log_dir"),
            logging_config.get("log_dir"),
            logging_defaults["log_dir"],
        ),
        structured_logging=bool(structured),
    )


def build_logger_manager(options: RunOptions) -> LoggerManager:
    logging_defaults = cast(dict[str, Any], DEFAULTS["logging"])
    return LoggerManager(
        config=LoggerConfig(
            log_level=options.log_level,
            log_dir=Path(options.log_dir) if options.log_dir else None,
            log_file_name=str(logging_defaults["log_file_name"]),
            structured_logging=options.structured_logging,
        )
    )


def _exit_code_for(error: SemtagError) -> int:
    if isinstance(error, NoMatchingTagError):
        return EXIT_NO_MATCH
    if isinstance(error, InvalidMethodError):
        return EXIT_USAGE
    return EXIT_FAILURE


def run_latest(
    options: RunOptions, *, as_json: bool, logger: logging.Logger
) -> tuple[int, str]:
    """Resolve the latest tag and render it for stdout."""
    skipped: list[SkippedTag] = []
    method: Method | None = None
    try:
        method = coerce_method(options.method)
        resolution = resolve(
            method,
            options.repository,
            on_skip=skipped.append,
            git_executable=options.git_executable,
        )
    except SemtagError as exc:
        level = logging.WARNING if exc.profile.expected else logging.ERROR
        logger.log(
            level,
            "Resolution failed: %s",
            exc,
            extra={"context": {"failure_class": exc.failure_class.value}},
        )
        if not as_json:
            return _exit_code_for(exc), ""
        report = FailureReport.from_error(
            exc, method=method, repository=options.repository
        )
        return _exit_code_for(exc), report.model_dump_json(indent=2)

    logger.info(
        "Resolved %s from tag %s",
        resolution.version_string,
        resolution.tag.name,
        extra={"context": {"method": method.value, "skipped": len(skipped)}},
    )
    if not as_json:
        return EXIT_OK, resolution.version_string
    report = ResolutionReport.from_resolution(
        resolution,
        method=method,
        repository=options.repository,
        skipped=skipped,
    )
    return EXIT_OK, report.model_dump_json(indent=2)


def run_compare(
    options: RunOptions, *, as_json: bool, logger: logging.Logger
) -> tuple[int, str]:
    """Run every backend against the repository and report whether they agree."""
    outcomes: dict[Method, str] = {}
    for method in Method:
        try:
            outcomes[method] = resolve(
                method, options.repository, git_executable=options.git_executable
            ).version_string
        except SemtagError as exc:
            logger.info("%s backend failed: %s", method.value, exc)
            outcomes[method] = exc.failure_class.value
    report = ComparisonReport(repository=options.repository, outcomes=outcomes)
    exit_code = EXIT_OK if report.agree else EXIT_FAILURE
    if as_json:
        return exit_code, report.model_dump_json(indent=2)
    lines = [f"{method.value}: {outcome}" for method, outcome in outcomes.items()]
    lines.append("backends agree" if report.agree else "backends DISAGREE")
    return exit_code, "\n".join(lines)

