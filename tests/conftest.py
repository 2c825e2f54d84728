from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path

import pytest

from semtag.utilities.logger_manager import LoggerConfig, LoggerManager
from tests.utils.git_helpers import GitRepo

SEMTAG_ENV_VARS = (
    "SEMTAG_METHOD",
    "SEMTAG_GIT",
    "SEMTAG_LOG_LEVEL",
    "SEMTAG_STRUCTURED_LOGS",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep developer settings and `.env` files out of test runs."""
    for name in SEMTAG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    return GitRepo(tmp_path / "repo")


@pytest.fixture
def logger_manager(tmp_path: Path) -> Iterator[LoggerManager]:
    manager = LoggerManager(
        config=LoggerConfig(log_level="DEBUG", log_dir=tmp_path / "logs")
    )
    yield manager
    manager.flush()


@pytest.fixture
def quiet_logger() -> logging.Logger:
    logger = logging.getLogger("semtag.tests")
    logger.addHandler(logging.NullHandler())
    return logger
