"""Logger manager with colored console output and optional JSON logs.

Library modules log through ``logging.getLogger(__name__)``; this manager
attaches handlers to the ``semtag`` logger so every module logger inherits
them. The command-line driver is its only caller.
"""

from __future__ import annotations

from dataclasses import dataclass
import datetime
import json
import logging
from logging import Handler, Logger, LogRecord, getLevelName
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import ClassVar

import colorlog

PACKAGE_LOGGER = "semtag"


@dataclass
class LoggerConfig:
    """Configuration for LoggerManager."""

    log_level: str = "WARNING"
    log_dir: Path | None = None
    log_file_name: str = "semtag.log"
    max_file_size_mb: int = 10
    backup_count: int = 3
    structured_logging: bool = False
    log_colors: dict[str, str] | None = None

    DEFAULT_LOG_COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "red,bg_white",
    }

    def __post_init__(self) -> None:
        self.log_level = self.log_level.upper()
        if self.log_dir is not None:
            self.log_dir = Path(self.log_dir).resolve()
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_colors = self.log_colors or self.DEFAULT_LOG_COLORS


class StructuredFormatter(logging.Formatter):
    """Render records as one JSON object per line."""

    def format(self, record: LogRecord) -> str:
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
            "context": getattr(record, "context", {}),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False, default=str)


class LoggerSettings:
    """Builds handlers with format and rotation settings."""

    def __init__(self, config: LoggerConfig) -> None:
        self.config = config

    def get_handlers(self) -> tuple[Handler, Handler | None]:
        """Return console and file handlers."""
        return self._get_console_handler(), self._get_file_handler()

    def _get_console_handler(self) -> Handler:
        handler = colorlog.StreamHandler(sys.stderr)
        formatter = (
            StructuredFormatter()
            if self.config.structured_logging
            else colorlog.ColoredFormatter(
                "%(log_color)s%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors=self.config.log_colors,
            )
        )
        handler.setFormatter(formatter)
        return handler

    def _get_file_handler(self) -> RotatingFileHandler | None:
        if self.config.log_dir is None:
            return None
        file_path = self.config.log_dir / self.config.log_file_name
        try:
            handler = RotatingFileHandler(
                file_path,
                maxBytes=self.config.max_file_size_mb * 1024 * 1024,
                backupCount=self.config.backup_count,
                encoding="utf-8",
            )
        except OSError as e:
            print(f"Failed to create RotatingFileHandler: {e}", file=sys.stderr)
            return None
        handler.setFormatter(
            StructuredFormatter()
            if self.config.structured_logging
            else logging.Formatter(
                "%(asctime)s - [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        return handler


class LoggerManager:
    """Owns the handlers attached to the package logger."""

    def __init__(
        self,
        name: str = PACKAGE_LOGGER,
        config: LoggerConfig | None = None,
    ) -> None:
        self.name = name
        self.config = config or LoggerConfig()
        self.settings = LoggerSettings(self.config)
        self._handlers: list[Handler] = []
        self._logger = self._configure_logger()

    def get_logger(self) -> Logger:
        """Return the configured logger."""
        return self._logger

    def _configure_logger(self) -> Logger:
        logger = logging.getLogger(self.name)
        logger.setLevel(getLevelName(self.config.log_level))
        for handler in list(logger.handlers):
            if getattr(handler, "_semtag_managed", False):
                logger.removeHandler(handler)

        console_handler, file_handler = self.settings.get_handlers()
        for handler in (console_handler, file_handler):
            if handler is None:
                continue
            handler._semtag_managed = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
            self._handlers.append(handler)
        logger.propagate = False
        return logger

    def flush(self) -> None:
        """Flush and detach the handlers added by this manager."""
        for handler in self._handlers:
            handler.flush()
            self._logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()


__all__ = ["LoggerConfig", "LoggerManager", "LoggerSettings", "StructuredFormatter"]
