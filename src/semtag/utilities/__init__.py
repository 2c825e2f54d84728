"""Utilities package for semtag: logging setup and runtime version lookup."""

from __future__ import annotations

from .logger_manager import LoggerConfig, LoggerManager, LoggerSettings

__all__ = [
    "LoggerConfig",
    "LoggerManager",
    "LoggerSettings",
]
