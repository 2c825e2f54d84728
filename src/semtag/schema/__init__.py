"""Pydantic reports describing resolution outcomes."""

from __future__ import annotations

from .base import TypedBaseModel
from .report import (
    ComparisonReport,
    FailureReport,
    ResolutionReport,
    SkippedTagReport,
)

__all__ = [
    "ComparisonReport",
    "FailureReport",
    "ResolutionReport",
    "SkippedTagReport",
    "TypedBaseModel",
]
