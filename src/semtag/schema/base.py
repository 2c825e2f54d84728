"""Shared Pydantic base class with consistent configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TypedBaseModel(BaseModel):
    """Centralized typed base so every report serializes the same way.

    Reports are immutable snapshots of one resolution; unknown fields are
    rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="forbid",
    )
