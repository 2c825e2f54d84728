"""Centralized semantic enums for semtag."""

from __future__ import annotations

from enum import Enum


class Method(str, Enum):
    """Backends able to resolve the latest semantic-version tag."""

    GIT_BINARY = "git-binary"
    DULWICH = "dulwich"


class SkipReason(str, Enum):
    """Why a tag was dropped from consideration during resolution."""

    INVALID_VERSION = "invalid_version"
    UNRESOLVABLE_TARGET = "unresolvable_target"
    NOT_ANCESTOR = "not_ancestor"
