"""Resolve the latest semantic-version tag reachable from a repository's HEAD.

Typical use::

    from semtag import Method, latest

    version = latest(Method.GIT_BINARY, "path/to/checkout")
"""

from __future__ import annotations

from semtag.enums import Method, SkipReason
from semtag.errors import (
    FailureClass,
    HeadResolutionError,
    InvalidMethodError,
    NoMatchingTagError,
    RepositoryOpenError,
    SemtagError,
    TagEnumerationError,
    ToolNotFoundError,
)
from semtag.resolver import Resolution, SkippedTag, latest, resolve, resolve_latest

__all__ = [
    "FailureClass",
    "HeadResolutionError",
    "InvalidMethodError",
    "Method",
    "NoMatchingTagError",
    "RepositoryOpenError",
    "Resolution",
    "SemtagError",
    "SkipReason",
    "SkippedTag",
    "TagEnumerationError",
    "ToolNotFoundError",
    "latest",
    "resolve",
    "resolve_latest",
]
