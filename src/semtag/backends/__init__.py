"""Backends that expose HEAD, tags and ancestry of a repository."""

from __future__ import annotations

from .base import TagBackend, TagRef, TagTargetError
from .dulwich_repo import DulwichBackend
from .factory import build_backend, coerce_method
from .git_binary import GitBinaryBackend, parse_show_ref

__all__ = [
    "DulwichBackend",
    "GitBinaryBackend",
    "TagBackend",
    "TagRef",
    "TagTargetError",
    "build_backend",
    "coerce_method",
    "parse_show_ref",
]
