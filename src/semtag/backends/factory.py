"""Factory for selecting a tag backend from a method identifier."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from semtag.backends.base import TagBackend
from semtag.backends.dulwich_repo import DulwichBackend
from semtag.backends.git_binary import DEFAULT_GIT_EXECUTABLE, GitBinaryBackend
from semtag.enums import Method
from semtag.errors import InvalidMethodError


def coerce_method(method: Any) -> Method:
    """Return ``method`` as a :class:`Method`, or raise InvalidMethodError."""
    if isinstance(method, Method):
        return method
    if isinstance(method, str):
        try:
            return Method(method.strip().lower())
        except ValueError:
            pass
    raise InvalidMethodError(method)


def _build_git_binary_backend(
    repository_path: str | Path, git_executable: str | None
) -> TagBackend:
    return GitBinaryBackend(
        repository_path, git_executable=git_executable or DEFAULT_GIT_EXECUTABLE
    )


def _build_dulwich_backend(
    repository_path: str | Path, git_executable: str | None
) -> TagBackend:
    _ = git_executable
    return DulwichBackend(repository_path)


_BACKEND_BUILDERS: dict[Method, Callable[[str | Path, str | None], TagBackend]] = {
    Method.GIT_BINARY: _build_git_binary_backend,
    Method.DULWICH: _build_dulwich_backend,
}


def build_backend(
    method: Method | str,
    repository_path: str | Path,
    *,
    git_executable: str | None = None,
) -> TagBackend:
    """Build the backend registered for ``method``."""
    resolved = coerce_method(method)
    builder = _BACKEND_BUILDERS.get(resolved)
    if not builder:
        raise InvalidMethodError(method)
    return builder(repository_path, git_executable)


__all__ = ["build_backend", "coerce_method"]
