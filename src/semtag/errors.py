"""Failure taxonomy raised by tag resolution."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class FailureClass(str, Enum):
    INVALID_METHOD = "invalid_method"
    TOOL_NOT_FOUND = "tool_not_found"
    REPOSITORY_OPEN = "repository_open_failed"
    HEAD_RESOLUTION = "head_resolution_failed"
    TAG_ENUMERATION = "tag_enumeration_failed"
    NO_MATCHING_TAG = "no_matching_tag"


@dataclass(frozen=True)
class FailureProfile:
    fatal: bool
    retryable: bool
    expected: bool


FAILURE_PROFILES: dict[FailureClass, FailureProfile] = {
    FailureClass.INVALID_METHOD: FailureProfile(
        fatal=True,
        retryable=False,
        expected=False,
    ),
    FailureClass.TOOL_NOT_FOUND: FailureProfile(
        fatal=True,
        retryable=False,
        expected=False,
    ),
    FailureClass.REPOSITORY_OPEN: FailureProfile(
        fatal=True,
        retryable=False,
        expected=False,
    ),
    FailureClass.HEAD_RESOLUTION: FailureProfile(
        fatal=True,
        retryable=False,
        expected=False,
    ),
    FailureClass.TAG_ENUMERATION: FailureProfile(
        fatal=True,
        retryable=False,
        expected=False,
    ),
    FailureClass.NO_MATCHING_TAG: FailureProfile(
        fatal=False,
        retryable=False,
        expected=True,
    ),
}


def failure_profile_for(failure_class: FailureClass) -> FailureProfile:
    profile = FAILURE_PROFILES.get(failure_class)
    if profile is None:
        raise RuntimeError(f"Missing failure profile for {failure_class.value}")
    return profile


class SemtagError(RuntimeError):
    """Base class for every failure surfaced by :func:`semtag.latest`.

    ``detail`` carries the underlying backend diagnostic (tool output or the
    library exception text) without changing the failure kind.
    """

    failure_class: ClassVar[FailureClass]

    def __init__(self, message: str, detail: str | None = None) -> None:
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.detail = detail

    @property
    def profile(self) -> FailureProfile:
        return failure_profile_for(self.failure_class)


class InvalidMethodError(SemtagError):
    """Raised when the backend selector receives an unknown method."""

    failure_class = FailureClass.INVALID_METHOD

    def __init__(self, method: Any) -> None:
        super().__init__(f"invalid method: {method!r}")
        self.method = method


class ToolNotFoundError(SemtagError):
    failure_class = FailureClass.TOOL_NOT_FOUND


class RepositoryOpenError(SemtagError):
    failure_class = FailureClass.REPOSITORY_OPEN


class HeadResolutionError(SemtagError):
    failure_class = FailureClass.HEAD_RESOLUTION


class TagEnumerationError(SemtagError):
    failure_class = FailureClass.TAG_ENUMERATION


class NoMatchingTagError(SemtagError):
    """No tag both parsed as a semantic version and was reachable from HEAD.

    This is the normal outcome for repositories without releases.
    """

    failure_class = FailureClass.NO_MATCHING_TAG


ERROR_TYPES: dict[FailureClass, type[SemtagError]] = {
    cls.failure_class: cls
    for cls in (
        InvalidMethodError,
        ToolNotFoundError,
        RepositoryOpenError,
        HeadResolutionError,
        TagEnumerationError,
        NoMatchingTagError,
    )
}


if set(FAILURE_PROFILES.keys()) != set(FailureClass) or set(ERROR_TYPES) != set(
    FailureClass
):
    missing = (set(FailureClass) - set(FAILURE_PROFILES.keys())) | (
        set(FailureClass) - set(ERROR_TYPES)
    )
    raise RuntimeError(
        "Failure profiles and error types must cover all failure classes: "
        f"missing={sorted(cls.value for cls in missing)}"
    )


__all__ = [
    "ERROR_TYPES",
    "FAILURE_PROFILES",
    "FailureClass",
    "FailureProfile",
    "HeadResolutionError",
    "InvalidMethodError",
    "NoMatchingTagError",
    "RepositoryOpenError",
    "SemtagError",
    "TagEnumerationError",
    "ToolNotFoundError",
    "failure_profile_for",
]
