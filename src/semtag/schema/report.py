"""Serializable reports emitted by the command-line driver."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated

from pydantic import Field, computed_field

from semtag.enums import Method, SkipReason
from semtag.errors import FailureClass, SemtagError
from semtag.resolver import Resolution, SkippedTag
from semtag.schema.base import TypedBaseModel

# Only dulwich can fail to open a repository; git reports the same path as an
# unresolvable HEAD.
EQUIVALENT_OUTCOMES: dict[str, str] = {
    FailureClass.REPOSITORY_OPEN.value: FailureClass.HEAD_RESOLUTION.value,
}


class SkippedTagReport(TypedBaseModel):
    tag: str
    target: str
    reason: SkipReason
    detail: str = ""

    @classmethod
    def from_skipped(cls, skipped: SkippedTag) -> SkippedTagReport:
        return cls(
            tag=skipped.tag.name,
            target=skipped.tag.target,
            reason=skipped.reason,
            detail=skipped.detail,
        )


class ResolutionReport(TypedBaseModel):
    """Outcome of a successful resolution."""

    method: Method
    repository: str
    version: Annotated[str, Field(min_length=1)]
    tag: Annotated[str, Field(min_length=1)]
    commit: Annotated[str, Field(min_length=1)]
    head: Annotated[str, Field(min_length=1)]
    skipped: list[SkippedTagReport] = Field(default_factory=list)

    @classmethod
    def from_resolution(
        cls,
        resolution: Resolution,
        *,
        method: Method,
        repository: str,
        skipped: Iterable[SkippedTag] = (),
    ) -> ResolutionReport:
        return cls(
            method=method,
            repository=repository,
            version=resolution.version_string,
            tag=resolution.tag.name,
            commit=resolution.tag.target,
            head=resolution.head,
            skipped=[SkippedTagReport.from_skipped(item) for item in skipped],
        )


class FailureReport(TypedBaseModel):
    """Outcome of a failed resolution."""

    method: Method | None = None
    repository: str
    failure_class: FailureClass
    message: str
    expected: bool = Field(
        False,
        description="True for outcomes such as a repository without releases",
    )

    @classmethod
    def from_error(
        cls, error: SemtagError, *, method: Method | None, repository: str
    ) -> FailureReport:
        return cls(
            method=method,
            repository=repository,
            failure_class=error.failure_class,
            message=str(error),
            expected=error.profile.expected,
        )


class ComparisonReport(TypedBaseModel):
    """Side-by-side outcome of every backend on the same repository."""

    repository: str
    outcomes: dict[Method, str]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def agree(self) -> bool:
        distinct = {
            EQUIVALENT_OUTCOMES.get(outcome, outcome)
            for outcome in self.outcomes.values()
        }
        return len(distinct) <= 1
