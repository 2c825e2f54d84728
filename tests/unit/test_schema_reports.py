from __future__ import annotations

import json

from pydantic import ValidationError
import pytest

from semtag.backends.base import TagRef
from semtag.enums import Method, SkipReason
from semtag.errors import HeadResolutionError, NoMatchingTagError
from semtag.resolver import Resolution, SkippedTag
from semtag.schema import ComparisonReport, FailureReport, ResolutionReport
from semtag.versioning import parse_version


def _resolution() -> Resolution:
    return Resolution(
        head="c" * 40,
        tag=TagRef(name="v1.4.0", target="a" * 40),
        version=parse_version("v1.4.0"),
    )


def test_resolution_report_uses_canonical_version() -> None:
    skipped = [
        SkippedTag(
            tag=TagRef(name="nightly", target="b" * 40),
            reason=SkipReason.INVALID_VERSION,
            detail="Invalid semver version: 'nightly'",
        )
    ]
    report = ResolutionReport.from_resolution(
        _resolution(), method=Method.DULWICH, repository="/repo", skipped=skipped
    )
    payload = json.loads(report.model_dump_json())
    assert payload["version"] == "1.4.0"
    assert payload["tag"] == "v1.4.0"
    assert payload["method"] == "dulwich"
    assert payload["skipped"][0]["reason"] == "invalid_version"


def test_reports_are_frozen() -> None:
    report = ResolutionReport.from_resolution(
        _resolution(), method=Method.GIT_BINARY, repository="/repo"
    )
    with pytest.raises(ValidationError):
        report.version = "9.9.9"  # type: ignore[misc]


def test_failure_report_marks_expected_outcomes() -> None:
    no_tag = FailureReport.from_error(
        NoMatchingTagError("no semver compliant tags found"),
        method=Method.GIT_BINARY,
        repository="/repo",
    )
    head = FailureReport.from_error(
        HeadResolutionError("cmd git rev-parse", "fatal"),
        method=None,
        repository="/repo",
    )
    assert no_tag.expected is True
    assert head.expected is False
    assert head.failure_class.value == "head_resolution_failed"


def test_comparison_report_agreement_is_serialized() -> None:
    agree = ComparisonReport(
        repository="/repo",
        outcomes={Method.GIT_BINARY: "1.0.0", Method.DULWICH: "1.0.0"},
    )
    disagree = ComparisonReport(
        repository="/repo",
        outcomes={Method.GIT_BINARY: "1.0.0", Method.DULWICH: "no_matching_tag"},
    )
    assert agree.agree
    assert not disagree.agree
    assert json.loads(agree.model_dump_json())["agree"] is True


def test_comparison_treats_unopenable_repository_as_unresolvable_head() -> None:
    report = ComparisonReport(
        repository="/not-a-repo",
        outcomes={
            Method.GIT_BINARY: "head_resolution_failed",
            Method.DULWICH: "repository_open_failed",
        },
    )
    assert report.agree
    assert report.outcomes[Method.DULWICH] == "repository_open_failed"
