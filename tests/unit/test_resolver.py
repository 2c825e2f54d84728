from __future__ import annotations

import pytest

from semtag.enums import SkipReason
from semtag.errors import FailureClass, HeadResolutionError, NoMatchingTagError
from semtag.resolver import SkippedTag, resolve_latest
from tests.stubs.fake_backend import FakeBackend


def test_highest_ancestor_version_wins() -> None:
    backend = FakeBackend(
        [("0.9.0", "a"), ("1.0.0", "b"), ("1.2.0-rc1", "c"), ("2.0.0", "d")],
        ancestors={"a", "b", "c", "d"},
    )
    resolution = resolve_latest(backend)
    assert resolution.version_string == "2.0.0"
    assert resolution.tag.name == "2.0.0"
    assert resolution.tag.target == "d"
    assert resolution.head == "head"


def test_prerelease_loses_to_its_release() -> None:
    backend = FakeBackend(
        [("1.2.0", "a"), ("1.2.0-rc1", "b")],
        ancestors={"a", "b"},
    )
    assert resolve_latest(backend).version_string == "1.2.0"


def test_non_ancestor_tag_is_excluded() -> None:
    backend = FakeBackend(
        [("1.0.0", "on-main"), ("9.9.9", "diverged")],
        ancestors={"on-main"},
    )
    assert resolve_latest(backend).version_string == "1.0.0"


def test_unparseable_tag_is_skipped_without_ancestry_check() -> None:
    backend = FakeBackend(
        [("release-candidate-7", "x"), ("1.1.0", "y")],
        ancestors={"x", "y"},
    )
    assert resolve_latest(backend).version_string == "1.1.0"
    assert backend.ancestry_calls == [("y", "head")]


def test_unresolvable_target_is_skipped() -> None:
    backend = FakeBackend(
        [("3.0.0", "tree"), ("1.0.0", "ok")],
        ancestors={"ok"},
        broken_targets={"tree"},
    )
    assert resolve_latest(backend).version_string == "1.0.0"


def test_skips_are_reported_to_sink() -> None:
    skipped: list[SkippedTag] = []
    backend = FakeBackend(
        [("nightly", "a"), ("4.0.0", "b"), ("5.0.0", "c"), ("1.0.0", "d")],
        ancestors={"d"},
        broken_targets={"c"},
    )
    resolve_latest(backend, on_skip=skipped.append)
    assert [(item.tag.name, item.reason) for item in skipped] == [
        ("nightly", SkipReason.INVALID_VERSION),
        ("4.0.0", SkipReason.NOT_ANCESTOR),
        ("5.0.0", SkipReason.UNRESOLVABLE_TARGET),
    ]
    assert "not found" in skipped[2].detail


def test_first_tag_wins_a_tie() -> None:
    backend = FakeBackend(
        [("v1.0.0", "first"), ("1.0.0", "second")],
        ancestors={"first", "second"},
    )
    assert resolve_latest(backend).tag.name == "v1.0.0"


def test_no_tags_is_no_matching_tag() -> None:
    with pytest.raises(NoMatchingTagError) as excinfo:
        resolve_latest(FakeBackend())
    assert excinfo.value.failure_class is FailureClass.NO_MATCHING_TAG
    assert excinfo.value.profile.expected


def test_no_surviving_tags_is_no_matching_tag() -> None:
    backend = FakeBackend(
        [("junk", "a"), ("2.0.0", "b")],
        ancestors=set(),
    )
    with pytest.raises(NoMatchingTagError, match="2 tag"):
        resolve_latest(backend)


def test_head_failure_propagates() -> None:
    backend = FakeBackend([("1.0.0", "a")], head_error="unborn branch")
    with pytest.raises(HeadResolutionError, match="unborn branch"):
        resolve_latest(backend)


def test_repeated_resolution_is_identical() -> None:
    backend = FakeBackend(
        [("1.0.0", "a"), ("1.1.0", "b")],
        ancestors={"a", "b"},
    )
    assert resolve_latest(backend) == resolve_latest(backend)
