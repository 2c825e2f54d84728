from __future__ import annotations

import pytest

from semtag.errors import (
    ERROR_TYPES,
    FailureClass,
    NoMatchingTagError,
    SemtagError,
    TagEnumerationError,
    failure_profile_for,
)


def test_every_failure_class_has_profile_and_error_type() -> None:
    for failure_class in FailureClass:
        profile = failure_profile_for(failure_class)
        assert isinstance(profile.fatal, bool)
        assert ERROR_TYPES[failure_class].failure_class is failure_class


def test_only_missing_release_is_an_expected_outcome() -> None:
    expected = {
        failure_class
        for failure_class in FailureClass
        if failure_profile_for(failure_class).expected
    }
    assert expected == {FailureClass.NO_MATCHING_TAG}
    assert not NoMatchingTagError("none").profile.fatal


@pytest.mark.parametrize("failure_class", list(FailureClass))
def test_errors_share_base_class(failure_class: FailureClass) -> None:
    assert issubclass(ERROR_TYPES[failure_class], SemtagError)
    assert issubclass(ERROR_TYPES[failure_class], RuntimeError)


def test_detail_is_kept_and_appended_to_message() -> None:
    error = TagEnumerationError("cmd git show-ref", "fatal: bad packed-refs")
    assert error.detail == "fatal: bad packed-refs"
    assert str(error) == "cmd git show-ref: fatal: bad packed-refs"
    assert error.profile.fatal
