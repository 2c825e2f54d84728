from __future__ import annotations

from pathlib import Path

import pytest

from semtag import Method, latest, resolve
from semtag.backends import factory
from semtag.errors import FailureClass, InvalidMethodError, NoMatchingTagError
from tests.stubs.fake_backend import FakeBackend


@pytest.fixture
def recorded_builds(monkeypatch: pytest.MonkeyPatch) -> list[tuple[Method, str]]:
    builds: list[tuple[Method, str]] = []

    def _builder(method: Method):
        def build(repository_path: str | Path, git_executable: str | None):
            builds.append((method, str(repository_path)))
            return FakeBackend([("1.4.0", "a"), ("1.3.0", "b")], ancestors={"a", "b"})

        return build

    monkeypatch.setattr(
        factory,
        "_BACKEND_BUILDERS",
        {method: _builder(method) for method in Method},
    )
    return builds


@pytest.mark.parametrize("method", list(Method))
def test_latest_dispatches_to_selected_backend(
    method: Method, recorded_builds: list[tuple[Method, str]]
) -> None:
    assert latest(method, "some/repo") == "1.4.0"
    assert recorded_builds == [(method, "some/repo")]


def test_method_accepts_member_values(
    recorded_builds: list[tuple[Method, str]],
) -> None:
    assert latest("dulwich", ".") == "1.4.0"
    assert latest(" Git-Binary ", ".") == "1.4.0"
    assert [method for method, _ in recorded_builds] == [
        Method.DULWICH,
        Method.GIT_BINARY,
    ]


@pytest.mark.parametrize("bad_method", ["svn", "", 7, None, True])
def test_invalid_method_never_builds_a_backend(
    bad_method: object, recorded_builds: list[tuple[Method, str]]
) -> None:
    with pytest.raises(InvalidMethodError) as excinfo:
        latest(bad_method, ".")  # type: ignore[arg-type]
    assert excinfo.value.method == bad_method
    assert excinfo.value.failure_class is FailureClass.INVALID_METHOD
    assert repr(bad_method) in str(excinfo.value)
    assert recorded_builds == []


def test_backend_is_closed_after_resolution(monkeypatch: pytest.MonkeyPatch) -> None:
    backend = FakeBackend([("0.1.0", "a")], ancestors={"a"})
    monkeypatch.setattr(
        factory,
        "_BACKEND_BUILDERS",
        {method: (lambda path, git: backend) for method in Method},
    )
    assert resolve(Method.DULWICH, ".").version_string == "0.1.0"
    assert backend.closed


def test_backend_is_closed_when_nothing_matches(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    backend = FakeBackend([("nope", "a")], ancestors={"a"})
    monkeypatch.setattr(
        factory,
        "_BACKEND_BUILDERS",
        {method: (lambda path, git: backend) for method in Method},
    )
    with pytest.raises(NoMatchingTagError):
        latest(Method.GIT_BINARY, ".")
    assert backend.closed
