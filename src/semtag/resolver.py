"""Select the highest semantic-version tag reachable from HEAD."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
from pathlib import Path

from semver import Version

from semtag.backends.base import TagBackend, TagRef, TagTargetError
from semtag.backends.factory import build_backend, coerce_method
from semtag.enums import Method, SkipReason
from semtag.errors import NoMatchingTagError
from semtag.versioning import InvalidVersionError, is_newer, parse_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedTag:
    """A tag dropped from consideration, handed to the ``on_skip`` sink."""

    tag: TagRef
    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True)
class TagMatch:
    tag: TagRef
    version: Version


@dataclass(frozen=True)
class Resolution:
    """Winning tag for one repository state."""

    head: str
    tag: TagRef
    version: Version

    @property
    def version_string(self) -> str:
        return str(self.version)


SkipSink = Callable[[SkippedTag], None]


def _skip(
    on_skip: SkipSink | None, tag: TagRef, reason: SkipReason, detail: str = ""
) -> None:
    logger.debug("Skipping tag %s (%s) %s", tag.name, reason.value, detail)
    if on_skip is not None:
        on_skip(SkippedTag(tag=tag, reason=reason, detail=detail))


def resolve_latest(
    backend: TagBackend, *, on_skip: SkipSink | None = None
) -> Resolution:
    """Reduce the backend's tags to the highest version reachable from HEAD.

    Tags whose name is not a semantic version, whose target cannot be checked,
    or whose target is not an ancestor of HEAD are skipped; each skip is
    logged and reported to ``on_skip``. Among equal versions the first tag
    yielded by the backend wins.

    Raises:
        HeadResolutionError: If HEAD cannot be resolved.
        TagEnumerationError: If tags cannot be listed.
        NoMatchingTagError: If no tag survives filtering.
    """
    head = backend.resolve_head()
    best: TagMatch | None = None
    seen = 0
    for tag in backend.iter_tags():
        seen += 1
        try:
            version = parse_version(tag.name)
        except InvalidVersionError as exc:
            _skip(on_skip, tag, SkipReason.INVALID_VERSION, str(exc))
            continue

        try:
            reachable = backend.is_ancestor(tag.target, head)
        except TagTargetError as exc:
            _skip(on_skip, tag, SkipReason.UNRESOLVABLE_TARGET, str(exc))
            continue
        if not reachable:
            _skip(on_skip, tag, SkipReason.NOT_ANCESTOR, f"{tag.target} not in HEAD")
            continue

        if is_newer(version, best.version if best else None):
            best = TagMatch(tag=tag, version=version)

    if best is None:
        raise NoMatchingTagError(
            "no semver compliant tags found",
            f"{seen} tag(s) considered in {backend.repository_path}",
        )
    logger.debug(
        "Resolved %s from tag %s at %s", best.version, best.tag.name, best.tag.target
    )
    return Resolution(head=head, tag=best.tag, version=best.version)


def resolve(
    method: Method | str,
    repository_path: str | Path,
    *,
    on_skip: SkipSink | None = None,
    git_executable: str | None = None,
) -> Resolution:
    """Resolve the latest tag with the backend chosen by ``method``."""
    selected = coerce_method(method)
    with build_backend(
        selected, repository_path, git_executable=git_executable
    ) as backend:
        return resolve_latest(backend, on_skip=on_skip)


def latest(
    method: Method | str,
    repository_path: str | Path,
    *,
    on_skip: SkipSink | None = None,
    git_executable: str | None = None,
) -> str:
    """Return the canonical version string of the latest reachable tag.

    Raises:
        InvalidMethodError: If ``method`` is not a known :class:`Method`.
        SemtagError: Any other resolution failure.
    """
    return resolve(
        method, repository_path, on_skip=on_skip, git_executable=git_executable
    ).version_string


__all__ = [
    "Resolution",
    "SkipSink",
    "SkippedTag",
    "TagMatch",
    "latest",
    "resolve",
    "resolve_latest",
]
