"""Thin wrapper around the ``semver`` package for tag-name parsing.

Tag names are parsed permissively: a single leading ``v`` or ``V`` is dropped
and a missing minor or patch component defaults to zero, so ``v1.2`` parses
as ``1.2.0``. Everything else follows the semantic-versioning grammar,
including pre-release precedence.
"""

from __future__ import annotations

from semver import Version

_PREFIXES = ("v", "V")


class InvalidVersionError(ValueError):
    """Raised when a tag name is not a semantic version."""


def parse_version(name: str) -> Version:
    """Parse a tag name into a :class:`semver.Version`.

    Raises:
        InvalidVersionError: If ``name`` is not a semantic version.
    """
    cleaned = name.strip()
    if cleaned[:1] in _PREFIXES:
        cleaned = cleaned[1:]
    try:
        return Version.parse(cleaned, optional_minor_and_patch=True)
    except (TypeError, ValueError) as exc:
        raise InvalidVersionError(f"Invalid semver version: {name!r}") from exc


def is_newer(candidate: Version, current: Version | None) -> bool:
    """Return True when ``candidate`` strictly outranks ``current``.

    Equal versions never replace the current one, so the first tag seen wins
    a tie.
    """
    if current is None:
        return True
    return candidate.compare(current) > 0


__all__ = ["InvalidVersionError", "Version", "is_newer", "parse_version"]
