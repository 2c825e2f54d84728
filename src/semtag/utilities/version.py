"""Runtime version resolution helpers."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

from semtag.enums import Method
from semtag.errors import SemtagError
from semtag.resolver import latest

DISTRIBUTION = "semtag"


def _checkout_version() -> str | None:
    repo_root = Path(__file__).resolve().parents[3]
    if not (repo_root / ".git").exists():
        return None
    try:
        return latest(Method.DULWICH, repo_root)
    except SemtagError:
        return None


def _installed_version() -> str | None:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return None


def get_runtime_version() -> str:
    """Resolve the version from the source checkout's tags or package metadata."""
    return _checkout_version() or _installed_version() or "0.0.0+unknown"
