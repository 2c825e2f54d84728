"""Capability interface shared by the tag-resolution backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from semtag.enums import Method


class TagTargetError(LookupError):
    """A single tag target could not be checked; the tag is skipped."""


@dataclass(frozen=True)
class TagRef:
    """A tag name and the commit id it dereferences to."""

    name: str
    target: str


class TagBackend(ABC):
    """Reads HEAD, tags and ancestry from one repository.

    Backends are context managers; leaving the ``with`` block releases any
    repository handle they hold.
    """

    method: Method

    def __init__(self, repository_path: str | Path) -> None:
        self._repository_path = Path(repository_path)

    @property
    def repository_path(self) -> Path:
        return self._repository_path

    @abstractmethod
    def resolve_head(self) -> str:
        """Return the commit id HEAD points at."""

    @abstractmethod
    def iter_tags(self) -> Iterator[TagRef]:
        """Yield annotated tags dereferenced to their final target."""

    @abstractmethod
    def is_ancestor(self, commit: str, head: str) -> bool:
        """Return True when ``commit`` is in the history of ``head``.

        Raises:
            TagTargetError: If ``commit`` is missing or not a commit.
        """

    def close(self) -> None:
        """Release backend resources."""

    def __enter__(self) -> TagBackend:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
