"""In-process backend reading the repository with dulwich."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
from pathlib import Path

from dulwich.errors import MissingCommitError, NotGitRepository, ObjectFormatException
from dulwich.objects import Commit, ShaFile, Tag
from dulwich.repo import Repo

from semtag.backends.base import TagBackend, TagRef, TagTargetError
from semtag.enums import Method
from semtag.errors import HeadResolutionError, RepositoryOpenError, TagEnumerationError

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = b"refs/tags"


class DulwichBackend(TagBackend):
    """Resolves HEAD, tags and ancestry without spawning processes.

    Only refs that point at annotated tag objects are enumerated, which is the
    same population ``git show-ref --dereference`` marks with ``^{}``. Refs are
    visited in name order so ties resolve the same way as the git backend.
    """

    method = Method.DULWICH

    def __init__(self, repository_path: str | Path) -> None:
        super().__init__(repository_path)
        if not self.repository_path.is_dir():
            raise RepositoryOpenError(
                "open git repo", f"{self.repository_path} is not a directory"
            )
        try:
            self._repo = Repo.discover(str(self.repository_path))
        except (NotGitRepository, OSError) as exc:
            raise RepositoryOpenError(
                "open git repo", str(exc) or str(self.repository_path)
            ) from exc
        self._history_head: str | None = None
        self._history: frozenset[bytes] = frozenset()

    def close(self) -> None:
        self._repo.close()

    def resolve_head(self) -> str:
        try:
            head = self._repo.head()
            commit = self._repo[head]
        except KeyError as exc:
            raise HeadResolutionError("get HEAD ref", f"missing {exc}") from exc
        except (OSError, ValueError, ObjectFormatException) as exc:
            raise HeadResolutionError("get HEAD commit", str(exc)) from exc
        if not isinstance(commit, Commit):
            raise HeadResolutionError(
                "get HEAD commit",
                f"HEAD points at a {commit.type_name.decode('ascii')}",
            )
        return head.decode("ascii")

    def iter_tags(self) -> Iterator[TagRef]:
        try:
            refs = self._repo.refs.as_dict(TAG_REF_PREFIX)
        except (KeyError, OSError, ValueError) as exc:
            raise TagEnumerationError("get tag objects", str(exc)) from exc
        return self._tag_objects(refs)

    def _tag_objects(self, refs: Mapping[bytes, bytes]) -> Iterator[TagRef]:
        for name, sha in sorted(refs.items()):
            try:
                obj = self._repo[sha]
            except KeyError:
                logger.debug("Tag ref %r points at a missing object", name)
                continue
            except (OSError, ObjectFormatException) as exc:
                raise TagEnumerationError("get next tag", str(exc)) from exc
            if not isinstance(obj, Tag):
                continue
            yield TagRef(
                name=name.decode("utf-8", errors="replace"),
                target=self._peel(obj).decode("ascii"),
            )

    def _peel(self, tag: Tag) -> bytes:
        obj: ShaFile = tag
        target = tag.id
        while isinstance(obj, Tag):
            _, target = obj.object
            try:
                obj = self._repo[target]
            except KeyError:
                break
        return target

    def _head_history(self, head: str) -> frozenset[bytes]:
        if self._history_head != head:
            walker = self._repo.get_walker(include=[head.encode("ascii")])
            self._history = frozenset(entry.commit.id for entry in walker)
            self._history_head = head
        return self._history

    def is_ancestor(self, commit: str, head: str) -> bool:
        sha = commit.encode("ascii")
        try:
            obj = self._repo[sha]
        except KeyError as exc:
            raise TagTargetError(f"object {commit} not found") from exc
        except (OSError, ValueError, ObjectFormatException) as exc:
            raise TagTargetError(str(exc)) from exc
        if not isinstance(obj, Commit):
            raise TagTargetError(
                f"{commit} is a {obj.type_name.decode('ascii')}, not a commit"
            )
        try:
            history = self._head_history(head)
        except (KeyError, MissingCommitError, OSError) as exc:
            raise TagTargetError(f"walk history of {head}: {exc}") from exc
        return sha in history


__all__ = ["DulwichBackend"]
