"""Backend that shells out to the ``git`` executable."""

# ruff: noqa: S603

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path
import shutil
import subprocess  # nosec B404 - subprocess is used with fixed git arguments

from semtag.backends.base import TagBackend, TagRef, TagTargetError
from semtag.enums import Method
from semtag.errors import HeadResolutionError, TagEnumerationError, ToolNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_GIT_EXECUTABLE = "git"
TAG_REF_PREFIX = "refs/tags/"
DEREFERENCE_SUFFIX = "^{}"


def _output(result: subprocess.CompletedProcess[str]) -> str:
    return "\n".join(
        part.strip() for part in (result.stderr, result.stdout) if part and part.strip()
    )


def parse_show_ref(output: str) -> list[TagRef]:
    """Extract dereferenced tags from ``git show-ref --tags --dereference``.

    Only ``<sha> refs/tags/<name>^{}`` lines are kept: they exist for annotated
    tags and carry the commit the tag object finally points at.
    """
    tags: list[TagRef] = []
    for line in output.splitlines():
        line = line.strip()
        if not line.endswith(DEREFERENCE_SUFFIX):
            continue
        elems = line.split()
        if len(elems) < 2:
            continue
        revision, ref = elems[0], elems[1]
        name = ref.removeprefix(TAG_REF_PREFIX).removesuffix(DEREFERENCE_SUFFIX)
        if not name:
            continue
        tags.append(TagRef(name=name, target=revision))
    return tags


class GitBinaryBackend(TagBackend):
    """Resolves HEAD, tags and ancestry by running ``git`` subprocesses."""

    method = Method.GIT_BINARY

    def __init__(
        self,
        repository_path: str | Path,
        git_executable: str = DEFAULT_GIT_EXECUTABLE,
    ) -> None:
        super().__init__(repository_path)
        found = shutil.which(git_executable)
        if not found:
            raise ToolNotFoundError(
                "find git binary", f"{git_executable!r} not found on PATH"
            )
        self._git = found

    @property
    def git_executable(self) -> str:
        return self._git

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        logger.debug("Running git %s in %s", " ".join(args), self.repository_path)
        return subprocess.run(  # nosec S603
            [self._git, *args],
            check=False,
            capture_output=True,
            # Ref names are bytes; decode them the way the dulwich backend does.
            encoding="utf-8",
            errors="replace",
            cwd=self.repository_path,
        )

    def resolve_head(self) -> str:
        try:
            result = self._run("rev-parse", "HEAD")
        except OSError as exc:
            raise HeadResolutionError("cmd git rev-parse", str(exc)) from exc
        if result.returncode != 0:
            raise HeadResolutionError("cmd git rev-parse", _output(result))
        return result.stdout.strip()

    def iter_tags(self) -> Iterator[TagRef]:
        try:
            result = self._run("show-ref", "--tags", "--dereference")
        except OSError as exc:
            raise TagEnumerationError("cmd git show-ref", str(exc)) from exc
        # show-ref exits 1 without output when the repository has no tags.
        if result.returncode == 1 and not _output(result):
            return iter(())
        if result.returncode != 0:
            raise TagEnumerationError("cmd git show-ref", _output(result))
        return iter(parse_show_ref(result.stdout))

    def is_ancestor(self, commit: str, head: str) -> bool:
        try:
            result = self._run("merge-base", "--is-ancestor", commit, head)
        except OSError as exc:
            raise TagTargetError(str(exc)) from exc
        if result.returncode == 0:
            return True
        if result.returncode == 1:
            return False
        raise TagTargetError(_output(result) or f"git exited with {result.returncode}")


__all__ = [
    "DEFAULT_GIT_EXECUTABLE",
    "GitBinaryBackend",
    "parse_show_ref",
]
