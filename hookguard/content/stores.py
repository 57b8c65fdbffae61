"""
Content Stores — Where hooks get file bytes from.

Each store hands out zero-argument accessors so content is only read when
a hook actually asks for it.
"""

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional, Union

from hookguard.core.context import HookChangeset
from hookguard.core.contracts import ContentAccessor
from hookguard.core.logging import LogChannel, get_logger
from hookguard.ir.enums import ChangedFileType

log = get_logger(LogChannel.CONTENT)


class ContentStore(ABC):
    """Abstract base for file content sources."""

    @abstractmethod
    def get_file_content(self, path: str) -> bytes:
        """
        Read a file's full content.

        Raises:
            FileNotFoundError: If the store has no such file
        """
        ...

    def accessor(self, path: str) -> ContentAccessor:
        """Lazy accessor for `path`; nothing is read until it is called."""
        return lambda: self.get_file_content(path)

    def changeset(self, paths: Mapping[str, ChangedFileType]) -> HookChangeset:
        """Build a changeset whose files read from this store."""
        changeset = HookChangeset()
        for path, change_type in paths.items():
            changeset.add_file(path, accessor=self.accessor(path), change_type=change_type)
        return changeset


class InMemoryContentStore(ContentStore):
    """Path -> bytes mapping, mostly for tests and embedding callers."""

    def __init__(self, files: Optional[Mapping[str, Union[bytes, str]]] = None) -> None:
        self._files: dict[str, bytes] = {}
        for path, content in (files or {}).items():
            self.insert(path, content)

    def insert(self, path: str, content: Union[bytes, str]) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._files[path] = content

    def get_file_content(self, path: str) -> bytes:
        try:
            return self._files[path]
        except KeyError:
            raise FileNotFoundError(f"No content for path: {path}") from None


class FilesystemContentStore(ContentStore):
    """Reads files from a working tree rooted at `root`."""

    def __init__(self, root: Union[str, Path] = ".") -> None:
        self.root = Path(root)

    def get_file_content(self, path: str) -> bytes:
        full_path = self.root / path
        log.debug("file_read", path=path, root=str(self.root))
        return full_path.read_bytes()


class GitIndexContentStore(ContentStore):
    """
    Reads staged content from a git repository's index.

    Content is the bytes about to be committed; unstaged working-tree
    edits are not seen.
    """

    def __init__(self, repo: Union[str, Path] = ".", git: str = "git") -> None:
        self.repo = Path(repo)
        self.git = git

    def _git(self, *args: str) -> bytes:
        result = subprocess.run(
            [self.git, "-C", str(self.repo), *args],
            capture_output=True,
        )
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise RuntimeError(f"git {' '.join(args)} failed: {stderr}")
        return result.stdout

    def get_file_content(self, path: str) -> bytes:
        log.debug("index_read", path=path, repo=str(self.repo))
        try:
            return self._git("show", f":{path}")
        except RuntimeError as e:
            raise FileNotFoundError(f"Not in index: {path} ({e})") from e

    def staged_changes(self) -> dict[str, ChangedFileType]:
        """Staged paths mapped to how the commit changes them."""
        out = self._git("diff", "--cached", "--name-status", "-z")
        return parse_name_status(out)

    def staged_changeset(self) -> HookChangeset:
        return self.changeset(self.staged_changes())


def parse_name_status(output: bytes) -> dict[str, ChangedFileType]:
    """
    Parse `git diff --name-status -z` output.

    Renames and copies are reported under their destination path as added.
    An unmerged (`U`) entry wins over any other entry for the same path.
    """
    fields = [f.decode("utf-8", errors="surrogateescape") for f in output.split(b"\0")]
    changes: dict[str, ChangedFileType] = {}
    i = 0
    while i < len(fields):
        status = fields[i]
        if not status:
            i += 1
            continue
        kind = status[0]
        if kind in ("R", "C"):
            # status, source, destination
            if i + 2 >= len(fields):
                break
            changes[fields[i + 2]] = ChangedFileType.ADDED
            i += 3
            continue
        if i + 1 >= len(fields):
            break
        path = fields[i + 1]
        if kind == "U" or changes.get(path) == ChangedFileType.UNMERGED:
            changes[path] = ChangedFileType.UNMERGED
        elif kind == "A":
            changes[path] = ChangedFileType.ADDED
        elif kind == "D":
            changes[path] = ChangedFileType.DELETED
        else:
            changes[path] = ChangedFileType.MODIFIED
        i += 2
    return changes
