"""
Context — The changed files handed to hooks for one run.

A HookFile is created per changed file per run and discarded afterwards.
"""

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import uuid4

from hookguard.core.contracts import ContentAccessor
from hookguard.ir.enums import ChangedFileType

_UNSET = object()


@dataclass
class HookFile:
    """
    A changed file as seen by hooks.

    The content accessor is evaluated at most once; the bytes are kept for
    the lifetime of the HookFile so several hooks can share one read.
    """

    path: str
    change_type: ChangedFileType = ChangedFileType.MODIFIED
    accessor: Optional[ContentAccessor] = field(default=None, repr=False)
    _content: Any = field(default=_UNSET, init=False, repr=False, compare=False)

    @property
    def is_deleted(self) -> bool:
        return self.change_type == ChangedFileType.DELETED

    @property
    def is_unmerged(self) -> bool:
        return self.change_type == ChangedFileType.UNMERGED

    @property
    def loaded(self) -> bool:
        """Whether the content accessor has already been evaluated."""
        return self._content is not _UNSET

    def content(self) -> bytes:
        """Return the file's bytes, reading them on first use."""
        if self.is_deleted:
            raise ValueError(f"Deleted file has no content: {self.path}")
        if self._content is _UNSET:
            if self.accessor is None:
                raise ValueError(f"No content accessor for file: {self.path}")
            data = self.accessor()
            if isinstance(data, str):
                data = data.encode("utf-8")
            self._content = data
        return self._content

    def len(self) -> int:
        return len(self.content())

    def contains_string(self, s: str) -> bool:
        return s.encode("utf-8") in self.content()


@dataclass
class HookChangeset:
    """A proposed change: the files it touches."""

    files: list[HookFile] = field(default_factory=list)

    def add_file(
        self,
        path: str,
        accessor: Optional[ContentAccessor] = None,
        change_type: ChangedFileType = ChangedFileType.MODIFIED,
    ) -> HookFile:
        hook_file = HookFile(path=path, change_type=change_type, accessor=accessor)
        self.files.append(hook_file)
        return hook_file

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]


@dataclass
class HookRunRequest:
    """Input to the hook runner."""

    changeset: HookChangeset
    request_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.request_id is None:
            self.request_id = str(uuid4())
