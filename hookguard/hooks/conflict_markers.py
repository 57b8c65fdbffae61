"""
Conflict Marker Hook

Rejects text files that still contain unresolved merge-conflict markers:
- a line starting with seven '<' and a space
- a line starting with seven '>' and a space
- a line that is exactly seven '='

Documentation files are skipped by suffix without reading their content,
since marker syntax shows up in prose examples. Content containing a NUL
byte is treated as binary and accepted.
"""

import re
from typing import Any, Iterable, Mapping, Optional

from hookguard.core.contracts import ContentAccessor, FileHook
from hookguard.core.logging import get_hook_logger
from hookguard.hooks.registry import HookRegistry, HookSpec
from hookguard.ir.schema import HookExecution

HOOK_NAME = "conflict_markers"

# Case-sensitive, matched with str.endswith
DEFAULT_SKIP_SUFFIXES = (".rst", ".markdown", ".md", ".rdoc")

# Anchored per line. A trailing CR is tolerated so CRLF files match too.
MARKER_PATTERN = re.compile(rb"^(?:<{7} |>{7} |={7}\r?$)", re.MULTILINE)

REJECTION_TEMPLATE = "Conflict markers were found in file '{path}'"

log = get_hook_logger(HOOK_NAME)


def _normalize_suffixes(suffixes: Any) -> tuple[str, ...]:
    if isinstance(suffixes, str):
        return (suffixes,)
    return tuple(str(s) for s in suffixes)


class ConflictMarkerHook(FileHook):
    """Stateless conflict-marker check, safe to share across threads."""

    def __init__(self, skip_suffixes: Optional[Iterable[str]] = None) -> None:
        if skip_suffixes is None:
            skip_suffixes = DEFAULT_SKIP_SUFFIXES
        self.skip_suffixes = _normalize_suffixes(skip_suffixes)

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "ConflictMarkerHook":
        return cls(skip_suffixes=options.get("skip_suffixes"))

    @property
    def name(self) -> str:
        return HOOK_NAME

    def needs_content(self, path: str) -> bool:
        """False when the path alone is enough to accept the file."""
        return not path.endswith(self.skip_suffixes)

    def check_content(self, path: str, content: bytes) -> HookExecution:
        """Decide on already-retrieved content."""
        if b"\0" in content:
            log.debug("binary_skipped", path=path)
            return HookExecution.accept()

        match = MARKER_PATTERN.search(content)
        if match is None:
            return HookExecution.accept()

        line_no = content.count(b"\n", 0, match.start()) + 1
        log.verbose("marker_found", path=path, line=line_no)
        return HookExecution.reject(REJECTION_TEMPLATE.format(path=path))

    def validate(self, path: str, content: ContentAccessor) -> HookExecution:
        if not self.needs_content(path):
            log.debug("suffix_skipped", path=path)
            return HookExecution.accept()
        return self.check_content(path, content())


_default_hook = ConflictMarkerHook()


def needs_content(path: str) -> bool:
    """Two-step API, step one: does `path` require reading content?"""
    return _default_hook.needs_content(path)


def check_content(path: str, content: bytes) -> HookExecution:
    """Two-step API, step two: verdict for already-read content."""
    return _default_hook.check_content(path, content)


def check_conflict_markers(path: str, content: ContentAccessor) -> HookExecution:
    """Validate one file with the default documentation skip list."""
    return _default_hook.validate(path, content)


HookRegistry.register(HookSpec(
    name=HOOK_NAME,
    description="Reject files containing unresolved merge-conflict markers",
    factory=ConflictMarkerHook.from_options,
))
