"""
Contracts — Type definitions and interfaces for hook components.
"""

from abc import ABC, abstractmethod
from typing import Callable

from hookguard.ir.schema import HookExecution

# Zero-argument callable returning a file's full content. Evaluated lazily.
ContentAccessor = Callable[[], bytes]


class FileHook(ABC):
    """Abstract base for hooks that inspect one changed file at a time."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Hook name for diagnostics and configuration."""
        ...

    @abstractmethod
    def validate(self, path: str, content: ContentAccessor) -> HookExecution:
        """
        Validate a single file.

        Args:
            path: Repository-relative, forward-slash separated path
            content: Lazy accessor for the file's bytes; call it at most once

        Returns:
            HookExecution verdict. Errors raised by `content` propagate.
        """
        ...
