"""
File hooks.

Importing this package registers every built-in hook with HookRegistry.
"""

from hookguard.hooks.registry import HookFactory, HookRegistry, HookSpec

from hookguard.hooks.conflict_markers import (
    ConflictMarkerHook,
    check_conflict_markers,
    check_content,
    needs_content,
)

__all__ = [
    # Registry
    "HookFactory",
    "HookRegistry",
    "HookSpec",
    # Conflict markers
    "ConflictMarkerHook",
    "check_conflict_markers",
    "check_content",
    "needs_content",
]
