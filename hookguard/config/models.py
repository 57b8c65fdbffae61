"""
Config Models — Data structures for hook configuration.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class HookEntry:
    """A single configured hook."""
    id: str                                   # Registered hook name
    enabled: bool = True
    description: str = ""
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class HookSettings:
    """Global run settings."""
    raise_errors: bool = False    # Propagate content errors instead of recording them


@dataclass
class HookConfig:
    """A complete hook configuration."""
    name: str
    description: str
    settings: HookSettings
    hooks: list[HookEntry]
    version: str = "1.0"

    def get_enabled_hooks(self) -> list[HookEntry]:
        """Get enabled hook entries, in config order."""
        return [h for h in self.hooks if h.enabled]

    def get_hook(self, hook_id: str) -> Optional[HookEntry]:
        for entry in self.hooks:
            if entry.id == hook_id:
                return entry
        return None

    def is_enabled(self, hook_id: str) -> bool:
        entry = self.get_hook(hook_id)
        return entry is not None and entry.enabled
