"""
Hook Registry

Central registry of the file hooks hookguard knows how to build:
- HookSpec: name, description and a factory building the hook from options
- HookRegistry: name -> HookSpec lookup
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional

from hookguard.core.contracts import FileHook

HookFactory = Callable[[Mapping[str, Any]], FileHook]


@dataclass
class HookSpec:
    """A buildable file hook."""

    name: str                  # Unique name used in configuration
    description: str           # Human-readable description
    factory: HookFactory       # Builds a hook instance from config options


class HookRegistry:
    """
    Central registry of all file hooks.

    Usage:
        HookRegistry.register(HookSpec("my_hook", "...", MyHook.from_options))
        hook = HookRegistry.create("my_hook", {"option": 1})
    """

    _hooks: dict[str, HookSpec] = {}

    @classmethod
    def register(cls, spec: HookSpec) -> None:
        """Register a hook spec, replacing any spec with the same name."""
        cls._hooks[spec.name] = spec

    @classmethod
    def get(cls, name: str) -> Optional[HookSpec]:
        """Get a hook spec by name."""
        return cls._hooks.get(name)

    @classmethod
    def create(cls, name: str, options: Optional[Mapping[str, Any]] = None) -> FileHook:
        """
        Build a hook instance.

        Raises:
            KeyError: If no hook is registered under `name`
        """
        spec = cls._hooks.get(name)
        if spec is None:
            raise KeyError(f"Unknown hook: {name}")
        return spec.factory(options or {})

    @classmethod
    def names(cls) -> List[str]:
        """List all registered hook names, sorted."""
        return sorted(cls._hooks.keys())
