"""
Config Loader — Load and parse hook configuration from YAML files.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from hookguard.config.models import HookConfig, HookEntry, HookSettings
from hookguard.core.logging import LogChannel, get_logger

# Bundled config directory
CONFIGS_DIR = Path(__file__).parent / "configs"

log = get_logger(LogChannel.CONFIG)


def load_config(name: str = "default") -> HookConfig:
    """
    Load a bundled hook config by name.

    Args:
        name: Config name (without .yaml extension)

    Returns:
        Parsed HookConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    path = CONFIGS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    return load_config_from_path(path, default_name=name)


def load_config_from_path(path: Union[str, Path], default_name: Optional[str] = None) -> HookConfig:
    """Load a config from an arbitrary path."""
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")

    config = parse_config(data, default_name=default_name or path.stem)
    log.verbose(
        "config_loaded",
        path=str(path),
        name=config.name,
        hooks=[h.id for h in config.hooks],
    )
    return config


def parse_config(data: dict, default_name: str = "unnamed") -> HookConfig:
    """Parse a config from dictionary."""
    settings_data = data.get("settings") or {}
    settings = HookSettings(
        raise_errors=bool(settings_data.get("raise_errors", False)),
    )

    hooks = []
    for hook_data in data.get("hooks") or []:
        entry = parse_hook_entry(hook_data)
        if entry:
            hooks.append(entry)

    return HookConfig(
        version=str(data.get("version", "1.0")),
        name=data.get("name", default_name),
        description=data.get("description", ""),
        settings=settings,
        hooks=hooks,
    )


def parse_hook_entry(data: Any) -> Optional[HookEntry]:
    """Parse a single hook entry, or None if it is invalid."""
    try:
        options = data.get("options") or {}
        if not isinstance(options, dict):
            raise ValueError(f"options for hook '{data.get('id')}' must be a mapping")
        return HookEntry(
            id=data["id"],
            enabled=bool(data.get("enabled", True)),
            description=data.get("description", ""),
            options=options,
        )
    except (AttributeError, KeyError, ValueError) as e:
        log.warning("hook_entry_skipped", error=str(e))
        return None


def list_configs() -> list[str]:
    """List bundled config names."""
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.yaml"))


# Cache for loaded configs
_cache: dict[str, HookConfig] = {}


def get_config(name: str = "default", use_cache: bool = True) -> HookConfig:
    """Get a bundled config, using cache by default."""
    if use_cache and name in _cache:
        return _cache[name]

    config = load_config(name)
    _cache[name] = config
    return config


def clear_cache() -> None:
    """Clear the config cache."""
    _cache.clear()
