"""
IR Serialization — JSON import/export for run results.
"""

from pathlib import Path
from typing import Union

from hookguard.ir.schema import HookRunResult


def to_json(result: HookRunResult, indent: int = 2) -> str:
    """Serialize a HookRunResult to JSON string."""
    return result.model_dump_json(indent=indent)


def from_json(json_str: str) -> HookRunResult:
    """Deserialize a HookRunResult from JSON string."""
    return HookRunResult.model_validate_json(json_str)


def save(result: HookRunResult, path: Union[str, Path]) -> None:
    """Save a HookRunResult to a JSON file."""
    path = Path(path)
    path.write_text(to_json(result))


def load(path: Union[str, Path]) -> HookRunResult:
    """Load a HookRunResult from a JSON file."""
    path = Path(path)
    return from_json(path.read_text())
