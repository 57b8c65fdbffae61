"""
hookguard — Per-file content hooks for pre-commit and pre-push validation.

Hooks inspect each changed file of a proposed change and either accept it
or reject it with a human-readable reason. The runner aggregates per-file
verdicts into one decision for the whole change.
"""

__version__ = "0.1.0"
