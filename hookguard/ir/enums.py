"""
IR Enums — Change types, outcome and run statuses.

No stringly-typed constants scattered across hooks.
"""

from enum import Enum


class ChangedFileType(str, Enum):
    """How a proposed change touches a file."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    UNMERGED = "unmerged"  # Conflicted in the index; content is ambiguous


class OutcomeStatus(str, Enum):
    """Result of one hook on one file."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    SKIPPED = "skipped"    # Hook not applicable (e.g. deleted file)
    ERROR = "error"        # File could not be evaluated


class RunStatus(str, Enum):
    """Aggregated decision for a whole change."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    ERROR = "error"
