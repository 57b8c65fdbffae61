"""
IR Schema — Pydantic models for hook verdicts and run results.

A verdict is immutable and returned by value; run results aggregate
verdicts for every (hook, file) pair of a proposed change.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hookguard.ir.enums import ChangedFileType, OutcomeStatus, RunStatus

SCHEMA_VERSION = "0.1.0"


class HookRejectionInfo(BaseModel):
    """Why a hook rejected a file."""

    model_config = ConfigDict(frozen=True)

    description: str = Field(..., description="Short human-readable reason")
    long_description: str = Field(default="", description="Optional extended explanation")


class HookExecution(BaseModel):
    """
    Verdict of a single hook on a single file.

    `rejection` is present exactly when `accepted` is false.
    """

    model_config = ConfigDict(frozen=True)

    accepted: bool = Field(..., description="Whether the file passed the hook")
    rejection: Optional[HookRejectionInfo] = Field(
        None, description="Rejection details, only when accepted is false"
    )

    @model_validator(mode="after")
    def _rejection_matches_accepted(self) -> "HookExecution":
        if self.accepted and self.rejection is not None:
            raise ValueError("accepted verdict cannot carry a rejection")
        if not self.accepted and self.rejection is None:
            raise ValueError("rejected verdict requires rejection info")
        return self

    @classmethod
    def accept(cls) -> "HookExecution":
        return cls(accepted=True)

    @classmethod
    def reject(cls, description: str, long_description: str = "") -> "HookExecution":
        return cls(
            accepted=False,
            rejection=HookRejectionInfo(
                description=description,
                long_description=long_description,
            ),
        )

    @property
    def reason(self) -> Optional[str]:
        """The rejection description, or None when accepted."""
        if self.rejection is None:
            return None
        return self.rejection.description


class HookOutcome(BaseModel):
    """Result of running one hook against one changed file."""

    hook_name: str = Field(..., description="Registered name of the hook")
    path: str = Field(..., description="Repository-relative path of the file")
    change_type: ChangedFileType = Field(default=ChangedFileType.MODIFIED)
    status: OutcomeStatus = Field(..., description="accepted, rejected, skipped or error")
    execution: Optional[HookExecution] = Field(
        None, description="The hook verdict (absent for skipped and error outcomes)"
    )
    error: Optional[str] = Field(None, description="Error text when status is error")
    error_type: Optional[str] = Field(None, description="Exception class name when status is error")


class HookRunResult(BaseModel):
    """Aggregated result of running all hooks over a proposed change."""

    schema_version: str = Field(default=SCHEMA_VERSION)
    request_id: str = Field(..., description="Identifier of the run")
    status: RunStatus = Field(..., description="Overall decision for the change")
    outcomes: list[HookOutcome] = Field(default_factory=list)
    files_checked: int = Field(default=0, description="Number of changed files considered")
    duration_ms: float = Field(default=0.0)
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def accepted(self) -> bool:
        return self.status == RunStatus.ACCEPTED

    @property
    def rejections(self) -> list[HookOutcome]:
        """Outcomes where a hook rejected a file."""
        return [o for o in self.outcomes if o.status == OutcomeStatus.REJECTED]

    @property
    def errors(self) -> list[HookOutcome]:
        """Outcomes where a file could not be evaluated."""
        return [o for o in self.outcomes if o.status == OutcomeStatus.ERROR]

    def rejection_messages(self) -> list[str]:
        """Human-readable rejection reasons, in outcome order."""
        return [o.execution.reason for o in self.rejections if o.execution is not None]
