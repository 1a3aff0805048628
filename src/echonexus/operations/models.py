"""Operation envelope, memory, artifact, and status models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SESSION_ID = "manual"


class OperationStatus(StrEnum):
    """Terminal job status vocabulary used in status reports."""

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


class OperationEnvelope(BaseModel):
    """Normalized input bundle for one operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation_id: str
    command: str
    inputs: Any = Field(default_factory=dict)
    session_id: str = DEFAULT_SESSION_ID
    auth_hash: str | None = None


class MemoryEntry(BaseModel):
    """Persisted record for one processed operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    command: str
    inputs: Any
    result: dict[str, Any]
    timestamp: str


class ResultArtifact(BaseModel):
    """Result file payload written once per run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation_id: str
    command: str
    result: dict[str, Any]
    timestamp: str


class StatusReport(BaseModel):
    """Terminal status summary for one run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    operation_id: str
    command: str
    status: OperationStatus
    completed_at: str
    artifacts_available: bool = True
    processor_repo: str
