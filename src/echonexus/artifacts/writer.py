"""Result artifact and status report writers."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel

from echonexus.operations.models import OperationStatus, StatusReport


def _write_json(path: Path, payload: BaseModel) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload.model_dump_json(indent=2), encoding="utf-8")
    return path


def write_result_artifact(path: Path, artifact: BaseModel) -> Path:
    """Write result artifact, overwriting previous content.

    Args:
        path: Target artifact file.
        artifact: Result artifact payload.

    Returns:
        Written path.
    """
    return _write_json(path, artifact)


def write_status_report(path: Path, report: StatusReport) -> Path:
    """Write status report, overwriting previous content.

    Args:
        path: Target report file.
        report: Status report payload.

    Returns:
        Written path.
    """
    return _write_json(path, report)


def build_status_report(
    *,
    operation_id: str,
    command: str,
    status: OperationStatus,
    processor_repo: str,
    completed_at: datetime | None = None,
) -> StatusReport:
    """Build status report stamped with local time at seconds precision.

    Args:
        operation_id: Operation id, possibly invalid on aborted runs.
        command: Command string.
        status: Terminal job status.
        processor_repo: Repository that ran the processor.
        completed_at: Optional completion time override.

    Returns:
        Status report payload.
    """
    stamp = completed_at or datetime.now().astimezone()
    return StatusReport(
        operation_id=operation_id,
        command=command,
        status=status,
        completed_at=stamp.isoformat(timespec="seconds"),
        artifacts_available=True,
        processor_repo=processor_repo,
    )
