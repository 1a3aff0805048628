"""Unit tests for result artifact and status report writers."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from echonexus.artifacts import (
    build_status_report,
    write_result_artifact,
    write_status_report,
)
from echonexus.operations import OperationStatus, ResultArtifact

_OP_ID = "echo-1699999999-abc0123456789def"


@pytest.mark.unit
def test_write_result_artifact_overwrites(tmp_path: Path) -> None:
    """Each run replaces the previous artifact."""
    path = tmp_path / "artifacts" / "result.json"
    for word_count in (1, 2):
        write_result_artifact(
            path,
            ResultArtifact(
                operation_id=_OP_ID,
                command="text_analysis",
                result={"word_count": word_count},
                timestamp="2026-10-19T12:00:00",
            ),
        )

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {
        "operation_id": _OP_ID,
        "command": "text_analysis",
        "result": {"word_count": 2},
        "timestamp": "2026-10-19T12:00:00",
    }
    assert path.read_text(encoding="utf-8").startswith('{\n  "operation_id"')


@pytest.mark.unit
def test_build_status_report_formats_seconds_with_offset() -> None:
    """completed_at uses seconds precision with a UTC offset."""
    stamp = datetime(
        2026, 10, 19, 8, 30, 15, 123456, tzinfo=timezone(timedelta(hours=2))
    )

    report = build_status_report(
        operation_id=_OP_ID,
        command="diagnostic_scan",
        status=OperationStatus.SUCCESS,
        processor_repo="acme/processor",
        completed_at=stamp,
    )

    assert report.completed_at == "2026-10-19T08:30:15+02:00"
    assert report.artifacts_available is True


@pytest.mark.unit
def test_build_status_report_defaults_to_aware_now() -> None:
    """Default timestamp carries an offset."""
    report = build_status_report(
        operation_id="",
        command="",
        status=OperationStatus.FAILURE,
        processor_repo="local",
    )

    assert datetime.fromisoformat(report.completed_at).tzinfo is not None


@pytest.mark.unit
def test_write_status_report_serializes_fields(tmp_path: Path) -> None:
    """Status report file holds exactly the six report fields."""
    path = tmp_path / "status_report.json"
    report = build_status_report(
        operation_id=_OP_ID,
        command="text_analysis",
        status=OperationStatus.FAILURE,
        processor_repo="acme/processor",
        completed_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )

    write_status_report(path, report)

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "operation_id": _OP_ID,
        "command": "text_analysis",
        "status": "failure",
        "completed_at": "2026-01-01T00:00:00+00:00",
        "artifacts_available": True,
        "processor_repo": "acme/processor",
    }
