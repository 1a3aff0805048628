"""Unit tests for the single-shot operation processor."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from echonexus.handlers import CommandRegistry
from echonexus.operations import (
    OperationEnvelope,
    OperationError,
    OperationErrorCode,
)
from echonexus.processor import OperationProcessor
from echonexus.state import (
    InMemoryStateBackend,
    JsonFileStateBackend,
    MemoryStore,
    StateLoadStatus,
)


class _ExplodingHandler:
    """Handler fixture that always raises."""

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> dict[str, Any]:
        del inputs, memory
        raise RuntimeError("boom")


def _processor(
    backend: InMemoryStateBackend | JsonFileStateBackend,
    artifacts_dir: Path,
    registry: CommandRegistry | None = None,
) -> OperationProcessor:
    return OperationProcessor(
        store=MemoryStore(backend),
        registry=registry or CommandRegistry(),
        artifacts_dir=artifacts_dir,
    )


@pytest.mark.unit
def test_process_text_analysis_persists_memory_and_artifact(
    tmp_path: Path, operation_id: str
) -> None:
    """A fresh workspace ends with one memory entry and one artifact."""
    # Arrange - file-backed store with no prior state
    state_file = tmp_path / "state" / "processor_memory.json"
    processor = _processor(JsonFileStateBackend(state_file), tmp_path / "artifacts")
    envelope = OperationEnvelope(
        operation_id=operation_id,
        command="text_analysis",
        inputs={"text": "hello world"},
    )

    # Act - process once
    outcome = processor.process(envelope)

    # Assert - result, memory, and artifact agree
    expected = {
        "analysis": "Analyzed 11 characters",
        "word_count": 2,
        "sentiment": "neutral",
    }
    assert outcome.result == expected
    assert outcome.state_load.status == StateLoadStatus.MISSING
    memory = json.loads(state_file.read_text(encoding="utf-8"))
    assert list(memory) == [operation_id]
    assert memory[operation_id]["command"] == "text_analysis"
    assert memory[operation_id]["inputs"] == {"text": "hello world"}
    assert memory[operation_id]["result"] == expected
    artifact = json.loads(outcome.artifact_path.read_text(encoding="utf-8"))
    assert outcome.artifact_path == tmp_path / "artifacts" / "result.json"
    assert artifact["operation_id"] == operation_id
    assert artifact["result"] == expected
    assert artifact["timestamp"] == outcome.timestamp


@pytest.mark.unit
def test_process_replay_overwrites_memory_entry(
    tmp_path: Path, operation_id: str
) -> None:
    """Replaying an id keeps one entry for it."""
    backend = InMemoryStateBackend()
    processor = _processor(backend, tmp_path)
    envelope = OperationEnvelope(
        operation_id=operation_id, command="diagnostic_scan", inputs={}
    )

    processor.process(envelope)
    second = processor.process(envelope)

    memory = json.loads(backend.text or "")
    assert list(memory) == [operation_id]
    assert second.state_load.entry_count == 1


@pytest.mark.unit
def test_process_keeps_other_operations(tmp_path: Path, operation_id: str) -> None:
    """Existing entries for other ids survive."""
    other = "echo-1-0000000000000000"
    backend = InMemoryStateBackend(json.dumps({other: {"command": "old"}}))

    _processor(backend, tmp_path).process(
        OperationEnvelope(operation_id=operation_id, command="noop", inputs={})
    )

    assert set(json.loads(backend.text or "")) == {other, operation_id}


@pytest.mark.unit
def test_process_rejects_invalid_id_before_side_effects(tmp_path: Path) -> None:
    """Format errors leave memory and artifacts untouched."""
    backend = InMemoryStateBackend('{"keep": {}}')
    processor = _processor(backend, tmp_path / "artifacts")

    with pytest.raises(OperationError) as exc_info:
        processor.process(
            OperationEnvelope(operation_id="echo-123-xyz", command="text_analysis")
        )

    assert exc_info.value.code == OperationErrorCode.INVALID_OPERATION_ID
    assert backend.writes == 0
    assert not (tmp_path / "artifacts").exists()


@pytest.mark.unit
def test_process_handler_failure_skips_save(tmp_path: Path, operation_id: str) -> None:
    """A raising handler leaves memory unsaved and writes no artifact."""
    backend = InMemoryStateBackend()
    registry = CommandRegistry(handlers={"explode": _ExplodingHandler()})
    processor = _processor(backend, tmp_path / "artifacts", registry)

    with pytest.raises(RuntimeError, match="boom"):
        processor.process(
            OperationEnvelope(operation_id=operation_id, command="explode")
        )

    assert backend.text is None
    assert not (tmp_path / "artifacts" / "result.json").exists()


@pytest.mark.unit
def test_process_recovers_from_corrupt_memory(
    tmp_path: Path, operation_id: str
) -> None:
    """Unreadable memory is replaced by a fresh document."""
    backend = InMemoryStateBackend("{corrupt")

    outcome = _processor(backend, tmp_path).process(
        OperationEnvelope(operation_id=operation_id, command="diagnostic_scan")
    )

    assert outcome.state_load.status == StateLoadStatus.UNREADABLE
    assert list(json.loads(backend.text or "")) == [operation_id]


@pytest.mark.unit
def test_process_fallback_echoes_inputs(tmp_path: Path, operation_id: str) -> None:
    """Unknown commands succeed with echoed inputs."""
    outcome = _processor(InMemoryStateBackend(), tmp_path).process(
        OperationEnvelope(
            operation_id=operation_id, command="summarize", inputs={"text": "raw"}
        )
    )

    assert outcome.result == {
        "status": "success",
        "message": "Template processor executed command: summarize",
        "data": {"text": "raw"},
    }
