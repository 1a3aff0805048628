"""Single-shot operation processing pipeline."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from echonexus.artifacts.writer import write_result_artifact
from echonexus.handlers.registry import CommandRegistry
from echonexus.operations.models import MemoryEntry, OperationEnvelope, ResultArtifact
from echonexus.operations.validator import validate_operation_id
from echonexus.state.store import MemoryStore, StateLoadResult

_LOGGER = logging.getLogger(__name__)

RESULT_ARTIFACT_NAME = "result.json"


class ProcessingOutcome(BaseModel):
    """Successful run summary returned to the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    envelope: OperationEnvelope
    result: dict[str, Any]
    timestamp: str
    state_load: StateLoadResult
    artifact_path: Path


class OperationProcessor:
    """Validate, dispatch, persist memory, and write the result artifact."""

    def __init__(
        self,
        *,
        store: MemoryStore,
        registry: CommandRegistry,
        artifacts_dir: Path,
    ) -> None:
        """Store processing dependencies.

        Args:
            store: Processor memory store.
            registry: Command handler registry.
            artifacts_dir: Directory receiving ``result.json``.
        """
        self._store = store
        self._registry = registry
        self._artifacts_dir = artifacts_dir

    def process(self, envelope: OperationEnvelope) -> ProcessingOutcome:
        """Run one operation to completion.

        Handler exceptions propagate; memory is then left unsaved and no
        artifact is written.

        Args:
            envelope: Normalized operation envelope.

        Returns:
            Processing outcome.

        Raises:
            OperationError: If the operation id is malformed or a handler
                rejects its inputs.
        """
        operation_id = validate_operation_id(envelope.operation_id)
        _LOGGER.info("Processing operation: %s", operation_id)
        _LOGGER.info("Command: %s", envelope.command)
        _LOGGER.info("Inputs: %s", json.dumps(envelope.inputs))

        state_load = self._store.load()
        if state_load.ok:
            _LOGGER.info(
                "Found existing state with %d entries", state_load.entry_count
            )
        elif state_load.reason:
            _LOGGER.warning(
                "Previous state unreadable; starting empty: %s", state_load.reason
            )
        else:
            _LOGGER.info("No previous state found")

        result = self._registry.dispatch(
            envelope.command, envelope.inputs, self._store.entries()
        )

        self._store.record(
            operation_id,
            MemoryEntry(
                command=envelope.command,
                inputs=envelope.inputs,
                result=result,
                timestamp=datetime.now().isoformat(),
            ),
        )
        self._store.save()

        timestamp = datetime.now().isoformat()
        artifact_path = write_result_artifact(
            self._artifacts_dir / RESULT_ARTIFACT_NAME,
            ResultArtifact(
                operation_id=operation_id,
                command=envelope.command,
                result=result,
                timestamp=timestamp,
            ),
        )
        _LOGGER.info("Processing completed successfully")
        return ProcessingOutcome(
            envelope=envelope,
            result=result,
            timestamp=timestamp,
            state_load=state_load,
            artifact_path=artifact_path,
        )
