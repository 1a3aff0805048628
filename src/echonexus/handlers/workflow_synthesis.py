"""Handler for workflow_synthesis."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from echonexus.handlers.types import HandlerResult, input_field

WORKFLOW_STEPS = ("checkout", "setup", "test", "deploy")


class WorkflowSynthesisCommand:
    """Fixed four-step workflow outline for ``inputs.description``."""

    name = "workflow_synthesis"

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> HandlerResult:
        """Build workflow outline.

        Args:
            inputs: Mapping with optional ``description`` field of any JSON type.
            memory: Unused processor memory snapshot.

        Returns:
            Workflow name, echoed description, and step list.
        """
        del memory
        description = input_field(self.name, inputs, "description")
        return {
            "workflow_name": "Generated Workflow",
            "description": description,
            "steps": list(WORKFLOW_STEPS),
        }
