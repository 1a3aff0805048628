"""Default handler for commands without a registered implementation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from echonexus.handlers.types import HandlerResult


class FallbackCommand:
    """Echo success with the raw inputs for any unregistered command."""

    def __init__(self, command: str) -> None:
        """Bind the unmatched command name.

        Args:
            command: Raw command string as received.
        """
        self._command = command

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> HandlerResult:
        """Return template success payload.

        Args:
            inputs: Normalized operation inputs, echoed back unchanged.
            memory: Unused processor memory snapshot.

        Returns:
            Success payload naming the command.
        """
        del memory
        return {
            "status": "success",
            "message": f"Template processor executed command: {self._command}",
            "data": inputs,
        }
