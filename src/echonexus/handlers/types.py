"""Shared command handler types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from echonexus.operations.errors import OperationError, OperationErrorCode

HandlerResult = dict[str, Any]


class CommandHandler(Protocol):
    """Protocol implemented by command handlers."""

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> HandlerResult:
        """Execute command logic.

        Args:
            inputs: Normalized operation inputs.
            memory: Snapshot of processor memory keyed by operation id.
        """


def input_field(command: str, inputs: Any, field: str) -> Any:
    """Read one optional field from mapping inputs without type checks.

    Args:
        command: Command name used in error messages.
        inputs: Normalized operation inputs.
        field: Field name to read.

    Returns:
        Field value as decoded, or empty string when absent.

    Raises:
        OperationError: If inputs is not a mapping.
    """
    if not isinstance(inputs, Mapping):
        raise OperationError(
            OperationErrorCode.HANDLER_FAILED,
            f"{command} expects object inputs, got {type(inputs).__name__}.",
            data={"command": command},
        )
    return inputs.get(field, "")


def input_text(command: str, inputs: Any, field: str) -> str:
    """Read one optional string field from mapping inputs.

    Raises:
        OperationError: If inputs is not a mapping or the field is not a string.
    """
    value = input_field(command, inputs, field)
    if not isinstance(value, str):
        raise OperationError(
            OperationErrorCode.HANDLER_FAILED,
            f"{command} field '{field}' must be a string.",
            data={"command": command, "field": field},
        )
    return value
