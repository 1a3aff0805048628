"""Errors raised while turning a trigger into a processed operation."""

from __future__ import annotations

from enum import StrEnum


class OperationErrorCode(StrEnum):
    """Why an operation was rejected or failed; shown in CLI error panels."""

    INVALID_OPERATION_ID = "invalid_operation_id"
    INVALID_PAYLOAD = "invalid_payload"
    HANDLER_FAILED = "handler_failed"


class OperationError(RuntimeError):
    """Operation rejected before processing or failed inside a handler.

    The CLI turns any ``OperationError`` into a ``failure`` status report and
    exit code 1; memory is left unsaved.
    """

    def __init__(
        self,
        code: OperationErrorCode,
        message: str,
        *,
        data: dict[str, object] | None = None,
    ) -> None:
        """Record the failure reason for rendering and logs.

        Args:
            code: Failure category.
            message: Text printed after ``Error:`` on the console.
            data: Offending fields, such as the rejected operation id.
        """
        super().__init__(message)
        self.code = code
        self.data = data or {}
