"""Operation id validation and generation."""

from __future__ import annotations

import re
import secrets
import time

from echonexus.operations.errors import OperationError, OperationErrorCode

OPERATION_ID_PATTERN = re.compile(r"echo-[0-9]+-[a-f0-9]{16}")


def is_valid_operation_id(candidate: object) -> bool:
    """Return whether candidate is a well-formed operation id.

    Args:
        candidate: Raw operation id value.

    Returns:
        True when the value fully matches ``echo-<digits>-<16 hex>``.
    """
    if not isinstance(candidate, str):
        return False
    return OPERATION_ID_PATTERN.fullmatch(candidate) is not None


def validate_operation_id(candidate: object) -> str:
    """Validate operation id format before any processing.

    Args:
        candidate: Raw operation id value.

    Returns:
        The validated operation id.

    Raises:
        OperationError: If the id is missing or malformed.
    """
    if not is_valid_operation_id(candidate):
        raise OperationError(
            OperationErrorCode.INVALID_OPERATION_ID,
            "Invalid operation ID format",
            data={"operation_id": candidate},
        )
    return str(candidate)


def new_operation_id(now: float | None = None) -> str:
    """Mint a fresh well-formed operation id.

    Args:
        now: Optional unix timestamp override.

    Returns:
        Operation id of the form ``echo-<unix seconds>-<16 hex>``.
    """
    seconds = int(time.time() if now is None else now)
    return f"echo-{seconds}-{secrets.token_hex(8)}"
