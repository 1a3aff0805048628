"""Unit tests for operation id validation and generation."""

from __future__ import annotations

import pytest

from echonexus.operations import (
    OperationError,
    OperationErrorCode,
    is_valid_operation_id,
    new_operation_id,
    validate_operation_id,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "candidate",
    [
        "echo-1699999999-abc0123456789def",
        "echo-0-0000000000000000",
        "echo-12345678901234567890-ffffffffffffffff",
    ],
)
def test_validate_operation_id_accepts_well_formed_ids(candidate: str) -> None:
    """Ids matching echo-<digits>-<16 hex> should pass through unchanged."""
    assert validate_operation_id(candidate) == candidate
    assert is_valid_operation_id(candidate) is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "candidate",
    [
        "echo-123-xyz",
        "",
        "echo--abc0123456789def",
        "echo-1699999999-ABC0123456789DEF",
        "echo-1699999999-abc0123456789de",
        "echo-1699999999-abc0123456789def0",
        "echo-1699999999-abc0123456789deg",
        "Echo-1699999999-abc0123456789def",
        " echo-1699999999-abc0123456789def",
        "echo-1699999999-abc0123456789def\n",
        "prefix-echo-1699999999-abc0123456789def",
        "echo-16999x9999-abc0123456789def",
    ],
)
def test_validate_operation_id_rejects_malformed_ids(candidate: str) -> None:
    """Anything not fully matching the pattern should raise a format error."""
    with pytest.raises(OperationError) as exc_info:
        validate_operation_id(candidate)

    assert exc_info.value.code == OperationErrorCode.INVALID_OPERATION_ID
    assert str(exc_info.value) == "Invalid operation ID format"
    assert exc_info.value.data == {"operation_id": candidate}


@pytest.mark.unit
def test_validate_operation_id_rejects_missing_id() -> None:
    """A missing id is a format error, not a type error."""
    with pytest.raises(OperationError):
        validate_operation_id(None)
    assert is_valid_operation_id(42) is False


@pytest.mark.unit
def test_new_operation_id_is_valid_and_uses_timestamp() -> None:
    """Minted ids should embed the unix timestamp and pass validation."""
    minted = new_operation_id(now=1700000000.9)

    assert minted.startswith("echo-1700000000-")
    assert is_valid_operation_id(minted)


@pytest.mark.unit
def test_new_operation_id_is_unique_per_call() -> None:
    """Random suffix should differ between calls at the same second."""
    assert new_operation_id(now=1.0) != new_operation_id(now=1.0)
