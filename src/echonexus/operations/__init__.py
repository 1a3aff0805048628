"""Operation envelope, validation, and trigger normalization surface."""

from echonexus.operations.errors import OperationError, OperationErrorCode
from echonexus.operations.models import (
    DEFAULT_SESSION_ID,
    MemoryEntry,
    OperationEnvelope,
    OperationStatus,
    ResultArtifact,
    StatusReport,
)
from echonexus.operations.trigger import (
    build_envelope,
    envelope_from_dispatch,
    envelope_from_environment,
    envelope_from_event,
    envelope_from_manual,
    log_security_context,
    parse_inputs,
)
from echonexus.operations.validator import (
    OPERATION_ID_PATTERN,
    is_valid_operation_id,
    new_operation_id,
    validate_operation_id,
)

__all__ = [
    "DEFAULT_SESSION_ID",
    "OPERATION_ID_PATTERN",
    "MemoryEntry",
    "OperationEnvelope",
    "OperationError",
    "OperationErrorCode",
    "OperationStatus",
    "ResultArtifact",
    "StatusReport",
    "build_envelope",
    "envelope_from_dispatch",
    "envelope_from_environment",
    "envelope_from_event",
    "envelope_from_manual",
    "is_valid_operation_id",
    "log_security_context",
    "new_operation_id",
    "parse_inputs",
    "validate_operation_id",
]
