"""Normalize dispatch, manual, and environment triggers into envelopes."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from echonexus.operations.errors import OperationError, OperationErrorCode
from echonexus.operations.models import DEFAULT_SESSION_ID, OperationEnvelope

_LOGGER = logging.getLogger(__name__)

DEFAULT_RAW_INPUTS = "{}"


def parse_inputs(raw: object) -> Any:
    """Decode raw operation inputs with lenient text fallback.

    Args:
        raw: Raw inputs; usually a JSON string, possibly already decoded.

    Returns:
        Decoded JSON value, or ``{"text": raw}`` when raw is not valid JSON.
    """
    if raw is None:
        raw = DEFAULT_RAW_INPUTS
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return {"text": raw}


def build_envelope(
    client_payload: Mapping[str, Any] | None = None,
    manual_inputs: Mapping[str, Any] | None = None,
) -> OperationEnvelope:
    """Merge dispatch payload and manual form fields into one envelope.

    Dispatch fields win over manual fields when truthy. A falsy dispatch
    value is kept when the manual field is absent, so empty inputs decode
    to ``{"text": ""}`` while absent inputs decode to ``{}``.

    Args:
        client_payload: Repository-dispatch client payload.
        manual_inputs: Workflow-dispatch form inputs.

    Returns:
        Normalized operation envelope. The operation id is not validated here.
    """
    dispatch = client_payload or {}
    manual = manual_inputs or {}
    security = dispatch.get("security_context")
    auth_hash = security.get("auth_hash") if isinstance(security, Mapping) else None
    return OperationEnvelope(
        operation_id=str(_first(dispatch, manual, "operation_id") or ""),
        command=str(_first(dispatch, manual, "command") or ""),
        inputs=parse_inputs(_first(dispatch, manual, "inputs")),
        session_id=str(dispatch.get("session_id") or DEFAULT_SESSION_ID),
        auth_hash=str(auth_hash) if auth_hash else None,
    )


def envelope_from_dispatch(payload: object) -> OperationEnvelope:
    """Build envelope from a repository-dispatch client payload.

    Args:
        payload: Decoded ``client_payload`` object.

    Returns:
        Normalized operation envelope.

    Raises:
        OperationError: If payload is not a JSON object.
    """
    if not isinstance(payload, Mapping):
        raise OperationError(
            OperationErrorCode.INVALID_PAYLOAD,
            "Dispatch payload must be a JSON object.",
            data={"payload_type": type(payload).__name__},
        )
    return build_envelope(client_payload=payload)


def envelope_from_manual(
    operation_id: str,
    command: str,
    inputs: str = DEFAULT_RAW_INPUTS,
) -> OperationEnvelope:
    """Build envelope from manual workflow-dispatch form inputs.

    Args:
        operation_id: Operation identifier field.
        command: Command field.
        inputs: JSON input data field.

    Returns:
        Normalized operation envelope with the manual session id.
    """
    return build_envelope(
        manual_inputs={
            "operation_id": operation_id,
            "command": command,
            "inputs": inputs,
        }
    )


def envelope_from_event(event: object) -> OperationEnvelope:
    """Build envelope from a full workflow event document.

    Args:
        event: Decoded event JSON (the file behind ``GITHUB_EVENT_PATH``).

    Returns:
        Normalized operation envelope.

    Raises:
        OperationError: If the event or its payload sections are not objects.
    """
    if not isinstance(event, Mapping):
        raise OperationError(
            OperationErrorCode.INVALID_PAYLOAD,
            "Event document must be a JSON object.",
            data={"payload_type": type(event).__name__},
        )
    client_payload = event.get("client_payload")
    manual_inputs = event.get("inputs")
    sections = (("client_payload", client_payload), ("inputs", manual_inputs))
    for name, section in sections:
        if section is not None and not isinstance(section, Mapping):
            raise OperationError(
                OperationErrorCode.INVALID_PAYLOAD,
                f"Event field '{name}' must be a JSON object.",
                data={"field": name},
            )
    return build_envelope(client_payload=client_payload, manual_inputs=manual_inputs)


def envelope_from_environment(environ: Mapping[str, str]) -> OperationEnvelope:
    """Build envelope from workflow step environment variables.

    Args:
        environ: Environment mapping with ``OPERATION_ID``, ``COMMAND``,
            ``INPUTS``, and ``SESSION_ID`` keys.

    Returns:
        Normalized operation envelope.
    """
    return build_envelope(
        client_payload={
            "operation_id": environ.get("OPERATION_ID", ""),
            "command": environ.get("COMMAND", ""),
            "inputs": environ.get("INPUTS", DEFAULT_RAW_INPUTS),
            "session_id": environ.get("SESSION_ID") or DEFAULT_SESSION_ID,
        }
    )


def log_security_context(envelope: OperationEnvelope) -> None:
    """Log envelope identity fields and auth hash presence.

    Args:
        envelope: Normalized operation envelope.
    """
    _LOGGER.info("Operation ID: %s", envelope.operation_id)
    _LOGGER.info("Session ID: %s", envelope.session_id)
    _LOGGER.info("Command: %s", envelope.command)
    if envelope.auth_hash:
        _LOGGER.info("Security validation passed")


def _first(
    dispatch: Mapping[str, Any],
    manual: Mapping[str, Any],
    key: str,
) -> Any:
    value = dispatch.get(key)
    if value:
        return value
    fallback = manual.get(key)
    # Falsy dispatch values such as "" survive when no manual value exists.
    return value if fallback is None else fallback
