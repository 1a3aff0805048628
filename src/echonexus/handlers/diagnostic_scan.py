"""Handler for diagnostic_scan."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from echonexus.handlers.types import HandlerResult

DIAGNOSTIC_CHECKS = ("memory", "disk", "network")


class DiagnosticScanCommand:
    """Static health report; inputs are ignored."""

    name = "diagnostic_scan"

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> HandlerResult:
        del inputs, memory
        return {
            "status": "healthy",
            "checks": list(DIAGNOSTIC_CHECKS),
            "issues": [],
        }
