"""Handler for code_generation."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from echonexus.handlers.types import HandlerResult, input_field


class CodeGenerationCommand:
    """Template code snippet for ``inputs.prompt``."""

    name = "code_generation"

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> HandlerResult:
        del memory
        prompt = input_field(self.name, inputs, "prompt")
        return {
            "code": f'# Generated code for: {prompt}\nprint("Hello, World!")',
            "language": "python",
            "explanation": "Simple template code generation",
        }
