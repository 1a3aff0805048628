"""Handler for text_analysis."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from echonexus.handlers.types import HandlerResult, input_text


class TextAnalysisCommand:
    """Character and word counts for ``inputs.text``."""

    name = "text_analysis"

    def execute(self, inputs: Any, memory: Mapping[str, Any]) -> HandlerResult:
        """Analyze input text.

        Args:
            inputs: Mapping with optional ``text`` field.
            memory: Unused processor memory snapshot.

        Returns:
            Analysis summary with word count and fixed neutral sentiment.
        """
        del memory
        text = input_text(self.name, inputs, "text")
        return {
            "analysis": f"Analyzed {len(text)} characters",
            "word_count": len(text.split()),
            "sentiment": "neutral",
        }
