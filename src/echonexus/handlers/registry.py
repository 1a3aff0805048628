"""Command registry and dispatch."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from echonexus.handlers.code_generation import CodeGenerationCommand
from echonexus.handlers.diagnostic_scan import DiagnosticScanCommand
from echonexus.handlers.fallback import FallbackCommand
from echonexus.handlers.text_analysis import TextAnalysisCommand
from echonexus.handlers.types import CommandHandler, HandlerResult
from echonexus.handlers.workflow_synthesis import WorkflowSynthesisCommand

_LOGGER = logging.getLogger(__name__)

FallbackFactory = Callable[[str], CommandHandler]


class CommandRegistry:
    """Exact-match command registry with an explicit fallback variant."""

    def __init__(
        self,
        *,
        handlers: dict[str, CommandHandler] | None = None,
        fallback: FallbackFactory | None = None,
    ) -> None:
        """Construct registry with built-in handlers plus optional overrides.

        Args:
            handlers: Optional custom handlers keyed by command name.
            fallback: Optional factory building the handler for unknown commands.
        """
        self._handlers: dict[str, CommandHandler] = {
            "text_analysis": TextAnalysisCommand(),
            "code_generation": CodeGenerationCommand(),
            "diagnostic_scan": DiagnosticScanCommand(),
            "workflow_synthesis": WorkflowSynthesisCommand(),
        }
        if handlers:
            self._handlers.update(handlers)
        self._fallback: FallbackFactory = fallback or FallbackCommand

    def registered_commands(self) -> tuple[str, ...]:
        """Return registered command names in sorted order."""
        return tuple(sorted(self._handlers))

    def resolve(self, command: str) -> CommandHandler:
        """Return handler for command, falling back for unknown names.

        Args:
            command: Raw command string.

        Returns:
            Matching handler or fallback handler bound to ``command``.
        """
        handler = self._handlers.get(command)
        if handler is not None:
            return handler
        _LOGGER.debug("No handler registered for %r; using fallback", command)
        return self._fallback(command)

    def dispatch(
        self,
        command: str,
        inputs: Any,
        memory: Mapping[str, Any],
    ) -> HandlerResult:
        """Dispatch command to its handler.

        Args:
            command: Raw command string.
            inputs: Normalized operation inputs.
            memory: Processor memory snapshot.

        Returns:
            Handler result mapping.
        """
        return self.resolve(command).execute(inputs, memory)
