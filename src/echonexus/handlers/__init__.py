"""Command handler registry surface."""

from echonexus.handlers.code_generation import CodeGenerationCommand
from echonexus.handlers.diagnostic_scan import DiagnosticScanCommand
from echonexus.handlers.fallback import FallbackCommand
from echonexus.handlers.registry import CommandRegistry
from echonexus.handlers.text_analysis import TextAnalysisCommand
from echonexus.handlers.types import CommandHandler, HandlerResult
from echonexus.handlers.workflow_synthesis import WorkflowSynthesisCommand

__all__ = [
    "CodeGenerationCommand",
    "CommandHandler",
    "CommandRegistry",
    "DiagnosticScanCommand",
    "FallbackCommand",
    "HandlerResult",
    "TextAnalysisCommand",
    "WorkflowSynthesisCommand",
]
