"""CLI rendering for processing outcomes and reports."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from echonexus.operations.errors import OperationError
from echonexus.operations.models import OperationStatus, StatusReport
from echonexus.processor import ProcessingOutcome
from echonexus.state.sync import SyncResult

_STATUS_STYLES = {
    OperationStatus.SUCCESS: "green",
    OperationStatus.FAILURE: "bold red",
    OperationStatus.CANCELLED: "yellow",
}


class CliRenderer:
    """Render processor results with Rich structures."""

    def __init__(self, *, console: Console) -> None:
        """Store console used for rendering.

        Args:
            console: Rich console used for output rendering.
        """
        self._console = console

    def render_outcome(self, outcome: ProcessingOutcome) -> None:
        """Render handler result for a completed operation.

        Args:
            outcome: Successful processing outcome.
        """
        self._console.print(
            Panel(
                JSON.from_data(outcome.result),
                title=f"EchoNexus [{outcome.envelope.command}]",
                subtitle=outcome.envelope.operation_id,
                border_style="green",
                expand=True,
            )
        )

    def render_error(self, exc: BaseException) -> None:
        """Render a fatal run error.

        Args:
            exc: Error that aborted the run.
        """
        code = exc.code.value if isinstance(exc, OperationError) else "unexpected"
        self._console.print(
            Panel(
                f"Error: {exc}",
                title=f"Error [{code}]",
                border_style="bold red",
                expand=True,
            )
        )
        if isinstance(exc, OperationError) and exc.data:
            self._console.print(
                Panel(
                    JSON.from_data(exc.data, default=str),
                    title="Data",
                    border_style="cyan",
                    expand=True,
                )
            )

    def render_sync(self, result: SyncResult) -> None:
        """Render state sync outcome as one status line.

        Args:
            result: Sync outcome.
        """
        style = "green" if result.ok else "yellow"
        self._console.print(
            f"[{style}]State sync: {result.status.value} - {result.message}[/{style}]"
        )

    def render_status(self, report: StatusReport) -> None:
        """Render terminal status report.

        Args:
            report: Status report payload.
        """
        table = Table(
            title="Processing Status Report",
            show_header=False,
            header_style="bold cyan",
        )
        table.add_column("Field", style="bold cyan", no_wrap=True)
        table.add_column("Value")
        table.add_row("Operation ID", report.operation_id)
        table.add_row("Command", report.command)
        style = _STATUS_STYLES[report.status]
        table.add_row("Status", f"[{style}]{report.status.value}[/{style}]")
        table.add_row("Completed", report.completed_at)
        table.add_row("Repository", report.processor_repo)
        self._console.print(table)

    def render_memory(self, entries: Mapping[str, Any]) -> None:
        """Render memory entries in table form.

        Args:
            entries: Raw memory mapping keyed by operation id.
        """
        table = Table(
            title=f"Processor Memory ({len(entries)} operations)",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Operation", style="green", no_wrap=True)
        table.add_column("Command", style="magenta")
        table.add_column("Timestamp")
        for operation_id in sorted(entries):
            entry = entries[operation_id]
            if not isinstance(entry, Mapping):
                table.add_row(operation_id, "?", "?")
                continue
            table.add_row(
                operation_id,
                str(entry.get("command", "")),
                str(entry.get("timestamp", "")),
            )
        self._console.print(table)

    def render_entry(self, operation_id: str, entry: object) -> None:
        """Render one raw memory entry as JSON.

        Args:
            operation_id: Operation id key.
            entry: Raw stored entry.
        """
        self._console.print(
            Panel(
                JSON.from_data(entry, default=str),
                title=operation_id,
                border_style="cyan",
                expand=True,
            )
        )
