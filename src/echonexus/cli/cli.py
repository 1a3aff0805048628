"""Typer CLI entrypoint for the EchoNexus processor."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from echonexus.artifacts.writer import build_status_report, write_status_report
from echonexus.cli.rendering import CliRenderer
from echonexus.config import (
    ProcessorConfig,
    ProcessorConfigError,
    ResolvedPaths,
    dump_default_config,
    load_processor_config,
)
from echonexus.handlers.registry import CommandRegistry
from echonexus.operations.errors import OperationError, OperationErrorCode
from echonexus.operations.models import OperationEnvelope, OperationStatus
from echonexus.operations.trigger import (
    DEFAULT_RAW_INPUTS,
    envelope_from_dispatch,
    envelope_from_event,
    log_security_context,
)
from echonexus.operations.validator import new_operation_id
from echonexus.processor import OperationProcessor
from echonexus.state.backends import JsonFileStateBackend
from echonexus.state.store import MemoryStore
from echonexus.state.sync import GitStateSync

app = typer.Typer(help="EchoNexus operation processor CLI")
_CONSOLE = Console()
_RENDERER = CliRenderer(console=_CONSOLE)
_LOGGER = logging.getLogger(__name__)
_LOGGING_CONFIGURED = False
_LOG_FILE_NAME = "processor.log"
_DEFAULT_CONFIG_NAME = "echonexus.yaml"
_EXIT_FAILURE = 1
_EXIT_USAGE = 2

WorkspaceOption = Annotated[
    Path | None,
    typer.Option(
        file_okay=False,
        dir_okay=True,
        help="Workspace root holding state, artifacts, and logs.",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        file_okay=True,
        dir_okay=False,
        help="Path to processor config YAML/JSON file.",
    ),
]


def _configure_logging() -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    _LOGGING_CONFIGURED = True


@contextmanager
def _log_file(logs_dir: Path) -> Iterator[Path]:
    """Mirror package logs into ``<logs_dir>/processor.log`` for one run.

    Args:
        logs_dir: Directory receiving the log file.

    Yields:
        Log file path.
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / _LOG_FILE_NAME
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    package_logger = logging.getLogger("echonexus")
    previous_level = package_logger.level
    package_logger.setLevel(logging.INFO)
    package_logger.addHandler(handler)
    try:
        yield path
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
        handler.close()


def _raw_inputs(option_value: str | None) -> str:
    """Resolve raw inputs from the option, then the ``INPUTS`` variable.

    Typer ignores empty environment variables, so ``INPUTS=""`` is read here
    to keep it distinct from an unset variable.
    """
    if option_value is not None:
        return option_value
    return os.environ.get("INPUTS", DEFAULT_RAW_INPUTS)


def _load_config(workspace: Path, config_file: Path | None) -> ProcessorConfig:
    """Load processor config or exit with usage status.

    Args:
        workspace: Workspace root.
        config_file: Optional config path override.

    Returns:
        Loaded config.

    Raises:
        Exit: If config exists but is invalid.
    """
    effective = config_file or workspace / _DEFAULT_CONFIG_NAME
    try:
        return load_processor_config(effective)
    except ProcessorConfigError as exc:
        _CONSOLE.print(f"[bold red]Processor config at {effective} is invalid.[/]")
        _CONSOLE.print(f"[red]Reason: {exc}[/red]")
        raise typer.Exit(code=_EXIT_USAGE) from exc


def _read_event_envelope(
    event_file: Path,
    *,
    dispatch_only: bool,
) -> OperationEnvelope:
    """Decode an event or dispatch payload file into an envelope.

    Args:
        event_file: JSON file path.
        dispatch_only: Treat file as a bare ``client_payload`` object.

    Returns:
        Normalized envelope.

    Raises:
        OperationError: If the file content is not a usable payload.
    """
    try:
        payload = json.loads(event_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise OperationError(
            OperationErrorCode.INVALID_PAYLOAD,
            f"Cannot read event payload '{event_file}'.",
            data={"path": str(event_file), "reason": str(exc)},
        ) from exc
    if dispatch_only:
        return envelope_from_dispatch(payload)
    return envelope_from_event(payload)


def _execute_process(  # noqa: PLR0913
    *,
    envelope_source: OperationEnvelope | Path,
    dispatch_only: bool,
    workspace: Path,
    config: ProcessorConfig,
    sync: bool | None,
    processor_repo: str | None,
) -> int:
    """Process one operation and always write the status report.

    Args:
        envelope_source: Prepared envelope or event file to decode.
        dispatch_only: Whether an event file holds a bare dispatch payload.
        workspace: Workspace root.
        config: Processor config.
        sync: Explicit git sync override, ``None`` to follow config.
        processor_repo: Repository name reported in the status report.

    Returns:
        Process exit code.
    """
    paths = config.resolve(workspace)
    repo_name = processor_repo or config.processor_repo or "local"
    operation_id = ""
    command = ""
    status = OperationStatus.FAILURE
    exit_code = _EXIT_FAILURE
    with _log_file(paths.logs_dir):
        try:
            if isinstance(envelope_source, OperationEnvelope):
                envelope = envelope_source
            else:
                envelope = _read_event_envelope(
                    envelope_source, dispatch_only=dispatch_only
                )
            operation_id = envelope.operation_id
            command = envelope.command
            log_security_context(envelope)
            outcome = _build_processor(paths).process(envelope)
            _RENDERER.render_outcome(outcome)
            status = OperationStatus.SUCCESS
            exit_code = 0
            sync_enabled = config.sync.enabled if sync is None else sync
            if sync_enabled:
                _LOGGER.info("Committing updated processor memory...")
                result = GitStateSync(
                    workspace,
                    author_name=config.sync.author_name,
                    author_email=config.sync.author_email,
                ).commit_and_push(paths.state_file, outcome.envelope.operation_id)
                _RENDERER.render_sync(result)
        except KeyboardInterrupt:
            status = OperationStatus.CANCELLED
            raise
        except OperationError as exc:
            _LOGGER.error("Error: %s", exc)
            _RENDERER.render_error(exc)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.exception("Error: %s", exc)
            _RENDERER.render_error(exc)
        finally:
            report = build_status_report(
                operation_id=operation_id,
                command=command,
                status=status,
                processor_repo=repo_name,
            )
            write_status_report(paths.status_report_file, report)
            _RENDERER.render_status(report)
    return exit_code


def _build_processor(paths: ResolvedPaths) -> OperationProcessor:
    """Wire file-backed processor for resolved paths.

    Args:
        paths: Resolved workspace paths.

    Returns:
        Operation processor.
    """
    return OperationProcessor(
        store=MemoryStore(JsonFileStateBackend(paths.state_file)),
        registry=CommandRegistry(),
        artifacts_dir=paths.artifacts_dir,
    )


@app.command("process")
def process_command(  # noqa: PLR0913
    operation_id: Annotated[
        str,
        typer.Option(envvar="OPERATION_ID", help="Unique operation identifier."),
    ] = "",
    command: Annotated[
        str,
        typer.Option(envvar="COMMAND", help="Command to execute."),
    ] = "",
    inputs: Annotated[
        str | None,
        typer.Option(help="JSON input data. Falls back to the INPUTS variable."),
    ] = None,
    session_id: Annotated[
        str,
        typer.Option(envvar="SESSION_ID", help="Originating session identifier."),
    ] = "manual",
    event_file: Annotated[
        Path | None,
        typer.Option(
            file_okay=True,
            dir_okay=False,
            help="Workflow event JSON; overrides the individual field options.",
        ),
    ] = None,
    dispatch_payload: Annotated[
        bool,
        typer.Option(
            "--dispatch-payload",
            help="Treat --event-file as a bare repository-dispatch client payload.",
        ),
    ] = False,
    workspace: WorkspaceOption = None,
    config_file: ConfigOption = None,
    sync: Annotated[
        bool | None,
        typer.Option(
            "--sync/--no-sync",
            help="Commit and push memory after success (default from config).",
        ),
    ] = None,
    processor_repo: Annotated[
        str | None,
        typer.Option(envvar="GITHUB_REPOSITORY", help="Repository running this."),
    ] = None,
) -> None:
    """Process one operation and write memory, artifact, and status report.

    Args:
        operation_id: Operation identifier.
        command: Command name.
        inputs: Raw JSON inputs, or None to read ``INPUTS``; non-JSON text
            becomes ``{"text": ...}``.
        session_id: Session identifier.
        event_file: Optional workflow event document.
        dispatch_payload: Whether event file is a bare dispatch payload.
        workspace: Optional workspace root override.
        config_file: Optional processor config path override.
        sync: Optional git sync override.
        processor_repo: Repository name for the status report.

    Raises:
        Exit: Raised with processing exit code for shell integration.
    """
    _configure_logging()
    effective_workspace = workspace or Path.cwd()
    config = _load_config(effective_workspace, config_file)
    envelope_source: OperationEnvelope | Path
    if event_file is not None:
        envelope_source = event_file
    else:
        envelope_source = envelope_from_dispatch(
            {
                "operation_id": operation_id,
                "command": command,
                "inputs": _raw_inputs(inputs),
                "session_id": session_id,
            }
        )
    exit_code = _execute_process(
        envelope_source=envelope_source,
        dispatch_only=dispatch_payload,
        workspace=effective_workspace,
        config=config,
        sync=sync,
        processor_repo=processor_repo,
    )
    raise typer.Exit(code=exit_code)


@app.command("init")
def init_command(
    workspace: WorkspaceOption = None,
    config_file: ConfigOption = None,
    overwrite_config: Annotated[
        bool,
        typer.Option(
            "--overwrite-config",
            help="Overwrite existing config file with default template.",
        ),
    ] = False,
) -> None:
    """Create state, artifacts, and logs directories plus a default config.

    Args:
        workspace: Optional workspace root override.
        config_file: Optional config file path override.
        overwrite_config: Whether to overwrite existing config payload.
    """
    _configure_logging()
    effective_workspace = workspace or Path.cwd()
    effective_config_file = config_file or effective_workspace / _DEFAULT_CONFIG_NAME
    config = _load_config(effective_workspace, effective_config_file)
    paths = config.resolve(effective_workspace)
    targets = {
        "state_dir": paths.state_file.parent,
        "artifacts_dir": paths.artifacts_dir,
        "logs_dir": paths.logs_dir,
    }
    actions: list[tuple[str, str]] = []
    for name, path in targets.items():
        existed = path.exists()
        path.mkdir(parents=True, exist_ok=True)
        actions.append((name, "exists" if existed else "created"))
    config_existed = effective_config_file.exists()
    if not config_existed or overwrite_config:
        effective_config_file.parent.mkdir(parents=True, exist_ok=True)
        effective_config_file.write_text(dump_default_config(), encoding="utf-8")
        actions.append(
            (
                "config_file",
                "overwritten" if config_existed and overwrite_config else "created",
            )
        )
    else:
        actions.append(("config_file", "exists"))
    table = Table(title="EchoNexus Init", show_header=True, header_style="bold cyan")
    table.add_column("Resource", style="bold")
    table.add_column("Status", style="green")
    for resource, status in actions:
        table.add_row(resource, status)
    _CONSOLE.print(table)
    _CONSOLE.print(
        Panel(
            f"Workspace: {effective_workspace}\nConfig: {effective_config_file}",
            title="Initialized",
            border_style="green",
            expand=True,
        )
    )


@app.command("memory")
def memory_command(
    operation_id: Annotated[
        str | None,
        typer.Argument(help="Show the full entry for one operation id."),
    ] = None,
    workspace: WorkspaceOption = None,
    config_file: ConfigOption = None,
) -> None:
    """Show processor memory entries.

    Args:
        operation_id: Optional operation id to show in full.
        workspace: Optional workspace root override.
        config_file: Optional processor config path override.

    Raises:
        Exit: If the requested operation id is not in memory.
    """
    _configure_logging()
    effective_workspace = workspace or Path.cwd()
    config = _load_config(effective_workspace, config_file)
    paths = config.resolve(effective_workspace)
    store = MemoryStore(JsonFileStateBackend(paths.state_file))
    load = store.load()
    if load.reason:
        _CONSOLE.print(f"[yellow]Memory unreadable: {load.reason}[/yellow]")
    if operation_id is None:
        _RENDERER.render_memory(store.entries())
        return
    entry = store.get(operation_id)
    if entry is None:
        _CONSOLE.print(f"[bold red]Error: operation '{operation_id}' not found.[/]")
        raise typer.Exit(code=_EXIT_FAILURE)
    _RENDERER.render_entry(operation_id, entry)


@app.command("commands")
def commands_command() -> None:
    """List registered command handlers."""
    table = Table(title="Commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="bold")
    for name in CommandRegistry().registered_commands():
        table.add_row(name)
    _CONSOLE.print(table)
    _CONSOLE.print("Any other command falls back to the template echo handler.")


@app.command("new-id")
def new_id_command() -> None:
    """Print a freshly minted operation id."""
    typer.echo(new_operation_id())
