"""Processor config models and loading helpers."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from echonexus.state.sync import DEFAULT_AUTHOR_EMAIL, DEFAULT_AUTHOR_NAME


class SyncSettings(BaseModel):
    """Git commit/push of the memory document after a successful run."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    author_name: str = Field(default=DEFAULT_AUTHOR_NAME, min_length=1)
    author_email: str = Field(default=DEFAULT_AUTHOR_EMAIL, min_length=1)


class ProcessorConfig(BaseModel):
    """Root processor configuration model."""

    model_config = ConfigDict(extra="forbid")

    state_file: str = "state/processor_memory.json"
    artifacts_dir: str = "artifacts"
    logs_dir: str = "logs"
    status_report_file: str = "status_report.json"
    processor_repo: str | None = None
    sync: SyncSettings = SyncSettings()

    def resolve(self, root: Path) -> ResolvedPaths:
        """Resolve configured relative paths against a workspace root.

        Args:
            root: Workspace root directory.

        Returns:
            Absolute-or-root-relative output paths.
        """
        return ResolvedPaths(
            state_file=root / self.state_file,
            artifacts_dir=root / self.artifacts_dir,
            logs_dir=root / self.logs_dir,
            status_report_file=root / self.status_report_file,
        )


class ResolvedPaths(BaseModel):
    """Concrete filesystem locations derived from config."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    state_file: Path
    artifacts_dir: Path
    logs_dir: Path
    status_report_file: Path


class ProcessorConfigError(RuntimeError):
    """Raised when processor config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        ProcessorConfigError: If decode fails or payload is not an object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProcessorConfigError(f"Unreadable processor config: {exc}") from exc
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ProcessorConfigError(f"Invalid processor config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ProcessorConfigError(f"Invalid processor config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ProcessorConfigError(
            "Invalid processor config payload: root must be an object"
        )
    return payload


def load_processor_config(path: Path) -> ProcessorConfig:
    """Load processor config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config payload, or defaults when file does not exist.

    Raises:
        ProcessorConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return ProcessorConfig()
    payload = _decode_config_payload(path)
    try:
        return ProcessorConfig.model_validate(payload)
    except ValidationError as exc:
        raise ProcessorConfigError(f"Invalid processor config payload: {exc}") from exc


def dump_default_config() -> str:
    """Render default config as YAML text."""
    payload = ProcessorConfig().model_dump(mode="json")
    return yaml.safe_dump(payload, sort_keys=False)
