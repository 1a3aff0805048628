"""Unit tests for processor config loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from echonexus.config import (
    ProcessorConfig,
    ProcessorConfigError,
    dump_default_config,
    load_processor_config,
)


@pytest.mark.unit
def test_load_processor_config_defaults_when_missing(tmp_path: Path) -> None:
    """Missing config file should yield deterministic defaults."""
    config = load_processor_config(tmp_path / "missing.yaml")

    assert config.state_file == "state/processor_memory.json"
    assert config.artifacts_dir == "artifacts"
    assert config.logs_dir == "logs"
    assert config.status_report_file == "status_report.json"
    assert config.processor_repo is None
    assert config.sync.enabled is False
    assert config.sync.author_name == "EchoNexus Processor"
    assert config.sync.author_email == "action@github.com"


@pytest.mark.unit
def test_load_processor_config_reads_yaml_overrides(tmp_path: Path) -> None:
    """YAML config overrides paths and sync settings."""
    config_path = tmp_path / "echonexus.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "state_file": "data/memory.json",
                "processor_repo": "acme/processor",
                "sync": {"enabled": True, "author_name": "Bot"},
            }
        ),
        encoding="utf-8",
    )

    config = load_processor_config(config_path)

    assert config.state_file == "data/memory.json"
    assert config.processor_repo == "acme/processor"
    assert config.sync.enabled is True
    assert config.sync.author_name == "Bot"
    assert config.sync.author_email == "action@github.com"


@pytest.mark.unit
def test_load_processor_config_reads_json(tmp_path: Path) -> None:
    """JSON suffix is decoded as JSON."""
    config_path = tmp_path / "config.json"
    config_path.write_text('{"artifacts_dir": "out"}', encoding="utf-8")

    assert load_processor_config(config_path).artifacts_dir == "out"


@pytest.mark.unit
def test_load_processor_config_empty_file_is_defaults(tmp_path: Path) -> None:
    """An empty YAML document is treated as an empty mapping."""
    config_path = tmp_path / "echonexus.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_processor_config(config_path) == ProcessorConfig()


@pytest.mark.unit
@pytest.mark.parametrize(
    ("name", "content", "fragment"),
    [
        ("config.json", "{not-json", "Invalid processor config JSON"),
        ("config.yaml", "a: [unclosed", "Invalid processor config YAML"),
        ("config.yaml", "- just\n- a list\n", "root must be an object"),
        ("config.yaml", "unknown_key: 1\n", "Invalid processor config payload"),
    ],
)
def test_load_processor_config_rejects_invalid_payloads(
    tmp_path: Path, name: str, content: str, fragment: str
) -> None:
    """Invalid config raises a deterministic config error."""
    config_path = tmp_path / name
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ProcessorConfigError) as exc_info:
        load_processor_config(config_path)

    assert fragment in str(exc_info.value)


@pytest.mark.unit
def test_resolve_joins_paths_to_workspace(tmp_path: Path) -> None:
    """Relative config paths resolve under the workspace root."""
    paths = ProcessorConfig().resolve(tmp_path)

    assert paths.state_file == tmp_path / "state" / "processor_memory.json"
    assert paths.artifacts_dir == tmp_path / "artifacts"
    assert paths.logs_dir == tmp_path / "logs"
    assert paths.status_report_file == tmp_path / "status_report.json"


@pytest.mark.unit
def test_dump_default_config_round_trips(tmp_path: Path) -> None:
    """The init template loads back to defaults."""
    config_path = tmp_path / "echonexus.yaml"
    config_path.write_text(dump_default_config(), encoding="utf-8")

    assert load_processor_config(config_path) == ProcessorConfig()
