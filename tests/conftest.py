"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from echonexus.state import InMemoryStateBackend, MemoryStore

VALID_OPERATION_ID = "echo-1699999999-abc0123456789def"


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Temporary workspace root; state, artifacts, and logs are created under it."""
    return tmp_path


@pytest.fixture
def operation_id() -> str:
    """Well-formed operation id."""
    return VALID_OPERATION_ID


@pytest.fixture
def memory_backend() -> InMemoryStateBackend:
    """Absent in-memory memory document."""
    return InMemoryStateBackend()


@pytest.fixture
def memory_store(memory_backend: InMemoryStateBackend) -> MemoryStore:
    """Memory store over the in-memory backend."""
    return MemoryStore(memory_backend)
