"""Processor memory persistence surface."""

from echonexus.state.backends import (
    InMemoryStateBackend,
    JsonFileStateBackend,
    StateBackend,
)
from echonexus.state.store import MemoryStore, StateLoadResult, StateLoadStatus
from echonexus.state.sync import GitStateSync, SyncResult, SyncStatus

__all__ = [
    "GitStateSync",
    "InMemoryStateBackend",
    "JsonFileStateBackend",
    "MemoryStore",
    "StateBackend",
    "StateLoadResult",
    "StateLoadStatus",
    "SyncResult",
    "SyncStatus",
]
