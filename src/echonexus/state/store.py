"""Processor memory store keyed by operation id."""

from __future__ import annotations

import json
from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from echonexus.operations.models import MemoryEntry
from echonexus.state.backends import StateBackend


class StateLoadStatus(StrEnum):
    """Outcome of reading the memory document."""

    LOADED = "loaded"
    MISSING = "missing"
    UNREADABLE = "unreadable"


class StateLoadResult(BaseModel):
    """Load outcome surfaced to the caller instead of being swallowed."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    status: StateLoadStatus
    entry_count: int = 0
    reason: str | None = None

    @property
    def ok(self) -> bool:
        """Return whether an existing document was decoded."""
        return self.status == StateLoadStatus.LOADED


class MemoryStore:
    """Whole-document read-modify-write store over an injected backend.

    Entries already present in the document are kept verbatim; only the
    recorded operation id is replaced. There is no locking: concurrent
    writers race and the last save wins.
    """

    def __init__(self, backend: StateBackend) -> None:
        """Create store over backend.

        Args:
            backend: Raw document backend.
        """
        self._backend = backend
        self._entries: dict[str, Any] = {}

    def load(self) -> StateLoadResult:
        """Read the full document into memory.

        An absent or unreadable document leaves the store empty.

        Returns:
            Load outcome with failure reason when applicable.
        """
        self._entries = {}
        try:
            raw = self._backend.read()
        except FileNotFoundError:
            return StateLoadResult(status=StateLoadStatus.MISSING)
        except (OSError, UnicodeDecodeError) as exc:
            return StateLoadResult(status=StateLoadStatus.UNREADABLE, reason=str(exc))
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            return StateLoadResult(
                status=StateLoadStatus.UNREADABLE,
                reason=f"Invalid memory JSON: {exc}",
            )
        if not isinstance(payload, dict):
            return StateLoadResult(
                status=StateLoadStatus.UNREADABLE,
                reason="Invalid memory payload: root must be an object",
            )
        self._entries = payload
        return StateLoadResult(status=StateLoadStatus.LOADED, entry_count=len(payload))

    def record(self, operation_id: str, entry: MemoryEntry) -> None:
        """Insert or overwrite one entry in memory.

        Args:
            operation_id: Operation id key.
            entry: Entry to store.
        """
        self._entries[operation_id] = entry.model_dump(mode="json")

    def get(self, operation_id: str) -> dict[str, Any] | None:
        """Return raw entry for operation id, if present."""
        return self._entries.get(operation_id)

    def entries(self) -> dict[str, Any]:
        """Return a shallow copy of all entries."""
        return dict(self._entries)

    def save(self) -> None:
        """Rewrite the full document, pretty-printed with 2-space indent."""
        self._backend.write(json.dumps(self._entries, indent=2))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, operation_id: object) -> bool:
        return operation_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
