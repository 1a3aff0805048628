"""Read/write backends for the processor memory document."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class StateBackend(Protocol):
    """Raw text storage for one memory document."""

    def read(self) -> str:
        """Return the stored document text.

        Raises:
            FileNotFoundError: If no document has been stored yet.
        """

    def write(self, text: str) -> None:
        """Replace the stored document text.

        Args:
            text: Full document text.
        """


class JsonFileStateBackend:
    """UTF-8 file backend with temp-file replace on write."""

    def __init__(self, path: Path) -> None:
        """Store target file location.

        Args:
            path: Memory document path.
        """
        self._path = path

    @property
    def path(self) -> Path:
        """Return memory document path."""
        return self._path

    def read(self) -> str:
        """Read document text from disk.

        Returns:
            Document text.
        """
        return self._path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        """Write document text, replacing any previous content.

        Args:
            text: Full document text.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_name(f"{self._path.name}.tmp")
        temp_path.write_text(text, encoding="utf-8")
        temp_path.replace(self._path)


class InMemoryStateBackend:
    """Process-local backend used by tests and dry runs."""

    def __init__(self, initial: str | None = None) -> None:
        """Create backend with optional pre-existing document.

        Args:
            initial: Initial document text, or ``None`` for an absent document.
        """
        self.text = initial
        self.writes = 0

    def read(self) -> str:
        """Return stored text.

        Returns:
            Document text.

        Raises:
            FileNotFoundError: If nothing has been stored.
        """
        if self.text is None:
            raise FileNotFoundError("in-memory state document is absent")
        return self.text

    def write(self, text: str) -> None:
        """Store text.

        Args:
            text: Full document text.
        """
        self.text = text
        self.writes += 1
