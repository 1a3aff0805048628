"""Best-effort commit and push of the memory document."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from echonexus.state.run_cmd import CompletedProcess, TimeoutExpired, run_subprocess

_LOGGER = logging.getLogger(__name__)

DEFAULT_AUTHOR_NAME = "EchoNexus Processor"
DEFAULT_AUTHOR_EMAIL = "action@github.com"
_GIT_TIMEOUT_SECONDS = 120.0


class SyncStatus(StrEnum):
    """Outcome of one state sync attempt."""

    PUSHED = "pushed"
    NO_CHANGES = "no_changes"
    PUSH_FAILED = "push_failed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SyncResult:
    """State sync outcome; git failures never raise."""

    status: SyncStatus
    message: str

    @property
    def ok(self) -> bool:
        """Return whether the state reached the remote or was already there."""
        return self.status in {SyncStatus.PUSHED, SyncStatus.NO_CHANGES}


class _GitStepError(RuntimeError):
    """Raised internally when one git step exits non-zero."""

    def __init__(self, step: str, detail: str) -> None:
        super().__init__(f"git {step} failed: {detail}")
        self.step = step


class GitStateSync:
    """Commit the memory document and push it to the tracking remote."""

    def __init__(
        self,
        repo_dir: Path,
        *,
        author_name: str = DEFAULT_AUTHOR_NAME,
        author_email: str = DEFAULT_AUTHOR_EMAIL,
    ) -> None:
        """Store repository location and commit identity.

        Args:
            repo_dir: Git working tree root.
            author_name: Local ``user.name`` for the commit.
            author_email: Local ``user.email`` for the commit.
        """
        self._repo_dir = repo_dir
        self._author_name = author_name
        self._author_email = author_email

    def commit_and_push(self, state_file: Path, operation_id: str) -> SyncResult:
        """Commit updated memory and push.

        Args:
            state_file: Memory document path.
            operation_id: Operation id used in the commit message.

        Returns:
            Sync outcome.
        """
        if not state_file.exists():
            return SyncResult(SyncStatus.SKIPPED, f"{state_file} does not exist")
        try:
            self._git("config", "--local", "user.email", self._author_email)
            self._git("config", "--local", "user.name", self._author_name)
            self._git("add", str(state_file.resolve()))
            if self._nothing_staged():
                _LOGGER.info("No changes to commit")
                return SyncResult(SyncStatus.NO_CHANGES, "No changes to commit")
            self._git(
                "commit",
                "-m",
                f"Update processor memory for operation {operation_id}",
            )
        except _GitStepError as exc:
            _LOGGER.warning("State commit failed: %s", exc)
            return SyncResult(SyncStatus.FAILED, str(exc))
        try:
            self._git("push")
        except _GitStepError as exc:
            _LOGGER.warning("Push failed - continuing: %s", exc)
            return SyncResult(SyncStatus.PUSH_FAILED, str(exc))
        return SyncResult(SyncStatus.PUSHED, "Processor memory pushed")

    def _nothing_staged(self) -> bool:
        return self._run("diff", "--cached", "--quiet").returncode == 0

    def _git(self, *args: str) -> str:
        result = self._run(*args)
        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise _GitStepError(args[0], detail or f"exit code {result.returncode}")
        return result.stdout

    def _run(self, *args: str) -> CompletedProcess[str]:
        try:
            return run_subprocess(
                ["git", *args],
                cwd=self._repo_dir,
                timeout=_GIT_TIMEOUT_SECONDS,
            )
        except FileNotFoundError as exc:
            raise _GitStepError(args[0], "git executable not found") from exc
        except TimeoutExpired as exc:
            raise _GitStepError(args[0], "timed out") from exc
