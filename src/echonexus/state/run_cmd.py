"""Git subprocess launcher for memory state sync.

Every git call made by ``GitStateSync`` goes through ``run_subprocess`` with
an argument list and an environment trimmed to git credentials.
"""

from __future__ import annotations

import os
import subprocess  # nosec B404 - argv lists only, see run_subprocess
from collections.abc import Sequence
from pathlib import Path

# Exposed here so sync code can catch and annotate them.
TimeoutExpired = subprocess.TimeoutExpired
CompletedProcess = subprocess.CompletedProcess

_PASSTHROUGH_PREFIXES = ("GIT_", "SSH_", "GH_", "GITHUB_")
_PASSTHROUGH_KEYS = ("PATH", "HOME", "LANG", "USER")


def git_env() -> dict[str, str]:
    """Return the variables git needs to commit and push from CI.

    Only ``PATH``, ``HOME``, ``LANG``, ``USER`` and the ``GIT_``, ``SSH_``,
    ``GH_`` and ``GITHUB_`` families are kept; API keys such as
    ``OPENAI_API_KEY`` are not passed to git.
    """
    return {
        key: value
        for key, value in os.environ.items()
        if key in _PASSTHROUGH_KEYS or key.startswith(_PASSTHROUGH_PREFIXES)
    }


def run_subprocess(
    argv: Sequence[str],
    *,
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run one git step and capture its text output.

    A non-zero exit is returned, not raised; ``GitStateSync`` maps it to a
    sync status.

    Args:
        argv: Program and arguments, for example ``["git", "push"]``.
        cwd: Repository checkout holding the state file.
        env: Environment override; ``git_env()`` when omitted.
        timeout: Seconds before ``TimeoutExpired`` is raised.

    Returns:
        Finished process with decoded stdout and stderr.
    """
    return subprocess.run(  # noqa: PLW1510  # nosec B603 - argv list, shell=False
        list(argv),
        cwd=str(cwd) if cwd is not None else None,
        env=env or git_env(),
        capture_output=True,
        text=True,
        timeout=timeout,
        shell=False,
    )
