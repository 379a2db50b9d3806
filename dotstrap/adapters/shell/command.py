"""
Shell adapter — probe the PATH and run shell commands.

Two flavours of execution:
    - ``run_command``: capture stdout (probes such as git config).
    - ``run_interactive``: inherit the terminal (package installs,
      installer steps) so prompts and progress bars reach the user.

Both raise ``ShellError`` on a non-zero exit or an OS error.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from dotstrap.core.errors import ShellError

logger = logging.getLogger(__name__)


def command_exists(name: str) -> bool:
    """Whether an executable called ``name`` is on the search path."""
    return shutil.which(name) is not None


def run_command(
    command: str,
    cwd: Path | None = None,
    timeout: float | None = None,
) -> str:
    """Run ``command`` through ``sh -c`` and return its stdout.

    Args:
        command: Shell command line.
        cwd: Working directory (default: current).
        timeout: Seconds before the command is killed (default: none).

    Raises:
        ShellError: On non-zero exit, timeout, or when sh cannot start.
    """
    logger.debug("Executing: %s (cwd=%s)", command, cwd)
    try:
        result = subprocess.run(
            ["sh", "-c", command],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise ShellError(command, f"timed out after {timeout}s") from e
    except OSError as e:
        raise ShellError(command, str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise ShellError(
            command,
            stderr or f"exited with code {result.returncode}",
            returncode=result.returncode,
        )
    return result.stdout


def run_interactive(command: str, cwd: Path | None = None) -> None:
    """Run ``command`` attached to the current terminal.

    Raises:
        ShellError: On non-zero exit or when sh cannot start.
    """
    logger.info("Running: %s", command)
    try:
        result = subprocess.run(
            ["sh", "-c", command],
            cwd=str(cwd) if cwd else None,
        )
    except OSError as e:
        raise ShellError(command, str(e)) from e

    if result.returncode != 0:
        raise ShellError(
            command,
            f"exited with code {result.returncode}",
            returncode=result.returncode,
        )
