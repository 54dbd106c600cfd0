"""Synchronous external command execution.

Runs one shell command at a time.  By default the child inherits the parent's
standard streams so ``npx``/``npm`` output shows up live; with
``capture=True`` output is collected instead and attached to the result.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a successful command."""

    command: str
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class CommandFailed(Exception):
    """Raised when an external command exits non-zero or cannot be spawned."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class CommandRunner:
    """Runs shell commands and raises :class:`CommandFailed` on failure."""

    def run(
        self,
        command: str,
        cwd: str | Path | None = None,
        capture: bool = False,
    ) -> CommandResult:
        """Run *command* through the shell and wait for it to exit.

        Args:
            command: Shell command string.
            cwd: Working directory for the child process.
            capture: Collect stdout/stderr instead of streaming them.

        Returns:
            A :class:`CommandResult` for a zero exit status.

        Raises:
            CommandFailed: On a non-zero exit or if the process cannot start.
        """
        logger.debug("Running %r (cwd=%s)", command, cwd or ".")
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=str(cwd) if cwd else None,
                capture_output=capture,
                text=capture,
                check=False,
            )
        except OSError as exc:
            raise CommandFailed(
                f"Could not start command: {exc}",
                command=command,
            ) from exc

        stdout = (completed.stdout or "") if capture else ""
        stderr = (completed.stderr or "") if capture else ""

        if completed.returncode != 0:
            logger.debug("Command %r exited with %d", command, completed.returncode)
            raise CommandFailed(
                f"Command exited with status {completed.returncode}",
                command=command,
                returncode=completed.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return CommandResult(command=command, stdout=stdout, stderr=stderr)
