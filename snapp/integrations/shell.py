"""External command execution for SNAPP.

CommandRunner is the single seam through which git and npm are invoked,
so tests can swap in a recording fake instead of running real binaries.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from snapp.utils.logging import log_command

logger = logging.getLogger(__name__)

# Conventional shell status for "command not found"
COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Run external commands to completion, one at a time.

    No timeout is applied: a hanging command blocks until it exits.
    """

    def which(self, name: str) -> str | None:
        """Return the full path of an executable on PATH, or None."""
        return shutil.which(name)

    def run(
        self,
        argv: Sequence[str],
        cwd: str | Path | None = None,
        *,
        discard_output: bool = False,
    ) -> int:
        """Run one command and return its exit status.

        Args:
            argv: Command and arguments
            cwd: Working directory for the command (caller's cwd is untouched)
            discard_output: Send stdout/stderr to the null device instead of
                capturing them for the log

        Returns:
            The process exit status; COMMAND_NOT_FOUND if it could not start
        """
        command = shlex.join(argv)
        try:
            if discard_output:
                result = subprocess.run(
                    list(argv),
                    cwd=cwd,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
            else:
                result = subprocess.run(
                    list(argv),
                    cwd=cwd,
                    stdin=subprocess.DEVNULL,
                    capture_output=True,
                    text=True,
                )
        except OSError as e:
            logger.warning("Failed to start '%s': %s", command, e)
            log_command(command, COMMAND_NOT_FOUND, logger)
            return COMMAND_NOT_FOUND

        log_command(command, result.returncode, logger)
        if result.returncode != 0 and not discard_output and result.stderr:
            logger.info("%s", result.stderr.strip())
        return result.returncode


__all__ = [
    "COMMAND_NOT_FOUND",
    "CommandRunner",
]
