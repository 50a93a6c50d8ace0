"""
Launching the external image editor.

Launches are fire-and-forget: callers get a Launch back and usually drop
it. The launch exposes the exit status for whoever wants to wait.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExitStatus:
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class Launch(Protocol):
    """Handle of a started process."""
    command: str
    cwd: Path

    def poll(self) -> Optional[ExitStatus]:
        """Exit status if the process has finished, else None."""
        ...

    def wait(self, timeout: Optional[float] = None) -> ExitStatus:
        ...


class ProcessLauncher(Protocol):
    def launch(self, command: str, *, cwd: Path) -> Launch:
        ...


class ShellLaunch:
    """Launch backed by a subprocess.Popen."""

    def __init__(self, command: str, cwd: Path, proc: subprocess.Popen):
        self.command = command
        self.cwd = cwd
        self._proc = proc

    @property
    def pid(self) -> int:
        return self._proc.pid

    def poll(self) -> Optional[ExitStatus]:
        rc = self._proc.poll()
        return None if rc is None else ExitStatus(rc)

    def wait(self, timeout: Optional[float] = None) -> ExitStatus:
        return ExitStatus(self._proc.wait(timeout=timeout))


class ShellProcessLauncher:
    """
    Runs commands through the platform shell in a new session.

    Output is not captured: it goes to the terminal the command was started
    from, which is the only place a failing editor reports anything.
    """

    def launch(self, command: str, *, cwd: Path) -> ShellLaunch:
        logger.info("Launching: %s (in %s)", command, cwd)
        proc = subprocess.Popen(
            command,
            shell=True,
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            start_new_session=True,
        )
        return ShellLaunch(command, Path(cwd), proc)


__all__ = ["ExitStatus", "Launch", "ProcessLauncher", "ShellLaunch", "ShellProcessLauncher"]
