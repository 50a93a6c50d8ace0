"""
Opening drawings in the external editor, creating them from the template
when they do not exist yet.
"""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from .config.model import InkscapeCfg
from .process.launcher import Launch, ProcessLauncher

logger = logging.getLogger(__name__)


def open_or_create(path: Path | str, cfg: InkscapeCfg, launcher: ProcessLauncher) -> Launch:
    """
    Open `path` in the external editor, creating it first if missing.

    Commands run in the drawing's directory and receive the bare file name.
    The returned launch is not awaited; two calls for the same missing file
    spawn two create commands.
    """
    target = Path(path).expanduser().resolve()
    workdir = target.parent
    if not target.exists():
        workdir.mkdir(parents=True, exist_ok=True)
        command = cfg.create_command_for(
            template=shlex.quote(str(cfg.template())),
            target=shlex.quote(target.name),
        )
        logger.debug("Creating drawing %s", target)
    else:
        command = cfg.open_command_for(target=shlex.quote(target.name))
        logger.debug("Opening drawing %s", target)
    return launcher.launch(command, cwd=workdir)


__all__ = ["open_or_create"]
