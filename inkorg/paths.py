from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .document.buffer import TextBuffer


def resolve_link_path(path: str, buffer: Optional[TextBuffer] = None) -> Path:
    """
    Absolute path of a link target. Relative targets are taken relative to
    the buffer's file directory, or to the current directory for buffers
    without a file.
    """
    p = Path(path).expanduser()
    if not p.is_absolute():
        base = buffer.directory if buffer is not None and buffer.directory is not None else Path.cwd()
        p = base / p
    return Path(os.path.normpath(p))


def link_text_path(target: Path, doc_dir: Optional[Path], *, absolute: bool) -> str:
    """How a drawing path is written into the document (POSIX separators)."""
    target = Path(target).resolve()
    if absolute or doc_dir is None:
        return target.as_posix()
    return Path(os.path.relpath(target, Path(doc_dir).resolve())).as_posix()


__all__ = ["resolve_link_path", "link_text_path"]
