from __future__ import annotations

import importlib
import uuid
from pathlib import Path
from typing import Callable, Optional

from ..errors import ConfigurationError

FilenameGenerator = Callable[[Optional[Path]], Path]

IMAGE_EXTENSION = ".svg"
DEFAULT_IMAGE_DIRECTORY = ".inkscape"


def generate_filename(doc_path: Optional[Path], *, directory: str = DEFAULT_IMAGE_DIRECTORY) -> Path:
    """
    Fresh absolute path for a new drawing: <doc-dir>/<directory>/<uuid>.svg.
    Without a document file the current directory stands in for <doc-dir>.
    """
    base = Path(doc_path).resolve().parent if doc_path else Path.cwd()
    folder = Path(directory).expanduser()
    if not folder.is_absolute():
        folder = base / folder
    return folder / f"{uuid.uuid4().hex}{IMAGE_EXTENSION}"


def load_generator(spec: str) -> FilenameGenerator:
    """Resolve a "package.module:function" reference."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"filename_generator must look like 'module:function', got {spec!r}")
    try:
        mod = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import filename generator module '{module_name}': {e}") from e
    fn = getattr(mod, attr, None)
    if fn is None:
        raise ConfigurationError(f"Filename generator '{attr}' not found in {module_name}")
    if not callable(fn):
        raise ConfigurationError(f"{module_name}.{attr} is not callable")
    return fn


__all__ = ["FilenameGenerator", "generate_filename", "load_generator", "IMAGE_EXTENSION", "DEFAULT_IMAGE_DIRECTORY"]
