"""
Config discovery and loading.

The config is a YAML mapping in `inkorg.yaml`, looked up in the document
directory and its parents. INKORG_CONFIG names an explicit file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import InkscapeCfg
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "inkorg.yaml"
CONFIG_ENV = "INKORG_CONFIG"

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return the mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"YAML must be a mapping: {path}")
    return raw


def find_config(start: Optional[Path]) -> Optional[Path]:
    """
    Locate the config file for a document.

    Args:
        start: Document file or directory; None means the current directory

    Returns:
        Path to the config file or None when there is none
    """
    explicit = os.environ.get(CONFIG_ENV)
    if explicit:
        p = Path(explicit).expanduser()
        if not p.is_file():
            raise ConfigurationError(f"{CONFIG_ENV} points to a missing file: {p}")
        return p

    here = Path(start).resolve() if start is not None else Path.cwd()
    if here.is_file() or not here.exists():
        here = here.parent
    for folder in (here, *here.parents):
        candidate = folder / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config(doc_path: Optional[Path] = None) -> InkscapeCfg:
    """Config for the document at `doc_path`; defaults when no file is found."""
    path = find_config(doc_path)
    if path is None:
        logger.debug("No %s found, using defaults", CONFIG_FILE_NAME)
        return InkscapeCfg()
    logger.debug("Loading config from %s", path)
    return InkscapeCfg.from_dict(_read_yaml_map(path), base_dir=path.parent)


__all__ = ["load_config", "find_config", "CONFIG_FILE_NAME", "CONFIG_ENV"]
