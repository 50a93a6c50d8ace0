from __future__ import annotations

import string
from dataclasses import dataclass, field
from functools import partial
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set

from .filenames import DEFAULT_IMAGE_DIRECTORY, FilenameGenerator, generate_filename, load_generator
from ..errors import ConfigurationError

DEFAULT_CREATE_COMMAND = "cp {template} {target} && inkscape {target}"
DEFAULT_OPEN_COMMAND = "inkscape {target}"

_KEYS = (
    "ask_for_file_name",
    "use_absolute_paths",
    "image_directory",
    "template_path",
    "create_command",
    "open_command",
    "filename_generator",
)


# --- helpers ---------------------------------------------------------------
def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise ConfigurationError(f"{ctx}: unknown key(s): {', '.join(sorted(extra))}")


def _placeholders(template: str, *, ctx: str) -> Set[str]:
    try:
        return {name for _, name, _, _ in string.Formatter().parse(template) if name is not None}
    except ValueError as e:
        raise ConfigurationError(f"{ctx}: malformed command template {template!r}: {e}") from e


def _check_command(template: Any, *, allowed: Set[str], ctx: str) -> str:
    if not isinstance(template, str) or not template.strip():
        raise ConfigurationError(f"{ctx} must be a non-empty string")
    names = _placeholders(template, ctx=ctx)
    unknown = names - allowed
    if unknown:
        raise ConfigurationError(f"{ctx}: unknown placeholder(s): {', '.join(sorted(unknown))}")
    if "target" not in names:
        raise ConfigurationError(f"{ctx} must reference {{target}}")
    return template


def _bool(d: Dict[str, Any], key: str, default: bool) -> bool:
    val = d.get(key, default)
    if not isinstance(val, bool):
        raise ConfigurationError(f"InkscapeCfg.{key} must be a boolean, got {type(val).__name__}")
    return val


def bundled_template() -> Path:
    """SVG template shipped with the package."""
    return Path(str(resources.files("inkorg.templates") / "default.svg"))


@dataclass
class InkscapeCfg:
    """
    Settings of the drawing links.
    """
    ask_for_file_name: bool = False
    use_absolute_paths: bool = False
    image_directory: str = DEFAULT_IMAGE_DIRECTORY
    # None → bundled template
    template_path: Optional[str] = None
    create_command: str = DEFAULT_CREATE_COMMAND
    open_command: str = DEFAULT_OPEN_COMMAND
    # "module:function"; None → generate_filename
    filename_generator: Optional[str] = None
    # directory of the config file; relative template paths resolve against it
    base_dir: Optional[Path] = field(default=None, compare=False)

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]], *, base_dir: Optional[Path] = None) -> InkscapeCfg:
        if not d:
            return InkscapeCfg(base_dir=base_dir)
        if not isinstance(d, dict):
            raise ConfigurationError("InkscapeCfg must be a mapping")
        _assert_only_keys(d, _KEYS, ctx="InkscapeCfg")

        image_directory = d.get("image_directory", DEFAULT_IMAGE_DIRECTORY)
        if not isinstance(image_directory, str) or not image_directory.strip():
            raise ConfigurationError("InkscapeCfg.image_directory must be a non-empty string")
        template_path = d.get("template_path")
        if template_path is not None and not isinstance(template_path, str):
            raise ConfigurationError("InkscapeCfg.template_path must be a string")
        generator = d.get("filename_generator")
        if generator is not None and not isinstance(generator, str):
            raise ConfigurationError("InkscapeCfg.filename_generator must be a 'module:function' string")

        cfg = InkscapeCfg(
            ask_for_file_name=_bool(d, "ask_for_file_name", False),
            use_absolute_paths=_bool(d, "use_absolute_paths", False),
            image_directory=image_directory,
            template_path=template_path,
            create_command=_check_command(
                d.get("create_command", DEFAULT_CREATE_COMMAND),
                allowed={"template", "target"},
                ctx="InkscapeCfg.create_command",
            ),
            open_command=_check_command(
                d.get("open_command", DEFAULT_OPEN_COMMAND),
                allowed={"target"},
                ctx="InkscapeCfg.open_command",
            ),
            filename_generator=generator,
            base_dir=base_dir,
        )
        if generator is not None:
            # fail at load time rather than on first insertion
            load_generator(generator)
        return cfg

    # --- derived values ------------------------------------------------
    def template(self) -> Path:
        if not self.template_path:
            return bundled_template()
        p = Path(self.template_path).expanduser()
        if not p.is_absolute() and self.base_dir is not None:
            p = self.base_dir / p
        return p.resolve()

    def generator(self) -> FilenameGenerator:
        if self.filename_generator:
            return load_generator(self.filename_generator)
        return partial(generate_filename, directory=self.image_directory)

    def create_command_for(self, template: str, target: str) -> str:
        return self.create_command.format(template=template, target=target)

    def open_command_for(self, target: str) -> str:
        return self.open_command.format(target=target)


__all__ = ["InkscapeCfg", "bundled_template", "DEFAULT_CREATE_COMMAND", "DEFAULT_OPEN_COMMAND"]
