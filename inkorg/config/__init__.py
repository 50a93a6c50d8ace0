from .filenames import generate_filename, load_generator, FilenameGenerator
from .load import load_config, find_config, CONFIG_FILE_NAME
from .model import InkscapeCfg, bundled_template

__all__ = [
    "InkscapeCfg",
    "bundled_template",
    "load_config",
    "find_config",
    "CONFIG_FILE_NAME",
    "generate_filename",
    "load_generator",
    "FilenameGenerator",
]
