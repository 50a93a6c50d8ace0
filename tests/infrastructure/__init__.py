"""
Shared test infrastructure for inkorg.

Modules:
- file_utils: Utilities for creating files and directories
- testing_utils: Fake launcher, recording buffer and other doubles
- generators: Filename generators referenced from config tests
"""

from .file_utils import write, write_svg, SVG
from .testing_utils import FakeLaunch, FakeLauncher, RecordingBuffer, FailingLoader

__all__ = [
    "write",
    "write_svg",
    "SVG",
    "FakeLaunch",
    "FakeLauncher",
    "RecordingBuffer",
    "FailingLoader",
]
