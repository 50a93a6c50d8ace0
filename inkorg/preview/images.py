from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class ImageHandle:
    """Image data ready to be displayed."""
    path: Path
    data: bytes = field(repr=False)
    mime_type: str = "image/svg+xml"


class ImageLoader(Protocol):
    def load(self, path: Path) -> ImageHandle:
        ...


class FileImageLoader:
    """Reads the image file as is; decoding is left to the display layer."""

    def load(self, path: Path) -> ImageHandle:
        mime, _ = mimetypes.guess_type(str(path))
        return ImageHandle(path=Path(path), data=Path(path).read_bytes(), mime_type=mime or "application/octet-stream")


__all__ = ["ImageHandle", "ImageLoader", "FileImageLoader"]
