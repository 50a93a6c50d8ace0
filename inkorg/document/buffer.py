"""
Editable text buffer with a point, bounded forward search and match replacement.

Indirect buffers (views) share the text and the mutation bus of their base
buffer but keep their own point and overlays.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .mutation import TextMutation, TextMutationBus


class _TextStore:
    """Text shared between a base buffer and its indirect views."""

    def __init__(self, text: str):
        self.text = text
        self.bus = TextMutationBus()

    def replace(self, start: int, end: int, replacement: str) -> TextMutation:
        self.text = self.text[:start] + replacement + self.text[end:]
        return self.bus.publish(start, end, len(replacement))


@dataclass(frozen=True)
class Match:
    start: int
    end: int


class TextBuffer:
    """
    In-memory document buffer.

    Positions are character offsets in [0, len(text)].
    """

    def __init__(self, text: str = "", *, path: Optional[Path | str] = None, name: Optional[str] = None):
        self._store = _TextStore(text)
        self._base: Optional[TextBuffer] = None
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.name = name or (self.path.name if self.path else "*scratch*")
        self.point = 0
        self.overlays: List[Any] = []
        self._match: Optional[Match] = None

    # --- construction --------------------------------------------------
    @classmethod
    def from_file(cls, path: Path | str) -> TextBuffer:
        p = Path(path)
        return cls(p.read_text(encoding="utf-8"), path=p)

    def make_indirect(self, name: Optional[str] = None) -> TextBuffer:
        """Create a view sharing this buffer's text."""
        base = self.base_buffer
        view = TextBuffer.__new__(TextBuffer)
        view._store = base._store
        view._base = base
        view.path = base.path
        view.name = name or f"{base.name}<view>"
        view.point = self.point
        view.overlays = []
        view._match = None
        return view

    def copy(self) -> TextBuffer:
        """Independent copy: same text and file, fresh bus, no overlays."""
        dup = TextBuffer(self.text, path=self.path, name=f"{self.name}<copy>")
        dup.point = self.point
        return dup

    # --- properties ----------------------------------------------------
    @property
    def text(self) -> str:
        return self._store.text

    @property
    def bus(self) -> TextMutationBus:
        return self._store.bus

    @property
    def base_buffer(self) -> TextBuffer:
        return self._base if self._base is not None else self

    @property
    def is_indirect(self) -> bool:
        return self._base is not None

    @property
    def directory(self) -> Optional[Path]:
        return self.path.parent if self.path else None

    def __len__(self) -> int:
        return len(self._store.text)

    # --- movement and search -------------------------------------------
    def goto_char(self, pos: int) -> int:
        self.point = max(0, min(pos, len(self)))
        return self.point

    def search_forward(self, needle: str, bound: Optional[int] = None) -> Optional[Match]:
        """
        Search for `needle` from point; the match must end at or before `bound`.
        On success point moves to the end of the match and the match is
        remembered for replace_match(). Returns None when not found.
        """
        limit = len(self) if bound is None else min(bound, len(self))
        idx = self.text.find(needle, self.point, limit)
        if idx < 0:
            return None
        self._match = Match(idx, idx + len(needle))
        self.point = self._match.end
        return self._match

    @property
    def match_data(self) -> Optional[Match]:
        return self._match

    # --- editing -------------------------------------------------------
    def replace_match(self, replacement: str) -> Tuple[int, int]:
        """Replace the last search match; point ends after the replacement."""
        if self._match is None:
            raise RuntimeError("replace_match() called without a successful search")
        m = self._match
        self._match = None
        self.replace_region(m.start, m.end, replacement)
        return m.start, m.start + len(replacement)

    def replace_region(self, start: int, end: int, replacement: str) -> TextMutation:
        if not (0 <= start <= end <= len(self)):
            raise ValueError(f"Region [{start}, {end}) is outside the buffer (length {len(self)})")
        mutation = self._store.replace(start, end, replacement)
        self.point = start + len(replacement)
        return mutation

    def insert(self, text: str) -> TextMutation:
        """Insert at point, leaving point after the inserted text."""
        return self.replace_region(self.point, self.point, text)

    def delete_region(self, start: int, end: int) -> TextMutation:
        return self.replace_region(start, end, "")

    def save(self, path: Optional[Path | str] = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError(f"Buffer {self.name} has no file")
        target.write_text(self.text, encoding="utf-8")
        return target

    def __repr__(self) -> str:
        return f"TextBuffer(name={self.name!r}, length={len(self)}, point={self.point})"


__all__ = ["TextBuffer", "Match"]
