from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

# ---- Link schemes ----
INKSCAPE_SCHEME = "inkscape"
FILE_SCHEME = "file"
# Tag under which the action menu exposes drawing links
INKSCAPE_LINK_TAG = "inkscape-link"


@dataclass(frozen=True)
class LinkOccurrence:
    """
    One recognised link in the buffer text at parse time.

    Offsets are character positions, `end` is exclusive. The snapshot is
    stale as soon as the buffer is edited.
    """
    scheme: str
    path: str
    begin: int
    end: int
    description: Optional[str] = None
    bracketed: bool = False

    def shifted(self, delta: int) -> LinkOccurrence:
        if not delta:
            return self
        return LinkOccurrence(
            scheme=self.scheme,
            path=self.path,
            begin=self.begin + delta,
            end=self.end + delta,
            description=self.description,
            bracketed=self.bracketed,
        )


class ActionTarget(NamedTuple):
    """Thing at point as seen by the action menu."""
    tag: str
    value: str


__all__ = ["INKSCAPE_SCHEME", "FILE_SCHEME", "INKSCAPE_LINK_TAG", "LinkOccurrence", "ActionTarget"]
