"""
"Act on the thing at point" menu: target finders classify what is under
the point, action tables map the target's tag to named actions.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .document.buffer import TextBuffer
from .document.tree import FORMATTING_TYPES, Element, element_at
from .errors import LinkError
from .types import ActionTarget

logger = logging.getLogger(__name__)

TargetFinder = Callable[[TextBuffer, Optional[int]], Optional[ActionTarget]]
Action = Callable[[str], Any]


def enclosing_link(root: Element, pos: int) -> Optional[Element]:
    """The link at `pos`, looking through inline formatting around the point."""
    el = element_at(root, pos)
    while el is not None and el.type in FORMATTING_TYPES:
        el = el.parent
    if el is not None and el.type == "link":
        return el
    return None


class ActionMenu:
    def __init__(self):
        self._finders: List[TargetFinder] = []
        self._tables: Dict[str, Dict[str, Action]] = {}

    def add_target_finder(self, finder: TargetFinder) -> None:
        if finder not in self._finders:
            self._finders.append(finder)

    def set_actions(self, tag: str, table: Mapping[str, Action]) -> None:
        """Install the action table of `tag`; the first entry is the default action."""
        self._tables[tag] = dict(table)

    def actions_for(self, tag: str) -> Dict[str, Action]:
        return dict(self._tables.get(tag, {}))

    def target_at(self, buffer: TextBuffer, point: Optional[int] = None) -> Optional[ActionTarget]:
        for finder in self._finders:
            target = finder(buffer, point)
            if target is not None:
                return target
        return None

    def act(self, buffer: TextBuffer, point: Optional[int] = None, action: Optional[str] = None) -> Any:
        """
        Run `action` (default: the tag's first action) on the target at point.
        Returns None when nothing actionable is at point.
        """
        target = self.target_at(buffer, point)
        if target is None:
            return None
        table = self._tables.get(target.tag) or {}
        if not table:
            raise LinkError(f"No actions for '{target.tag}'")
        name = action or next(iter(table))
        if name not in table:
            raise LinkError(f"Unknown action '{name}' for '{target.tag}'. Available: {', '.join(table)}")
        logger.debug("Action %s on %s %s", name, target.tag, target.value)
        return table[name](target.value)


__all__ = ["ActionMenu", "TargetFinder", "Action", "enclosing_link"]
