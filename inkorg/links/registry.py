"""
Link dispatch table: scheme name → handlers.

One LinkDispatcher instance is owned by the editor and handed to whoever
needs to register or dispatch link types.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from ..errors import ConfigurationError, LinkError

logger = logging.getLogger(__name__)

ActivateFn = Callable[[int, int, str, bool], None]
FollowFn = Callable[[str], None]
Tooltip = Union[str, Callable[[str], str], None]

_SCHEME_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")

__all__ = ["SchemeHandlers", "LinkDispatcher", "ActivateFn", "FollowFn", "Tooltip"]


@dataclass(frozen=True)
class SchemeHandlers:
    """Callbacks bound to one link scheme."""
    tooltip: Tooltip = None
    #: Called by the highlighting pass for every occurrence: (begin, end, path, bracketed)
    activate: Optional[ActivateFn] = None
    #: Called when the user opens the link
    follow: Optional[FollowFn] = None


class LinkDispatcher:
    """Registry of link schemes and their handlers."""

    def __init__(self):
        self._schemes: Dict[str, SchemeHandlers] = {}

    def register(self, scheme: str, handlers: SchemeHandlers) -> None:
        """
        Bind `handlers` to `scheme`. Registering an existing scheme replaces
        its handlers.

        Raises:
            ConfigurationError: If the scheme name is empty or malformed
        """
        if not isinstance(scheme, str) or not scheme.strip():
            raise ConfigurationError("Link scheme name must be a non-empty string")
        if not _SCHEME_NAME.match(scheme):
            raise ConfigurationError(f"Invalid link scheme name: {scheme!r}")
        if scheme in self._schemes:
            logger.debug("Link scheme '%s' re-registered, previous handlers replaced", scheme)
        self._schemes[scheme] = handlers

    def get(self, scheme: str) -> Optional[SchemeHandlers]:
        return self._schemes.get(scheme)

    def schemes(self) -> List[str]:
        """Registered scheme names in registration order."""
        return list(self._schemes)

    def __contains__(self, scheme: object) -> bool:
        return scheme in self._schemes

    def __len__(self) -> int:
        return len(self._schemes)

    def tooltip(self, scheme: str, path: str) -> Optional[str]:
        handlers = self._schemes.get(scheme)
        if handlers is None or handlers.tooltip is None:
            return None
        if callable(handlers.tooltip):
            return handlers.tooltip(path)
        return handlers.tooltip

    def follow(self, scheme: str, path: str) -> None:
        handlers = self._schemes.get(scheme)
        if handlers is None:
            raise LinkError(f"Unknown link scheme: {scheme}")
        if handlers.follow is None:
            raise LinkError(f"Links of type '{scheme}' cannot be followed")
        logger.debug("Following %s:%s", scheme, path)
        handlers.follow(path)
