"""
inkorg: Inkscape drawing links for Org documents.

Usage:
    from inkorg import Editor, InkscapeLinks, TextBuffer
    editor = Editor(TextBuffer.from_file("notes.org"))
    links = InkscapeLinks(editor).install()
    editor.fontify()
"""

from .document.buffer import TextBuffer
from .editor import Editor
from .errors import ConfigurationError, ConsistencyError, ExportError, InkOrgUserError, LinkError
from .integration import InkscapeLinks
from .links.registry import LinkDispatcher, SchemeHandlers
from .types import ActionTarget, LinkOccurrence

__all__ = [
    "TextBuffer",
    "Editor",
    "InkscapeLinks",
    "LinkDispatcher",
    "SchemeHandlers",
    "LinkOccurrence",
    "ActionTarget",
    "InkOrgUserError",
    "ConfigurationError",
    "ConsistencyError",
    "ExportError",
    "LinkError",
]
