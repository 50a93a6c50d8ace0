from __future__ import annotations

from html import escape
from pathlib import PurePosixPath
from typing import List, Protocol

from ..document.parser import VERBATIM_BLOCKS
from ..document.tree import Element
from ..types import FILE_SCHEME

IMAGE_SUFFIXES = frozenset({".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp"})

_EMPHASIS_TAGS = {
    "bold": "b",
    "italic": "i",
    "underline": "u",
    "strike-through": "del",
}


class ExportBackend(Protocol):
    name: str

    def render(self, tree: Element, text: str) -> str:
        ...


class OrgBackend:
    """Org to Org: the processed text itself."""
    name = "org"

    def render(self, tree: Element, text: str) -> str:
        return text


class HtmlBackend:
    """
    Minimal HTML: headlines, paragraphs, blocks and inline markup.
    Description-less file links to images are inlined as <img>.
    """
    name = "html"

    def render(self, tree: Element, text: str) -> str:
        parts: List[str] = []
        for el in tree.children:
            if el.type == "headline":
                level = min(int(el.get("level", 1)), 6)
                parts.append(f"<h{level}>{self._contents(el, text).strip()}</h{level}>")
            elif el.type == "paragraph":
                parts.append(f"<p>{self._contents(el, text).strip()}</p>")
            elif el.type.endswith("-block"):
                parts.append(self._block(el, text))
            # keywords and comments are not exported
        return "\n".join(p for p in parts if p) + "\n"

    def _block(self, el: Element, text: str) -> str:
        name = el.get("name")
        if name == "comment":
            return ""
        if name in VERBATIM_BLOCKS:
            return f'<pre class="{escape(name)}">{escape(el.get("value", ""))}</pre>'
        inner = self._contents(el, text).strip()
        if name == "quote":
            return f"<blockquote>{inner}</blockquote>"
        return f'<div class="{escape(name)}">{inner}</div>'

    def _contents(self, el: Element, text: str) -> str:
        if el.contents_begin is None or el.contents_end is None:
            return ""
        out: List[str] = []
        pos = el.contents_begin
        for child in el.children:
            out.append(escape(text[pos:child.begin]))
            out.append(self._object(child, text))
            pos = child.end
        out.append(escape(text[pos:el.contents_end]))
        return "".join(out)

    def _object(self, el: Element, text: str) -> str:
        if el.type == "link":
            return self._link(el, text)
        if el.type in ("verbatim", "code"):
            return f"<code>{escape(el.get('value', ''))}</code>"
        tag = _EMPHASIS_TAGS[el.type]
        return f"<{tag}>{self._contents(el, text)}</{tag}>"

    def _link(self, el: Element, text: str) -> str:
        scheme = el.get("type")
        path = el.get("path", "")
        description = self._contents(el, text) if el.contents_begin is not None else None
        if scheme == FILE_SCHEME:
            href = path
            if description is None and PurePosixPath(path).suffix.lower() in IMAGE_SUFFIXES:
                return f'<img src="{escape(href)}" alt="{escape(PurePosixPath(path).name)}"/>'
        elif scheme == "fuzzy":
            href = f"#{path}"
        else:
            href = f"{scheme}:{path}"
        label = description if description is not None else escape(el.get("raw_link") or href)
        return f'<a href="{escape(href)}">{label}</a>'


__all__ = ["ExportBackend", "OrgBackend", "HtmlBackend", "IMAGE_SUFFIXES"]
