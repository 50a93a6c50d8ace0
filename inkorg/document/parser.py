"""
Lightweight Org parser producing an element tree:
  • headlines (* Title), keywords (#+KEY: value), comments (# text)
  • blocks (#+begin_NAME … #+end_NAME); src/example/export/comment are opaque
  • paragraphs separated by blank lines
  • inline objects: bracket links, plain links of known schemes, emphasis
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .tree import Element, walk
from ..types import FILE_SCHEME, LinkOccurrence

_HEADLINE = re.compile(r"^(?P<stars>\*+)[ \t]+(?P<title>.*?)[ \t]*$")
_BLOCK_BEGIN = re.compile(r"^[ \t]*#\+begin_(?P<name>\S+)", re.IGNORECASE)
_KEYWORD = re.compile(r"^[ \t]*#\+(?P<key>[^\s:]+):[ \t]*(?P<value>.*?)[ \t]*$")
_COMMENT = re.compile(r"^[ \t]*#(?:[ \t]|$)")

# Blocks whose contents are not parsed for objects
VERBATIM_BLOCKS = frozenset({"src", "example", "export", "comment"})

_BRACKET_LINK = re.compile(r"\[\[(?P<link>[^\[\]\n]+)\](?:\[(?P<desc>[^\[\]]+)\])?\]")
_LINK_SCHEME = re.compile(r"(?P<scheme>[A-Za-z][A-Za-z0-9+.-]*):(?P<path>.*)", re.DOTALL)
_EMPHASIS = re.compile(r"(?P<marker>[*/_+=~])(?P<body>\S(?:[^\n]*?\S)?)(?P=marker)")

_EMPHASIS_TYPES = {
    "*": "bold",
    "/": "italic",
    "_": "underline",
    "+": "strike-through",
    "=": "verbatim",
    "~": "code",
}
_EMPHASIS_PRE = " \t\n-({'\"["
_EMPHASIS_POST = " \t\n-.,;:!?'\")}[]\\"
# Stripped from the end of plain links: "see inkscape:a.svg." ends at "svg"
_PLAIN_LINK_TRAILING = ".,;:!?'\""


def _line_spans(text: str) -> List[Tuple[int, int]]:
    """(start, end) of every line; `end` includes the newline."""
    spans: List[Tuple[int, int]] = []
    pos = 0
    n = len(text)
    while pos < n:
        nl = text.find("\n", pos)
        end = n if nl < 0 else nl + 1
        spans.append((pos, end))
        pos = end
    return spans


@lru_cache(maxsize=32)
def _plain_link_re(schemes: FrozenSet[str]) -> Optional[re.Pattern[str]]:
    if not schemes:
        return None
    alts = "|".join(re.escape(s) for s in sorted(schemes, key=len, reverse=True))
    return re.compile(rf"(?<![\w/:.+-])(?P<scheme>{alts}):(?P<path>[^\s()<>\[\]]+)")


def _split_link(raw: str, schemes: FrozenSet[str]) -> Tuple[str, str]:
    m = _LINK_SCHEME.match(raw)
    if m and m.group("scheme") in schemes:
        return m.group("scheme"), m.group("path")
    if raw.startswith(("/", "./", "../", "~")):
        return FILE_SCHEME, raw
    return "fuzzy", raw


def _find_plain_link(text: str, pos: int, end: int, schemes: FrozenSet[str]):
    pattern = _plain_link_re(schemes)
    if pattern is None:
        return None
    while True:
        m = pattern.search(text, pos, end)
        if m is None:
            return None
        path = m.group("path").rstrip(_PLAIN_LINK_TRAILING)
        if path:
            stop = m.start("path") + len(path)
            return m.start(), stop, m.group("scheme"), path
        pos = m.start() + 1


def _find_emphasis(text: str, pos: int, end: int, region_begin: int):
    while True:
        m = _EMPHASIS.search(text, pos, end)
        if m is None:
            return None
        start, stop = m.span()
        pre_ok = start == region_begin or text[start - 1] in _EMPHASIS_PRE
        post_ok = stop == end or text[stop] in _EMPHASIS_POST
        if pre_ok and post_ok:
            return m
        pos = start + 1


def _parse_objects(text: str, begin: int, end: int, parent: Element, schemes: FrozenSet[str]) -> None:
    """Attach inline objects found in [begin, end) to `parent`, left to right."""
    pos = begin
    while pos < end:
        candidates = []
        bracket = _BRACKET_LINK.search(text, pos, end)
        if bracket:
            candidates.append((bracket.start(), 0, "bracket", bracket))
        plain = _find_plain_link(text, pos, end, schemes)
        if plain:
            candidates.append((plain[0], 1, "plain", plain))
        emphasis = _find_emphasis(text, pos, end, begin)
        if emphasis:
            candidates.append((emphasis.start(), 2, "emphasis", emphasis))
        if not candidates:
            return

        _, _, kind, found = min(candidates, key=lambda c: (c[0], c[1]))
        if kind == "bracket":
            el = _bracket_link(text, found, parent, schemes)
        elif kind == "plain":
            start, stop, scheme, path = found
            el = parent.append(Element("link", start, stop, {
                "type": scheme,
                "path": path,
                "raw_link": f"{scheme}:{path}",
                "format": "plain",
            }))
        else:
            el = _emphasis(text, found, parent, schemes)
        pos = el.end


def _bracket_link(text: str, m: re.Match[str], parent: Element, schemes: FrozenSet[str]) -> Element:
    raw = m.group("link")
    scheme, path = _split_link(raw, schemes)
    el = parent.append(Element("link", m.start(), m.end(), {
        "type": scheme,
        "path": path,
        "raw_link": raw,
        "format": "bracket",
        "description": m.group("desc"),
    }))
    if m.group("desc") is not None:
        el.contents_begin, el.contents_end = m.span("desc")
        _parse_objects(text, el.contents_begin, el.contents_end, el, schemes)
    return el


def _emphasis(text: str, m: re.Match[str], parent: Element, schemes: FrozenSet[str]) -> Element:
    kind = _EMPHASIS_TYPES[m.group("marker")]
    el = parent.append(Element(kind, m.start(), m.end()))
    if kind in ("verbatim", "code"):
        el.properties["value"] = m.group("body")
    else:
        el.contents_begin, el.contents_end = m.span("body")
        _parse_objects(text, el.contents_begin, el.contents_end, el, schemes)
    return el


def _block_end_re(name: str) -> re.Pattern[str]:
    return re.compile(rf"^[ \t]*#\+end_{re.escape(name)}(?:\s|$)", re.IGNORECASE)


def parse_document(text: str, schemes: Iterable[str] = ()) -> Element:
    """
    Parse `text` into an element tree rooted at an `org-data` element.

    `schemes` lists link types recognised in plain (unbracketed) form and
    before the colon of bracket links; other bracket links are `file`
    (path-like targets) or `fuzzy`.
    """
    known = frozenset(schemes)
    root = Element("org-data", 0, len(text), contents_begin=0, contents_end=len(text))
    spans = _line_spans(text)
    n = len(spans)

    para: List[int] = []  # [start, end] of the paragraph being collected

    def flush() -> None:
        if not para:
            return
        start, stop = para
        el = root.append(Element("paragraph", start, stop, contents_begin=start, contents_end=stop))
        _parse_objects(text, start, stop, el, known)
        para.clear()

    i = 0
    while i < n:
        s, e = spans[i]
        line = text[s:e].rstrip("\r\n")

        if not line.strip():
            flush()
            i += 1
            continue

        m = _HEADLINE.match(line)
        if m:
            flush()
            el = root.append(Element("headline", s, e, {
                "level": len(m.group("stars")),
                "title": m.group("title"),
            }, contents_begin=s + m.start("title"), contents_end=s + m.end("title")))
            _parse_objects(text, el.contents_begin, el.contents_end, el, known)
            i += 1
            continue

        m = _BLOCK_BEGIN.match(line)
        if m:
            flush()
            name = m.group("name").lower()
            end_re = _block_end_re(name)
            j = i + 1
            while j < n and not end_re.match(text[spans[j][0]:spans[j][1]]):
                j += 1
            contents_begin = e
            if j < n:
                contents_end = spans[j][0]
                block_end = spans[j][1]
            else:
                # unclosed block runs to the end of the document
                contents_end = block_end = len(text)
            el = root.append(Element(f"{name}-block", s, block_end, {
                "name": name,
                "parameters": line[m.end():].strip(),
                "value": text[contents_begin:contents_end],
            }, contents_begin=contents_begin, contents_end=contents_end))
            if name not in VERBATIM_BLOCKS:
                _parse_objects(text, contents_begin, contents_end, el, known)
            i = j + 1
            continue

        m = _KEYWORD.match(line)
        if m:
            flush()
            root.append(Element("keyword", s, e, {"key": m.group("key").upper(), "value": m.group("value")}))
            i += 1
            continue

        if _COMMENT.match(line):
            flush()
            root.append(Element("comment", s, e, {"value": line.lstrip()[1:].strip()}))
            i += 1
            continue

        if not para:
            para.extend([s, e])
        else:
            para[1] = e
        i += 1

    flush()
    return root


def to_occurrence(el: Element) -> LinkOccurrence:
    return LinkOccurrence(
        scheme=el.get("type"),
        path=el.get("path"),
        begin=el.begin,
        end=el.end,
        description=el.get("description"),
        bracketed=el.get("format") == "bracket",
    )


def link_occurrences(root: Element, scheme: Optional[str] = None) -> List[LinkOccurrence]:
    """Links of the tree (optionally of one scheme) in document order."""
    return walk(
        root,
        "link",
        lambda el: to_occurrence(el) if scheme is None or el.get("type") == scheme else None,
    )


__all__ = ["parse_document", "link_occurrences", "to_occurrence", "VERBATIM_BLOCKS"]
