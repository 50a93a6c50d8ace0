"""
Element tree of a parsed Org document and traversal helpers.

walk() visits elements in document order: parents before children,
children by increasing position. Callers rely on this order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

# Inline containers that may wrap (or be wrapped by) a link
FORMATTING_TYPES: Tuple[str, ...] = ("bold", "italic", "underline", "strike-through", "verbatim", "code")
INLINE_TYPES: Tuple[str, ...] = ("link",) + FORMATTING_TYPES


@dataclass(eq=False)
class Element:
    type: str
    begin: int
    end: int
    properties: Dict[str, Any] = field(default_factory=dict)
    parent: Optional[Element] = field(default=None, repr=False)
    children: List[Element] = field(default_factory=list, repr=False)
    # Region holding parsed children (None for leaf elements)
    contents_begin: Optional[int] = None
    contents_end: Optional[int] = None

    def get(self, prop: str, default: Any = None) -> Any:
        return self.properties.get(prop, default)

    def append(self, child: Element) -> Element:
        child.parent = self
        self.children.append(child)
        return child

    def contains(self, pos: int) -> bool:
        return self.begin <= pos < self.end

    def lineage(self) -> Iterator[Element]:
        """This element followed by its ancestors up to the root."""
        el: Optional[Element] = self
        while el is not None:
            yield el
            el = el.parent


Types = Union[str, Tuple[str, ...], List[str]]


def _as_types(types: Optional[Types]) -> Optional[Tuple[str, ...]]:
    if types is None:
        return None
    if isinstance(types, str):
        return (types,)
    return tuple(types)


def iter_elements(root: Element) -> Iterator[Element]:
    """Pre-order traversal; children are kept sorted by position by the parser."""
    stack: List[Element] = [root]
    while stack:
        el = stack.pop()
        yield el
        stack.extend(reversed(el.children))


def walk(root: Element, types: Optional[Types] = None, fn: Optional[Callable[[Element], Optional[T]]] = None) -> List[Any]:
    """
    Map `fn` over elements of the given types in document order.

    Results that are None are dropped. Without `fn` the matching elements
    themselves are returned.
    """
    wanted = _as_types(types)
    out: List[Any] = []
    for el in iter_elements(root):
        if wanted is not None and el.type not in wanted:
            continue
        value = fn(el) if fn is not None else el
        if value is not None:
            out.append(value)
    return out


def element_at(root: Element, pos: int) -> Optional[Element]:
    """
    Innermost element covering `pos`. A position right after an inline
    object (its end) still counts as being on it.
    """
    found: Optional[Element] = None
    node = root
    while True:
        nxt = next((c for c in node.children if c.contains(pos)), None)
        if nxt is None:
            nxt = next((c for c in node.children if c.type in INLINE_TYPES and pos == c.end), None)
        if nxt is None:
            return found
        found = nxt
        node = nxt


__all__ = ["Element", "FORMATTING_TYPES", "INLINE_TYPES", "iter_elements", "walk", "element_at"]
