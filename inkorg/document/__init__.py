from .buffer import TextBuffer, Match
from .mutation import TextMutationBus, TextMutation, Subscription, TextRange
from .parser import parse_document, link_occurrences, to_occurrence
from .tree import Element, FORMATTING_TYPES, INLINE_TYPES, walk, element_at, iter_elements

__all__ = [
    "TextBuffer",
    "Match",
    "TextMutationBus",
    "TextMutation",
    "Subscription",
    "TextRange",
    "parse_document",
    "link_occurrences",
    "to_occurrence",
    "Element",
    "FORMATTING_TYPES",
    "INLINE_TYPES",
    "walk",
    "element_at",
    "iter_elements",
]
