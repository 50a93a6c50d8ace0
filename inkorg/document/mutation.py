"""
Observer bus for text mutations.

Regions subscribe to the bus; every edit of the buffer is published once.
A subscription whose region is touched by an edit is cancelled and its
callback is invoked. Regions strictly after an edit are shifted so they
keep covering the same text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    def overlaps(self, other: TextRange) -> bool:
        """Check if this range overlaps with another."""
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)

    def contains_offset(self, pos: int) -> bool:
        return self.start_char <= pos < self.end_char


@dataclass(frozen=True)
class TextMutation:
    """Text in [start, end) was replaced by `inserted` characters."""
    start: int
    end: int
    inserted: int

    @property
    def delta(self) -> int:
        return self.inserted - (self.end - self.start)

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def touches(self, region: TextRange) -> bool:
        if self.is_insertion:
            return region.contains_offset(self.start)
        return region.overlaps(TextRange(self.start, self.end))


MutationCallback = Callable[[TextMutation], None]


@dataclass
class Subscription:
    region: TextRange
    callback: MutationCallback
    active: bool = field(default=True)

    @property
    def begin(self) -> int:
        return self.region.start_char

    @property
    def end(self) -> int:
        return self.region.end_char


class TextMutationBus:
    """Per-buffer publisher of text mutations."""

    def __init__(self):
        self._subs: List[Subscription] = []

    def subscribe(self, begin: int, end: int, callback: MutationCallback) -> Subscription:
        sub = Subscription(TextRange(begin, end), callback)
        self._subs.append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        sub.active = False
        try:
            self._subs.remove(sub)
        except ValueError:
            pass

    @property
    def subscriptions(self) -> List[Subscription]:
        return list(self._subs)

    def publish(self, start: int, end: int, inserted: int) -> TextMutation:
        """
        Announce that [start, end) was replaced by `inserted` characters.

        Touched subscriptions are dropped before their callbacks run, so a
        callback can never observe itself as still subscribed.
        """
        mutation = TextMutation(start, end, inserted)
        touched: List[Subscription] = []
        kept: List[Subscription] = []
        for sub in self._subs:
            if mutation.touches(sub.region):
                sub.active = False
                touched.append(sub)
                continue
            if sub.region.start_char >= mutation.end and mutation.delta:
                sub.region = TextRange(sub.region.start_char + mutation.delta,
                                       sub.region.end_char + mutation.delta)
            kept.append(sub)
        self._subs = kept

        if touched:
            logger.debug("Edit [%d, %d) touched %d region(s)", start, end, len(touched))
        for sub in touched:
            sub.callback(mutation)
        return mutation

    def clear(self) -> None:
        for sub in self._subs:
            sub.active = False
        self._subs = []


__all__ = ["TextRange", "TextMutation", "Subscription", "TextMutationBus", "MutationCallback"]
