"""
Inline image previews for drawing links.

An overlay covers the link text of one occurrence and lives until the
first edit touching that text or until the next full redraw, whichever
comes first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from .images import FileImageLoader, ImageHandle, ImageLoader
from ..document.buffer import TextBuffer
from ..document.mutation import Subscription, TextMutation
from ..paths import resolve_link_path

if TYPE_CHECKING:
    from ..editor import Editor

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class PreviewOverlay:
    surface: TextBuffer = field(repr=False)
    image: ImageHandle
    generation: int
    bracketed: bool = False
    visible: bool = True
    subscription: Optional[Subscription] = field(default=None, repr=False)

    @property
    def region(self) -> Tuple[int, int]:
        if self.subscription is None:
            raise RuntimeError("Overlay was never attached to a buffer")
        return self.subscription.begin, self.subscription.end

    @property
    def live(self) -> bool:
        return self.visible and self.subscription is not None and self.subscription.active


class PreviewOverlayManager:
    """
    Creates and tracks preview overlays.

    Overlays always go to the base buffer of the current buffer, so views
    of one document share a single set of previews.
    """

    def __init__(self, editor: Editor, loader: Optional[ImageLoader] = None):
        self._editor = editor
        self._loader: ImageLoader = loader or FileImageLoader()
        self._overlays: List[PreviewOverlay] = []
        self.generation = 0

    @property
    def overlays(self) -> List[PreviewOverlay]:
        return list(self._overlays)

    def overlays_at(self, pos: int) -> List[PreviewOverlay]:
        return [ov for ov in self._overlays if ov.region[0] <= pos < ov.region[1]]

    def render_overlay(self, begin: int, end: int, path: Optional[str], bracketed: bool) -> None:
        """
        Show the image at `path` over [begin, end) of the current buffer.
        Missing or unresolved images leave the link text as it is.
        """
        if not path:
            return
        buffer = self._editor.current_buffer
        image_path = resolve_link_path(path, buffer)
        if not image_path.is_file():
            logger.debug("No image at %s, preview skipped", image_path)
            return

        image = self._loader.load(image_path)
        surface = buffer.base_buffer
        for existing in list(self._overlays):
            if existing.surface is surface and existing.region == (begin, end):
                self._delete(existing)

        overlay = PreviewOverlay(surface=surface, image=image, generation=self.generation, bracketed=bracketed)
        overlay.subscription = surface.bus.subscribe(begin, end, lambda mutation: self._on_touched(overlay, mutation))
        surface.overlays.append(overlay)
        self._overlays.append(overlay)
        logger.debug("Preview of %s over [%d, %d)", image_path, begin, end)

    def invalidate_and_redraw(self) -> None:
        """
        Drop every preview of the current document and re-run the editor's
        highlighting pass, which renders the previews again.
        """
        surface = self._editor.current_buffer.base_buffer
        for overlay in list(self._overlays):
            if overlay.surface is surface:
                self._delete(overlay)
        self._editor.fontify()

    # --- highlighting passes ---------------------------------------------
    def begin_pass(self, buffer: TextBuffer) -> None:
        self.generation += 1

    def end_pass(self, buffer: TextBuffer) -> None:
        """Drop previews of the buffer that the pass just finished did not render."""
        surface = buffer.base_buffer
        stale = [ov for ov in self._overlays if ov.surface is surface and ov.generation < self.generation]
        for overlay in stale:
            self._delete(overlay)
        if stale:
            logger.debug("Highlighting pass %d dropped %d stale preview(s)", self.generation, len(stale))

    def clear(self) -> None:
        for overlay in list(self._overlays):
            self._delete(overlay)

    # --- internals -------------------------------------------------------
    def _on_touched(self, overlay: PreviewOverlay, mutation: TextMutation) -> None:
        logger.debug("Edit at [%d, %d) removed a preview", mutation.start, mutation.end)
        self._detach(overlay)

    def _delete(self, overlay: PreviewOverlay) -> None:
        if overlay.subscription is not None:
            overlay.surface.bus.unsubscribe(overlay.subscription)
        self._detach(overlay)

    def _detach(self, overlay: PreviewOverlay) -> None:
        overlay.visible = False
        if overlay in overlay.surface.overlays:
            overlay.surface.overlays.remove(overlay)
        if overlay in self._overlays:
            self._overlays.remove(overlay)


__all__ = ["PreviewOverlay", "PreviewOverlayManager"]
