from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List

from .backends import ExportBackend, HtmlBackend, OrgBackend
from ..document.buffer import TextBuffer
from ..document.parser import parse_document
from ..errors import ExportError

if TYPE_CHECKING:
    from ..editor import Editor

logger = logging.getLogger(__name__)

#: Called once per export with the backend name, the export copy being current
BeforeProcessingHook = Callable[[str], None]


class ExportPipeline:
    """
    Export = copy the buffer, run the before-processing hooks on the copy,
    parse the result and hand it to the backend. The source buffer is
    never modified.
    """

    def __init__(self):
        self._hooks: List[BeforeProcessingHook] = []
        self._backends: Dict[str, ExportBackend] = {}
        self.register_backend(OrgBackend())
        self.register_backend(HtmlBackend())

    def add_before_processing_hook(self, hook: BeforeProcessingHook) -> None:
        if hook not in self._hooks:
            self._hooks.append(hook)

    @property
    def hooks(self) -> List[BeforeProcessingHook]:
        return list(self._hooks)

    def register_backend(self, backend: ExportBackend) -> None:
        self._backends[backend.name] = backend

    def backends(self) -> List[str]:
        return sorted(self._backends)

    def backend(self, name: str) -> ExportBackend:
        try:
            return self._backends[name]
        except KeyError:
            raise ExportError(
                f"Unknown export backend '{name}'. Available: {', '.join(self.backends())}"
            ) from None

    def run(self, editor: Editor, buffer: TextBuffer, backend_name: str) -> str:
        backend = self.backend(backend_name)
        work = buffer.copy()
        with editor.with_buffer(work):
            for hook in self._hooks:
                hook(backend_name)
            tree = parse_document(work.text, editor.links.schemes())
        logger.debug("Exporting %s with the %s backend", buffer.name, backend_name)
        return backend.render(tree, work.text)


__all__ = ["ExportPipeline", "BeforeProcessingHook"]
