from .backends import ExportBackend, HtmlBackend, OrgBackend
from .pipeline import ExportPipeline
from .rewriter import ExportRewriter

__all__ = ["ExportBackend", "HtmlBackend", "OrgBackend", "ExportPipeline", "ExportRewriter"]
