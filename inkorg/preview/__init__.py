from .images import FileImageLoader, ImageHandle, ImageLoader
from .overlays import PreviewOverlay, PreviewOverlayManager

__all__ = ["FileImageLoader", "ImageHandle", "ImageLoader", "PreviewOverlay", "PreviewOverlayManager"]
