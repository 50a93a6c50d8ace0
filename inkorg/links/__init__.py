from .registry import LinkDispatcher, SchemeHandlers

__all__ = ["LinkDispatcher", "SchemeHandlers"]
