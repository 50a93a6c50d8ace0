"""
Errors raised by inkorg.

Everything a user can act on, such as a bad config file or a link that
cannot be followed, derives from InkOrgUserError; the CLI reports those
as one line on stderr. Anything else is a bug and surfaces with its
traceback.
"""

from __future__ import annotations


class InkOrgUserError(Exception):
    """Problem in the user's input or environment, reported without a traceback."""
    pass


class ConfigurationError(InkOrgUserError):
    """Invalid scheme name at registration or an invalid config file."""
    pass


class ConsistencyError(InkOrgUserError):
    """
    The export rewrite could not find the scheme token of a link
    collected earlier in the same pass.

    Already rewritten links stay rewritten; the export must not proceed.
    """
    def __init__(self, token: str, begin: int, end: int):
        self.token = token
        self.begin = begin
        self.end = end
        super().__init__(
            f"Expected '{token}' within [{begin}, {end}) but the document changed; "
            f"export aborted"
        )


class ExportError(InkOrgUserError):
    """Raised for an unknown export backend."""
    pass


class LinkError(InkOrgUserError):
    """Raised when a link cannot be followed."""
    pass


__all__ = ["InkOrgUserError", "ConfigurationError", "ConsistencyError", "ExportError", "LinkError"]
