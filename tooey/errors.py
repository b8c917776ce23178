"""Error taxonomy shared by the loader, navigator, and runtime loop.

Construction-time errors are fatal and surface before a session starts.
Per-tick input errors end the loop; projection problems never escape.
"""

from __future__ import annotations


class TooeyError(Exception):
    """Base class for all tooey errors."""


class DeserializationError(TooeyError):
    """Malformed or schema-mismatched input document.

    ``path`` locates the offending element (``root.children[2].values``) when
    the failure is tied to one; it is empty for whole-document errors.
    """

    def __init__(self, message: str, path: str = "") -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class NavigationInvariantViolation(TooeyError, LookupError):
    """A navigation reference (ancestor id, node id) does not resolve in the tree."""


class InputError(TooeyError, OSError):
    """Polling or reading a terminal event failed."""
