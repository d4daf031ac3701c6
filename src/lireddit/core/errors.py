"""Domain exceptions raised below the GraphQL layer."""

from __future__ import annotations


class LiredditError(Exception):
    """Base class for errors the API reports to clients verbatim."""


class InvalidCursorError(LiredditError):
    """Raised when a feed cursor is not an epoch-millisecond timestamp."""

    def __init__(self, cursor: str) -> None:
        super().__init__(f"invalid cursor: {cursor!r}")
        self.cursor = cursor


class InvalidPostError(LiredditError):
    """Raised when post input fails validation."""
