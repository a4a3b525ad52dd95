"""
reqlix.core.errors - Error taxonomy for requirements operations.

Every failure the core can report is one of these exceptions. The
operation layer (reqlix.mcp.handlers) turns them into error payloads;
nothing here is retried.
"""

from __future__ import annotations

from pathlib import Path


class ReqlixError(Exception):
    """Base class for all reqlix errors."""


class InvalidParameterError(ReqlixError, ValueError):
    """A parameter violates a length, charset or required-field rule."""


class NotFoundError(ReqlixError):
    """A category, chapter or requirement index could not be resolved."""


class DuplicateTitleError(ReqlixError):
    """A requirement title is already used in the target chapter."""

    def __init__(self, message: str = "Title already exists in chapter") -> None:
        super().__init__(message)


class StorageError(ReqlixError):
    """Reading or writing a requirements file failed.

    Attributes:
        path: The file or directory involved, when known.
        cause: The underlying OS or decoding error, when known.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause


class SerializationError(ReqlixError):
    """A response payload could not be encoded."""
