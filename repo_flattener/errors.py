"""Exception types raised by the flattening pipeline."""

from __future__ import annotations


class FlattenError(Exception):
    """Base class for structural failures that abort a whole run."""


class InvalidReference(FlattenError, ValueError):
    """Raised when a repository reference is not a usable GitHub URL."""

    def __init__(self, reference: str, reason: str = "not a GitHub repository URL"):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Invalid repository reference {reference!r}: {reason}")


class RetrievalError(FlattenError):
    """Raised when the repository archive cannot be downloaded."""

    def __init__(self, url: str, message: str, status: int | None = None):
        self.url = url
        self.status = status
        super().__init__(message)


class ExtractionError(FlattenError):
    """Raised when the archive is corrupt or does not hold exactly one directory."""


class WalkError(FlattenError, OSError):
    """Raised when the extracted tree cannot be walked."""
