"""Exception hierarchy for cnxcheck.

Load failures are reported per path and skipped; service failures abort the run.
"""

from __future__ import annotations


class CnxCheckError(Exception):
    """Base exception for all cnxcheck errors.

    Attributes:
        message: Human-readable error description
        path: File or directory the error relates to, when there is one
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class DocumentLoadError(CnxCheckError):
    """A document could not be read or parsed."""


class GrammarCheckError(CnxCheckError):
    """The grammar-checking service failed or returned an unusable response."""


class ModelServiceError(CnxCheckError):
    """The model-inference service failed or reported an error in its stream."""
