"""
Base exception classes for PageDigest.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Caller-visible failure taxonomy carried by every operation failure."""
    NO_SURFACE = "no_surface"
    EMPTY_CONTENT = "empty_content"
    EXTRACTION_FAILED = "extraction_failed"
    CREDENTIAL_MISSING = "credential_missing"
    CREDENTIAL_INVALID = "credential_invalid"
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class PageDigestError(Exception):
    """Base exception for all PageDigest errors.

    All custom exceptions in the pagedigest package should inherit from this class.
    This allows consumers to catch all pagedigest-related errors with a single except clause.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (optional)
        kind: Failure taxonomy entry reported to the caller
    """

    kind: FailureKind = FailureKind.INTERNAL

    def __init__(self, message: str, *, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"
