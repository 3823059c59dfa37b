"""
Generation service exceptions for PageDigest.
"""

from pagedigest.exceptions.base import FailureKind, PageDigestError


class GenerationError(PageDigestError):
    """Base exception for all remote generation failures."""
    kind = FailureKind.UPSTREAM


class AuthError(GenerationError):
    """Raised when the service rejects the credential.

    Kept distinct from other failures so the caller can ask for a new credential.
    """
    kind = FailureKind.CREDENTIAL_INVALID


class TransportError(GenerationError):
    """Raised on connection failures and timeouts, including mid-stream drops."""
    kind = FailureKind.TRANSPORT


class UpstreamError(GenerationError):
    """Raised when the service reports a failure or produces no usable content.

    Attributes:
        reason: Short machine-readable cause, e.g. "empty" or "no_content"
    """
    kind = FailureKind.UPSTREAM

    def __init__(self, message: str, *, details: str | None = None, reason: str | None = None):
        super().__init__(message, details=details)
        self.reason = reason
