"""
PageDigest exceptions module.

All exceptions are exported from this module for convenient imports:
    from pagedigest.exceptions import AuthError, EmptyContentError
"""

from pagedigest.exceptions.base import FailureKind, PageDigestError

from pagedigest.exceptions.extraction import (
    ExtractionError,
    NoSurfaceError,
    EmptyContentError,
    ExtractionFailedError,
)

from pagedigest.exceptions.generation import (
    GenerationError,
    AuthError,
    TransportError,
    UpstreamError,
)

from pagedigest.exceptions.operation import (
    CredentialMissingError,
    OperationSupersededError,
)

__all__ = [
    # Base
    "FailureKind",
    "PageDigestError",
    # Extraction
    "ExtractionError",
    "NoSurfaceError",
    "EmptyContentError",
    "ExtractionFailedError",
    # Generation
    "GenerationError",
    "AuthError",
    "TransportError",
    "UpstreamError",
    # Operation
    "CredentialMissingError",
    "OperationSupersededError",
]
