"""
Page content extraction exceptions for PageDigest.
"""

from pagedigest.exceptions.base import FailureKind, PageDigestError


class ExtractionError(PageDigestError):
    """Base exception for failures while reading text out of a page surface."""
    kind = FailureKind.EXTRACTION_FAILED


class NoSurfaceError(ExtractionError):
    """Raised when no page is currently loaded."""
    kind = FailureKind.NO_SURFACE


class EmptyContentError(ExtractionError):
    """Raised when the page yields no text after trimming whitespace."""
    kind = FailureKind.EMPTY_CONTENT


class ExtractionFailedError(ExtractionError):
    """Raised when the page surface reports an error while evaluating."""
    kind = FailureKind.EXTRACTION_FAILED
