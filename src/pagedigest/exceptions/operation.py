"""
Operation lifecycle exceptions for PageDigest.
"""

from pagedigest.exceptions.base import FailureKind, PageDigestError


class CredentialMissingError(PageDigestError):
    """Raised when an operation needs a credential and none is stored."""
    kind = FailureKind.CREDENTIAL_MISSING


class OperationSupersededError(PageDigestError):
    """Raised when a cancelled operation resumes after a newer one replaced it.

    Internal only: the orchestrator swallows it so late results of a stale
    operation never reach the caller.

    Attributes:
        operation_id: Id of the stale operation
    """

    def __init__(self, operation_id: str, *, details: str | None = None):
        super().__init__(f"Operation {operation_id} was superseded", details=details)
        self.operation_id = operation_id
