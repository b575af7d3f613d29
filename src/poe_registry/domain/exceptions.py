"""
Domain exceptions - Semantic error types for claim operations.

Every ClaimError is a terminal, non-retryable outcome of a single
operation. Raising one guarantees that nothing was written.
"""


class ClaimError(Exception):
    """Base class for claim registry domain errors."""

    def __init__(self, claim: bytes) -> None:
        super().__init__(f"{type(self).__name__}: 0x{claim.hex()}")
        self.claim = claim


class ProofAlreadyExists(ClaimError):
    """Fingerprint was already registered (active or revoked)."""

    pass


class ProofNotExist(ClaimError):
    """No claim was ever created for the fingerprint."""

    pass


class NotProofOwner(ClaimError):
    """Requester is not the current owner of the claim."""

    pass


class ProofAlreadyRevoked(ClaimError):
    """Claim is already inactive."""

    pass


class CannotTransferToSelf(ClaimError):
    """Transfer target is the requester itself."""

    pass


class AuthenticationFailed(Exception):
    """Credentials did not resolve to a known account."""

    pass
