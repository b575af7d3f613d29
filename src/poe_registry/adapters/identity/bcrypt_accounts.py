"""
Bcrypt account directory adapter - Implements IdentityProvider protocol.

Authenticates actors against a static map of account id -> bcrypt hash.

Security Design - Timing Oracle Prevention:
------------------------------------------
bcrypt.checkpw() ALWAYS runs, even for unknown accounts: those are
compared against a pre-computed dummy hash. Response time therefore does
not reveal whether an account id exists.
"""

import logging
import re
from collections.abc import Mapping

import bcrypt

from poe_registry.domain.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)

# Hash of "dummy_password_for_timing_safety" with cost factor 10.
_DUMMY_BCRYPT_HASH = bcrypt.hashpw(b"dummy_password_for_timing_safety", bcrypt.gensalt(10))

# Modular crypt format: $2b$<cost>$<22-char salt><31-char digest>
_BCRYPT_HASH_PATTERN = re.compile(r"\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}")


class BcryptAccountDirectory:
    """
    Implements IdentityProvider protocol via bcrypt hashes.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, accounts: Mapping[str, str]) -> None:
        """
        Args:
            accounts: Account id -> bcrypt hash (as produced by bcrypt.hashpw)

        Raises:
            ValueError: If any hash is not a bcrypt hash; checked here so a
                bad setting fails at startup instead of on every login
        """
        malformed = sorted(
            account
            for account, hashed in accounts.items()
            if not _BCRYPT_HASH_PATTERN.fullmatch(hashed)
        )
        if malformed:
            raise ValueError(f"Malformed bcrypt hash for account(s): {', '.join(malformed)}")
        self._accounts = {account: hashed.encode() for account, hashed in accounts.items()}

    def authenticate(self, account: str, secret: str) -> str:
        """
        Verify an account's secret.

        Args:
            account: Account id
            secret: Plaintext secret

        Returns:
            The authenticated account id

        Raises:
            AuthenticationFailed: Unknown account or wrong secret
        """
        stored_hash = self._accounts.get(account)
        # Always run bcrypt so unknown accounts cost the same as known ones
        try:
            valid = bcrypt.checkpw(secret.encode(), stored_hash or _DUMMY_BCRYPT_HASH)
        except ValueError:
            # Well-formed but unusable hash (e.g. cost out of range)
            logger.error("Stored bcrypt hash rejected for account %r", account)
            raise AuthenticationFailed(account) from None
        if stored_hash is None or not valid:
            logger.debug("Authentication failed for account %r", account)
            raise AuthenticationFailed(account)
        return account


def hash_secret(secret: str, rounds: int = 10) -> str:
    """Produce a bcrypt hash suitable for the `accounts` setting."""
    return bcrypt.hashpw(secret.encode(), bcrypt.gensalt(rounds=rounds)).decode()
