"""Identity adapters - IdentityProvider implementations."""

from .bcrypt_accounts import BcryptAccountDirectory, hash_secret

__all__ = ["BcryptAccountDirectory", "hash_secret"]
