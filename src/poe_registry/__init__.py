"""
poe-registry - Proof-of-existence claim registry.

Actors register that they hold a piece of data (identified by a bounded
byte fingerprint), revoke that registration, or transfer it to another actor.
"""

__version__ = "0.1.0"
