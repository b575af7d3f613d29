"""
Fingerprint boundary - Enforces the MaxClaimLength bound.

Fingerprints are checked here before they reach the registry. Failures
are plain ValueErrors, not ClaimErrors: an oversized fingerprint is a
malformed request, not a registry outcome.
"""

import binascii


class InvalidFingerprint(ValueError):
    """Fingerprint text could not be decoded."""

    pass


class FingerprintTooLong(InvalidFingerprint):
    """Fingerprint exceeds the configured MaxClaimLength."""

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(f"Fingerprint is {length} bytes, limit is {max_length}")
        self.length = length
        self.max_length = max_length


def bound_fingerprint(raw: bytes, max_length: int) -> bytes:
    """
    Check a raw fingerprint against the length bound.

    No normalization is applied; two fingerprints are equal iff their
    bytes are equal.

    Raises:
        FingerprintTooLong: If len(raw) > max_length
    """
    if len(raw) > max_length:
        raise FingerprintTooLong(len(raw), max_length)
    return bytes(raw)


def parse_hex_fingerprint(text: str, max_length: int) -> bytes:
    """
    Decode a hex fingerprint (optional 0x prefix) and bound it.

    Raises:
        InvalidFingerprint: If text is not valid hex
        FingerprintTooLong: If the decoded value exceeds max_length
    """
    digits = text[2:] if text[:2].lower() == "0x" else text
    try:
        raw = binascii.unhexlify(digits)
    except (binascii.Error, ValueError) as e:
        raise InvalidFingerprint(f"Not a hex fingerprint: {text!r}") from e
    return bound_fingerprint(raw, max_length)


def format_fingerprint(fingerprint: bytes) -> str:
    """Render a fingerprint as 0x-prefixed lowercase hex."""
    return "0x" + fingerprint.hex()
