"""HMAC-SHA256 signing and shared-secret helpers.

Senders sign the exact request body bytes. Receivers must verify against
the raw body they received, before any JSON parsing.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import string

SECRET_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def _to_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def sign(secret: str | bytes, body: str | bytes) -> str:
    """Compute the HMAC-SHA256 signature of a webhook body.

    Args:
        secret: Shared secret used as the HMAC key.
        body: Serialized payload. Strings are UTF-8 encoded.

    Returns:
        Lowercase hex digest (64 characters).
    """
    return hmac.new(
        key=_to_bytes(secret),
        msg=_to_bytes(body),
        digestmod=hashlib.sha256,
    ).hexdigest()


def verify_signature(secret: str | bytes, signature: str, body: str | bytes) -> bool:
    """Verify a webhook signature.

    Args:
        secret: Shared secret used as the HMAC key.
        signature: Value of the X-Signature (or X-<Name>-Signature) header.
        body: Raw request body as received.

    Returns:
        True if the signature matches exactly (case-sensitive), False otherwise.
    """
    expected = sign(secret, body)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))


def generate_secret(length: int = 32) -> str:
    """Generate a random alphanumeric shared secret.

    Each character is drawn independently from ``a-zA-Z0-9`` using the
    ``secrets`` module.

    Args:
        length: Number of characters.

    Returns:
        The generated secret.

    Raises:
        ValueError: If length is negative.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")
    return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(length))


__all__ = ["SECRET_ALPHABET", "generate_secret", "sign", "verify_signature"]
