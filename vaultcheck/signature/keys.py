"""
Ed25519 public keys and signatures for snapshot verification.

Keys and signatures travel as standard base64 of their raw bytes:
- public key: 32 bytes
- signature: 64 bytes
"""

import base64
import binascii
import hashlib
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from cryptography.hazmat.primitives import serialization

from ..core.errors import KeyDecodeError, SignatureDecodeError

ED25519_PUBLIC_KEY_SIZE = 32
ED25519_SIGNATURE_SIZE = 64


def decode_base64(value: str) -> bytes:
    """
    Strict standard base64 decode.

    Raises:
        binascii.Error: If value contains non-alphabet characters or bad padding
    """
    return base64.b64decode(value, validate=True)


class VerifyingKey:
    """
    Ed25519 verifying key (public key only).

    Used for signature verification without private key access.
    """

    def __init__(self, public_key: Ed25519PublicKey):
        self.public_key = public_key

    @classmethod
    def from_base64(cls, key_b64: str) -> "VerifyingKey":
        """
        Load public key from base64 of its raw 32 bytes.

        Raises:
            KeyDecodeError: If base64 is malformed or key length is wrong
        """
        try:
            raw = decode_base64(key_b64)
        except (binascii.Error, ValueError) as e:
            raise KeyDecodeError(f"failed to decode public key base64: {e}") from e

        if len(raw) != ED25519_PUBLIC_KEY_SIZE:
            raise KeyDecodeError(
                f"invalid ed25519 public key: expected {ED25519_PUBLIC_KEY_SIZE} bytes, got {len(raw)}"
            )

        try:
            public_key = Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as e:
            raise KeyDecodeError(f"invalid ed25519 public key: {e}") from e

        return cls(public_key)

    def raw_bytes(self) -> bytes:
        """Raw 32-byte public key."""
        return self.public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def to_base64(self) -> str:
        return base64.b64encode(self.raw_bytes()).decode("ascii")

    def verify(self, data: bytes, signature: bytes) -> bool:
        """
        Verify signature over data.

        Args:
            data: Exact bytes that were signed
            signature: Raw signature bytes

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            self.public_key.verify(signature, data)
            return True
        except InvalidSignature:
            return False

    def get_pubkey_id(self) -> str:
        """
        Get public key identifier (SHA-256 of raw key, first 16 chars).

        Returns:
            Hex string (16 characters)
        """
        return hashlib.sha256(self.raw_bytes()).hexdigest()[:16]


def decode_signature(signature_b64: str) -> bytes:
    """
    Decode base64 signature and check its length.

    Raises:
        SignatureDecodeError: If base64 is malformed or length is wrong
    """
    try:
        raw = decode_base64(signature_b64)
    except (binascii.Error, ValueError) as e:
        raise SignatureDecodeError(f"failed to decode signature base64: {e}") from e

    if len(raw) != ED25519_SIGNATURE_SIZE:
        raise SignatureDecodeError(
            f"invalid signature format: expected {ED25519_SIGNATURE_SIZE} bytes, got {len(raw)}"
        )
    return raw
