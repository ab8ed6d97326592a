"""
Ed25519 signature verification for snapshot metadata.

Provides:
- VerifyingKey: base64 public key decoding and verification
- Signature decoding with length checks
- Key resolution (pinned override vs embedded signer_pub)
"""

from .keys import (
    ED25519_PUBLIC_KEY_SIZE,
    ED25519_SIGNATURE_SIZE,
    VerifyingKey,
    decode_signature,
)
from .verify import (
    TrustMode,
    VerificationResult,
    resolve_verifying_key,
    verify_signature,
)

__all__ = [
    "ED25519_PUBLIC_KEY_SIZE",
    "ED25519_SIGNATURE_SIZE",
    "VerifyingKey",
    "decode_signature",
    "TrustMode",
    "VerificationResult",
    "resolve_verifying_key",
    "verify_signature",
]
