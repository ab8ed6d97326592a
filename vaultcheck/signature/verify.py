"""
Snapshot signature verification.

Trust levels:
- pinned: caller supplied a known-good public key out of band
- embedded: the record's own signer_pub was used. This only proves the
  record is self-consistent, not who produced it.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.canonical import canonical_snapshot_bytes
from ..core.errors import SignatureInvalid
from ..core.models import SnapshotRecord
from ..logging_config import get_logger
from .keys import VerifyingKey, decode_signature

SIGNATURE_FAILED = "signature verification failed"


class TrustMode:
    """Where the verification key came from."""
    PINNED = "pinned"
    EMBEDDED = "embedded"


@dataclass
class VerificationResult:
    """
    Result of snapshot signature verification.

    Fields:
        valid: Signature matches the canonical bytes
        trust: TrustMode.PINNED or TrustMode.EMBEDDED
        pubkey_id: Identifier of the key used
        error: Error message if verification failed
    """
    valid: bool
    trust: str
    pubkey_id: str
    error: Optional[str] = None

    @property
    def pinned(self) -> bool:
        return self.trust == TrustMode.PINNED

    def raise_for_status(self) -> None:
        """
        Raise if the signature did not verify.

        Raises:
            SignatureInvalid: If valid is False
        """
        if not self.valid:
            raise SignatureInvalid(self.error or SIGNATURE_FAILED)


def resolve_verifying_key(
    record: SnapshotRecord,
    override_pub: Optional[str] = None,
) -> Tuple[VerifyingKey, str]:
    """
    Pick the verification key: override if given, else embedded signer_pub.

    Returns:
        (VerifyingKey, trust mode) tuple

    Raises:
        KeyDecodeError: If the chosen key cannot be decoded
    """
    if override_pub is not None:
        return VerifyingKey.from_base64(override_pub), TrustMode.PINNED
    return VerifyingKey.from_base64(record.signer_pub), TrustMode.EMBEDDED


def verify_signature(
    record: SnapshotRecord,
    canonical: Optional[bytes] = None,
    override_pub: Optional[str] = None,
) -> VerificationResult:
    """
    Verify snapshot signature over its canonical bytes.

    Args:
        record: Decoded snapshot record
        canonical: Precomputed canonical bytes (computed if omitted)
        override_pub: Optional base64 public key to pin instead of signer_pub

    Returns:
        VerificationResult. A mismatch is reported, not raised.

    Raises:
        KeyDecodeError: If the public key cannot be decoded
        SignatureDecodeError: If the signature cannot be decoded
    """
    logger = get_logger(__name__, snapshot_id=record.id)

    verifying_key, trust = resolve_verifying_key(record, override_pub)
    signature = decode_signature(record.signature)

    if canonical is None:
        canonical = canonical_snapshot_bytes(record)

    pubkey_id = verifying_key.get_pubkey_id()
    if trust == TrustMode.EMBEDDED:
        logger.warning(
            "Verifying with embedded signer_pub; provenance is not established without a pinned key",
            extra={"pubkey_id": pubkey_id},
        )

    if not verifying_key.verify(canonical, signature):
        logger.error("Snapshot signature invalid", extra={"pubkey_id": pubkey_id, "trust": trust})
        return VerificationResult(
            valid=False,
            trust=trust,
            pubkey_id=pubkey_id,
            error=SIGNATURE_FAILED,
        )

    logger.info("Snapshot signature valid", extra={"pubkey_id": pubkey_id, "trust": trust})
    return VerificationResult(valid=True, trust=trust, pubkey_id=pubkey_id)
