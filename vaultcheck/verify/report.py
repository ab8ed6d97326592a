"""
End-to-end snapshot verification.

Flow: canonical bytes -> signature check -> chunk presence check.
The chunk check always runs so an invalid snapshot still gets a diagnostic
chunk report; callers must not trust a record whose signature failed.
"""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.canonical import canonical_snapshot_bytes
from ..core.models import SnapshotRecord
from ..logging_config import get_logger
from ..objects.store import ObjectStore
from ..signature.verify import VerificationResult, verify_signature
from .chunks import DEFAULT_SHOW_MISSING, ChunkReport, check_chunks

EXIT_OK = 0
EXIT_SIGNATURE_INVALID = 1
EXIT_DECODE_ERROR = 2
EXIT_MISSING_CHUNKS = 3


@dataclass
class SnapshotReport:
    """
    Summary of one snapshot verification run.

    Fields:
        snapshot_id: Snapshot identifier
        parent: Parent snapshot id (None for first snapshot)
        timestamp: Snapshot timestamp text
        root: File tree root hash
        file_count: Number of file entries
        total_size: Sum of declared file sizes
        canonical_sha256: SHA-256 of the canonical signed bytes
        signature: Signature verification result
        chunks: Chunk presence result
    """
    snapshot_id: str
    parent: Optional[str]
    timestamp: str
    root: str
    file_count: int
    total_size: int
    canonical_sha256: str
    signature: VerificationResult
    chunks: ChunkReport

    @property
    def valid(self) -> bool:
        return self.signature.valid

    def exit_code(self, strict: bool = False) -> int:
        """
        Process exit status for this report.

        Args:
            strict: Treat missing chunks as failure

        Returns:
            0 ok, 1 signature invalid, 3 missing chunks (strict only)
        """
        if not self.signature.valid:
            return EXIT_SIGNATURE_INVALID
        if strict and not self.chunks.complete:
            return EXIT_MISSING_CHUNKS
        return EXIT_OK

    def to_dict(self, show_missing: int = DEFAULT_SHOW_MISSING) -> Dict[str, Any]:
        """Serialize report to dict for JSON output."""
        shown = self.chunks.shown(show_missing)
        return {
            "snapshot_id": self.snapshot_id,
            "parent": self.parent,
            "timestamp": self.timestamp,
            "root": self.root,
            "file_count": self.file_count,
            "total_size": self.total_size,
            "canonical_sha256": self.canonical_sha256,
            "signature": {
                "valid": self.signature.valid,
                "trust": self.signature.trust,
                "pubkey_id": self.signature.pubkey_id,
                "error": self.signature.error,
            },
            "chunks": {
                "unique": self.chunks.total,
                "present": self.chunks.present,
                "missing_count": len(self.chunks.missing),
                "missing": list(shown),
                "missing_hidden": len(self.chunks.missing) - len(shown),
            },
        }


def verify_snapshot(
    record: SnapshotRecord,
    objects_dir: Union[str, Path],
    override_pub: Optional[str] = None,
    workers: int = 1,
) -> SnapshotReport:
    """
    Verify snapshot signature and chunk availability.

    Args:
        record: Decoded snapshot record
        objects_dir: Base object storage directory
        override_pub: Optional pinned public key (base64)
        workers: Number of chunk probe threads

    Returns:
        SnapshotReport

    Raises:
        KeyDecodeError: If the public key cannot be decoded
        SignatureDecodeError: If the signature cannot be decoded
    """
    logger = get_logger(__name__, snapshot_id=record.id)
    logger.info(
        "Verifying snapshot",
        extra={"files": len(record.files), "pinned_key": override_pub is not None},
    )

    canonical = canonical_snapshot_bytes(record)
    signature = verify_signature(record, canonical=canonical, override_pub=override_pub)
    chunks = check_chunks(record, ObjectStore(objects_dir), workers=workers)

    return SnapshotReport(
        snapshot_id=record.id,
        parent=record.parent,
        timestamp=record.timestamp,
        root=record.root,
        file_count=len(record.files),
        total_size=record.total_size(),
        canonical_sha256=hashlib.sha256(canonical).hexdigest(),
        signature=signature,
        chunks=chunks,
    )
