"""
Verification of snapshot signatures and chunk availability.
"""

from .chunks import DEFAULT_SHOW_MISSING, ChunkReport, check_chunks, truncate_missing
from .report import (
    EXIT_OK,
    EXIT_SIGNATURE_INVALID,
    EXIT_DECODE_ERROR,
    EXIT_MISSING_CHUNKS,
    SnapshotReport,
    verify_snapshot,
)

__all__ = [
    "DEFAULT_SHOW_MISSING",
    "ChunkReport",
    "check_chunks",
    "truncate_missing",
    "EXIT_OK",
    "EXIT_SIGNATURE_INVALID",
    "EXIT_DECODE_ERROR",
    "EXIT_MISSING_CHUNKS",
    "SnapshotReport",
    "verify_snapshot",
]
