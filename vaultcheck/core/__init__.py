"""
Core snapshot primitives.

This module provides:
- SnapshotRecord / FileEntry: Read-only snapshot metadata
- Canonical: Byte-exact encoding of the signed snapshot portion
- Errors: Decode and verification error types
"""

from .models import FileEntry, SnapshotRecord, load_snapshot
from .canonical import (
    canonical_snapshot_bytes,
    canonical_snapshot_str,
    encode_string,
    encode_uint,
)
from .errors import (
    VaultCheckError,
    DecodeError,
    KeyDecodeError,
    SignatureDecodeError,
    SignatureInvalid,
)

__all__ = [
    "FileEntry",
    "SnapshotRecord",
    "load_snapshot",
    "canonical_snapshot_bytes",
    "canonical_snapshot_str",
    "encode_string",
    "encode_uint",
    "VaultCheckError",
    "DecodeError",
    "KeyDecodeError",
    "SignatureDecodeError",
    "SignatureInvalid",
]
