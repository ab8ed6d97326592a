"""
Snapshot metadata model.

A snapshot record captures:
- Identity and parent link
- Merkle-style root of the file tree
- Ordered file entries with their chunk hash sequences
- Embedded signer public key and signature (base64)

Records are read-only once decoded. Sequence fields are tuples so the
order seen at signing time is preserved and cannot be mutated.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple

from .errors import DecodeError

MAX_UINT32 = 2**32 - 1
MAX_UINT64 = 2**64 - 1


@dataclass(frozen=True)
class FileEntry:
    """
    One file in a snapshot.

    Fields:
        path: Relative file path (opaque text)
        mode: Permission/type bits (uint32)
        mod_time: Modification time text, kept verbatim
        size: Declared byte count (uint64)
        chunk_hashes: Content hashes of the file's chunks, in chunk order
    """
    path: str
    mode: int
    mod_time: str
    size: int
    chunk_hashes: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileEntry":
        """Deserialize file entry from dict."""
        if not isinstance(data, dict):
            raise DecodeError(f"file entry must be an object, got {type(data).__name__}")

        return cls(
            path=_require_str(data, "path"),
            mode=_require_uint(data, "mode", MAX_UINT32),
            mod_time=_require_str(data, "mod_time"),
            size=_require_uint(data, "size", MAX_UINT64),
            chunk_hashes=tuple(_nullable_list(data, "chunk_hashes", _as_str)),
        )


@dataclass(frozen=True)
class SnapshotRecord:
    """
    Signed snapshot metadata.

    Fields:
        id: Snapshot identifier
        parent: Previous snapshot id, or None for a first snapshot
        timestamp: Creation time text, kept verbatim
        root: Content hash summarizing the file tree
        files: File entries in signed order
        signer_pub: Embedded Ed25519 public key (base64)
        signature: Ed25519 signature over the canonical bytes (base64)
    """
    id: str
    parent: Optional[str]
    timestamp: str
    root: str
    files: Tuple[FileEntry, ...]
    signer_pub: str
    signature: str

    def total_size(self) -> int:
        """Sum of declared file sizes."""
        return sum(f.size for f in self.files)

    def unique_chunk_hashes(self) -> FrozenSet[str]:
        """Chunk hashes referenced by any file, deduplicated."""
        return frozenset(h for f in self.files for h in f.chunk_hashes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapshotRecord":
        """
        Deserialize snapshot record from a decoded JSON object.

        Raises:
            DecodeError: If a required field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise DecodeError(f"snapshot must be a JSON object, got {type(data).__name__}")

        parent = data.get("parent")
        if parent is not None and not isinstance(parent, str):
            raise DecodeError("field 'parent' must be a string or null")

        return cls(
            id=_require_str(data, "id"),
            parent=parent,
            timestamp=_require_str(data, "timestamp"),
            root=_require_str(data, "root"),
            files=tuple(_nullable_list(data, "files", FileEntry.from_dict)),
            signer_pub=_require_str(data, "signer_pub"),
            signature=_require_str(data, "signature"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "SnapshotRecord":
        """Deserialize from JSON string."""
        try:
            data = json.loads(json_str)
        except ValueError as e:
            raise DecodeError(f"failed to parse snapshot JSON: {e}") from e
        return cls.from_dict(data)


def load_snapshot(path: str) -> SnapshotRecord:
    """
    Load snapshot record from a JSON file.

    Args:
        path: Path to decrypted snapshot metadata JSON

    Returns:
        SnapshotRecord instance

    Raises:
        DecodeError: If the file cannot be read or decoded
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            json_str = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DecodeError(f"failed to open snapshot file {path}: {e}") from e

    return SnapshotRecord.from_json(json_str)


def _require_str(data: Dict[str, Any], key: str) -> str:
    if key not in data:
        raise DecodeError(f"missing field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise DecodeError(f"field '{key}' must be a string")
    return value


def _require_uint(data: Dict[str, Any], key: str, maximum: int) -> int:
    if key not in data:
        raise DecodeError(f"missing field '{key}'")
    value = data[key]
    # bool is an int subclass; JSON true/false is not a number
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"field '{key}' must be an unsigned integer")
    if value < 0 or value > maximum:
        raise DecodeError(f"field '{key}' out of range: {value}")
    return value


def _nullable_list(data: Dict[str, Any], key: str, convert):
    if key not in data:
        raise DecodeError(f"missing field '{key}'")
    # A nil Go slice marshals as null
    value = data[key]
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"field '{key}' must be an array")
    return [convert(item) for item in value]


def _as_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DecodeError("chunk hash must be a string")
    return value
