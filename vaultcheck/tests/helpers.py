"""
Test helpers: build snapshot records and sign them with throwaway keys.
"""

import base64
import dataclasses
import json
import os
from typing import Optional, Sequence

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from vaultcheck.core.canonical import canonical_snapshot_bytes
from vaultcheck.core.models import FileEntry, SnapshotRecord


def public_key_b64(private_key: Ed25519PrivateKey) -> str:
    raw = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return base64.b64encode(raw).decode("ascii")


def make_record(
    files: Sequence[FileEntry] = (),
    parent: Optional[str] = "snap-0",
    signer_pub: str = "",
    signature: str = "",
) -> SnapshotRecord:
    return SnapshotRecord(
        id="snap-1",
        parent=parent,
        timestamp="2024-03-01T12:00:00Z",
        root="f" * 64,
        files=tuple(files),
        signer_pub=signer_pub,
        signature=signature,
    )


def sample_files() -> list:
    return [
        FileEntry(
            path="docs/readme.txt",
            mode=0o644,
            mod_time="2024-02-28T09:30:00Z",
            size=1024,
            chunk_hashes=("aa11bb22", "cc33dd44"),
        ),
        FileEntry(
            path="bin/tool",
            mode=0o755,
            mod_time="2024-02-28T09:31:00Z",
            size=4096,
            chunk_hashes=("cc33dd44", "ee55ff66"),
        ),
    ]


def sign_record(record: SnapshotRecord, private_key: Ed25519PrivateKey) -> SnapshotRecord:
    """Embed the key's public half and sign the canonical bytes."""
    with_key = dataclasses.replace(record, signer_pub=public_key_b64(private_key))
    signature = private_key.sign(canonical_snapshot_bytes(with_key))
    return dataclasses.replace(with_key, signature=base64.b64encode(signature).decode("ascii"))


def signed_record(files: Sequence[FileEntry] = (), **kwargs) -> tuple:
    """Return (private_key, signed record)."""
    private_key = Ed25519PrivateKey.generate()
    return private_key, sign_record(make_record(files=files, **kwargs), private_key)


def record_to_dict(record: SnapshotRecord) -> dict:
    return {
        "id": record.id,
        "parent": record.parent,
        "timestamp": record.timestamp,
        "root": record.root,
        "files": [
            {
                "path": f.path,
                "mode": f.mode,
                "mod_time": f.mod_time,
                "size": f.size,
                "chunk_hashes": list(f.chunk_hashes),
            }
            for f in record.files
        ],
        "signer_pub": record.signer_pub,
        "signature": record.signature,
    }


def write_record(record: SnapshotRecord, directory: str, name: str = "snapshot.json") -> str:
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(record_to_dict(record), f, indent=2)
    return path


def put_chunk(objects_dir: str, chunk_hash: str, sharded: bool = False) -> str:
    if sharded:
        path = os.path.join(objects_dir, chunk_hash[:2], chunk_hash[2:])
    else:
        path = os.path.join(objects_dir, chunk_hash)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"chunk")
    return path
