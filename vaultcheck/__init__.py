"""
vaultcheck - snapshot metadata authentication and chunk availability checks.

Packages:
- core: Snapshot model, canonical encoding, errors
- signature: Ed25519 key/signature decoding and verification
- objects: Read-only content-addressed chunk store
- verify: Chunk presence check and end-to-end report
"""

__version__ = "0.1.0"
