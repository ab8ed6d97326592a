"""
Content-addressed object store access (read-only).
"""

from .store import ObjectStore, SHARD_PREFIX_LEN

__all__ = ["ObjectStore", "SHARD_PREFIX_LEN"]
