"""
Read-only view of a content-addressed chunk store.

Chunks are files named by their content hash. Two layouts are accepted:
- flat: <objects_dir>/<hash>
- sharded: <objects_dir>/<hash[:2]>/<hash[2:]>

Only existence is checked; chunk contents are never read or re-hashed.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

SHARD_PREFIX_LEN = 2


class ObjectStore:
    """
    Chunk existence lookup over an objects directory.

    Storage format:
    - objects/ directory
    - Each chunk: objects/{hash} or objects/{hash[:2]}/{hash[2:]}
    """

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize object store view.

        Args:
            directory: Base object storage directory (not created if missing)
        """
        self.directory = Path(directory)

    def candidate_paths(self, chunk_hash: str) -> List[Path]:
        """
        Paths where a chunk may live, in lookup order.

        Args:
            chunk_hash: Chunk content hash

        Returns:
            Flat path, then sharded path when the hash is long enough
        """
        # Empty hash is never present; joining "" would test objects_dir itself
        if not chunk_hash:
            return []

        paths = [self.directory / chunk_hash]
        if len(chunk_hash) > SHARD_PREFIX_LEN:
            paths.append(
                self.directory / chunk_hash[:SHARD_PREFIX_LEN] / chunk_hash[SHARD_PREFIX_LEN:]
            )
        return paths

    def locate(self, chunk_hash: str) -> Optional[Path]:
        """
        Find the stored path of a chunk.

        A filesystem error while probing counts as absent.

        Returns:
            First existing candidate path, or None if chunk is missing
        """
        for path in self.candidate_paths(chunk_hash):
            try:
                if path.exists():
                    return path
            except (OSError, ValueError) as e:
                logger.debug("Probe failed for %s: %s", path, e)
        return None

    def exists(self, chunk_hash: str) -> bool:
        """Check whether a chunk is present in either layout."""
        return self.locate(chunk_hash) is not None
