"""
Chunk presence check against an object store.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..core.models import SnapshotRecord
from ..logging_config import get_logger
from ..objects.store import ObjectStore

DEFAULT_SHOW_MISSING = 20


@dataclass(frozen=True)
class ChunkReport:
    """
    Result of probing every unique chunk of a snapshot.

    Fields:
        total: Number of unique chunk hashes referenced
        missing: Hashes found in neither layout (sorted)
    """
    total: int
    missing: Tuple[str, ...] = ()

    @property
    def present(self) -> int:
        return self.total - len(self.missing)

    @property
    def complete(self) -> bool:
        return not self.missing

    def shown(self, limit: int = DEFAULT_SHOW_MISSING) -> Tuple[str, ...]:
        return truncate_missing(self.missing, limit)[0]

    def hidden_count(self, limit: int = DEFAULT_SHOW_MISSING) -> int:
        return truncate_missing(self.missing, limit)[1]


def truncate_missing(missing: Sequence[str], limit: int) -> Tuple[Tuple[str, ...], int]:
    """
    Cut the missing list down for display.

    Args:
        missing: Missing chunk hashes
        limit: Maximum number of hashes to show

    Returns:
        (shown hashes, count of hashes not shown) tuple

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    shown = tuple(missing[:limit])
    return shown, len(missing) - len(shown)


def check_chunks(record: SnapshotRecord, store: ObjectStore, workers: int = 1) -> ChunkReport:
    """
    Probe the store for every unique chunk referenced by the snapshot.

    A chunk shared by several files is probed once. Probes are independent
    existence checks, so running them on a thread pool changes nothing but
    wall time.

    Args:
        record: Snapshot record
        store: Object store to probe
        workers: Number of probe threads (1 = sequential)

    Returns:
        ChunkReport with sorted missing hashes
    """
    logger = get_logger(__name__, snapshot_id=record.id)
    hashes = sorted(record.unique_chunk_hashes())

    if workers > 1 and len(hashes) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            present = list(pool.map(store.exists, hashes))
    else:
        present = [store.exists(h) for h in hashes]

    missing = tuple(h for h, ok in zip(hashes, present) if not ok)

    if missing:
        logger.warning(
            "Missing chunks",
            extra={"unique_chunks": len(hashes), "missing": len(missing)},
        )
    else:
        logger.info("All chunks present", extra={"unique_chunks": len(hashes)})

    return ChunkReport(total=len(hashes), missing=missing)
