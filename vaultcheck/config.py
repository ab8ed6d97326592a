"""
Runtime settings from environment variables.

Environment Variables:
    VAULTCHECK_OBJECTS_DIR: Base object storage directory - default: ./objects
    VAULTCHECK_SHOW_MISSING: Max missing chunk hashes to display - default: 20
    VAULTCHECK_WORKERS: Chunk probe threads - default: 1
    VAULTCHECK_PUBKEY: Pinned signer public key (base64) - default: unset

Command-line flags take precedence over these values.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .verify.chunks import DEFAULT_SHOW_MISSING

DEFAULT_OBJECTS_DIR = "./objects"


def _env_int(key: str, default: int, minimum: int = 1) -> int:
    val = os.getenv(key)
    if not val:
        return default
    try:
        parsed = int(val)
    except ValueError:
        return default
    return parsed if parsed >= minimum else default


@dataclass
class Settings:
    objects_dir: str = DEFAULT_OBJECTS_DIR
    show_missing: int = DEFAULT_SHOW_MISSING
    workers: int = 1
    pubkey: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from VAULTCHECK_* environment variables."""
        return cls(
            objects_dir=os.getenv("VAULTCHECK_OBJECTS_DIR") or DEFAULT_OBJECTS_DIR,
            show_missing=_env_int("VAULTCHECK_SHOW_MISSING", DEFAULT_SHOW_MISSING, minimum=0),
            workers=_env_int("VAULTCHECK_WORKERS", 1),
            pubkey=os.getenv("VAULTCHECK_PUBKEY") or None,
        )
