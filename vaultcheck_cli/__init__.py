"""
vaultcheck CLI - Snapshot metadata verification

Commands:
- vaultcheck snapshot verify - Signature + chunk availability check
- vaultcheck snapshot inspect - List snapshot files
- vaultcheck snapshot canonical - Dump canonical signed bytes
- vaultcheck version
"""

__version__ = "0.1.0"
