"""
vaultcheck CLI command groups.
"""
