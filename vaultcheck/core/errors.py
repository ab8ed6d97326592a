"""
Exception types for snapshot verification.
"""


class VaultCheckError(Exception):
    """Base class for all vaultcheck errors."""
    pass


class DecodeError(VaultCheckError):
    """Raised when a snapshot record cannot be decoded into its typed shape."""
    pass


class KeyDecodeError(DecodeError):
    """Raised when a public key is not valid base64 or has the wrong length."""
    pass


class SignatureDecodeError(DecodeError):
    """Raised when a signature is not valid base64 or has the wrong length."""
    pass


class SignatureInvalid(VaultCheckError):
    """Raised when the signature does not match the canonical snapshot bytes."""
    pass
