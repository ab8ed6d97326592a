"""
Test suite for snapshot verification.

Focus areas:
- Canonical encoding byte-exactness
- Signature verification and tamper detection
- Chunk lookup across flat and sharded layouts
- CLI exit codes
"""
