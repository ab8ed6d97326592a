"""
Canonical serialization for snapshot signatures.

This module is the heart of signature verification. The producer signs the
output of Go's encoding/json for its snapshot struct, so the bytes built here
must match that output exactly:
- fixed struct field order (never sorted)
- no whitespace
- Go string escaping, including the HTML-safe escapes for <, > and &
- null for an absent parent

The encoder walks typed record attributes only. It never goes through a
generic dict or json.dumps, so field order and escaping are structural.
"""

import re
from typing import List

from .models import FileEntry, SnapshotRecord

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Control characters, quote, backslash, HTML-sensitive characters,
# U+2028/U+2029 line separators and lone surrogates.
_ESCAPE_RE = re.compile(
    "[\x00-\x1f\"\\\\<>&%s%s%s-%s]" % (chr(0x2028), chr(0x2029), chr(0xD800), chr(0xDFFF))
)

_REPLACEMENT_CHAR = chr(0xFFFD)


def _escape_char(match: "re.Match") -> str:
    ch = match.group(0)
    short = _SHORT_ESCAPES.get(ch)
    if short is not None:
        return short
    code = ord(ch)
    if 0xD800 <= code <= 0xDFFF:
        # Unpaired surrogate: Go coerces invalid text to U+FFFD
        return _REPLACEMENT_CHAR
    return "\\u%04x" % code


def encode_string(value: str) -> str:
    """
    Encode string as a JSON literal the way Go's json.Marshal does.

    Rules:
    - quote and backslash are backslash-escaped
    - \\n, \\r, \\t use short escapes; other C0 controls use \\u00xx
      (including \\b and \\f)
    - <, > and & are escaped as \\u003c, \\u003e, \\u0026
    - U+2028 and U+2029 are escaped
    - everything else is emitted as raw UTF-8

    Args:
        value: String to encode

    Returns:
        Quoted JSON string literal
    """
    return '"' + _ESCAPE_RE.sub(_escape_char, value) + '"'


def encode_uint(value: int) -> str:
    """Encode unsigned integer as plain decimal digits."""
    return "%d" % value


def _encode_file(entry: FileEntry, out: List[str]) -> None:
    out.append('{"path":')
    out.append(encode_string(entry.path))
    out.append(',"mode":')
    out.append(encode_uint(entry.mode))
    out.append(',"mod_time":')
    out.append(encode_string(entry.mod_time))
    out.append(',"size":')
    out.append(encode_uint(entry.size))
    out.append(',"chunk_hashes":[')
    out.append(",".join(encode_string(h) for h in entry.chunk_hashes))
    out.append("]}")


def canonical_snapshot_str(record: SnapshotRecord) -> str:
    """
    Deterministic JSON text of the signed portion of a snapshot.

    Field order: id, parent, timestamp, root, files, signer_pub.
    The signature field is never part of the signed bytes.
    """
    out: List[str] = ['{"id":', encode_string(record.id)]

    out.append(',"parent":')
    out.append("null" if record.parent is None else encode_string(record.parent))

    out.append(',"timestamp":')
    out.append(encode_string(record.timestamp))
    out.append(',"root":')
    out.append(encode_string(record.root))

    out.append(',"files":[')
    for i, entry in enumerate(record.files):
        if i:
            out.append(",")
        _encode_file(entry, out)
    out.append("]")

    out.append(',"signer_pub":')
    out.append(encode_string(record.signer_pub))
    out.append("}")
    return "".join(out)


def canonical_snapshot_bytes(record: SnapshotRecord) -> bytes:
    """
    Canonical bytes for signature verification.

    Returns:
        UTF-8 encoded canonical JSON
    """
    return canonical_snapshot_str(record).encode("utf-8")
