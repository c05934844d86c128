"""Content fingerprinting.

A fingerprint is the MD5 hex digest of a file's whole byte content.  It is
used for equality checks between runs only, not as a security primitive.
"""

from __future__ import annotations

import hashlib

from change_tracker.errors import InvalidInputError

_BYTE_TYPES = (bytes, bytearray, memoryview)


def compute_fingerprint(contents: object) -> str:
    """Return the fingerprint of *contents*.

    Raises InvalidInputError for anything that is not a byte sequence,
    including None and str.
    """
    if not isinstance(contents, _BYTE_TYPES):
        raise InvalidInputError(
            f"File contents must be bytes-like, got {type(contents).__name__}"
        )
    if isinstance(contents, memoryview) and not contents.c_contiguous:
        contents = contents.tobytes()
    return hashlib.md5(contents, usedforsecurity=False).hexdigest()


def fingerprint_record(path: str, record: object) -> str:
    """Fingerprint the ``contents`` of *record*, naming *path* on failure."""
    contents = getattr(record, "contents", None)
    try:
        return compute_fingerprint(contents)
    except InvalidInputError as exc:
        raise InvalidInputError(f"Cannot fingerprint {path!r}: {exc}", path=path) from exc
