"""
Registry Release — Artifact checksums.

The registry verifies the uploaded archive against the checksum sent with
the draft release. Checksums carry an explicit algorithm prefix, e.g.
``sha512:<hex>``.
"""

from __future__ import annotations

import hashlib

ALGORITHM = "sha512"


def compute_digest(data: bytes) -> str:
    """Return the lowercase hex SHA-512 digest of ``data``."""
    return hashlib.sha512(data).hexdigest()


def format_checksum(data: bytes) -> str:
    return f"{ALGORITHM}:{compute_digest(data)}"
