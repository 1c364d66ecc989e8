"""
treasureboard.utils
===================

Small byte/hex and hashing helpers shared by the commit and reveal paths.
"""

from .bytes import BytesLike, ensure_bytes, from_hex, to_hex  # noqa: F401
from .hash import Hasher, get_hasher, sha256  # noqa: F401

__all__ = ["BytesLike", "ensure_bytes", "from_hex", "to_hex", "Hasher", "get_hasher", "sha256"]
