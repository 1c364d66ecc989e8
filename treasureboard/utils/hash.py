from __future__ import annotations

import hashlib
from typing import Callable, Dict, Protocol, runtime_checkable

from .bytes import BytesLike, ensure_bytes

DIGEST_LEN = 32


@runtime_checkable
class Hasher(Protocol):
    """Anything that maps a byte sequence to a fixed-length digest."""

    name: str
    digest_size: int

    def __call__(self, data: BytesLike) -> bytes: ...


class _HashlibHasher:
    """Hasher backed by a hashlib constructor."""

    __slots__ = ("name", "digest_size", "_factory")

    def __init__(self, name: str, factory: Callable[[], "hashlib._Hash"]) -> None:
        self.name = name
        self._factory = factory
        self.digest_size = factory().digest_size

    def __call__(self, data: BytesLike) -> bytes:
        h = self._factory()
        h.update(ensure_bytes(data))
        return h.digest()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Hasher({self.name})"


# --- SHA-256 ------------------------------------------------------------------
# Boards are committed with SHA-256 unless configured otherwise; the contract compares against
# whatever digest was published, so this stays the default.

def sha256(data: BytesLike) -> bytes:
    """Return SHA-256 digest of *data* (bytes)."""
    return hashlib.sha256(ensure_bytes(data)).digest()


_REGISTRY: Dict[str, _HashlibHasher] = {
    "sha256": _HashlibHasher("sha256", hashlib.sha256),
    "sha3_256": _HashlibHasher("sha3_256", hashlib.sha3_256),
    "blake2b256": _HashlibHasher("blake2b256", lambda: hashlib.blake2b(digest_size=DIGEST_LEN)),
}

DEFAULT_HASHER: Hasher = _REGISTRY["sha256"]


def available_hashers() -> tuple[str, ...]:
    return tuple(sorted(_REGISTRY))


def get_hasher(name: str | None = None) -> Hasher:
    """
    Look up a registered hasher by name (case-insensitive, '-' treated as '_').

    Raises ValueError for unknown names.
    """
    if name is None:
        return DEFAULT_HASHER
    key = name.strip().lower().replace("-", "_")
    try:
        return _REGISTRY[key]
    except KeyError:
        raise ValueError(
            f"unknown hash algorithm {name!r}; expected one of {available_hashers()}"
        ) from None


__all__ = [
    "DIGEST_LEN",
    "Hasher",
    "DEFAULT_HASHER",
    "available_hashers",
    "get_hasher",
    "sha256",
]
