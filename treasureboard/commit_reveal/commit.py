"""
Commitment construction for treasure boards.

Definition
----------
C = H( bomb_0 || bomb_1 || ... || bomb_n || salt )

- H is the configured hasher (SHA-256 by default).
- Each bomb is a single byte: its slot index, in the order the creator gave
  them. Order is part of the commitment; sorting would change C.
- `salt` is appended verbatim after the bombs.

The preimage (`committed_bytes`) is handed back to the creator and never
stored by this package. Without it the board cannot be revealed and its
stake stays locked in the contract.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from treasureboard.board.codec import check_slot
from treasureboard.board.parse import IndexFallback
from treasureboard.errors import DuplicateBomb, InsufficientBombs, OutOfRangeSlot
from treasureboard.utils.bytes import BytesLike, ensure_bytes, to_hex, to_int_list, to_tokens
from treasureboard.utils.hash import DEFAULT_HASHER, Hasher

log = logging.getLogger(__name__)

SaltLike = Union[BytesLike, str]


@dataclass(frozen=True, slots=True)
class Commitment:
    """Preimage and digest of a board commitment."""
    committed_bytes: bytes
    digest: bytes
    bomb_count: int
    hash_alg: str = "sha256"

    def hex(self, *, prefix: bool = True) -> str:
        return to_hex(self.digest, prefix=prefix)

    def digest_list(self) -> List[int]:
        """Digest as a list of ints, the shape `new_game` takes."""
        return to_int_list(self.digest)

    def tokens(self) -> str:
        """Preimage as space separated decimals, ready to paste into a reveal."""
        return to_tokens(self.committed_bytes)

    @property
    def bombs(self) -> List[int]:
        return list(self.committed_bytes[: self.bomb_count])

    @property
    def salt(self) -> bytes:
        return self.committed_bytes[self.bomb_count :]


def _normalize_bombs(
    bombs: Sequence[int], slot_count: int, policy: IndexFallback
) -> List[int]:
    out: List[int] = []
    for i, b in enumerate(bombs):
        try:
            out.append(check_slot(b, slot_count, position=i))
        except OutOfRangeSlot:
            if policy is IndexFallback.STRICT or i >= slot_count or i in out:
                raise
            log.warning(
                "bomb %r at position %d is outside [0, %d); substituting %d",
                b, i, slot_count, i,
            )
            out.append(i)
    return out


def _reject_duplicates(bombs: Sequence[int]) -> None:
    seen: Dict[int, List[int]] = {}
    for i, b in enumerate(bombs):
        seen.setdefault(b, []).append(i)
    for b, positions in seen.items():
        if len(positions) > 1:
            raise DuplicateBomb(b, tuple(positions))


def build_commitment(
    bombs: Sequence[int],
    slot_count: int,
    salt: SaltLike,
    *,
    hasher: Optional[Hasher] = None,
    policy: IndexFallback = IndexFallback.STRICT,
) -> Commitment:
    """
    Compute the board commitment C = H(bombs || salt).

    Parameters
    ----------
    bombs : sequence of int
        Bomb slot indices in the order the creator chose. Each must be in
        [0, slot_count) and appear once.
    slot_count : int
        Number of slots on the board (4, 16 or 32).
    salt : bytes | str
        Secret appended after the bombs; str is UTF-8 encoded.
    hasher : Hasher, optional
        Digest function; SHA-256 by default.
    policy : IndexFallback
        STRICT (default) raises OutOfRangeSlot; POSITION substitutes the
        bomb's position and logs a warning. A position that is itself off
        the board or already taken by an earlier bomb still raises
        OutOfRangeSlot for the value given.

    Raises
    ------
    OutOfRangeSlot, DuplicateBomb, InsufficientBombs
    """
    h = hasher or DEFAULT_HASHER
    picked = _normalize_bombs(bombs, slot_count, policy)
    _reject_duplicates(picked)

    required = slot_count // 2
    if len(picked) < required:
        raise InsufficientBombs(len(picked), required, slot_count)

    salt_b = ensure_bytes(salt)
    if not salt_b:
        log.warning("empty salt: the commitment can be brute forced from the bomb layout alone")

    preimage = bytes(picked) + salt_b
    return Commitment(
        committed_bytes=preimage,
        digest=h(preimage),
        bomb_count=len(picked),
        hash_alg=getattr(h, "name", "custom"),
    )


__all__ = ["Commitment", "SaltLike", "build_commitment"]
