"""
Verify a claimed solution before revealing it.

We recompute H(solution) over the bytes exactly as given (no sorting, no
deduplication). The contract is the authority that compares against the
stored commitment and pays out; this check exists so a typo is caught before
a transaction fee is spent.

This module exposes:
- `validate_solution(...)` : ints → bytes, raising InvalidSolutionByte.
- `verify_reveal(...)`     : digest + optional constant-time comparison.
- `classify_winners(...)`  : which reservations on a board hit a bomb.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from treasureboard.constants import MAX_BYTE
from treasureboard.errors import InvalidSolutionByte
from treasureboard.session.state import GameBoard
from treasureboard.utils.bytes import BytesLike, from_hex, to_hex
from treasureboard.utils.hash import DEFAULT_HASHER, Hasher

log = logging.getLogger(__name__)

SolutionLike = Union[BytesLike, Sequence[int]]


def validate_solution(solution: SolutionLike) -> bytes:
    """
    Turn a solution into bytes, refusing anything that is not a byte.

    bytes-like input is taken as is; sequences must hold ints in [0, 255].
    """
    if isinstance(solution, (bytes, bytearray, memoryview)):
        return bytes(solution)
    if isinstance(solution, str):
        raise TypeError("solution must be bytes or a sequence of ints, not str")
    out = bytearray()
    for i, v in enumerate(solution):
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= MAX_BYTE:
            raise InvalidSolutionByte(i, v)
        out.append(v)
    return bytes(out)


def normalize_digest(digest: Union[BytesLike, str, Sequence[int]]) -> bytes:
    """Accept raw bytes, 0x-hex, or the list-of-ints shape the contract stores."""
    if isinstance(digest, str):
        return from_hex(digest)
    if isinstance(digest, (bytes, bytearray, memoryview)):
        return bytes(digest)
    return validate_solution(digest)


@dataclass(frozen=True, slots=True)
class RevealResult:
    """Outcome of a local reveal check."""
    valid: bool
    digest: bytes
    solution: bytes
    checked: bool = False  # True when compared against an expected commitment

    def hex(self, *, prefix: bool = True) -> str:
        return to_hex(self.digest, prefix=prefix)


def verify_reveal(
    solution: SolutionLike,
    *,
    expected: Optional[Union[BytesLike, str, Sequence[int]]] = None,
    hasher: Optional[Hasher] = None,
) -> RevealResult:
    """
    Recompute the digest of `solution` and, when `expected` is given, compare.

    Without `expected` the result is valid whenever the solution is well
    formed; the digest is always returned so callers can display it.

    Raises
    ------
    InvalidSolutionByte
        If any element is not an int in [0, 255].
    """
    sol = validate_solution(solution)
    h = hasher or DEFAULT_HASHER
    got = h(sol)
    if expected is None:
        return RevealResult(valid=True, digest=got, solution=sol)

    ok = hmac.compare_digest(got, normalize_digest(expected))
    if not ok:
        log.warning("reveal digest %s does not match the expected commitment", to_hex(got))
    return RevealResult(valid=ok, digest=got, solution=sol, checked=True)


@dataclass(frozen=True, slots=True)
class WinnerReport:
    """Reserved slots split by whether they hit a bomb."""
    bombs: Tuple[int, ...]
    winners: Tuple[int, ...]
    losers: Tuple[int, ...]


def classify_winners(
    board: GameBoard,
    solution: SolutionLike,
    *,
    bomb_count: Optional[int] = None,
) -> WinnerReport:
    """
    Split a board's reservations into winners and losers.

    The first `bomb_count` bytes of the solution are the bombs (default:
    half the board, the minimum a creator must commit); the rest is salt.
    """
    sol = validate_solution(solution)
    n = board.allowed_reservations if bomb_count is None else int(bomb_count)
    if n < 0 or n > len(sol):
        raise ValueError(f"bomb_count {n} outside [0, {len(sol)}]")
    bombs = tuple(sol[:n])
    bomb_set = set(bombs)
    winners = tuple(s for s in board.reserved_slots if s not in bomb_set)
    losers = tuple(s for s in board.reserved_slots if s in bomb_set)
    return WinnerReport(bombs=bombs, winners=winners, losers=losers)


__all__ = [
    "SolutionLike",
    "RevealResult",
    "WinnerReport",
    "validate_solution",
    "normalize_digest",
    "verify_reveal",
    "classify_winners",
]
