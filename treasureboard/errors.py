"""
Treasure board client errors.

A small, typed hierarchy of exceptions raised by the board codec, the
commit/reveal helpers and the client facade. Callers can catch the base
`TreasureBoardError` to handle every failure, or catch the concrete
subclasses for more granular control.

Local validation errors (everything except `RemoteCallFailed`) are always
raised *before* any request leaves the process, so no stake is put at risk by
a request that fails them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence


class TreasureBoardError(Exception):
    """Base class for all treasure board client errors."""


@dataclass(frozen=True)
class InvalidSize(TreasureBoardError):
    """
    Raised when a board size label is not one of Small, Medium, Big.

    Attributes:
        label: The label as supplied by the caller.
    """
    label: str

    def __str__(self) -> str:
        return f"InvalidSize: {self.label!r} is not one of Small, Medium, Big"


@dataclass(frozen=True)
class InsufficientBombs(TreasureBoardError):
    """
    Raised when fewer than half of the board's slots are marked as bombs.

    Attributes:
        got: Number of bombs supplied.
        required: Minimum number of bombs (slot_count // 2).
        slot_count: Number of slots on the board.
    """
    got: int
    required: int
    slot_count: int

    def __str__(self) -> str:
        return (
            f"InsufficientBombs: got {self.got} bomb(s), a board of "
            f"{self.slot_count} slots needs at least {self.required}"
        )


@dataclass(frozen=True)
class OutOfRangeSlot(TreasureBoardError):
    """
    Raised when a bomb or a reservation index is outside [0, slot_count).

    Attributes:
        index: The offending slot index.
        slot_count: Number of slots on the board.
        position: Position of the index in the caller's sequence, if any.
    """
    index: Any
    slot_count: int
    position: Optional[int] = None

    def __str__(self) -> str:
        where = f" at position {self.position}" if self.position is not None else ""
        return (
            f"OutOfRangeSlot: slot {self.index!r}{where} is outside "
            f"[0, {self.slot_count})"
        )


@dataclass(frozen=True)
class DuplicateBomb(TreasureBoardError):
    """Raised when the same slot is marked as a bomb more than once."""
    index: int
    positions: Sequence[int]

    def __str__(self) -> str:
        return f"DuplicateBomb: slot {self.index} listed at positions {list(self.positions)}"


@dataclass(frozen=True)
class InvalidSolutionByte(TreasureBoardError):
    """
    Raised when a reveal token is not an integer in [0, 255].

    Attributes:
        position: Index of the token in the solution.
        value: The offending token.
    """
    position: int
    value: Any

    def __str__(self) -> str:
        return (
            f"InvalidSolutionByte: token {self.value!r} at position "
            f"{self.position} is not a byte in [0, 255]"
        )


@dataclass(frozen=True)
class ParseError(TreasureBoardError):
    """Raised when a whitespace-delimited token is not decimal text."""
    token: str
    position: Optional[int] = None
    field: Optional[str] = None

    def __str__(self) -> str:
        bits = []
        if self.field:
            bits.append(self.field)
        if self.position is not None:
            bits.append(f"position {self.position}")
        where = f" ({', '.join(bits)})" if bits else ""
        return f"ParseError: {self.token!r}{where} is not a decimal integer"


@dataclass(frozen=True)
class RemoteCallFailed(TreasureBoardError):
    """
    Raised when the remote contract call fails (transport or execution error).

    The remote message is carried verbatim; nothing is retried for
    state-changing calls.

    Attributes:
        method: Contract method that failed (games/new_game/play/reveal).
        message: Remote error message, verbatim.
        code: Remote error code if one was returned.
        data: Extra error payload, if any.
    """
    method: str
    message: str
    code: Optional[int] = None
    data: Optional[Any] = None

    def __str__(self) -> str:
        code = f" code={self.code}" if self.code is not None else ""
        extra = f" data={self.data!r}" if self.data is not None else ""
        return f"RemoteCallFailed[{self.method}]{code}: {self.message}{extra}"


__all__ = [
    "TreasureBoardError",
    "InvalidSize",
    "InsufficientBombs",
    "OutOfRangeSlot",
    "DuplicateBomb",
    "InvalidSolutionByte",
    "ParseError",
    "RemoteCallFailed",
]
