"""
Board codec: size labels ↔ slot counts, slot bounds and stake amounts.

    Small  → 4 slots
    Medium → 16 slots
    Big    → 32 slots

Labels are matched case-insensitively; anything else raises `InvalidSize`
instead of quietly becoming a Small board.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from treasureboard.constants import PLAY_STAKE_UNITS, SLOT_COUNTS
from treasureboard.errors import InvalidSize, OutOfRangeSlot


class BoardSize(Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    BIG = "Big"

    @property
    def label(self) -> str:
        """Wire label as the contract spells it."""
        return self.value

    @property
    def slot_count(self) -> int:
        return SLOT_COUNTS[self.value.lower()]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


SizeLike = Union[BoardSize, str]


def size_from_label(label: SizeLike) -> BoardSize:
    """Map 'small' / 'Medium' / ' BIG ' to a BoardSize; raise InvalidSize otherwise."""
    if isinstance(label, BoardSize):
        return label
    if not isinstance(label, str):
        raise InvalidSize(repr(label))
    key = label.strip().lower()
    for size in BoardSize:
        if size.value.lower() == key:
            return size
    raise InvalidSize(label)


def slot_count(size: SizeLike) -> int:
    return size_from_label(size).slot_count


def allowed_reservations(size: SizeLike) -> int:
    """Number of reservations after which a board stops accepting plays."""
    return slot_count(size) // 2


def stake_amount(slots: int, unit: int = 1) -> int:
    """
    Deposit required to create a board with `slots` slots.

    One stake unit per slot; integers only so large denominations (10**24
    per coin) never pass through a float.
    """
    if isinstance(slots, bool) or not isinstance(slots, int) or slots <= 0:
        raise ValueError(f"slot count must be a positive integer, got {slots!r}")
    if isinstance(unit, bool) or not isinstance(unit, int) or unit <= 0:
        raise ValueError(f"stake unit must be a positive integer, got {unit!r}")
    return slots * unit


def play_stake(unit: int = 1) -> int:
    """Deposit attached to a single slot reservation."""
    return PLAY_STAKE_UNITS * unit


def check_slot(index: Any, slots: int, *, position: int | None = None) -> int:
    """Return `index` if it is an int in [0, slots); raise OutOfRangeSlot otherwise."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise OutOfRangeSlot(index, slots, position)
    if not 0 <= index < slots:
        raise OutOfRangeSlot(index, slots, position)
    return index


__all__ = [
    "BoardSize",
    "SizeLike",
    "size_from_label",
    "slot_count",
    "allowed_reservations",
    "stake_amount",
    "play_stake",
    "check_slot",
]
