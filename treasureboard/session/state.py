"""
Board lifecycle as seen from the client.

    OPEN      reserved < slot_count // 2   (plays accepted)
    CLOSED    reserved == slot_count // 2  (no further plays, awaiting reveal)
    REVEALED  the creator's solution was accepted (terminal)

Transitions happen on the contract. The client only fetches snapshots with
`games()` and classifies them; nothing here mutates a board.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Mapping, Tuple

from treasureboard.board.codec import BoardSize, size_from_label

log = logging.getLogger(__name__)


class GameState(Enum):
    """High-level lifecycle state of a board."""
    OPEN = auto()
    CLOSED = auto()
    REVEALED = auto()


@dataclass(frozen=True, slots=True)
class Session:
    """The caller's selected identity, passed explicitly to each facade call."""
    account_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.account_id, str) or not self.account_id.strip():
            raise ValueError("account_id must be a non-empty string")


@dataclass(frozen=True, slots=True)
class GameBoard:
    """Snapshot of one board as returned by the contract's `games` view."""
    id: int
    size: BoardSize
    reserved_slots: Tuple[int, ...] = field(default_factory=tuple)

    @property
    def slot_count(self) -> int:
        return self.size.slot_count

    @property
    def allowed_reservations(self) -> int:
        return self.slot_count // 2

    @property
    def remaining(self) -> int:
        return max(self.allowed_reservations - len(self.reserved_slots), 0)

    def is_reserved(self, slot: int) -> bool:
        return slot in self.reserved_slots

    @classmethod
    def from_record(cls, rec: Mapping[str, Any]) -> "GameBoard":
        """
        Parse a wire record `{"id": int, "size": "Small", "answers": [int, ...]}`.

        Raises InvalidSize for unknown sizes and ValueError for malformed fields.
        """
        try:
            gid = int(rec["id"])
            size = size_from_label(rec["size"])
            answers = rec.get("answers") or []
        except KeyError as e:
            raise ValueError(f"board record missing field {e.args[0]!r}: {dict(rec)!r}") from None
        slots = tuple(int(a) for a in answers)
        return cls(id=gid, size=size, reserved_slots=slots)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "size": self.size.label,
            "answers": list(self.reserved_slots),
            "state": classify(self).name.lower(),
        }


def classify(board: GameBoard, *, revealed: bool = False) -> GameState:
    """Classify a snapshot; `revealed` is only known to the caller that revealed it."""
    if revealed:
        return GameState.REVEALED
    n = len(board.reserved_slots)
    limit = board.allowed_reservations
    if n > limit:
        log.warning(
            "board %d has %d reservations, more than the %d a %s board allows",
            board.id, n, limit, board.size.label,
        )
        return GameState.CLOSED
    return GameState.CLOSED if n == limit else GameState.OPEN


__all__ = ["GameState", "GameBoard", "Session", "classify"]
