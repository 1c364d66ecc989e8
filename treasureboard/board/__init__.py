"""
treasureboard.board
===================

Board size labels, slot bounds, stake arithmetic and parsing of the
whitespace-delimited numeric tokens typed by creators and players.
"""

from __future__ import annotations

from .codec import (  # noqa: F401
    BoardSize,
    allowed_reservations,
    check_slot,
    size_from_label,
    slot_count,
    stake_amount,
)
from .parse import IndexFallback, parse_byte_tokens, parse_int  # noqa: F401

__all__ = [
    "BoardSize",
    "size_from_label",
    "slot_count",
    "stake_amount",
    "check_slot",
    "allowed_reservations",
    "IndexFallback",
    "parse_int",
    "parse_byte_tokens",
]
