"""
Treasure board client for Python

Commit–reveal client for the treasure board contract: a creator commits to a
hidden bomb layout by publishing H(bombs || salt), players reserve slots for a
stake, and the creator later reveals the layout for the contract to verify.

Convenience exports for the most common APIs.
"""

from .version import __version__  # noqa: F401

# Config & errors
from .config import ClientConfig  # noqa: F401
from .errors import (  # noqa: F401
    DuplicateBomb,
    InsufficientBombs,
    InvalidSize,
    InvalidSolutionByte,
    OutOfRangeSlot,
    ParseError,
    RemoteCallFailed,
    TreasureBoardError,
)

# Board codec
from .board.codec import BoardSize, size_from_label, slot_count, stake_amount  # noqa: F401

# Commit / reveal
from .commit_reveal.commit import Commitment, build_commitment  # noqa: F401
from .commit_reveal.verify import RevealResult, classify_winners, verify_reveal  # noqa: F401

# Session
from .session.state import GameBoard, GameState, Session, classify  # noqa: F401

# Facade
from .client import TransactionOutcome, TreasureBoardClient  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "ClientConfig",
    "TreasureBoardError", "InvalidSize", "InsufficientBombs", "OutOfRangeSlot",
    "DuplicateBomb", "InvalidSolutionByte", "ParseError", "RemoteCallFailed",
    # Board
    "BoardSize", "size_from_label", "slot_count", "stake_amount",
    # Commit / reveal
    "Commitment", "build_commitment", "RevealResult", "verify_reveal", "classify_winners",
    # Session
    "GameBoard", "GameState", "Session", "classify",
    # Facade
    "TransactionOutcome", "TreasureBoardClient",
]
