"""
treasureboard.commit_reveal
===========================

Commitment construction and reveal verification for treasure boards.

Typical flow:
    1) The creator builds a commitment over (bombs ++ salt) and publishes
       only the digest with `new_game`.
    2) Players reserve slots until the board closes.
    3) The creator reveals the committed bytes; the contract recomputes the
       digest and pays out. `verify_reveal` runs the same check locally
       before the transaction is sent.
"""

from __future__ import annotations

from .commit import Commitment, build_commitment  # noqa: F401
from .verify import (  # noqa: F401
    RevealResult,
    WinnerReport,
    classify_winners,
    validate_solution,
    verify_reveal,
)

__all__ = [
    "Commitment",
    "build_commitment",
    "RevealResult",
    "WinnerReport",
    "classify_winners",
    "validate_solution",
    "verify_reveal",
]
