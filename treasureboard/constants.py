"""
Fixed protocol constants for the treasure board client.

These values must agree with the deployed board contract; changing any of
them changes what the contract accepts.
"""

from __future__ import annotations

from typing import Dict, Final

# Slot counts per board size label (lowercase keys).
SLOT_COUNTS: Final[Dict[str, int]] = {
    "small": 4,
    "medium": 16,
    "big": 32,
}

# Largest value a single committed/revealed byte may take.
MAX_BYTE: Final[int] = 255

# Gas attached to every state-changing call (40 Tgas).
DEFAULT_GAS: Final[int] = 40 * 10**12

# Deposit attached to a single slot reservation, in stake units.
PLAY_STAKE_UNITS: Final[int] = 1

# Smallest denomination of the ledger's currency per whole coin (yocto).
YOCTO_PER_COIN: Final[int] = 10**24

# Default testnet deployment of the board contract.
DEFAULT_CONTRACT_ID: Final[str] = "dev-1654580401237-76489858696902"

# Remote contract methods.
VIEW_METHODS: Final[tuple[str, ...]] = ("games",)
CHANGE_METHODS: Final[tuple[str, ...]] = ("new_game", "play", "reveal")

__all__ = [
    "SLOT_COUNTS",
    "MAX_BYTE",
    "DEFAULT_GAS",
    "PLAY_STAKE_UNITS",
    "YOCTO_PER_COIN",
    "DEFAULT_CONTRACT_ID",
    "VIEW_METHODS",
    "CHANGE_METHODS",
]
