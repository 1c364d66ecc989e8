"""
treasureboard.session
=====================

Read-only lifecycle classification of board snapshots and the explicit
per-caller session value.
"""

from __future__ import annotations

from .state import GameBoard, GameState, Session, classify  # noqa: F401

__all__ = ["GameBoard", "GameState", "Session", "classify"]
