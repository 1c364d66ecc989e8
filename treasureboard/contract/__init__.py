"""
treasureboard.contract
======================

Adapter from the four board contract methods to the JSON-RPC transport.
"""

from __future__ import annotations

from .service import BoardService, RpcBoardService  # noqa: F401

__all__ = ["BoardService", "RpcBoardService"]
