"""
treasureboard.rpc
=================

JSON-RPC 2.0 transport used to reach the board contract.
"""

from __future__ import annotations

from .http import RpcClient  # noqa: F401

__all__ = ["RpcClient"]
