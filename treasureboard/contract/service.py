"""
treasureboard.contract.service
==============================

The board contract is an opaque remote service with one view and three
change methods:

- games()                      → list of {id, size, answers}
- new_game(size, solution_hash)   deposit = slot_count stake units
- play(id, choice)                deposit = 1 stake unit
- reveal(id, solution)

`RpcBoardService` sends each method as a JSON-RPC request whose method name
is the contract method and whose params object is

    {"contract_id", "signer_id", "args", "gas", "deposit"}

(`signer_id`, `gas` and `deposit` are omitted for the view). Deposits are
decimal strings so 10**24-scale amounts survive JSON. Signing and key
custody belong to the endpoint, not to this package.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Protocol

from treasureboard.constants import CHANGE_METHODS, VIEW_METHODS
from treasureboard.rpc.http import RpcClient

log = logging.getLogger(__name__)

JsonDict = Dict[str, Any]


class BoardService(Protocol):
    """What the client facade needs from the remote contract."""

    def view(self, method: str, args: Mapping[str, Any]) -> Any: ...

    def call(
        self,
        method: str,
        args: Mapping[str, Any],
        *,
        signer_id: str,
        gas: int,
        deposit: int = 0,
    ) -> Any: ...


class RpcBoardService:
    """
    BoardService over JSON-RPC.

    Parameters
    ----------
    rpc : RpcClient (or anything with `.request(method, params, idempotent=...)`).
    contract_id : account id of the deployed board contract.
    """

    def __init__(self, rpc: RpcClient, contract_id: str) -> None:
        if not contract_id:
            raise ValueError("contract_id must be non-empty")
        self._rpc = rpc
        self._contract_id = contract_id

    @property
    def contract_id(self) -> str:
        return self._contract_id

    def view(self, method: str, args: Mapping[str, Any]) -> Any:
        if method not in VIEW_METHODS:
            raise ValueError(f"{method!r} is not a view method of the board contract")
        params: JsonDict = {"contract_id": self._contract_id, "args": dict(args)}
        return self._rpc.request(method, params, idempotent=True)

    def call(
        self,
        method: str,
        args: Mapping[str, Any],
        *,
        signer_id: str,
        gas: int,
        deposit: int = 0,
    ) -> Any:
        if method not in CHANGE_METHODS:
            raise ValueError(f"{method!r} is not a change method of the board contract")
        params: JsonDict = {
            "contract_id": self._contract_id,
            "signer_id": signer_id,
            "args": dict(args),
            "gas": int(gas),
            "deposit": str(int(deposit)),
        }
        log.info(
            "calling %s.%s as %s (gas=%d deposit=%d)",
            self._contract_id, method, signer_id, int(gas), int(deposit),
        )
        return self._rpc.request(method, params, idempotent=False)


__all__ = ["BoardService", "RpcBoardService"]
