from __future__ import annotations

from typing import Any, Dict, List, Mapping

import pytest

from treasureboard.config import ClientConfig
from treasureboard.client import TreasureBoardClient
from treasureboard.constants import SLOT_COUNTS
from treasureboard.errors import RemoteCallFailed
from treasureboard.session.state import Session
from treasureboard.utils.hash import sha256


class FakeBoardService:
    """
    In-memory stand-in for the board contract.

    Mirrors the contract's rules closely enough for facade tests: deposits
    must cover the board, slots are reserved once, boards close at half,
    reveals are checked against the stored hash. Every call is recorded.
    """

    def __init__(self, stake_unit: int = 1) -> None:
        self.stake_unit = stake_unit
        self.calls: List[Dict[str, Any]] = []
        self.boards: Dict[int, Dict[str, Any]] = {}
        self.next_id = 1

    # BoardService -------------------------------------------------------

    def view(self, method: str, args: Mapping[str, Any]) -> Any:
        self.calls.append({"method": method, "args": dict(args)})
        if method != "games":
            raise RemoteCallFailed(method, "MethodNotFound")
        return [
            {"id": gid, "size": b["size"], "answers": list(b["answers"])}
            for gid, b in sorted(self.boards.items())
        ]

    def call(self, method: str, args: Mapping[str, Any], *, signer_id: str, gas: int, deposit: int = 0) -> Any:
        self.calls.append(
            {"method": method, "args": dict(args), "signer_id": signer_id, "gas": gas, "deposit": deposit}
        )
        return getattr(self, f"_{method}")(dict(args), signer_id, deposit)

    # contract emulation -------------------------------------------------

    def _new_game(self, args: Dict[str, Any], signer: str, deposit: int) -> Any:
        slots = SLOT_COUNTS[args["size"].lower()]
        if deposit < slots * self.stake_unit:
            raise RemoteCallFailed("new_game", "Attached deposit is not sufficient for a game of this size")
        gid = self.next_id
        self.next_id += 1
        self.boards[gid] = {
            "creator": signer,
            "size": args["size"],
            "hash": list(args["solution_hash"]),
            "answers": [],
            "revealed": False,
        }
        return {"status": {"SuccessValue": ""}, "id": gid}

    def _play(self, args: Dict[str, Any], signer: str, deposit: int) -> Any:
        board = self.boards.get(args["id"])
        if board is None:
            raise RemoteCallFailed("play", "No such a game exists")
        if deposit < self.stake_unit:
            raise RemoteCallFailed("play", "Attached deposit is insufficient")
        if args["choice"] in board["answers"]:
            raise RemoteCallFailed("play", "That slot has already been taken")
        if len(board["answers"]) == SLOT_COUNTS[board["size"].lower()] // 2:
            raise RemoteCallFailed("play", "This board is closed")
        board["answers"].append(args["choice"])
        return {"status": {"SuccessValue": ""}}

    def _reveal(self, args: Dict[str, Any], signer: str, deposit: int) -> Any:
        board = self.boards.get(args["id"])
        if board is None:
            raise RemoteCallFailed("reveal", "No such a game exists")
        if signer != board["creator"]:
            raise RemoteCallFailed("reveal", "Only the creator can reveal")
        if list(sha256(bytes(args["solution"]))) != board["hash"]:
            raise RemoteCallFailed("reveal", "Solution does not match the stored hash")
        board["revealed"] = True
        return {"status": {"SuccessValue": ""}}

    # helpers ------------------------------------------------------------

    def methods(self) -> List[str]:
        return [c["method"] for c in self.calls]


@pytest.fixture
def service() -> FakeBoardService:
    return FakeBoardService()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(rpc_url="http://127.0.0.1:3030", contract_id="board.test.near")


@pytest.fixture
def client(service: FakeBoardService, config: ClientConfig) -> TreasureBoardClient:
    return TreasureBoardClient(service, config)


@pytest.fixture
def alice() -> Session:
    return Session("alice.testnet")


@pytest.fixture
def bob() -> Session:
    return Session("bob.testnet")
