"""
treasureboard.client
====================

Client facade over the board contract. Each operation runs the local checks
first (size, bombs, bytes) and only then issues exactly one request:

- list_games()                                  read-only, no stake
- create_game(session, size, bombs, salt)       deposit = slot_count units
- reserve_slot(session, game_id, slot)          deposit = 1 unit
- reveal_solution(session, game_id, solution)   no deposit

A request that fails a local check never reaches the network, so no stake is
risked. Remote failures surface as `RemoteCallFailed` and are never retried.

Example
-------
    from treasureboard import ClientConfig, Session, TreasureBoardClient

    cfg = ClientConfig.from_env()
    with TreasureBoardClient.from_config(cfg) as client:
        me = Session("alice.testnet")
        created = client.create_game(me, "Medium", [1, 3, 5, 7, 9, 11, 13, 15], "pw")
        print(created.commitment.tokens())   # keep this, it is needed to reveal
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

import httpx

from treasureboard.board.codec import (
    SizeLike,
    check_slot,
    play_stake,
    size_from_label,
    stake_amount,
)
from treasureboard.board.parse import IndexFallback
from treasureboard.commit_reveal.commit import Commitment, SaltLike, build_commitment
from treasureboard.commit_reveal.verify import RevealResult, SolutionLike, verify_reveal
from treasureboard.config import ClientConfig
from treasureboard.contract.service import BoardService, RpcBoardService
from treasureboard.errors import RemoteCallFailed
from treasureboard.rpc.http import RpcClient
from treasureboard.session.state import GameBoard, Session
from treasureboard.utils.bytes import BytesLike, to_int_list
from treasureboard.utils.hash import Hasher, get_hasher

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransactionOutcome:
    """
    Result of one state-changing call.

    `result` is the remote response, untouched. `commitment` is set for
    `new_game` and `local_check` for `reveal`.
    """
    method: str
    signer_id: str
    args: Dict[str, Any]
    gas: int
    deposit: int
    result: Any
    commitment: Optional[Commitment] = None
    local_check: Optional[RevealResult] = None

    @property
    def game_id(self) -> Optional[int]:
        gid = self.args.get("id")
        return int(gid) if gid is not None else None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "method": self.method,
            "signer_id": self.signer_id,
            "args": self.args,
            "gas": self.gas,
            "deposit": str(self.deposit),
            "result": self.result,
        }
        if self.commitment is not None:
            out["commitment"] = self.commitment.hex()
            out["solution"] = self.commitment.tokens()
        if self.local_check is not None:
            out["local_digest"] = self.local_check.hex()
            out["local_valid"] = self.local_check.valid
        return out


def _check_id(game_id: Any, what: str = "game id") -> int:
    if isinstance(game_id, bool) or not isinstance(game_id, int) or game_id < 0:
        raise ValueError(f"{what} must be a non-negative integer, got {game_id!r}")
    return game_id


class TreasureBoardClient:
    """
    Facade binding the board codec, the commit/reveal helpers and a
    `BoardService`.

    Parameters
    ----------
    service : BoardService used for the remote calls.
    config : ClientConfig for gas, stake unit and digest algorithm.
    """

    def __init__(self, service: BoardService, config: Optional[ClientConfig] = None) -> None:
        self._service = service
        self._config = config or ClientConfig()
        self._hasher: Hasher = get_hasher(self._config.hash_alg)
        self._owned_rpc: Optional[RpcClient] = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "TreasureBoardClient":
        rpc = RpcClient(
            config.rpc_url,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
            backoff_base=config.backoff_factor,
            headers=config.http_headers(),
            transport=transport,
        )
        client = cls(RpcBoardService(rpc, config.contract_id), config)
        client._owned_rpc = rpc
        return client

    # ------------------------------------------------------------------ lifecycle

    def __enter__(self) -> "TreasureBoardClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._owned_rpc is not None:
            self._owned_rpc.close()
            self._owned_rpc = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    # ------------------------------------------------------------------ read-only

    def list_games(self) -> List[GameBoard]:
        """Fetch every board snapshot from the contract."""
        res = self._service.view("games", {})
        if not isinstance(res, list):
            raise RemoteCallFailed("games", f"unexpected games payload: {res!r}")
        return [GameBoard.from_record(rec) for rec in res]

    def get_game(self, game_id: int) -> Optional[GameBoard]:
        for board in self.list_games():
            if board.id == game_id:
                return board
        return None

    # ------------------------------------------------------------------ state-changing

    def create_game(
        self,
        session: Session,
        size: SizeLike,
        bombs: Sequence[int],
        salt: SaltLike,
        *,
        policy: IndexFallback = IndexFallback.STRICT,
    ) -> TransactionOutcome:
        """
        Commit to a bomb layout and open a new board.

        Raises InvalidSize, OutOfRangeSlot, DuplicateBomb or InsufficientBombs
        before anything is sent; RemoteCallFailed if the contract rejects it.
        """
        board_size = size_from_label(size)
        slots = board_size.slot_count
        commitment = build_commitment(bombs, slots, salt, hasher=self._hasher, policy=policy)
        deposit = stake_amount(slots, self._config.stake_unit)

        log.warning(
            "board commitment %s: keep the returned solution bytes private and safe; "
            "without them the board cannot be revealed and its stake stays locked",
            commitment.hex(),
        )
        args = {"size": board_size.label, "solution_hash": commitment.digest_list()}
        result = self._service.call(
            "new_game", args, signer_id=session.account_id, gas=self._config.gas, deposit=deposit,
        )
        return TransactionOutcome(
            method="new_game",
            signer_id=session.account_id,
            args=args,
            gas=self._config.gas,
            deposit=deposit,
            result=result,
            commitment=commitment,
        )

    def reserve_slot(
        self,
        session: Session,
        game_id: int,
        slot: int,
        *,
        size: Optional[SizeLike] = None,
    ) -> TransactionOutcome:
        """
        Reserve one slot on a board for a one-unit stake.

        With `size` the slot is bounds-checked locally; otherwise the contract
        decides on range and double reservations.
        """
        _check_id(game_id)
        if size is not None:
            check_slot(slot, size_from_label(size).slot_count)
        else:
            _check_id(slot, "slot")
        deposit = play_stake(self._config.stake_unit)
        args = {"id": game_id, "choice": slot}
        result = self._service.call(
            "play", args, signer_id=session.account_id, gas=self._config.gas, deposit=deposit,
        )
        return TransactionOutcome(
            method="play",
            signer_id=session.account_id,
            args=args,
            gas=self._config.gas,
            deposit=deposit,
            result=result,
        )

    def reveal_solution(
        self,
        session: Session,
        game_id: int,
        solution: SolutionLike,
        *,
        expected: Optional[Union[BytesLike, str, Sequence[int]]] = None,
    ) -> TransactionOutcome:
        """
        Reveal the committed bytes of a board.

        Malformed bytes raise InvalidSolutionByte locally. A digest that does
        not match `expected` is logged and still sent: the contract decides.
        """
        _check_id(game_id)
        check = verify_reveal(solution, expected=expected, hasher=self._hasher)
        if check.checked and not check.valid:
            log.warning(
                "reveal for board %d does not match the expected commitment; "
                "sending anyway for the contract to adjudicate",
                game_id,
            )
        args = {"id": game_id, "solution": to_int_list(check.solution)}
        result = self._service.call(
            "reveal", args, signer_id=session.account_id, gas=self._config.gas, deposit=0,
        )
        return TransactionOutcome(
            method="reveal",
            signer_id=session.account_id,
            args=args,
            gas=self._config.gas,
            deposit=0,
            result=result,
            local_check=check,
        )


__all__ = ["TransactionOutcome", "TreasureBoardClient"]
