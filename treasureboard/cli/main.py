"""
treasureboard.cli.main
======================

`treasureboard`: command-line interface for the treasure board contract.

Examples
--------
    $ treasureboard env
    $ treasureboard list
    $ treasureboard create --account alice.testnet --size Medium \\
          --bombs "1 3 5 7 9 11 13 15" --salt pw
    $ treasureboard play --account bob.testnet --id 1 --slot 4
    $ treasureboard reveal --account alice.testnet --id 1 \\
          --solution "1 3 5 7 9 11 13 15 112 119"
    $ treasureboard menu          # numbered interactive loop

Configuration
-------------
- Network      : `--network` or env `TREASURE_NETWORK` (default: testnet)
- RPC URL      : `--rpc-url` or env `TREASURE_RPC_URL`
- Contract id  : `--contract-id` or env `TREASURE_CONTRACT_ID`
- Digest       : `--hash` or env `TREASURE_HASH` (default: sha256)
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, List, Optional

import typer

from ..board.parse import IndexFallback, parse_byte_tokens, parse_int, split_tokens
from ..client import TransactionOutcome, TreasureBoardClient
from ..config import ClientConfig
from ..errors import TreasureBoardError
from ..session.state import Session
from ..version import __version__

log = logging.getLogger(__name__)

app = typer.Typer(
    name="treasureboard",
    help="Treasure board client: create boards, reserve slots, reveal solutions.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "MENU"]

MENU = """
Available actions:
    1. Start a new game
    2. Get the list of games
    3. Play a game
    4. Reveal the solution of a game
    0. Exit
"""


@dataclass
class Ctx:
    config: ClientConfig


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


def _client(ctx: typer.Context) -> TreasureBoardClient:
    c: Ctx = ctx.obj
    return TreasureBoardClient.from_config(c.config)


def _fail(err: Exception) -> None:
    typer.echo(f"Error: {err}", err=True)
    raise typer.Exit(1)


def _parse_slots(text: str, field: str) -> List[int]:
    return [parse_int(tok, field=field) for tok in split_tokens(text)]


@app.callback()
def _root(
    ctx: typer.Context,
    network: Optional[str] = typer.Option(
        None, "--network", help="Network profile (testnet, mainnet, localnet).", envvar="TREASURE_NETWORK"
    ),
    rpc_url: Optional[str] = typer.Option(
        None, "--rpc-url", help="Override the JSON-RPC endpoint.", envvar="TREASURE_RPC_URL"
    ),
    contract_id: Optional[str] = typer.Option(
        None, "--contract-id", help="Board contract account id.", envvar="TREASURE_CONTRACT_ID"
    ),
    hash_alg: Optional[str] = typer.Option(
        None, "--hash", help="Digest algorithm (sha256, sha3_256, blake2b256).", envvar="TREASURE_HASH"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Resolve the effective configuration for this process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    try:
        cfg = ClientConfig.with_overrides(
            ClientConfig.from_env(),
            network=network,
            rpc_url=rpc_url,
            contract_id=contract_id,
            hash_alg=hash_alg,
        )
    except ValueError as e:
        _fail(e)
    ctx.obj = Ctx(config=cfg)


# --- Commands -----------------------------------------------------------------


@app.command("version")
def version() -> None:
    """Print the client version."""
    typer.echo(f"treasureboard {__version__}")


@app.command("env")
def env(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    c: Ctx = ctx.obj
    _print_json(c.config.to_dict())


@app.command("list")
def list_games(ctx: typer.Context) -> None:
    """List every board with its reserved slots and state."""
    try:
        with _client(ctx) as client:
            boards = client.list_games()
    except (TreasureBoardError, ValueError) as e:
        _fail(e)
    _print_json([b.to_dict() for b in boards])


@app.command("create")
def create(
    ctx: typer.Context,
    account: str = typer.Option(..., "--account", "-a", help="Creator account id."),
    size: str = typer.Option(..., "--size", "-s", help="Board size: Small, Medium or Big."),
    bombs: str = typer.Option(..., "--bombs", "-b", help='Bomb slots, space separated (e.g. "1 3 5 7").'),
    salt: str = typer.Option(..., "--salt", help="Secret salt appended to the bombs."),
    lenient: bool = typer.Option(
        False, "--lenient", help="Replace out-of-range bombs by their position instead of failing."
    ),
) -> None:
    """
    Commit to a bomb layout and open a board.

    Prints the solution bytes needed to reveal later. They are not stored.
    """
    policy = IndexFallback.POSITION if lenient else IndexFallback.STRICT
    try:
        picked = _parse_slots(bombs, "bomb")
        with _client(ctx) as client:
            outcome = client.create_game(Session(account), size, picked, salt, policy=policy)
    except (TreasureBoardError, ValueError) as e:
        _fail(e)
    _print_outcome(outcome)


@app.command("play")
def play(
    ctx: typer.Context,
    account: str = typer.Option(..., "--account", "-a", help="Player account id."),
    game_id: int = typer.Option(..., "--id", help="Board id."),
    slot: int = typer.Option(..., "--slot", help="Slot to reserve."),
    size: Optional[str] = typer.Option(None, "--size", help="Board size, to bounds-check the slot locally."),
) -> None:
    """Reserve a slot on a board for a one-unit stake."""
    try:
        with _client(ctx) as client:
            outcome = client.reserve_slot(Session(account), game_id, slot, size=size)
    except (TreasureBoardError, ValueError) as e:
        _fail(e)
    _print_outcome(outcome)


@app.command("reveal")
def reveal(
    ctx: typer.Context,
    account: str = typer.Option(..., "--account", "-a", help="Creator account id."),
    game_id: int = typer.Option(..., "--id", help="Board id."),
    solution: str = typer.Option(..., "--solution", help="Solution bytes from creation, space separated."),
    expected: Optional[str] = typer.Option(None, "--expected", help="Published commitment (0x-hex) to check against."),
) -> None:
    """Reveal a board's solution."""
    try:
        sol = parse_byte_tokens(solution)
        with _client(ctx) as client:
            outcome = client.reveal_solution(Session(account), game_id, sol, expected=expected)
    except (TreasureBoardError, ValueError) as e:
        _fail(e)
    _print_outcome(outcome)


def _print_outcome(outcome: TransactionOutcome) -> None:
    _print_json(outcome.to_dict())
    if outcome.commitment is not None:
        typer.echo(
            "Keep the solution above. Without it this board cannot be revealed "
            "and its stake stays locked.",
            err=True,
        )


# --- Interactive menu ---------------------------------------------------------


def _menu_create(client: TreasureBoardClient, session: Session) -> TransactionOutcome:
    size = typer.prompt("Choose a size for this game (Small, Medium, Big)")
    bombs = _parse_slots(typer.prompt("Enter the bomb slots (separated by SPACE)"), "bomb")
    salt = typer.prompt("Enter a secret salt")
    return client.create_game(session, size, bombs, salt)


def _menu_play(client: TreasureBoardClient, session: Session) -> TransactionOutcome:
    game_id = parse_int(typer.prompt("Enter the id of the game"), field="id")
    slot = parse_int(typer.prompt("Which slot do you wish to choose?"), field="slot")
    return client.reserve_slot(session, game_id, slot)


def _menu_reveal(client: TreasureBoardClient, session: Session) -> TransactionOutcome:
    game_id = parse_int(typer.prompt("Enter the id of the game"), field="id")
    solution = parse_byte_tokens(
        typer.prompt("Enter the solution (the numbers printed at creation, separated by SPACE)")
    )
    return client.reveal_solution(session, game_id, solution)


@app.command("menu")
def menu(
    ctx: typer.Context,
    account: Optional[str] = typer.Option(
        None, "--account", "-a", help="Account id to use for every action (prompted otherwise)."
    ),
) -> None:
    """Numbered interactive loop: 1 create, 2 list, 3 play, 4 reveal, 0 exit."""
    with _client(ctx) as client:
        while True:
            typer.echo(MENU)
            try:
                action = parse_int(typer.prompt("Pick your poison"), field="action")
            except TreasureBoardError as e:
                typer.echo(f"Error: {e}", err=True)
                continue
            if action == 0:
                break
            if action not in (1, 2, 3, 4):
                typer.echo("Sorry, I didn't quite catch that!")
                continue
            try:
                if action == 2:
                    _print_json([b.to_dict() for b in client.list_games()])
                    continue
                session = Session(account or typer.prompt("Enter your account id"))
                if action == 1:
                    _print_outcome(_menu_create(client, session))
                elif action == 3:
                    _print_outcome(_menu_play(client, session))
                else:
                    _print_outcome(_menu_reveal(client, session))
            except (TreasureBoardError, ValueError) as e:
                typer.echo(f"Error: {e}", err=True)


def main() -> None:  # pragma: no cover
    try:
        app(prog_name="treasureboard")
    except KeyboardInterrupt:
        typer.echo("", err=True)
        sys.exit(130)


if __name__ == "__main__":  # pragma: no cover
    main()
