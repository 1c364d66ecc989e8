"""
CLI tests for `treasureboard`.

The remote contract is replaced by the in-memory FakeBoardService, so these
exercise argument parsing, local validation and output only.
"""

from __future__ import annotations

import inspect
import json

import pytest
from typer.testing import CliRunner

import treasureboard.cli.main as cli_main
from treasureboard.cli.main import app
from treasureboard.client import TreasureBoardClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def fake_client(monkeypatch, service, config):
    monkeypatch.delenv("TREASURE_RPC_URL", raising=False)
    monkeypatch.delenv("TREASURE_NETWORK", raising=False)
    monkeypatch.setattr(cli_main, "_client", lambda ctx: TreasureBoardClient(service, config))
    return service


class TestCLIBasics:
    def test_main_submodule_is_not_shadowed(self) -> None:
        assert inspect.ismodule(cli_main)
        assert callable(cli_main.main)
        assert hasattr(cli_main, "_client")

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for cmd in ("create", "list", "play", "reveal", "menu"):
            assert cmd in result.stdout

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert result.stdout.startswith("treasureboard ")

    def test_env_reflects_flags(self) -> None:
        result = runner.invoke(app, ["--contract-id", "board.near", "--hash", "sha3_256", "env"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["contract_id"] == "board.near"
        assert data["hash_alg"] == "sha3_256"

    def test_bad_rpc_url(self) -> None:
        result = runner.invoke(app, ["--rpc-url", "ftp://nope", "env"])
        assert result.exit_code == 1


class TestCommands:
    def test_create_then_list(self, service) -> None:
        result = runner.invoke(
            app,
            ["create", "-a", "alice.testnet", "--size", "Medium",
             "--bombs", "1 3 5 7 9 11 13 15", "--salt", "pw"],
        )
        assert result.exit_code == 0, result.output
        assert "1 3 5 7 9 11 13 15 112 119" in result.stdout
        assert service.methods() == ["new_game"]

        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        boards = json.loads(result.stdout)
        assert boards == [{"id": 1, "size": "Medium", "answers": [], "state": "open"}]

    def test_list_reports_malformed_record(self, service, monkeypatch) -> None:
        monkeypatch.setattr(service, "view", lambda method, args: [{"size": "Small", "answers": []}])
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "missing field 'id'" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_create_insufficient_bombs_never_calls_remote(self, service) -> None:
        result = runner.invoke(
            app, ["create", "-a", "alice.testnet", "--size", "Small", "--bombs", "0", "--salt", "pw"]
        )
        assert result.exit_code == 1
        assert "InsufficientBombs" in result.output
        assert service.calls == []

    def test_create_invalid_size(self, service) -> None:
        result = runner.invoke(
            app, ["create", "-a", "alice.testnet", "--size", "Huge", "--bombs", "0 1", "--salt", "pw"]
        )
        assert result.exit_code == 1
        assert "InvalidSize" in result.output
        assert service.calls == []

    def test_create_non_decimal_bomb(self, service) -> None:
        result = runner.invoke(
            app, ["create", "-a", "alice.testnet", "--size", "Small", "--bombs", "0 one", "--salt", "pw"]
        )
        assert result.exit_code == 1
        assert "ParseError" in result.output
        assert service.calls == []

    def test_create_lenient(self, service) -> None:
        result = runner.invoke(
            app,
            ["create", "-a", "alice.testnet", "--size", "Small", "--bombs", "0 9",
             "--salt", "pw", "--lenient"],
        )
        assert result.exit_code == 0, result.output
        assert "0 1 112 119" in result.stdout

    def test_play_and_reveal(self, service) -> None:
        runner.invoke(
            app, ["create", "-a", "alice.testnet", "--size", "Small", "--bombs", "0 2", "--salt", "pw"]
        )
        result = runner.invoke(app, ["play", "-a", "bob.testnet", "--id", "1", "--slot", "3"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["args"] == {"id": 1, "choice": 3}

        result = runner.invoke(
            app, ["reveal", "-a", "alice.testnet", "--id", "1", "--solution", "0 2 112 119"]
        )
        assert result.exit_code == 0, result.output
        assert service.boards[1]["revealed"] is True

    def test_play_out_of_range_with_size(self, service) -> None:
        result = runner.invoke(
            app, ["play", "-a", "bob.testnet", "--id", "1", "--slot", "7", "--size", "Small"]
        )
        assert result.exit_code == 1
        assert "OutOfRangeSlot" in result.output
        assert service.calls == []

    def test_reveal_invalid_byte_never_calls_remote(self, service) -> None:
        result = runner.invoke(
            app, ["reveal", "-a", "alice.testnet", "--id", "1", "--solution", "0 2 256"]
        )
        assert result.exit_code == 1
        assert "InvalidSolutionByte" in result.output
        assert service.calls == []

    def test_remote_error_is_reported(self, service) -> None:
        result = runner.invoke(app, ["play", "-a", "bob.testnet", "--id", "42", "--slot", "1"])
        assert result.exit_code == 1
        assert "No such a game exists" in result.output


class TestMenu:
    def test_exit_immediately(self, service) -> None:
        result = runner.invoke(app, ["menu"], input="0\n")
        assert result.exit_code == 0
        assert "Start a new game" in result.stdout
        assert service.calls == []

    def test_create_list_play_reveal(self, service) -> None:
        script = "\n".join([
            "1", "alice.testnet", "Small", "0 2", "pw",
            "2",
            "3", "bob.testnet", "1", "1",
            "4", "alice.testnet", "1", "0 2 112 119",
            "0",
        ]) + "\n"
        result = runner.invoke(app, ["menu"], input=script)
        assert result.exit_code == 0, result.output
        assert service.methods() == ["new_game", "games", "play", "reveal"]
        assert service.boards[1]["answers"] == [1]
        assert service.boards[1]["revealed"] is True

    def test_bad_tokens_keep_the_loop_going(self, service) -> None:
        script = "\n".join(["x", "9", "3", "bob.testnet", "one", "0"]) + "\n"
        result = runner.invoke(app, ["menu"], input=script)
        assert result.exit_code == 0, result.output
        assert "didn't quite catch that" in result.stdout
        assert service.calls == []

    def test_account_option_skips_prompt(self, service) -> None:
        script = "\n".join(["1", "Small", "0 1", "pw", "0"]) + "\n"
        result = runner.invoke(app, ["menu", "--account", "alice.testnet"], input=script)
        assert result.exit_code == 0, result.output
        assert service.calls[0]["signer_id"] == "alice.testnet"
