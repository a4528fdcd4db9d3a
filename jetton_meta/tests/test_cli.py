from __future__ import annotations

from typing import Any, Sequence

import pytest
from pytoniq_core import Address, begin_cell
from typer.testing import CliRunner

from jetton_meta import cli
from jetton_meta.types import ContentOnchain, ContentVariant, JettonData

MASTER_RAW = "0:" + "11" * 32
WALLET_RAW = "0:" + "33" * 32

runner = CliRunner()


class FakeLiteChainAPI:
    content: ContentVariant = ContentOnchain(attributes={"name": "Cli Token", "symbol": "CLI", "decimals": "9"})
    error: Exception | None = None

    @classmethod
    def from_settings(cls, settings) -> "FakeLiteChainAPI":
        return cls()

    async def __aenter__(self) -> "FakeLiteChainAPI":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def current_masterchain_info(self) -> Any:
        return "block"

    async def run_get_method(self, block: Any, address: Address, method: str, stack: Sequence[Any] = ()) -> list[Any]:
        return [1, begin_cell().store_address(Address(MASTER_RAW)).end_cell().begin_parse()]

    async def get_jetton_data(self, master: Address) -> JettonData:
        if self.error:
            raise self.error
        return JettonData(total_supply=1, mintable=False, admin_address=None, content=self.content)


@pytest.fixture(autouse=True)
def _fake_chain(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "LiteChainAPI", FakeLiteChainAPI)
    monkeypatch.setattr(FakeLiteChainAPI, "error", None)
    monkeypatch.setattr(
        FakeLiteChainAPI,
        "content",
        ContentOnchain(attributes={"name": "Cli Token", "symbol": "CLI", "decimals": "9"}),
    )


def test_master_command_prints_table() -> None:
    result = runner.invoke(cli.app, ["master", MASTER_RAW])

    assert result.exit_code == 0, result.output
    assert "Jetton Master Data" in result.output
    assert "Cli Token" in result.output
    assert "CLI" in result.output


def test_wallet_command_resolves_master() -> None:
    result = runner.invoke(cli.app, ["wallet", WALLET_RAW])

    assert result.exit_code == 0, result.output
    assert "Cli Token" in result.output


def test_bad_decimals_prints_partial_record_and_fails(monkeypatch) -> None:
    monkeypatch.setattr(FakeLiteChainAPI, "content", ContentOnchain(attributes={"name": "Odd", "decimals": "abc"}))

    result = runner.invoke(cli.app, ["master", MASTER_RAW])

    assert result.exit_code == 1
    assert "Odd" in result.output
    assert "Invalid decimals" in result.output


def test_chain_error_exits_with_code_2(monkeypatch) -> None:
    monkeypatch.setattr(FakeLiteChainAPI, "error", ConnectionError("down"))

    result = runner.invoke(cli.app, ["master", MASTER_RAW])

    assert result.exit_code == 2


def test_invalid_address_is_rejected() -> None:
    result = runner.invoke(cli.app, ["master", "not-an-address"])

    assert result.exit_code == 2
