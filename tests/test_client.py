"""Tests for the AsyncWeb3-backed client."""

from __future__ import annotations

from typing import Any, cast

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import AsyncWeb3

from zk_deposit.client import Web3EthereumClient
from zk_deposit.exceptions import IncorrectCredentialsError, NetworkError
from zk_deposit.types import TransactionOptions

from conftest import TOKEN

PRIVATE_KEY = "0x" + "11" * 32


async def _value(value: Any) -> Any:
    return value


class DummyEth:
    def __init__(self, *, base_fee: int | None = 10, fail_send: bool = False) -> None:
        self._base_fee = base_fee
        self._fail_send = fail_send
        self.sent: list[bytes] = []

    @property
    def chain_id(self):
        return _value(1)

    @property
    def gas_price(self):
        return _value(30)

    def generate_gas_price(self, tx: dict[str, Any]) -> int | None:
        return None

    async def get_transaction_count(self, address: str, block_identifier: str = "latest") -> int:
        return 4

    async def estimate_gas(self, tx: dict[str, Any]) -> int:
        return 55_000

    async def get_block(self, block: str) -> dict[str, Any]:
        if self._base_fee is None:
            return {}
        return {"baseFeePerGas": self._base_fee}

    async def send_raw_transaction(self, raw: bytes) -> bytes:
        if self._fail_send:
            raise ValueError("insufficient funds for gas * price + value")
        self.sent.append(bytes(raw))
        return b"\x01" * 32


class DummyWeb3:
    def __init__(self, eth: DummyEth) -> None:
        self.eth = eth


def _client(eth: DummyEth, **kwargs: Any) -> Web3EthereumClient:
    account = cast(LocalAccount, Account.from_key(PRIVATE_KEY))
    return Web3EthereumClient(cast(AsyncWeb3, DummyWeb3(eth)), account, **kwargs)


def test_from_rpc_rejects_bad_key() -> None:
    with pytest.raises(IncorrectCredentialsError):
        Web3EthereumClient.from_rpc("http://localhost:8545", "0x00")


@pytest.mark.asyncio
async def test_prepare_fills_missing_fields_with_eip1559_fees() -> None:
    client = _client(DummyEth(base_fee=10), priority_fee=2)

    tx = await client._prepare(b"\x01", TOKEN, TransactionOptions(value=5))

    assert tx["chainId"] == 1
    assert tx["nonce"] == 4
    assert tx["gas"] == 55_000
    assert tx["value"] == 5
    assert tx["maxPriorityFeePerGas"] == 2
    assert tx["maxFeePerGas"] == 22
    assert "gasPrice" not in tx


@pytest.mark.asyncio
async def test_prepare_uses_legacy_price_without_base_fee() -> None:
    client = _client(DummyEth(base_fee=None))

    tx = await client._prepare(b"", TOKEN, TransactionOptions(gas=21_000, nonce=0))

    assert tx["gasPrice"] == 30
    assert tx["nonce"] == 0
    assert tx["gas"] == 21_000


@pytest.mark.asyncio
async def test_prepare_drops_priority_fee_without_base_fee() -> None:
    client = _client(DummyEth(base_fee=None))

    tx = await client._prepare(b"", TOKEN, TransactionOptions(max_priority_fee_per_gas=3))

    assert tx["gasPrice"] == 30
    assert "maxPriorityFeePerGas" not in tx
    assert "maxFeePerGas" not in tx


@pytest.mark.asyncio
async def test_prepare_keeps_caller_fee_cap() -> None:
    client = _client(DummyEth(base_fee=10), priority_fee=2)

    tx = await client._prepare(b"", TOKEN, TransactionOptions(gas=21_000, max_fee_per_gas=100))

    assert tx["maxFeePerGas"] == 100
    assert tx["maxPriorityFeePerGas"] == 2
    assert tx["value"] == 0


@pytest.mark.asyncio
async def test_sign_and_send_roundtrip() -> None:
    eth = DummyEth()
    client = _client(eth)

    signed = await client.sign_prepared_tx_for_addr(
        b"\x09\x5e\xa7\xb3", TOKEN, TransactionOptions(gas=300_000, gas_price=7)
    )
    tx_hash = await client.send_raw_tx(signed.raw_tx)

    assert isinstance(signed.raw_tx, HexBytes)
    assert signed.tx_hash is not None and len(signed.tx_hash) == 32
    assert eth.sent == [bytes(signed.raw_tx)]
    assert tx_hash == "0x" + "01" * 32


@pytest.mark.asyncio
async def test_send_failure_maps_to_network_error() -> None:
    client = _client(DummyEth(fail_send=True))

    with pytest.raises(NetworkError, match="insufficient funds"):
        await client.send_raw_tx(b"\x00")
