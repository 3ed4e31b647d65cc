from __future__ import annotations

from typing import Any, cast

import pytest
from eth_abi import encode as abi_encode
from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import Web3
from web3.types import ChecksumAddress

from zk_deposit.client import EthereumClient
from zk_deposit.config import DefaultBridges, ProviderConfig
from zk_deposit.exceptions import IncorrectCredentialsError, NetworkError
from zk_deposit.types import SignedPayload, TransactionOptions

ETHER = 10**18

SENDER = cast(ChecksumAddress, "0x1000000000000000000000000000000000000001")
MAIN_CONTRACT = cast(ChecksumAddress, "0x2000000000000000000000000000000000000002")
DEFAULT_BRIDGE = cast(ChecksumAddress, "0x3000000000000000000000000000000000000003")
CUSTOM_BRIDGE = cast(ChecksumAddress, "0x4000000000000000000000000000000000000004")
TOKEN = cast(ChecksumAddress, "0x5000000000000000000000000000000000000005")
RECIPIENT = cast(ChecksumAddress, "0x6000000000000000000000000000000000000006")

BASE_COST_SELECTOR = bytes(
    Web3.keccak(text="l2TransactionBaseCost(uint256,uint256,uint256)")[:4]
)


class RecordingClient(EthereumClient):
    """Test double recording every capability call instead of doing network I/O."""

    def __init__(
        self,
        *,
        gas_price: int = 25 * 10**9,
        base_cost: int = 10**15,
        gas_price_error: Exception | None = None,
        sign_error: Exception | None = None,
        send_error: Exception | None = None,
        call_results: dict[bytes, int] | None = None,
    ) -> None:
        self._gas_price = gas_price
        self._base_cost = base_cost
        self._gas_price_error = gas_price_error
        self._sign_error = sign_error
        self._send_error = send_error
        self._call_results = call_results or {}
        self.gas_price_queries = 0
        self.calls: list[tuple[str, bytes]] = []
        self.signed: list[tuple[bytes, str, TransactionOptions]] = []
        self.sent: list[bytes] = []

    @property
    def address(self) -> ChecksumAddress:
        return SENDER

    async def get_gas_price(self) -> int:
        self.gas_price_queries += 1
        if self._gas_price_error is not None:
            raise self._gas_price_error
        return self._gas_price

    async def call(self, to: ChecksumAddress, data: bytes) -> bytes:
        self.calls.append((to, bytes(data)))
        selector = bytes(data[:4])
        if selector == BASE_COST_SELECTOR:
            return abi_encode(["uint256"], [self._base_cost])
        if selector in self._call_results:
            return abi_encode(["uint256"], [self._call_results[selector]])
        raise NetworkError("execution reverted", details={"to": to})

    async def sign_prepared_tx_for_addr(
        self, data: bytes, to: ChecksumAddress, options: TransactionOptions
    ) -> SignedPayload:
        if self._sign_error is not None:
            raise self._sign_error
        self.signed.append((bytes(data), to, options))
        return SignedPayload(raw_tx=HexBytes(b"\x02" + bytes(data)), tx_hash=HexBytes(b"\xab" * 32))

    async def send_raw_tx(self, raw_tx: bytes) -> HexStr:
        if self._send_error is not None:
            raise self._send_error
        self.sent.append(bytes(raw_tx))
        return HexStr("0x" + "ab" * 32)


def make_config(**overrides: Any) -> ProviderConfig:
    params: dict[str, Any] = {
        "main_contract": MAIN_CONTRACT,
        "default_bridges": DefaultBridges(l1_erc20_default_bridge=DEFAULT_BRIDGE),
    }
    params.update(overrides)
    return ProviderConfig(**params)


@pytest.fixture
def config() -> ProviderConfig:
    return make_config()


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def credential_failure() -> IncorrectCredentialsError:
    return IncorrectCredentialsError("keystore locked")
