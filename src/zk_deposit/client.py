"""L1 client capability used to price, sign and submit transactions."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, cast

from aiohttp import ClientTimeout
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import AsyncHTTPProvider, AsyncWeb3
from web3._utils.async_transactions import async_fill_nonce, async_fill_transaction_defaults

from .config import DEFAULT_REQUEST_TIMEOUT
from .constants import DEFAULT_PRIORITY_FEE
from .exceptions import IncorrectCredentialsError, NetworkError
from .types import Address, SignedPayload, TransactionOptions

logger = logging.getLogger(__name__)


class EthereumClient(ABC):
    """Network and signing capability bound to one L1 account.

    Implementations own nonce allocation and fee filling for any option the
    caller leaves unset.
    """

    @property
    @abstractmethod
    def address(self) -> Address:
        pass

    @abstractmethod
    async def get_gas_price(self) -> int:
        """Current L1 gas price in wei.

        Implementations must raise ``NetworkError`` when the query fails; callers
        treat that error, and only that error, as a recoverable oracle outage.
        """

    @abstractmethod
    async def call(self, to: Address, data: bytes) -> bytes:
        pass

    @abstractmethod
    async def sign_prepared_tx_for_addr(
        self, data: bytes, to: Address, options: TransactionOptions
    ) -> SignedPayload:
        pass

    @abstractmethod
    async def send_raw_tx(self, raw_tx: bytes) -> HexStr:
        pass


class Web3EthereumClient(EthereumClient):
    """``EthereumClient`` backed by ``AsyncWeb3`` and a local signing key."""

    def __init__(
        self,
        web3: AsyncWeb3,
        account: LocalAccount,
        *,
        priority_fee: int = DEFAULT_PRIORITY_FEE,
        endpoint: str | None = None,
    ) -> None:
        self._web3 = web3
        self._account = account
        self._priority_fee = priority_fee
        self._endpoint = endpoint

    @classmethod
    def from_rpc(
        cls,
        rpc_url: str,
        private_key: str,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        priority_fee: int = DEFAULT_PRIORITY_FEE,
    ) -> Web3EthereumClient:
        try:
            account = cast(LocalAccount, Account.from_key(private_key))
        except Exception as exc:
            raise IncorrectCredentialsError(
                "Failed to derive signer account from provided private key",
                details={"error": str(exc)},
            ) from exc

        provider = AsyncHTTPProvider(
            rpc_url, request_kwargs={"timeout": ClientTimeout(total=request_timeout)}
        )
        return cls(AsyncWeb3(provider), account, priority_fee=priority_fee, endpoint=rpc_url)

    @property
    def address(self) -> Address:
        return self._account.address

    async def get_gas_price(self) -> int:
        try:
            return int(await self._web3.eth.gas_price)
        except Exception as exc:
            raise NetworkError(
                "Failed to query gas price", endpoint=self._endpoint, details={"error": str(exc)}
            ) from exc

    async def call(self, to: Address, data: bytes) -> bytes:
        try:
            result = await self._web3.eth.call({"to": to, "data": HexBytes(data)})
        except Exception as exc:
            raise NetworkError(
                "eth_call failed",
                endpoint=self._endpoint,
                details={"to": to, "error": str(exc)},
            ) from exc
        return bytes(result)

    async def sign_prepared_tx_for_addr(
        self, data: bytes, to: Address, options: TransactionOptions
    ) -> SignedPayload:
        tx = await self._prepare(data, to, options)
        try:
            signed = self._account.sign_transaction(tx)
        except Exception as exc:
            raise IncorrectCredentialsError(
                "Signer rejected transaction", details={"to": to, "error": str(exc)}
            ) from exc

        return SignedPayload(raw_tx=HexBytes(signed.raw_transaction), tx_hash=HexBytes(signed.hash))

    async def send_raw_tx(self, raw_tx: bytes) -> HexStr:
        try:
            tx_hash = await self._web3.eth.send_raw_transaction(raw_tx)
        except Exception as exc:
            raise NetworkError(str(exc), endpoint=self._endpoint) from exc
        return HexStr(HexBytes(tx_hash).to_0x_hex())

    async def _prepare(
        self, data: bytes, to: Address, options: TransactionOptions
    ) -> dict[str, Any]:
        tx: dict[str, Any] = {
            "from": self.address,
            "to": to,
            "data": HexBytes(data),
            **options.to_dict(),
        }
        if "maxFeePerGas" in tx:
            tx.setdefault("maxPriorityFeePerGas", min(self._priority_fee, tx["maxFeePerGas"]))

        try:
            if "gasPrice" not in tx and "maxFeePerGas" not in tx:
                await self._select_fee_market(tx)
            tx = dict(await async_fill_nonce(self._web3, tx))  # type: ignore[arg-type]
            filled = await async_fill_transaction_defaults(self._web3, tx)  # type: ignore[arg-type]
            tx = dict(filled)
        except Exception as exc:
            raise NetworkError(
                "Failed to prepare transaction",
                endpoint=self._endpoint,
                details={"to": to, "error": str(exc)},
            ) from exc
        return tx

    async def _select_fee_market(self, tx: dict[str, Any]) -> None:
        block = await self._web3.eth.get_block("latest")
        if block.get("baseFeePerGas") is None:
            # Chains without a base fee only accept legacy pricing.
            tx.pop("maxPriorityFeePerGas", None)
            tx["gasPrice"] = await self._web3.eth.gas_price
            logger.debug("No base fee on latest block, using legacy gas price %s", tx["gasPrice"])
            return
        tx.setdefault("maxPriorityFeePerGas", self._priority_fee)
