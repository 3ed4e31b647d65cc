"""Deposit provider: L1 -> L2 bridging of ETH and ERC20 tokens."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from eth_typing import HexStr

from .client import EthereumClient
from .config import ProviderConfig
from .constants import DEFAULT_APPROVAL_THRESHOLD
from .exceptions import ValidationError
from .fees import FeeEstimator
from .router import DepositRouter
from .submission import SubmissionPipeline
from .types import (
    Address,
    DepositIntent,
    PreparedTransaction,
    TokenAsset,
    TransactionOptions,
    asset_from_address,
    check_uint256,
    to_address,
)

logger = logging.getLogger(__name__)


class EthereumProvider:
    """Construct, price and submit L1 transactions that move funds to L2.

    Every operation runs classify -> price -> build -> sign -> submit in
    order. The provider holds only read-only configuration, so independent
    calls may run concurrently on one instance.
    """

    def __init__(
        self,
        client: EthereumClient,
        config: ProviderConfig,
        *,
        fees: FeeEstimator | None = None,
        router: DepositRouter | None = None,
        pipeline: SubmissionPipeline | None = None,
    ) -> None:
        self._client = client
        self._config = config
        self._fees = fees or FeeEstimator(
            client, config.main_contract, fallback_gas_price=config.fallback_gas_price
        )
        self._router = router or DepositRouter(config)
        self._pipeline = pipeline or SubmissionPipeline(client)

    @property
    def config(self) -> ProviderConfig:
        return self._config

    @property
    def address(self) -> Address:
        return self._client.address

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------
    async def base_cost(
        self,
        l2_gas_limit: int,
        gas_per_pubdata: int | None = None,
        gas_price: int | None = None,
    ) -> int:
        """Minimum L1 value required to pay for an L2 execution."""
        quote = await self._fees.resolve_gas_price(gas_price)
        return await self._fees.base_cost(
            l2_gas_limit,
            gas_per_pubdata if gas_per_pubdata is not None else self._config.gas_per_pubdata,
            quote.gas_price,
        )

    # ------------------------------------------------------------------
    # Deposits
    # ------------------------------------------------------------------
    async def build_deposit(
        self,
        l1_token_address: str,
        amount: int,
        to: str,
        operator_tip: int | None = None,
        bridge_address: str | None = None,
        eth_options: TransactionOptions | None = None,
    ) -> PreparedTransaction:
        """Price and encode a deposit without signing it."""
        intent = DepositIntent.create(
            l1_token_address,
            amount,
            to,
            operator_tip=operator_tip,
            bridge_address=bridge_address,
            options=eth_options,
        )
        call = self._router.deposit_call(intent)

        requested = self._config.default_options.overlay(eth_options)
        quote = await self._fees.resolve_gas_price(requested.gas_price)
        base_cost = await self._fees.base_cost(
            self._config.l2_gas_limit, self._config.gas_per_pubdata, quote.gas_price
        )

        return self._router.price(
            call,
            value=self._router.total_value(intent, base_cost),
            base_cost=base_cost,
            quote=quote,
            overrides=intent.options,
        )

    async def deposit(
        self,
        l1_token_address: str,
        amount: int,
        to: str,
        operator_tip: int | None = None,
        bridge_address: str | None = None,
        eth_options: TransactionOptions | None = None,
    ) -> HexStr:
        """Deposit ETH (zero address) or an ERC20 token into an L2 account.

        ERC20 deposits require a prior approval of the bridge, see
        ``approve_erc20_token_deposits``.
        """
        prepared = await self.build_deposit(
            l1_token_address, amount, to, operator_tip, bridge_address, eth_options
        )
        return await self._pipeline.submit(prepared)

    async def request_execute(
        self,
        contract_l2: str,
        l2_value: int,
        calldata: bytes = b"",
        l2_gas_limit: int | None = None,
        factory_deps: Sequence[bytes] | None = None,
        operator_tip: int | None = None,
        gas_price: int | None = None,
        refund_recipient: str | None = None,
        eth_options: TransactionOptions | None = None,
    ) -> HexStr:
        """Request execution of an arbitrary L2 call through the main contract."""
        tip = operator_tip or 0
        check_uint256(l2_value, field_name="l2_value")
        check_uint256(tip, field_name="operator_tip")
        check_uint256(l2_value + tip, field_name="value")

        limit = l2_gas_limit if l2_gas_limit is not None else self._config.l2_gas_limit
        requested = self._config.default_options.overlay(eth_options)
        refund = to_address(refund_recipient, field_name="refund") if refund_recipient else None
        call = self._router.request_execute_call(
            to_address(contract_l2, field_name="contract_l2"),
            l2_value,
            calldata,
            limit,
            self._config.gas_per_pubdata,
            factory_deps or [],
            refund,
            gas=requested.gas or self._config.gas_limits.request_execute,
        )

        quote = await self._fees.resolve_gas_price(
            gas_price if gas_price is not None else requested.gas_price
        )
        base_cost = await self._fees.base_cost(limit, self._config.gas_per_pubdata, quote.gas_price)
        prepared = self._router.price(
            call,
            value=base_cost + tip + l2_value,
            base_cost=base_cost,
            quote=quote,
            overrides=eth_options,
        )
        return await self._pipeline.submit(prepared)

    # ------------------------------------------------------------------
    # Approvals
    # ------------------------------------------------------------------
    def build_approval(
        self,
        token_address: str,
        max_erc20_approve_amount: int | None = None,
        bridge: str | None = None,
        eth_options: TransactionOptions | None = None,
    ) -> PreparedTransaction:
        return self._router.route_approval(
            asset_from_address(token_address),
            max_erc20_approve_amount,
            to_address(bridge, field_name="bridge") if bridge else None,
            eth_options,
        )

    async def approve_erc20_token_deposits(
        self,
        token_address: str,
        bridge: str | None = None,
        eth_options: TransactionOptions | None = None,
    ) -> HexStr:
        """Grant the bridge an unlimited allowance on ``token_address``."""
        return await self.limited_approve_erc20_token_deposits(
            token_address, None, bridge, eth_options
        )

    async def limited_approve_erc20_token_deposits(
        self,
        token_address: str,
        max_erc20_approve_amount: int | None,
        bridge: str | None = None,
        eth_options: TransactionOptions | None = None,
    ) -> HexStr:
        """Grant the bridge an allowance of ``max_erc20_approve_amount``.

        ``None`` approves the maximum ``uint256`` value.
        """
        prepared = self.build_approval(token_address, max_erc20_approve_amount, bridge, eth_options)
        return await self._pipeline.submit(prepared)

    async def erc20_allowance(self, token_address: str, bridge: str | None = None) -> int:
        token = self._token(token_address)
        spender = self._router.resolve_bridge(
            to_address(bridge, field_name="bridge") if bridge else None
        )
        erc20 = self._router.erc20
        raw = await self._client.call(
            token.address, erc20.encode_input("allowance", [self.address, spender])
        )
        (allowance,) = erc20.decode_output("allowance", raw)
        return int(allowance)

    async def is_erc20_deposit_approved(
        self,
        token_address: str,
        bridge: str | None = None,
        threshold: int | None = None,
    ) -> bool:
        """Whether the bridge may pull at least ``threshold`` tokens.

        Without a threshold, any allowance of at least half the ``uint256``
        range counts as an unlimited approval.
        """
        allowance = await self.erc20_allowance(token_address, bridge)
        required = DEFAULT_APPROVAL_THRESHOLD if threshold is None else threshold
        return allowance >= required

    async def erc20_balance(self, token_address: str, owner: str | None = None) -> int:
        token = self._token(token_address)
        account = to_address(owner, field_name="owner") if owner else self.address
        erc20 = self._router.erc20
        raw = await self._client.call(token.address, erc20.encode_input("balanceOf", [account]))
        (balance,) = erc20.decode_output("balanceOf", raw)
        return int(balance)

    def _token(self, token_address: str) -> TokenAsset:
        asset = asset_from_address(token_address)
        if not isinstance(asset, TokenAsset):
            raise ValidationError(
                "ETH is not an ERC20 token", field="token_address", value=token_address
            )
        return asset
