"""Route deposits and approvals to the right contract, method and value."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from web3 import Web3

from .abi import ERC20_ABI, L1_BRIDGE_ABI, MAILBOX_ABI
from .config import ProviderConfig
from .constants import MAX_UINT256, ZERO_ADDRESS
from .encoding import ContractInterface, TransactionBuilder
from .exceptions import ValidationError
from .types import (
    Address,
    Asset,
    DepositIntent,
    GasPriceQuote,
    NativeAsset,
    PreparedTransaction,
    TokenAsset,
    TransactionOptions,
    check_uint256,
)

logger = logging.getLogger(__name__)


class DepositRouter:
    """Decide the target, method and transaction options for each call.

    The router performs no network I/O. Calls are encoded first
    (``deposit_call``) so that interface errors surface before pricing, then
    priced (``price``) once the base cost and gas price are known.
    """

    def __init__(self, config: ProviderConfig, builder: TransactionBuilder | None = None) -> None:
        self._config = config
        self._builder = builder or TransactionBuilder()
        self.erc20 = ContractInterface("ERC20", ERC20_ABI)
        self.l1_bridge = ContractInterface("L1Bridge", L1_BRIDGE_ABI)
        self.mailbox = ContractInterface("Mailbox", MAILBOX_ABI)

    # ------------------------------------------------------------------
    # Selection rules
    # ------------------------------------------------------------------
    def resolve_bridge(self, bridge: Address | None = None) -> Address:
        if bridge is not None:
            return bridge
        return self._config.default_bridges.l1_erc20_default_bridge

    def deposit_gas_limit(self, asset: Asset) -> int:
        limits = self._config.gas_limits
        if isinstance(asset, NativeAsset):
            return limits.eth_deposit
        return limits.erc20_deposit

    def total_value(self, intent: DepositIntent, base_cost: int) -> int:
        if isinstance(intent.asset, NativeAsset):
            return base_cost + intent.operator_tip + intent.amount
        # Tokens move through the bridge's transferFrom, not as native value.
        return base_cost + intent.operator_tip

    def options_for(
        self,
        overrides: TransactionOptions | None,
        *,
        gas: int,
        value: int | None = None,
        quote: GasPriceQuote | None = None,
    ) -> TransactionOptions:
        """Overlay caller options on the configured defaults.

        ``gas`` and ``value`` belong to the route and always replace whatever
        the caller passed. A fallback gas price quote is never written into
        the options; the signer fills the fee instead. Without a legacy gas
        price the configured priority fee becomes the default tip, capped by
        any caller fee cap.
        """
        options = self._config.default_options.overlay(overrides)
        max_fee = options.max_fee_per_gas
        priority_fee = options.max_priority_fee_per_gas

        gas_price = options.gas_price
        if gas_price is None and quote is not None and not quote.is_fallback:
            gas_price = quote.gas_price
        if max_fee is not None or priority_fee is not None:
            gas_price = None
        if gas_price is None and priority_fee is None:
            priority_fee = self._config.priority_fee
            if max_fee is not None:
                priority_fee = min(priority_fee, max_fee)

        return TransactionOptions(
            gas=gas,
            gas_price=gas_price,
            value=value,
            nonce=options.nonce,
            max_fee_per_gas=max_fee,
            max_priority_fee_per_gas=priority_fee,
        )

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------
    def deposit_call(self, intent: DepositIntent) -> PreparedTransaction:
        """Encode the deposit call for ``intent`` without pricing it."""
        check_uint256(self.total_value(intent, 0), field_name="value")
        gas = self.deposit_gas_limit(intent.asset)
        context = {
            "asset": intent.asset.address,
            "amount": intent.amount,
            "to": intent.to,
            "operator_tip": intent.operator_tip,
        }

        if isinstance(intent.asset, TokenAsset):
            bridge = self.resolve_bridge(intent.bridge)
            logger.debug(
                "Routing ERC20 deposit of %s %s via bridge %s",
                intent.amount,
                intent.asset.address,
                bridge,
            )
            return self._builder.build(
                self.l1_bridge,
                bridge,
                "deposit",
                [
                    intent.to,
                    intent.asset.address,
                    intent.amount,
                    self._config.l2_gas_limit,
                    self._config.gas_per_pubdata,
                ],
                TransactionOptions(gas=gas),
                action="erc20_deposit",
                context={**context, "bridge": bridge},
            )

        logger.debug("Routing ETH deposit of %s to %s", intent.amount, intent.to)
        return self._builder.build(
            self.mailbox,
            self._config.main_contract,
            "requestL2Transaction",
            [
                intent.to,
                intent.amount,
                b"",
                self._config.l2_gas_limit,
                self._config.gas_per_pubdata,
                [],
                Web3.to_checksum_address(ZERO_ADDRESS),
            ],
            TransactionOptions(gas=gas),
            action="eth_deposit",
            context=context,
        )

    def price(
        self,
        call: PreparedTransaction,
        *,
        value: int,
        base_cost: int,
        quote: GasPriceQuote,
        overrides: TransactionOptions | None = None,
    ) -> PreparedTransaction:
        """Attach value and fees to an encoded call."""
        check_uint256(value, field_name="value")
        options = self.options_for(overrides, gas=call.options.gas or 0, value=value, quote=quote)
        return replace(
            call,
            options=options,
            context={
                **call.context,
                "base_cost": base_cost,
                "gas_price": quote.gas_price,
                "gas_price_source": quote.source.value,
            },
        )

    def route_deposit(
        self, intent: DepositIntent, base_cost: int, quote: GasPriceQuote
    ) -> PreparedTransaction:
        return self.price(
            self.deposit_call(intent),
            value=self.total_value(intent, base_cost),
            base_cost=base_cost,
            quote=quote,
            overrides=intent.options,
        )

    def request_execute_call(
        self,
        contract_l2: Address,
        l2_value: int,
        calldata: bytes,
        l2_gas_limit: int,
        gas_per_pubdata: int,
        factory_deps: Sequence[bytes],
        refund_recipient: Address | None,
        *,
        gas: int,
    ) -> PreparedTransaction:
        refund = refund_recipient or Web3.to_checksum_address(ZERO_ADDRESS)
        return self._builder.build(
            self.mailbox,
            self._config.main_contract,
            "requestL2Transaction",
            [
                contract_l2,
                l2_value,
                bytes(calldata),
                l2_gas_limit,
                gas_per_pubdata,
                [bytes(dep) for dep in factory_deps],
                refund,
            ],
            TransactionOptions(gas=gas),
            action="request_execute",
            context={
                "contract_l2": contract_l2,
                "l2_value": l2_value,
                "l2_gas_limit": l2_gas_limit,
                "refund_recipient": refund,
            },
        )

    def route_approval(
        self,
        asset: Asset,
        allowance: int | None = None,
        bridge: Address | None = None,
        overrides: TransactionOptions | None = None,
    ) -> PreparedTransaction:
        if not isinstance(asset, TokenAsset):
            raise ValidationError(
                "ETH deposits do not require an approval", field="token_address", value=ZERO_ADDRESS
            )

        amount = MAX_UINT256 if allowance is None else allowance
        check_uint256(amount, field_name="max_erc20_approve_amount")

        spender = self.resolve_bridge(bridge)
        return self._builder.build(
            self.erc20,
            asset.address,
            "approve",
            [spender, amount],
            self.options_for(overrides, gas=self._config.gas_limits.erc20_approve),
            action="erc20_approve",
            context={"token": asset.address, "spender": spender, "allowance": amount},
        )
