"""Configuration containers for the deposit provider."""

from __future__ import annotations

from dataclasses import dataclass, field

from web3.types import ChecksumAddress

from .constants import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_PRIORITY_FEE,
    DEPOSIT_L2_GAS_LIMIT,
    ERC20_APPROVE_GAS_LIMIT,
    ETH_DEPOSIT_GAS_LIMIT,
    L1_TO_L2_GAS_PER_PUBDATA,
)
from .types import TransactionOptions

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_FALLBACK_GAS_PRICE = 0


@dataclass(frozen=True)
class DefaultBridges:
    """Bridge contracts used when a call does not name one."""

    l1_erc20_default_bridge: ChecksumAddress


@dataclass(frozen=True)
class GasLimits:
    """Outer L1 gas limits for each kind of transaction."""

    eth_deposit: int = ETH_DEPOSIT_GAS_LIMIT
    erc20_deposit: int = DEFAULT_GAS_LIMIT
    erc20_approve: int = ERC20_APPROVE_GAS_LIMIT
    request_execute: int = DEFAULT_GAS_LIMIT


@dataclass(frozen=True)
class ProviderConfig:
    """Aggregated configuration used to construct an ``EthereumProvider``.

    ``main_contract`` is the L2 chain's L1 diamond proxy: it is both the
    execution entry point for native deposits and the base-cost oracle.
    """

    main_contract: ChecksumAddress
    default_bridges: DefaultBridges
    gas_limits: GasLimits = field(default_factory=GasLimits)
    l2_gas_limit: int = DEPOSIT_L2_GAS_LIMIT
    gas_per_pubdata: int = L1_TO_L2_GAS_PER_PUBDATA
    priority_fee: int = DEFAULT_PRIORITY_FEE
    fallback_gas_price: int = DEFAULT_FALLBACK_GAS_PRICE
    default_options: TransactionOptions = field(default_factory=TransactionOptions)
