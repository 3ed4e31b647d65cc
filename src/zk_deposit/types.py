"""Type definitions and data models for zk-deposit."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from eth_typing import HexStr
from hexbytes import HexBytes
from web3 import Web3
from web3.types import ChecksumAddress

from .constants import MAX_UINT256, ZERO_ADDRESS
from .exceptions import ValidationError

Address = ChecksumAddress
Wei = int
TransactionHash = HexStr


def to_address(value: str, *, field_name: str = "address") -> Address:
    """Return ``value`` as a checksum address or raise ``ValidationError``."""
    try:
        return Web3.to_checksum_address(value)
    except (ValueError, TypeError) as exc:
        raise ValidationError(
            "Invalid address", field=field_name, value=value, details={"error": str(exc)}
        ) from exc


@dataclass(frozen=True)
class NativeAsset:
    """The chain's native asset (ETH), identified by the zero address."""

    @property
    def address(self) -> Address:
        return Web3.to_checksum_address(ZERO_ADDRESS)


@dataclass(frozen=True)
class TokenAsset:
    """An ERC20 token contract on L1."""

    address: Address


Asset = NativeAsset | TokenAsset


def check_uint256(value: int, *, field_name: str) -> int:
    """Return ``value`` if it fits in a ``uint256``, else raise ``ValidationError``."""
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative", field=field_name, value=value)
    if value > MAX_UINT256:
        raise ValidationError(f"{field_name} exceeds uint256", field=field_name, value=value)
    return value


def asset_from_address(address: str) -> Asset:
    """Classify an L1 asset reference.

    The zero address denotes the native asset; any other address is a token
    contract.
    """
    checksum = to_address(address, field_name="l1_token_address")
    if int(checksum, 16) == 0:
        return NativeAsset()
    return TokenAsset(checksum)


class GasPriceSource(Enum):
    """Where the gas price used for pricing a deposit came from."""

    EXPLICIT = "explicit"
    NETWORK = "network"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class GasPriceQuote:
    """Gas price resolved for a single call."""

    gas_price: Wei
    source: GasPriceSource
    error: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source is GasPriceSource.FALLBACK


@dataclass(frozen=True)
class TransactionOptions:
    """Outer transaction parameters. ``None`` means "let the signer decide"."""

    gas: int | None = None
    gas_price: Wei | None = None
    value: Wei | None = None
    nonce: int | None = None
    max_fee_per_gas: Wei | None = None
    max_priority_fee_per_gas: Wei | None = None

    def overlay(self, overrides: TransactionOptions | None) -> TransactionOptions:
        """Return a new record with every field set in ``overrides`` applied."""
        if overrides is None:
            return replace(self)
        changes = {
            name: getattr(overrides, name)
            for name in self.__dataclass_fields__
            if getattr(overrides, name) is not None
        }
        return replace(self, **changes)

    def to_dict(self) -> dict[str, int]:
        """Return the options as web3 transaction fields, skipping unset ones."""
        mapping = {
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "value": self.value,
            "nonce": self.nonce,
            "maxFeePerGas": self.max_fee_per_gas,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
        }
        return {key: value for key, value in mapping.items() if value is not None}


@dataclass(frozen=True)
class DepositIntent:
    """Caller-supplied parameters for a single deposit."""

    asset: Asset
    amount: Wei
    to: Address
    operator_tip: Wei = 0
    bridge: Address | None = None
    options: TransactionOptions | None = None

    @classmethod
    def create(
        cls,
        l1_token_address: str,
        amount: int,
        to: str,
        *,
        operator_tip: int | None = None,
        bridge_address: str | None = None,
        options: TransactionOptions | None = None,
    ) -> DepositIntent:
        """Validate raw caller input and build an intent."""
        tip = operator_tip or 0
        check_uint256(amount, field_name="amount")
        check_uint256(tip, field_name="operator_tip")

        return cls(
            asset=asset_from_address(l1_token_address),
            amount=amount,
            to=to_address(to, field_name="to"),
            operator_tip=tip,
            bridge=to_address(bridge_address, field_name="bridge") if bridge_address else None,
            options=options,
        )

    @property
    def is_native(self) -> bool:
        return isinstance(self.asset, NativeAsset)


@dataclass(frozen=True)
class PreparedTransaction:
    """Call data and options for one L1 transaction, ready for signing."""

    to: Address
    data: HexBytes
    options: TransactionOptions
    action: str
    context: Mapping[str, Any] = field(default_factory=dict)

    @property
    def value(self) -> Wei:
        return self.options.value or 0

    @property
    def gas_limit(self) -> int | None:
        return self.options.gas


@dataclass(frozen=True)
class SignedPayload:
    """Raw signed transaction bytes produced by the signer."""

    raw_tx: HexBytes
    tx_hash: HexBytes | None = None
