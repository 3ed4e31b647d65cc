"""Tests for zk_deposit.types."""

import pytest

from zk_deposit.constants import MAX_UINT256, ZERO_ADDRESS
from zk_deposit.exceptions import ValidationError
from zk_deposit.types import (
    DepositIntent,
    GasPriceQuote,
    GasPriceSource,
    NativeAsset,
    TokenAsset,
    TransactionOptions,
    asset_from_address,
    check_uint256,
)

from conftest import RECIPIENT, TOKEN


class TestAssetClassification:
    def test_zero_address_is_native(self):
        assert asset_from_address(ZERO_ADDRESS) == NativeAsset()

    def test_non_zero_address_is_token(self):
        asset = asset_from_address(TOKEN.lower())
        assert asset == TokenAsset(TOKEN)
        assert asset.address == TOKEN

    def test_native_asset_reports_zero_address(self):
        assert int(NativeAsset().address, 16) == 0

    def test_invalid_address_raises(self):
        with pytest.raises(ValidationError) as excinfo:
            asset_from_address("0x1234")
        assert excinfo.value.field == "l1_token_address"


class TestDepositIntent:
    def test_create_defaults_tip_to_zero(self):
        intent = DepositIntent.create(ZERO_ADDRESS, 5, RECIPIENT)
        assert intent.is_native
        assert intent.operator_tip == 0
        assert intent.bridge is None

    def test_create_token_intent(self):
        intent = DepositIntent.create(TOKEN, 100, RECIPIENT, operator_tip=3)
        assert not intent.is_native
        assert intent.asset == TokenAsset(TOKEN)
        assert intent.operator_tip == 3

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            DepositIntent.create(ZERO_ADDRESS, -1, RECIPIENT)
        assert excinfo.value.field == "amount"

    def test_negative_tip_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            DepositIntent.create(ZERO_ADDRESS, 1, RECIPIENT, operator_tip=-5)
        assert excinfo.value.field == "operator_tip"

    def test_intent_is_immutable(self):
        intent = DepositIntent.create(ZERO_ADDRESS, 1, RECIPIENT)
        with pytest.raises(AttributeError):
            intent.amount = 2  # type: ignore[misc]


class TestTransactionOptions:
    def test_overlay_applies_only_set_fields(self):
        defaults = TransactionOptions(gas=21_000, gas_price=7, nonce=1)
        merged = defaults.overlay(TransactionOptions(gas_price=9))
        assert merged == TransactionOptions(gas=21_000, gas_price=9, nonce=1)

    def test_overlay_returns_fresh_record(self):
        defaults = TransactionOptions(gas=1)
        merged = defaults.overlay(None)
        assert merged == defaults
        assert merged is not defaults

    def test_to_dict_skips_unset_fields(self):
        options = TransactionOptions(gas=200_000, value=10)
        assert options.to_dict() == {"gas": 200_000, "value": 10}


def test_gas_price_quote_fallback_flag():
    assert GasPriceQuote(0, GasPriceSource.FALLBACK, error="boom").is_fallback
    assert not GasPriceQuote(1, GasPriceSource.NETWORK).is_fallback


class TestUint256Range:
    def test_amount_above_uint256_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            DepositIntent.create(TOKEN, MAX_UINT256 + 1, RECIPIENT)
        assert excinfo.value.field == "amount"

    def test_tip_above_uint256_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            DepositIntent.create(TOKEN, 1, RECIPIENT, operator_tip=MAX_UINT256 + 1)
        assert excinfo.value.field == "operator_tip"

    def test_boundary_values_accepted(self):
        assert check_uint256(0, field_name="x") == 0
        assert check_uint256(MAX_UINT256, field_name="x") == MAX_UINT256
