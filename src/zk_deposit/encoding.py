"""Call data encoding for L1 contract interactions."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from eth_abi.exceptions import DecodingError
from eth_abi.exceptions import EncodingError as ABIEncodingError
from hexbytes import HexBytes
from web3 import AsyncWeb3
from web3.exceptions import MismatchedABI, Web3ValidationError
from web3.utils import (
    function_abi_to_4byte_selector,
    get_abi_element,
    get_abi_input_types,
    get_abi_output_types,
)

from .exceptions import EncodingError, NetworkError
from .types import Address, PreparedTransaction, TransactionOptions

logger = logging.getLogger(__name__)


class ContractInterface:
    """Named ABI bound to an address-less web3 contract used for encoding only."""

    def __init__(
        self, name: str, abi: Sequence[Mapping[str, Any]], web3: AsyncWeb3 | None = None
    ) -> None:
        self.name = name
        self.abi = [dict(entry) for entry in abi]
        self._contract = (web3 or AsyncWeb3()).eth.contract(abi=self.abi)

    def __repr__(self) -> str:
        return f"ContractInterface({self.name!r})"

    @property
    def function_names(self) -> list[str]:
        return sorted({str(e["name"]) for e in self.abi if e.get("type") == "function"})

    def function(self, function_name: str) -> Mapping[str, Any]:
        try:
            return get_abi_element(self.abi, function_name)  # type: ignore[arg-type]
        except MismatchedABI as exc:
            raise EncodingError(
                f"Function '{function_name}' not found in {self.name} interface",
                function_name=function_name,
                details={"available": self.function_names, "error": str(exc)},
            ) from exc

    def input_types(self, function_name: str) -> list[str]:
        return list(get_abi_input_types(self.function(function_name)))  # type: ignore[arg-type]

    def output_types(self, function_name: str) -> list[str]:
        return list(get_abi_output_types(self.function(function_name)))  # type: ignore[arg-type]

    def selector(self, function_name: str) -> bytes:
        abi = self.function(function_name)
        return bytes(function_abi_to_4byte_selector(abi))  # type: ignore[arg-type]

    def encode_input(self, function_name: str, args: Sequence[Any]) -> HexBytes:
        """Return selector + ABI-encoded ``args`` for ``function_name``."""
        types = self.input_types(function_name)
        try:
            encoded = self._contract.encode_abi(function_name, args=list(args))
        except (MismatchedABI, Web3ValidationError, ABIEncodingError, TypeError, ValueError) as exc:
            raise EncodingError(
                f"Failed to encode parameters for {self.name}.{function_name}",
                function_name=function_name,
                details={"types": types, "arguments": len(args), "error": str(exc)},
            ) from exc

        return HexBytes(encoded)

    def decode_output(self, function_name: str, data: bytes) -> tuple[Any, ...]:
        types = self.output_types(function_name)
        try:
            return tuple(self._contract.w3.codec.decode(types, bytes(data)))
        except (DecodingError, TypeError, ValueError) as exc:
            raise NetworkError(
                f"Failed to decode {self.name}.{function_name} response",
                details={"types": types, "raw": HexBytes(data).to_0x_hex(), "error": str(exc)},
            ) from exc


class TransactionBuilder:
    """Pair encoded call data with the options the transaction is sent with."""

    def build(
        self,
        interface: ContractInterface,
        target: Address,
        function_name: str,
        args: Sequence[Any],
        options: TransactionOptions,
        *,
        action: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> PreparedTransaction:
        data = interface.encode_input(function_name, args)
        logger.debug(
            "Encoded %s.%s for %s (%d bytes, gas=%s, value=%s)",
            interface.name,
            function_name,
            target,
            len(data),
            options.gas,
            options.value,
        )
        return PreparedTransaction(
            to=target,
            data=data,
            options=options,
            action=action or function_name,
            context=dict(context or {}),
        )
