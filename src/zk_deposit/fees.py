"""Gas price resolution and L1 -> L2 base cost pricing."""

from __future__ import annotations

import logging

from .abi import MAILBOX_ABI
from .client import EthereumClient
from .encoding import ContractInterface
from .exceptions import NetworkError
from .types import Address, GasPriceQuote, GasPriceSource

logger = logging.getLogger(__name__)


class FeeEstimator:
    """Price the L2 execution of a bridged message.

    The base cost is never computed locally: it is read from the main
    contract's ``l2TransactionBaseCost`` view so that it always matches the
    on-chain gas accounting.
    """

    def __init__(
        self,
        client: EthereumClient,
        main_contract: Address,
        *,
        fallback_gas_price: int = 0,
        interface: ContractInterface | None = None,
    ) -> None:
        self._client = client
        self._main_contract = main_contract
        self._fallback_gas_price = fallback_gas_price
        self._interface = interface or ContractInterface("Mailbox", MAILBOX_ABI)

    async def resolve_gas_price(self, gas_price: int | None = None) -> GasPriceQuote:
        """Return the caller's gas price, or query one from the network.

        A failed query does not abort pricing. The configured fallback is used
        instead and the returned quote is marked ``GasPriceSource.FALLBACK``.
        """
        if gas_price is not None:
            return GasPriceQuote(gas_price, GasPriceSource.EXPLICIT)

        try:
            queried = await self._client.get_gas_price()
        except NetworkError as exc:
            logger.warning(
                "Gas price query failed, pricing with fallback %s: %s",
                self._fallback_gas_price,
                exc,
            )
            return GasPriceQuote(self._fallback_gas_price, GasPriceSource.FALLBACK, error=str(exc))

        return GasPriceQuote(queried, GasPriceSource.NETWORK)

    async def base_cost(self, l2_gas_limit: int, gas_per_pubdata: int, gas_price: int) -> int:
        data = self._interface.encode_input(
            "l2TransactionBaseCost", [gas_price, l2_gas_limit, gas_per_pubdata]
        )
        raw = await self._client.call(self._main_contract, data)
        (cost,) = self._interface.decode_output("l2TransactionBaseCost", raw)
        logger.debug(
            "Base cost %s (l2_gas_limit=%s, gas_per_pubdata=%s, gas_price=%s)",
            cost,
            l2_gas_limit,
            gas_per_pubdata,
            gas_price,
        )
        return int(cost)
