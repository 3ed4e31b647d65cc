"""Sign and submit prepared transactions."""

from __future__ import annotations

import logging

from eth_typing import HexStr

from .client import EthereumClient
from .exceptions import IncorrectCredentialsError, NetworkError
from .types import PreparedTransaction

logger = logging.getLogger(__name__)


class SubmissionPipeline:
    """Hand prepared call data to the signer and broadcast the result.

    Signing failures surface as ``IncorrectCredentialsError`` and stop the
    pipeline before anything is sent. Broadcast failures surface as
    ``NetworkError``. Nothing is retried here.
    """

    def __init__(self, client: EthereumClient) -> None:
        self._client = client

    async def submit(self, prepared: PreparedTransaction) -> HexStr:
        logger.debug(
            "Signing %s for %s (gas=%s, value=%s)",
            prepared.action,
            prepared.to,
            prepared.gas_limit,
            prepared.value,
        )
        try:
            signed = await self._client.sign_prepared_tx_for_addr(
                prepared.data, prepared.to, prepared.options
            )
        except (IncorrectCredentialsError, NetworkError):
            raise
        except Exception as exc:
            raise IncorrectCredentialsError(
                "Signer failed to produce a transaction",
                details={"action": prepared.action, "error": str(exc)},
            ) from exc

        try:
            tx_hash = await self._client.send_raw_tx(signed.raw_tx)
        except NetworkError:
            raise
        except Exception as exc:
            raise NetworkError(str(exc), details={"action": prepared.action}) from exc

        logger.info("Transaction sent for action=%s hash=%s", prepared.action, tx_hash)
        return tx_hash
