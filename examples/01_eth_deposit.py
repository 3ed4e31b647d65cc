"""Example: Deposit ETH from L1 into an L2 account."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv
from web3 import Web3

from zk_deposit import (
    ZERO_ADDRESS,
    DefaultBridges,
    EthereumProvider,
    ProviderConfig,
    Web3EthereumClient,
)

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("eth_deposit")


async def main() -> None:
    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")

    l1_rpc_url = os.getenv("L1_RPC_URL", "https://sepolia.drpc.org")
    main_contract = os.getenv("MAIN_CONTRACT")
    erc20_bridge = os.getenv("L1_ERC20_BRIDGE")
    if not main_contract or not erc20_bridge:
        raise ValueError("MAIN_CONTRACT and L1_ERC20_BRIDGE must be set")

    client = Web3EthereumClient.from_rpc(l1_rpc_url, private_key)
    provider = EthereumProvider(
        client,
        ProviderConfig(
            main_contract=Web3.to_checksum_address(main_contract),
            default_bridges=DefaultBridges(
                l1_erc20_default_bridge=Web3.to_checksum_address(erc20_bridge)
            ),
        ),
    )

    amount = Web3.to_wei(os.getenv("DEPOSIT_ETH", "0.01"), "ether")
    recipient = os.getenv("L2_RECIPIENT", provider.address)

    prepared = await provider.build_deposit(ZERO_ADDRESS, amount, recipient)
    logger.info(
        "Prepared %s: to=%s value=%s gas=%s pricing=%s",
        prepared.action,
        prepared.to,
        prepared.value,
        prepared.gas_limit,
        prepared.context["gas_price_source"],
    )

    tx_hash = await provider.deposit(ZERO_ADDRESS, amount, recipient)
    logger.info("Deposit submitted: %s", tx_hash)


if __name__ == "__main__":
    asyncio.run(main())
