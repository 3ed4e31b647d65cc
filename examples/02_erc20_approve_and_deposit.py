"""Example: Approve the default bridge and deposit an ERC20 token into L2."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv
from web3 import Web3

from zk_deposit import DefaultBridges, EthereumProvider, ProviderConfig, Web3EthereumClient

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("erc20_deposit")


async def main() -> None:
    private_key = os.getenv("PRIVATE_KEY")
    if not private_key:
        raise ValueError("PRIVATE_KEY not found in environment variables")

    l1_rpc_url = os.getenv("L1_RPC_URL", "https://sepolia.drpc.org")
    main_contract = os.getenv("MAIN_CONTRACT")
    erc20_bridge = os.getenv("L1_ERC20_BRIDGE")
    token = os.getenv("L1_TOKEN")
    if not main_contract or not erc20_bridge or not token:
        raise ValueError("MAIN_CONTRACT, L1_ERC20_BRIDGE and L1_TOKEN must be set")

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

    amount = int(os.getenv("DEPOSIT_UNITS", "1000000"))
    balance = await provider.erc20_balance(token)
    logger.info("Token balance: %s (depositing %s)", balance, amount)

    if not await provider.is_erc20_deposit_approved(token, threshold=amount):
        approve_hash = await provider.approve_erc20_token_deposits(token)
        logger.info("Approval submitted: %s", approve_hash)
        logger.info("Wait for the approval to be mined before depositing")
        return

    tx_hash = await provider.deposit(token, amount, provider.address)
    logger.info("Deposit submitted: %s", tx_hash)


if __name__ == "__main__":
    asyncio.run(main())
