"""zk-deposit - L1 -> L2 deposit bridging for zkSync-style rollups.

This library builds, prices and submits the layer-1 transactions that move
ETH or ERC20 tokens into a layer-2 account.
"""

from .client import EthereumClient, Web3EthereumClient
from .config import DefaultBridges, GasLimits, ProviderConfig
from .constants import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_PRIORITY_FEE,
    DEPOSIT_L2_GAS_LIMIT,
    ETH_DEPOSIT_GAS_LIMIT,
    L1_TO_L2_GAS_PER_PUBDATA,
    MAX_UINT256,
    ZERO_ADDRESS,
)
from .encoding import ContractInterface, TransactionBuilder
from .exceptions import (
    EncodingError,
    IncorrectCredentialsError,
    NetworkError,
    ValidationError,
    ZkDepositError,
)
from .fees import FeeEstimator
from .provider import EthereumProvider
from .router import DepositRouter
from .submission import SubmissionPipeline
from .types import (
    Address,
    Asset,
    DepositIntent,
    GasPriceQuote,
    GasPriceSource,
    NativeAsset,
    PreparedTransaction,
    SignedPayload,
    TokenAsset,
    TransactionOptions,
    Wei,
    asset_from_address,
)

__version__ = "0.1.0"

__all__ = [
    # Provider and components
    "EthereumProvider",
    "FeeEstimator",
    "DepositRouter",
    "TransactionBuilder",
    "ContractInterface",
    "SubmissionPipeline",
    "EthereumClient",
    "Web3EthereumClient",
    # Configuration
    "ProviderConfig",
    "DefaultBridges",
    "GasLimits",
    # Types
    "Address",
    "Asset",
    "NativeAsset",
    "TokenAsset",
    "asset_from_address",
    "DepositIntent",
    "GasPriceQuote",
    "GasPriceSource",
    "PreparedTransaction",
    "SignedPayload",
    "TransactionOptions",
    "Wei",
    # Constants
    "DEFAULT_GAS_LIMIT",
    "DEFAULT_PRIORITY_FEE",
    "DEPOSIT_L2_GAS_LIMIT",
    "ETH_DEPOSIT_GAS_LIMIT",
    "L1_TO_L2_GAS_PER_PUBDATA",
    "MAX_UINT256",
    "ZERO_ADDRESS",
    # Exceptions
    "ZkDepositError",
    "IncorrectCredentialsError",
    "NetworkError",
    "EncodingError",
    "ValidationError",
]
