"""Protocol constants for L1 -> L2 deposits."""

# Outer (L1) gas limits per deposit route.
ETH_DEPOSIT_GAS_LIMIT = 200_000
DEFAULT_GAS_LIMIT = 300_000
ERC20_APPROVE_GAS_LIMIT = DEFAULT_GAS_LIMIT

# Gas budget granted to the L2 side of a bridged message.
DEPOSIT_L2_GAS_LIMIT = 3_000_000
L1_TO_L2_GAS_PER_PUBDATA = 800

DEFAULT_PRIORITY_FEE = 2_000_000_000  # 2 gwei

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
MAX_UINT256 = 2**256 - 1

# Allowances at or above this value are treated as "unlimited".
DEFAULT_APPROVAL_THRESHOLD = MAX_UINT256 // 2
