"""Minimal ABI fragments for the contracts touched by deposits."""

from __future__ import annotations

from typing import Any


def _fn(
    name: str,
    inputs: list[tuple[str, str]],
    outputs: list[str] | None = None,
    *,
    mutability: str = "nonpayable",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": arg, "type": kind} for arg, kind in inputs],
        "outputs": [{"name": "", "type": kind} for kind in outputs or []],
        "stateMutability": mutability,
    }


ERC20_ABI: list[dict[str, Any]] = [
    _fn("approve", [("spender", "address"), ("amount", "uint256")], ["bool"]),
    _fn(
        "allowance",
        [("owner", "address"), ("spender", "address")],
        ["uint256"],
        mutability="view",
    ),
    _fn("balanceOf", [("account", "address")], ["uint256"], mutability="view"),
]

L1_BRIDGE_ABI: list[dict[str, Any]] = [
    _fn(
        "deposit",
        [
            ("_l2Receiver", "address"),
            ("_l1Token", "address"),
            ("_amount", "uint256"),
            ("_l2TxGasLimit", "uint256"),
            ("_l2TxGasPerPubdataByte", "uint256"),
        ],
        ["bytes32"],
        mutability="payable",
    ),
]

MAILBOX_ABI: list[dict[str, Any]] = [
    _fn(
        "requestL2Transaction",
        [
            ("_contractL2", "address"),
            ("_l2Value", "uint256"),
            ("_calldata", "bytes"),
            ("_l2GasLimit", "uint256"),
            ("_l2GasPerPubdataByteLimit", "uint256"),
            ("_factoryDeps", "bytes[]"),
            ("_refundRecipient", "address"),
        ],
        ["bytes32"],
        mutability="payable",
    ),
    _fn(
        "l2TransactionBaseCost",
        [
            ("_gasPrice", "uint256"),
            ("_l2GasLimit", "uint256"),
            ("_l2GasPerPubdataByteLimit", "uint256"),
        ],
        ["uint256"],
        mutability="view",
    ),
]
