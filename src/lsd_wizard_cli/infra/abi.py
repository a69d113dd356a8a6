"""Minimal LiquidStakingManager ABI.

Only the entries lsd-wizard calls are listed; web3.py needs nothing
more to encode the calls and decode their results.
"""

from __future__ import annotations

from typing import Any


def _view(name: str, inputs: list[tuple[str, str]], output: str) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": "", "type": output}],
    }


def _write(name: str, inputs: list[tuple[str, str]]) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "nonpayable",
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [],
    }


LIQUID_STAKING_MANAGER_ABI: list[dict[str, Any]] = [
    _view("dao", [], "address"),
    _view("savETHVault", [], "address"),
    _view("stakingFundsVault", [], "address"),
    _view("enableWhitelisting", [], "bool"),
    _view("isNodeRunnerWhitelisted", [("_nodeRunner", "address")], "bool"),
    _view("isNodeRunnerBanned", [("_nodeRunner", "address")], "bool"),
    _view("getNetworkFeeRecipient", [], "address"),
    _write("updateWhitelisting", [("_changeWhitelist", "bool")]),
    _write(
        "updateNodeRunnerWhitelistStatus",
        [("_nodeRunner", "address"), ("_isWhitelisted", "bool")],
    ),
]
