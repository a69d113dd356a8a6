"""Shared pytest fixtures and configuration for the lsd-wizard test suite.

Guidelines
----------
* No network access in any test.
* web3 must be mocked at the infra boundary, or used offline only.
* Core tests must be pure — no side effects.
* Tests must not depend on the caller's environment variables.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from lsd_wizard_cli.core.models import InvocationRequest, Network

MANAGER = "0x" + "11" * 20
NODE_RUNNER = "0x" + "ab" * 20
DAO = "0x" + "da" * 20
# Well-known throwaway key from the web3.py documentation.
PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ETH_URL", "PRIVATE_KEY", "LSD_MANAGER_ADDRESS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def fake_utils() -> MagicMock:
    """A fake WizardUtils with plausible return values."""
    utils = MagicMock()
    utils.get_dao_address.return_value = DAO
    utils.get_saveth_vault_address.return_value = "0x" + "5a" * 20
    utils.get_staking_funds_vault_address.return_value = "0x" + "5f" * 20
    utils.is_whitelisting_enabled.return_value = True
    utils.is_node_runner_whitelisted.return_value = False
    utils.is_node_runner_banned.return_value = False
    utils.update_whitelisting.return_value = "0x" + "aa" * 32
    utils.update_node_runner_whitelist_status.return_value = "0x" + "bb" * 32
    utils.get_network_fee_recipient.return_value = "0x" + "fe" * 20
    return utils


def make_request(**overrides: object) -> InvocationRequest:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, object] = {
        "network": Network.MAINNET,
        "eth_url": "http://localhost:8545",
        "private_key": PRIVATE_KEY,
        "liquid_staking_manager_address": MANAGER,
        "command": "getDaoAddress",
    }
    defaults.update(overrides)
    return InvocationRequest(**defaults)  # type: ignore[arg-type]
