"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the dispatcher can be driven by a fake client in
tests without any network or credential.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from lsd_wizard_cli.core.models import InvocationRequest


class WizardUtils(Protocol):
    """Contract for an LSD network client bound to one signer.

    Every method performs exactly one contract read or one transaction.
    Implementations must map all backend-specific exceptions to
    :class:`~lsd_wizard_cli.exceptions.LsdWizardError` subclasses.
    """

    def get_dao_address(self) -> str:
        """Return the address set as DAO when the LSD network was deployed."""
        ...  # pragma: no cover

    def get_saveth_vault_address(self) -> str:
        """Return the protected staking (savETH) vault address."""
        ...  # pragma: no cover

    def get_staking_funds_vault_address(self) -> str:
        """Return the fees-and-MEV (staking funds) vault address."""
        ...  # pragma: no cover

    def is_whitelisting_enabled(self) -> bool:
        """Return whether only whitelisted node runners may join."""
        ...  # pragma: no cover

    def is_node_runner_whitelisted(self, node_runner_address: str) -> bool:
        """Return the whitelist status of *node_runner_address*."""
        ...  # pragma: no cover

    def is_node_runner_banned(self, node_runner_address: str) -> bool:
        """Return whether *node_runner_address* was banned by the DAO."""
        ...  # pragma: no cover

    def update_whitelisting(self, new_whitelisting_status: bool) -> str:
        """Send a transaction toggling whitelisting; return its hash.

        Raises
        ------
        ExternalCallError
            When the transaction cannot be built or is rejected.
        """
        ...  # pragma: no cover

    def update_node_runner_whitelist_status(
        self,
        node_runner_address: str,
        new_whitelisting_status: bool,
    ) -> str:
        """Send a transaction setting one node runner's status; return its hash."""
        ...  # pragma: no cover

    def get_network_fee_recipient(self) -> str:
        """Return the syndicate address node runners must use as fee recipient."""
        ...  # pragma: no cover


WizardFactory = Callable[[InvocationRequest], WizardUtils]
"""Builds a :class:`WizardUtils` bound to the request's endpoint and key."""
