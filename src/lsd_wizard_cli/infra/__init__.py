"""Infrastructure layer — external system integration.

This layer wraps all interaction with web3.py, eth-account and the
JSON-RPC endpoint.  Every raw third-party exception must be caught here
and re-raised as a :class:`~lsd_wizard_cli.exceptions.LsdWizardError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from lsd_wizard_cli.infra.abi import LIQUID_STAKING_MANAGER_ABI
from lsd_wizard_cli.infra.web3_wizard import Web3WizardUtils, build_wizard

__all__: list[str] = [
    "LIQUID_STAKING_MANAGER_ABI",
    "Web3WizardUtils",
    "build_wizard",
]
