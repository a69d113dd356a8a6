"""Core / service layer — request validation and command dispatch.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from lsd_wizard_cli.core.dispatcher import COMMANDS, CommandDispatcher, build_request
from lsd_wizard_cli.core.models import CommandResult, CommandSpec, InvocationRequest, Network
from lsd_wizard_cli.core.protocols import WizardFactory, WizardUtils

__all__: list[str] = [
    "COMMANDS",
    "CommandDispatcher",
    "CommandResult",
    "CommandSpec",
    "InvocationRequest",
    "Network",
    "WizardFactory",
    "WizardUtils",
    "build_request",
]
