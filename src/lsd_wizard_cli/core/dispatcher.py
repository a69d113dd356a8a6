"""Core command dispatcher — validates requests and routes commands.

The dispatcher owns a lookup table of :class:`CommandSpec` entries and
a :data:`~lsd_wizard_cli.core.protocols.WizardFactory` injected at
construction time.  It is responsible for:

* Turning raw CLI values into a validated :class:`InvocationRequest`.
* Rejecting bad input before any client is constructed.
* Invoking exactly one client operation per request.
* Ensuring only :class:`~lsd_wizard_cli.exceptions.LsdWizardError`
  subclasses escape.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``, no web3 import.
* No retries: every operation is attempted at most once.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any

from lsd_wizard_cli.core.models import (
    CommandResult,
    CommandSpec,
    InvocationRequest,
    Network,
)
from lsd_wizard_cli.core.protocols import WizardFactory, WizardUtils
from lsd_wizard_cli.exceptions import (
    ExternalCallError,
    InvalidCommandError,
    InvalidNetworkError,
    InvalidParameterError,
    LsdWizardError,
    MissingParameterError,
)

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

_TRUE_WORDS: frozenset[str] = frozenset({"true", "1", "yes"})
_FALSE_WORDS: frozenset[str] = frozenset({"false", "0", "no"})

# InvocationRequest field name -> CLI flag, for error messages.
_FLAG_NAMES: dict[str, str] = {
    "node_runner_address": "--nodeRunnerAddress",
    "new_whitelisting_status": "--newWhitelistingStatus",
}


# ---------------------------------------------------------------------------
# Command table
# ---------------------------------------------------------------------------

def _specs(*specs: CommandSpec) -> MappingProxyType[str, CommandSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


COMMANDS: MappingProxyType[str, CommandSpec] = _specs(
    CommandSpec(
        name="getDaoAddress",
        handler=lambda utils, req: utils.get_dao_address(),
    ),
    CommandSpec(
        name="getSavETHVaultAddress",
        handler=lambda utils, req: utils.get_saveth_vault_address(),
    ),
    CommandSpec(
        name="getStakingFundsVaultAddress",
        handler=lambda utils, req: utils.get_staking_funds_vault_address(),
    ),
    CommandSpec(
        name="isWhitelistingEnabled",
        handler=lambda utils, req: utils.is_whitelisting_enabled(),
    ),
    CommandSpec(
        name="isNodeRunnerWhitelisted",
        handler=lambda utils, req: utils.is_node_runner_whitelisted(
            req.node_runner_address,
        ),
        required=("node_runner_address",),
    ),
    CommandSpec(
        name="isNodeRunnerBanned",
        handler=lambda utils, req: utils.is_node_runner_banned(
            req.node_runner_address,
        ),
        required=("node_runner_address",),
    ),
    CommandSpec(
        name="updateWhitelisting",
        handler=lambda utils, req: utils.update_whitelisting(
            req.new_whitelisting_status,
        ),
        required=("new_whitelisting_status",),
        writes=True,
        confirmation="Whitelisting status updated",
    ),
    CommandSpec(
        name="updateNodeRunnerWhitelistStatus",
        handler=lambda utils, req: utils.update_node_runner_whitelist_status(
            req.node_runner_address,
            req.new_whitelisting_status,
        ),
        required=("node_runner_address", "new_whitelisting_status"),
        writes=True,
        confirmation="Node runner whitelist status updated",
    ),
    CommandSpec(
        name="getNetworkFeeRecipient",
        handler=lambda utils, req: utils.get_network_fee_recipient(),
    ),
)
"""Every command the CLI accepts, keyed by its ``--command`` name."""


# ---------------------------------------------------------------------------
# Validation helpers (pure)
# ---------------------------------------------------------------------------

def parse_network(value: str) -> Network:
    """Map a ``--network`` literal to :class:`Network`.

    Raises
    ------
    InvalidNetworkError
        For anything other than ``mainnet`` or ``goerli``.
    """
    try:
        return Network(value)
    except ValueError:
        supported = ", ".join(n.value for n in Network)
        raise InvalidNetworkError(
            f"Invalid network: {value!r}",
            hint=f"Supported networks: {supported}.",
        ) from None


def lookup_command(name: str) -> CommandSpec:
    """Return the :class:`CommandSpec` registered under *name*.

    Raises
    ------
    InvalidCommandError
        If *name* is not a known command.
    """
    spec = COMMANDS.get(name)
    if spec is None:
        raise InvalidCommandError(
            f"Invalid command: {name!r}",
            hint=f"Known commands: {', '.join(COMMANDS)}.",
        )
    return spec


def parse_bool(value: str, *, flag: str) -> bool:
    """Parse a CLI boolean strictly; ``"false"`` is never truthy."""
    normalized = value.strip().lower()
    if normalized in _TRUE_WORDS:
        return True
    if normalized in _FALSE_WORDS:
        return False
    raise InvalidParameterError(
        f"{flag} must be true or false, got {value!r}",
    )


def validate_address(value: str, *, flag: str) -> str:
    """Check that *value* is a 20-byte hex address and return it stripped."""
    candidate = value.strip()
    if not _ADDRESS_RE.match(candidate):
        raise InvalidParameterError(
            f"{flag} is not a valid address: {value!r}",
            hint="Expected 0x followed by 40 hex characters.",
        )
    return candidate


def build_request(
    *,
    network: str,
    eth_url: str | None,
    private_key: str | None,
    liquid_staking_manager_address: str | None,
    command: str,
    node_runner_address: str | None = None,
    new_whitelisting_status: str | None = None,
) -> InvocationRequest:
    """Validate raw CLI values and return an :class:`InvocationRequest`.

    Checks run in a fixed order: network, command, connection settings,
    then the command's own parameters.  Nothing here touches the network.

    Raises
    ------
    InvalidNetworkError
    InvalidCommandError
    MissingParameterError
    InvalidParameterError
    """
    parsed_network = parse_network(network)
    spec = lookup_command(command)

    if not eth_url:
        raise MissingParameterError(
            "--ethUrl is required.", hint="Or set the ETH_URL environment variable.",
        )
    if not private_key:
        raise MissingParameterError(
            "--privateKey is required.",
            hint="Or set the PRIVATE_KEY environment variable.",
        )
    if not liquid_staking_manager_address:
        raise MissingParameterError(
            "--liquidStakingManagerAddress is required.",
            hint="Or set the LSD_MANAGER_ADDRESS environment variable.",
        )
    manager = validate_address(
        liquid_staking_manager_address, flag="--liquidStakingManagerAddress",
    )

    request = InvocationRequest(
        network=parsed_network,
        eth_url=eth_url,
        private_key=private_key,
        liquid_staking_manager_address=manager,
        command=spec.name,
        writes=spec.writes,
        node_runner_address=(
            validate_address(node_runner_address, flag="--nodeRunnerAddress")
            if node_runner_address is not None
            else None
        ),
        new_whitelisting_status=(
            parse_bool(new_whitelisting_status, flag="--newWhitelistingStatus")
            if new_whitelisting_status is not None
            else None
        ),
    )
    check_required(spec, request)
    return request


def check_required(spec: CommandSpec, request: InvocationRequest) -> None:
    """Raise :class:`MissingParameterError` for the first absent field."""
    for field_name in spec.required:
        if getattr(request, field_name) is None:
            raise MissingParameterError(
                f"{_FLAG_NAMES[field_name]} is required for {spec.name}.",
            )


def format_value(value: Any) -> str:
    """Render a command result the way the console prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class CommandDispatcher:
    """Routes one :class:`InvocationRequest` to one client operation.

    Parameters
    ----------
    factory:
        Callable building a :class:`WizardUtils` for a request.  Only
        invoked after the request passed validation.
    """

    def __init__(self, factory: WizardFactory) -> None:
        self._factory: WizardFactory = factory

    def dispatch(self, request: InvocationRequest) -> CommandResult:
        """Run *request* and return its :class:`CommandResult`.

        Raises
        ------
        InvalidCommandError
            If the request names an unknown command.
        MissingParameterError
            If a required parameter is absent.
        ExternalCallError
            When the client fails for any reason.
        """
        spec = lookup_command(request.command)
        check_required(spec, request)

        utils: WizardUtils = self._factory(request)
        try:
            value = spec.handler(utils, request)
        except LsdWizardError:
            # Already one of ours — propagate unchanged.
            raise
        except Exception as exc:
            raise ExternalCallError(
                f"Unexpected error in {spec.name}: {exc}",
            ) from exc

        return CommandResult(
            command=spec.name,
            value=value,
            confirmation=spec.confirmation,
        )
