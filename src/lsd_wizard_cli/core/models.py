"""Domain models for lsd-wizard.

All models are **frozen** dataclasses (or enums) — immutable value
objects with no behaviour beyond data access.  They carry zero I/O and
zero dependencies on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

class Network(enum.Enum):
    """Ethereum networks an LSD network can be deployed on."""

    MAINNET = "mainnet"
    GOERLI = "goerli"

    @property
    def chain_id(self) -> int:
        """EIP-155 chain id used when signing transactions."""
        return _CHAIN_IDS[self]


_CHAIN_IDS: dict[Network, int] = {
    Network.MAINNET: 1,
    Network.GOERLI: 5,
}


# ---------------------------------------------------------------------------
# Invocation request
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """Everything one process run needs, validated and immutable."""

    network: Network
    """Target network."""

    eth_url: str
    """JSON-RPC endpoint URL."""

    private_key: str = field(repr=False)
    """Hex private key of the signing account.  Never rendered."""

    liquid_staking_manager_address: str
    """Address of the LSD network's LiquidStakingManager contract."""

    command: str
    """Name of the operation to run."""

    node_runner_address: str | None = None
    """Node runner address, for commands that take one."""

    new_whitelisting_status: bool | None = None
    """Desired whitelisting flag, for write commands that take one."""

    writes: bool = False
    """``True`` when the command sends a transaction."""


# ---------------------------------------------------------------------------
# Command table entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Declarative description of one dispatchable operation."""

    name: str
    """CLI-facing command name (e.g. ``getDaoAddress``)."""

    handler: Callable[[Any, InvocationRequest], Any]
    """Callable taking ``(client, request)`` and returning the raw result."""

    required: tuple[str, ...] = ()
    """:class:`InvocationRequest` field names that must not be ``None``."""

    writes: bool = False
    """``True`` when the operation sends a transaction."""

    confirmation: str | None = None
    """Line printed after a successful write."""


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a dispatched command."""

    command: str
    value: Any
    confirmation: str | None = None
