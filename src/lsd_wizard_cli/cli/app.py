"""CLI application entry point and command routing for lsd-wizard.

This module is the **sole error boundary** for the entire application.
It catches :class:`~lsd_wizard_cli.exceptions.LsdWizardError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — validation and dispatch live in the
  core layer, contract access in the infrastructure layer.
* Results are written to stdout; everything else goes to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import os
import sys

from lsd_wizard_cli.cli import exit_codes
from lsd_wizard_cli.cli.console import console, emit
from lsd_wizard_cli.core.dispatcher import COMMANDS
from lsd_wizard_cli.exceptions import LsdWizardError
from lsd_wizard_cli.version import __version__

# Environment fallbacks for connection settings.
ENV_ETH_URL = "ETH_URL"
ENV_PRIVATE_KEY = "PRIVATE_KEY"
ENV_MANAGER_ADDRESS = "LSD_MANAGER_ADDRESS"


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    ``--network`` and ``--command`` are validated by the core layer, not
    by argparse ``choices``, so bad values surface as typed errors.
    """
    parser = argparse.ArgumentParser(
        prog="lsd-wizard",
        description="Run one LiquidStakingManager operation on a Stakehouse LSD network.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Run environment diagnostics and exit.",
    )
    parser.add_argument("--network", help="mainnet or goerli")
    parser.add_argument(
        "--ethUrl",
        dest="eth_url",
        help=f"The Ethereum RPC URL (default: ${ENV_ETH_URL})",
    )
    parser.add_argument(
        "--privateKey",
        dest="private_key",
        help=f"The private key of the account (default: ${ENV_PRIVATE_KEY})",
    )
    parser.add_argument(
        "--liquidStakingManagerAddress",
        dest="liquid_staking_manager_address",
        help=f"The LSD network's LiquidStakingManager (default: ${ENV_MANAGER_ADDRESS})",
    )
    parser.add_argument("--command", help=", ".join(COMMANDS))
    parser.add_argument(
        "--nodeRunnerAddress",
        dest="node_runner_address",
        help="The address of the node operator",
    )
    parser.add_argument(
        "--newWhitelistingStatus",
        dest="new_whitelisting_status",
        help="The new whitelisting status (true or false)",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_command(args: argparse.Namespace) -> int:
    """Validate the request, build the client, and run one command.

    Flow:
    1. Build an immutable request (fails before any network activity).
    2. Instantiate the web3-backed client through the dispatcher.
    3. Print the result, then the confirmation line for writes.
    """
    from lsd_wizard_cli.core.dispatcher import (
        CommandDispatcher,
        build_request,
        format_value,
    )
    from lsd_wizard_cli.infra.web3_wizard import build_wizard

    request = build_request(
        network=args.network,
        eth_url=args.eth_url or os.environ.get(ENV_ETH_URL),
        private_key=args.private_key or os.environ.get(ENV_PRIVATE_KEY),
        liquid_staking_manager_address=(
            args.liquid_staking_manager_address or os.environ.get(ENV_MANAGER_ADDRESS)
        ),
        command=args.command,
        node_runner_address=args.node_runner_address,
        new_whitelisting_status=args.new_whitelisting_status,
    )

    if request.writes:
        console.status(
            f"Sending {request.command} transaction…  network={request.network.value}",
            style="bold",
        )

    result = CommandDispatcher(build_wizard).dispatch(request)

    emit(format_value(result.value))
    if result.confirmation:
        emit(result.confirmation)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from lsd_wizard_cli.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the lsd-wizard CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.doctor:
        return _handle_doctor()

    if args.network is None or args.command is None:
        missing = [
            flag
            for flag, value in (("--network", args.network), ("--command", args.command))
            if value is None
        ]
        parser.error(f"the following arguments are required: {', '.join(missing)}")

    return _handle_command(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except LsdWizardError as exc:
        console.error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.status("\nAborted by user.", style="yellow")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.labelled(
            "Unexpected error.",
            f"Please report this issue.\n  {type(exc).__name__}: {exc}",
            style="bold red",
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
