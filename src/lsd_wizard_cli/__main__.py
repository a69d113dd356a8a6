"""Allow ``python -m lsd_wizard_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m lsd_wizard_cli`` behaves identically to the
``lsd-wizard`` console script.
"""

from __future__ import annotations

from lsd_wizard_cli.cli.app import cli

if __name__ == "__main__":
    cli()
