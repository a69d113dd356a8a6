"""``lsd-wizard --doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can talk to an LSD network.

This module lives in the CLI layer and renders via Rich.  No business
logic resides here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from importlib import metadata

from lsd_wizard_cli.cli import exit_codes
from lsd_wizard_cli.cli.console import console
from lsd_wizard_cli.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _package_check(label: str, distribution: str, module: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable dependency."""
    try:
        __import__(module)
    except ImportError:
        return label, "NOT INSTALLED", "[red]FAIL[/red]"
    try:
        version = metadata.version(distribution)
    except metadata.PackageNotFoundError:
        version = "unknown"
    return label, version, "[green]OK[/green]"


def _rich_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the optional Rich row."""
    label, value, status = _package_check("rich", "rich", "rich")
    if "FAIL" in status:
        return label, value, "[yellow]WARN[/yellow]"
    return label, value, status


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nlsd-wizard doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        ("lsd-wizard", __version__, "[green]OK[/green]"),
        _python_version_check(),
        _package_check("web3", "web3", "web3"),
        _package_check("eth-account", "eth-account", "eth_account"),
        _rich_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print("Some checks failed." if has_failure else "All checks passed.", file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="lsd-wizard doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.status("Some checks failed.", style="bold red")
        return exit_codes.GENERAL_ERROR
    console.status("All checks passed.", style="bold green")
    return exit_codes.SUCCESS
