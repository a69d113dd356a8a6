"""lsd-wizard — command-line access to a Stakehouse LSD network.

Forwards one named LiquidStakingManager operation per invocation through
web3.py, with a strict layered architecture.
"""

from lsd_wizard_cli.version import __version__

__all__: list[str] = ["__version__"]
