"""Custom exception hierarchy for lsd-wizard.

All exceptions that cross layer boundaries must inherit from
:class:`LsdWizardError`.  Raw third-party exceptions (e.g. from web3.py)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
LsdWizardError
├── RequestValidationError
│   ├── InvalidNetworkError
│   ├── InvalidCommandError
│   ├── MissingParameterError
│   └── InvalidParameterError
├── ExternalCallError
└── EnvironmentError
"""

from __future__ import annotations


class LsdWizardError(Exception):
    """Base exception for all lsd-wizard errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Request validation ----------------------------------------------------

class RequestValidationError(LsdWizardError):
    """Raised when CLI input is rejected before any network activity."""


class InvalidNetworkError(RequestValidationError):
    """Raised when ``--network`` is not a supported network name."""


class InvalidCommandError(RequestValidationError):
    """Raised when ``--command`` is not one of the known operations."""


class MissingParameterError(RequestValidationError):
    """Raised when a command-specific parameter was not supplied."""


class InvalidParameterError(RequestValidationError):
    """Raised when a supplied parameter cannot be interpreted."""


# --- External calls --------------------------------------------------------

class ExternalCallError(LsdWizardError):
    """Raised when the RPC endpoint or contract call fails."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(LsdWizardError):
    """Raised when a required runtime dependency is not available."""


def append_authority_suggestion(hint: str) -> str:
    """Append DAO-authority guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Write commands can only be sent by the LSD network DAO."
    if marker in hint:
        return hint
    return "\n".join((hint, marker))
