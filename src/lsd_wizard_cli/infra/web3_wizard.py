"""web3.py backed implementation of :class:`~lsd_wizard_cli.core.protocols.WizardUtils`.

This module is the **only** place in the codebase that imports ``web3``
or ``eth_account``.  All of their exceptions are caught here and
re-raised as typed :class:`~lsd_wizard_cli.exceptions.LsdWizardError`
subclasses — nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

from typing import Any, NoReturn

from lsd_wizard_cli.core.models import InvocationRequest
from lsd_wizard_cli.exceptions import (
    EnvironmentError,
    ExternalCallError,
    InvalidParameterError,
    append_authority_suggestion,
)
from lsd_wizard_cli.infra.abi import LIQUID_STAKING_MANAGER_ABI


def _load_backend() -> tuple[Any, Any]:
    """Return the ``(Web3, Account)`` classes or raise ``EnvironmentError``."""
    try:
        from eth_account import Account
        from web3 import Web3
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "web3 is not installed. Install with: pip install web3",
        ) from exc
    return Web3, Account


class Web3WizardUtils:
    """Concrete :class:`WizardUtils` backed by a LiquidStakingManager contract.

    Usage::

        utils = build_wizard(request)
        utils.get_dao_address()

    Reads are a single ``call()``.  Writes are built, signed locally and
    broadcast once; the receipt is not awaited.
    """

    # Substrings in transport errors that point at the RPC endpoint
    # rather than the contract.
    _CONNECTION_SIGNALS: tuple[str, ...] = (
        "connection",
        "max retries",
        "timed out",
        "name or service not known",
        "could not connect",
    )

    def __init__(self, w3: Any, contract: Any, account: Any, *, chain_id: int) -> None:
        self._w3 = w3
        self._contract = contract
        self._account = account
        self._chain_id = chain_id

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_dao_address(self) -> str:
        return self._call("dao")

    def get_saveth_vault_address(self) -> str:
        return self._call("savETHVault")

    def get_staking_funds_vault_address(self) -> str:
        return self._call("stakingFundsVault")

    def is_whitelisting_enabled(self) -> bool:
        return bool(self._call("enableWhitelisting"))

    def is_node_runner_whitelisted(self, node_runner_address: str) -> bool:
        return bool(
            self._call("isNodeRunnerWhitelisted", self._checksum(node_runner_address))
        )

    def is_node_runner_banned(self, node_runner_address: str) -> bool:
        return bool(
            self._call("isNodeRunnerBanned", self._checksum(node_runner_address))
        )

    def get_network_fee_recipient(self) -> str:
        return self._call("getNetworkFeeRecipient")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def update_whitelisting(self, new_whitelisting_status: bool) -> str:
        return self._transact("updateWhitelisting", bool(new_whitelisting_status))

    def update_node_runner_whitelist_status(
        self,
        node_runner_address: str,
        new_whitelisting_status: bool,
    ) -> str:
        return self._transact(
            "updateNodeRunnerWhitelistStatus",
            self._checksum(node_runner_address),
            bool(new_whitelisting_status),
        )

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _checksum(self, address: str) -> str:
        try:
            return self._w3.to_checksum_address(address)
        except (TypeError, ValueError) as exc:
            raise InvalidParameterError(
                f"Not a valid address: {address!r}",
            ) from exc

    def _call(self, function_name: str, *args: Any) -> Any:
        try:
            return getattr(self._contract.functions, function_name)(*args).call()
        except Exception as exc:
            self._raise_mapped(function_name, exc, writes=False)

    def _transact(self, function_name: str, *args: Any) -> str:
        """Build, sign and broadcast one transaction; return its hash."""
        sender = self._account.address
        try:
            tx = getattr(self._contract.functions, function_name)(*args).build_transaction(
                {
                    "from": sender,
                    "chainId": self._chain_id,
                    "nonce": self._w3.eth.get_transaction_count(sender),
                }
            )
            signed = self._account.sign_transaction(tx)
            tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as exc:
            self._raise_mapped(function_name, exc, writes=True)
        return self._w3.to_hex(tx_hash)

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @classmethod
    def _raise_mapped(cls, function_name: str, exc: Exception, *, writes: bool) -> NoReturn:
        """Translate a web3 / transport error into :class:`ExternalCallError`."""
        from web3.exceptions import ContractLogicError

        if isinstance(exc, ContractLogicError):
            hint = "The contract rejected the call."
            if writes:
                hint = append_authority_suggestion(hint)
            raise ExternalCallError(
                f"{function_name} reverted: {exc}",
                hint=hint,
            ) from exc

        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._CONNECTION_SIGNALS):
            raise ExternalCallError(
                f"{function_name} failed: could not reach the RPC endpoint.",
                hint="Check --ethUrl and your network connection.",
            ) from exc

        raise ExternalCallError(f"{function_name} failed: {exc}") from exc


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_wizard(request: InvocationRequest) -> Web3WizardUtils:
    """Bind a provider, a signer and the manager contract for *request*.

    Construction is local only; no RPC traffic happens until an
    operation is invoked.

    Raises
    ------
    EnvironmentError
        If web3 / eth-account are not installed.
    InvalidParameterError
        If the private key or manager address is malformed.
    """
    Web3, Account = _load_backend()
    w3 = Web3(Web3.HTTPProvider(request.eth_url))

    private_key = request.private_key
    if private_key[:2].lower() == "0x":
        private_key = private_key[2:]
    private_key = "0x" + private_key
    try:
        account = Account.from_key(private_key)
    except Exception:
        # Never chain: the original message may echo the key.
        raise InvalidParameterError(
            "--privateKey is not a valid private key.",
        ) from None

    try:
        manager_address = Web3.to_checksum_address(request.liquid_staking_manager_address)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(
            "--liquidStakingManagerAddress is not a valid address.",
        ) from exc

    contract = w3.eth.contract(address=manager_address, abi=LIQUID_STAKING_MANAGER_ABI)
    return Web3WizardUtils(w3, contract, account, chain_id=request.network.chain_id)
