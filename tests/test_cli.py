"""CLI routing and error-boundary tests (cli/app.py).

The web3 client factory is replaced by a fake, so these tests run the
whole parse → validate → dispatch → print path without any network.
"""

from __future__ import annotations

import sys
from unittest.mock import MagicMock

import pytest

from conftest import DAO, MANAGER, NODE_RUNNER, PRIVATE_KEY
from lsd_wizard_cli.cli import exit_codes
from lsd_wizard_cli.cli.app import cli, main
from lsd_wizard_cli.exceptions import (
    ExternalCallError,
    InvalidCommandError,
    InvalidNetworkError,
    MissingParameterError,
)

BASE_ARGS = [
    "--network", "mainnet",
    "--ethUrl", "http://localhost:8545",
    "--privateKey", PRIVATE_KEY,
    "--liquidStakingManagerAddress", MANAGER,
]


@pytest.fixture()
def factory(monkeypatch: pytest.MonkeyPatch, fake_utils: MagicMock) -> MagicMock:
    """Replace ``build_wizard`` with a factory returning *fake_utils*."""
    from lsd_wizard_cli.infra import web3_wizard

    mock_factory = MagicMock(return_value=fake_utils)
    monkeypatch.setattr(web3_wizard, "build_wizard", mock_factory)
    return mock_factory


def _stdout_lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


# ---------------------------------------------------------------------------
# Bootstrap paths
# ---------------------------------------------------------------------------

class TestBootstrap:
    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_help_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_missing_network_and_command_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_doctor_routes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from lsd_wizard_cli.cli import doctor

        monkeypatch.setattr(doctor, "run_doctor", lambda: exit_codes.SUCCESS)
        assert main(["--doctor"]) == exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_get_dao_address(
        self,
        factory: MagicMock,
        fake_utils: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main([*BASE_ARGS, "--command", "getDaoAddress"])

        assert code == exit_codes.SUCCESS
        fake_utils.get_dao_address.assert_called_once_with()
        assert _stdout_lines(capsys) == [DAO]

    def test_is_node_runner_whitelisted_prints_bool(
        self,
        factory: MagicMock,
        fake_utils: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main([
            *BASE_ARGS,
            "--command", "isNodeRunnerWhitelisted",
            "--nodeRunnerAddress", NODE_RUNNER,
        ])

        assert code == exit_codes.SUCCESS
        fake_utils.is_node_runner_whitelisted.assert_called_once_with(NODE_RUNNER)
        assert _stdout_lines(capsys) == ["false"]

    def test_update_whitelisting_prints_result_then_confirmation(
        self,
        factory: MagicMock,
        fake_utils: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = main([
            *BASE_ARGS,
            "--command", "updateWhitelisting",
            "--newWhitelistingStatus", "true",
        ])

        assert code == exit_codes.SUCCESS
        fake_utils.update_whitelisting.assert_called_once_with(True)
        assert _stdout_lines(capsys) == [
            fake_utils.update_whitelisting.return_value,
            "Whitelisting status updated",
        ]

    def test_update_node_runner_status_false_is_false(
        self,
        factory: MagicMock,
        fake_utils: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main([
            *BASE_ARGS,
            "--command", "updateNodeRunnerWhitelistStatus",
            "--nodeRunnerAddress", NODE_RUNNER,
            "--newWhitelistingStatus", "false",
        ])

        fake_utils.update_node_runner_whitelist_status.assert_called_once_with(
            NODE_RUNNER, False,
        )
        assert _stdout_lines(capsys)[-1] == "Node runner whitelist status updated"

    def test_bogus_command_makes_no_call(self, factory: MagicMock) -> None:
        with pytest.raises(InvalidCommandError):
            main([*BASE_ARGS, "--command", "bogus"])
        factory.assert_not_called()

    def test_testnet_builds_no_client(self, factory: MagicMock) -> None:
        args = [*BASE_ARGS, "--command", "getDaoAddress"]
        args[1] = "testnet"
        with pytest.raises(InvalidNetworkError):
            main(args)
        factory.assert_not_called()

    def test_missing_node_runner_address(self, factory: MagicMock) -> None:
        with pytest.raises(MissingParameterError, match="--nodeRunnerAddress"):
            main([*BASE_ARGS, "--command", "isNodeRunnerBanned"])
        factory.assert_not_called()


# ---------------------------------------------------------------------------
# Environment fallbacks
# ---------------------------------------------------------------------------

class TestEnvironmentFallbacks:
    def test_connection_settings_from_env(
        self,
        monkeypatch: pytest.MonkeyPatch,
        factory: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ETH_URL", "http://rpc.example:8545")
        monkeypatch.setenv("PRIVATE_KEY", PRIVATE_KEY)
        monkeypatch.setenv("LSD_MANAGER_ADDRESS", MANAGER)

        code = main(["--network", "goerli", "--command", "getNetworkFeeRecipient"])

        assert code == exit_codes.SUCCESS
        request = factory.call_args.args[0]
        assert request.eth_url == "http://rpc.example:8545"
        assert request.liquid_staking_manager_address == MANAGER

    def test_flag_wins_over_env(
        self, monkeypatch: pytest.MonkeyPatch, factory: MagicMock,
    ) -> None:
        monkeypatch.setenv("ETH_URL", "http://ignored:8545")
        main([*BASE_ARGS, "--command", "getDaoAddress"])
        assert factory.call_args.args[0].eth_url == "http://localhost:8545"

    def test_missing_private_key(self, factory: MagicMock) -> None:
        with pytest.raises(MissingParameterError, match="--privateKey"):
            main([
                "--network", "mainnet",
                "--ethUrl", "http://localhost:8545",
                "--liquidStakingManagerAddress", MANAGER,
                "--command", "getDaoAddress",
            ])


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, argv: list[str]) -> int:
        monkeypatch.setattr(sys, "argv", ["lsd-wizard", *argv])
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)

    def test_success_exits_zero(
        self, monkeypatch: pytest.MonkeyPatch, factory: MagicMock,
    ) -> None:
        assert self._run_cli(monkeypatch, [*BASE_ARGS, "--command", "getDaoAddress"]) == 0

    def test_invalid_command_exits_general_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        factory: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(monkeypatch, [*BASE_ARGS, "--command", "bogus"])
        assert code == exit_codes.GENERAL_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Invalid command" in captured.err

    def test_external_failure_exits_general_error(
        self,
        monkeypatch: pytest.MonkeyPatch,
        factory: MagicMock,
        fake_utils: MagicMock,
    ) -> None:
        fake_utils.get_dao_address.side_effect = ExternalCallError("rpc down")
        code = self._run_cli(monkeypatch, [*BASE_ARGS, "--command", "getDaoAddress"])
        assert code == exit_codes.GENERAL_ERROR

    def test_keyboard_interrupt(
        self, monkeypatch: pytest.MonkeyPatch, factory: MagicMock,
        fake_utils: MagicMock,
    ) -> None:
        fake_utils.get_dao_address.side_effect = KeyboardInterrupt
        code = self._run_cli(monkeypatch, [*BASE_ARGS, "--command", "getDaoAddress"])
        assert code == exit_codes.KEYBOARD_INTERRUPT

    def test_private_key_never_printed(
        self,
        monkeypatch: pytest.MonkeyPatch,
        factory: MagicMock,
        fake_utils: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_utils.update_whitelisting.side_effect = ExternalCallError("reverted")
        self._run_cli(monkeypatch, [
            *BASE_ARGS,
            "--command", "updateWhitelisting",
            "--newWhitelistingStatus", "true",
        ])
        captured = capsys.readouterr()
        assert PRIVATE_KEY not in captured.out + captured.err

    @pytest.mark.parametrize(
        ("flag", "value", "expected"),
        [
            ("--command", "[/x]", "Invalid command: '[/x]'"),
            ("--network", "[/bold]", "Invalid network: '[/bold]'"),
        ],
    )
    def test_bracketed_input_is_printed_literally(
        self,
        monkeypatch: pytest.MonkeyPatch,
        factory: MagicMock,
        capsys: pytest.CaptureFixture[str],
        flag: str,
        value: str,
        expected: str,
    ) -> None:
        argv = [*BASE_ARGS, "--command", "getDaoAddress"]
        argv[argv.index(flag) + 1] = value

        code = self._run_cli(monkeypatch, argv)

        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Error:" in err
        assert expected in err
        factory.assert_not_called()

    def test_bracketed_revert_text_and_hint(
        self,
        monkeypatch: pytest.MonkeyPatch,
        factory: MagicMock,
        fake_utils: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        fake_utils.get_dao_address.side_effect = ExternalCallError(
            "dao reverted: [/red] nope", hint="see [bold]docs",
        )
        code = self._run_cli(monkeypatch, [*BASE_ARGS, "--command", "getDaoAddress"])

        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "[/red] nope" in err
        assert "Hint: see [bold]docs" in err


class TestWriteStatus:
    def test_write_announces_transaction_on_stderr(
        self,
        factory: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main([
            *BASE_ARGS,
            "--command", "updateWhitelisting",
            "--newWhitelistingStatus", "true",
        ])
        captured = capsys.readouterr()
        assert "Sending updateWhitelisting transaction" in captured.err
        assert "Sending" not in captured.out

    def test_read_is_silent_on_stderr(
        self,
        factory: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        main([*BASE_ARGS, "--command", "getDaoAddress"])
        assert capsys.readouterr().err == ""
