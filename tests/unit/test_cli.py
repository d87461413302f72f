"""
CLI Tests

Tests for argument parsing, exit codes and output of the scanverify CLI.
"""

import json
from unittest.mock import Mock, patch

import pytest

from core.schemas import ContractResult, VerificationOutcome
from scanverify_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)

from fixtures.common import make_artifact_dict, write_artifact


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SCANVERIFY_API_KEY", "SCANVERIFY_LOG_FILE", "SCANVERIFY_LOG_LEVEL", "SCANVERIFY_POLL_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_file(project_dir):
    """Project config for network 42 with two artifacts in the build directory."""
    source = str(project_dir / "contracts" / "Token.sol")
    build_dir = project_dir / "build" / "contracts"
    write_artifact(build_dir, make_artifact_dict("Token", source_path=source))
    write_artifact(build_dir, make_artifact_dict("Vault", source_path=source))

    path = project_dir / "scanverify.yaml"
    path.write_text("network: kovan\nnetwork_id: 42\n")
    return path


def _patched_client(*results):
    """Patch VerificationClient so that verify() answers with `results` in order."""
    client_cls = Mock()
    client_cls.return_value.verify.side_effect = list(results)
    return patch("scanverify_cli.commands.verify.VerificationClient", client_cls)


class TestParser:
    """Tests for create_parser()."""

    def test_verify_arguments(self):
        args = create_parser().parse_args(
            ["verify", "Token", "Vault", "-p", "p.yaml", "--network-id", "42", "--timeout", "10", "--json"]
        )

        assert args.contracts == ["Token", "Vault"]
        assert args.project == "p.yaml"
        assert args.network_id == "42"
        assert args.timeout == 10.0
        assert args.json is True

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR


class TestVerifyCommand:
    """Tests for `scanverify verify`."""

    def test_all_verified_exits_zero(self, project_file, capsys):
        results = [
            ContractResult(contract_name="Token", outcome=VerificationOutcome.SUCCESS, explorer_link="https://e/t"),
            ContractResult(contract_name="Vault", outcome=VerificationOutcome.ALREADY_VERIFIED, explorer_link="https://e/v"),
        ]
        with _patched_client(*results):
            code = main(["verify", "all", "--project", str(project_file)])

        out = capsys.readouterr().out
        assert code == EXIT_SUCCESS
        assert "Token: Pass - Verified: https://e/t" in out
        assert "Vault: Contract source code already verified: https://e/v" in out
        assert "already verified: Vault" in out
        assert "Successfully verified 1 contract(s)." in out

    def test_failure_exits_two(self, project_file, capsys):
        results = [
            ContractResult(contract_name="Token", outcome=VerificationOutcome.FAILED, message="Invalid compiler version"),
            ContractResult(contract_name="Vault", outcome=VerificationOutcome.SUCCESS),
        ]
        with _patched_client(*results):
            code = main(["verify", "Token", "Vault", "--project", str(project_file)])

        captured = capsys.readouterr()
        assert code == EXIT_VERIFICATION_FAILED
        assert "Failed to verify 1 contract(s): Token" in captured.err

    def test_json_report(self, project_file, capsys):
        results = [ContractResult(contract_name="Token", outcome=VerificationOutcome.SUCCESS)]
        with _patched_client(*results):
            code = main(["verify", "Token", "--project", str(project_file), "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert data["verified"] == ["Token"]
        assert data["network_id"] == "42"

    def test_unsupported_network_exits_one(self, project_file, capsys):
        with _patched_client() as client_cls:
            code = main(["verify", "Token", "--project", str(project_file), "--network-id", "1337"])

        assert code == EXIT_RUNTIME_ERROR
        assert "No explorer support" in capsys.readouterr().err
        client_cls.assert_not_called()

    def test_missing_contract_names_exits_one(self, project_file, capsys):
        code = main(["verify", "--project", str(project_file)])

        assert code == EXIT_RUNTIME_ERROR
        assert "No contract name" in capsys.readouterr().err

    def test_missing_project_file_exits_one(self, tmp_path, capsys):
        code = main(["verify", "Token", "--project", str(tmp_path / "missing.yaml")])

        assert code == EXIT_RUNTIME_ERROR

    def test_invalid_poll_override_exits_one(self, project_file, monkeypatch, capsys):
        monkeypatch.setenv("SCANVERIFY_POLL_ATTEMPTS", "0")
        with _patched_client() as client_cls:
            code = main(["verify", "Token", "--project", str(project_file)])

        assert code == EXIT_RUNTIME_ERROR
        assert "max_attempts" in capsys.readouterr().err
        client_cls.assert_not_called()

    def test_client_receives_runtime_poll_policy(self, project_file, monkeypatch):
        monkeypatch.setenv("SCANVERIFY_POLL_ATTEMPTS", "9")
        results = [ContractResult(contract_name="Token", outcome=VerificationOutcome.SUCCESS)]
        with _patched_client(*results) as client_cls:
            main(["verify", "Token", "--project", str(project_file)])

        assert client_cls.call_args.kwargs["poll"].max_attempts == 9


class TestOtherCommands:
    """Tests for `networks` and `config`."""

    def test_networks_json(self, capsys):
        code = main(["networks", "--json"])

        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert {"network_id": "42", "name": "kovan"}.items() <= data[1].items()

    def test_config_init_and_show(self, tmp_path, capsys):
        path = tmp_path / "runtime.yaml"

        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS
        assert path.exists()
        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR

        capsys.readouterr()
        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["poll"]["max_attempts"] == 5
