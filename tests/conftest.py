"""
Pytest configuration and shared fixtures for scanverify tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_artifact_dict = _common.make_artifact_dict
make_artifact = _common.make_artifact
make_options = _common.make_options
write_artifact = _common.write_artifact


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def project_dir(tmp_path):
    """A project tree with one contract source and an empty build directory."""
    contracts = tmp_path / "contracts"
    contracts.mkdir()
    (contracts / "Token.sol").write_text(
        "// SPDX-License-Identifier: MIT\n"
        "pragma solidity ^0.5.13;\n"
        "\n"
        "contract Token {\n"
        "    uint256 public supply;\n"
        "}\n",
        encoding="utf-8",
    )
    (tmp_path / "build" / "contracts").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def options(project_dir):
    """VerificationOptions pointing at the project_dir build directory."""
    return make_options(
        build_dir=str(project_dir / "build" / "contracts"),
        working_dir=str(project_dir),
    )


@pytest.fixture
def artifact(project_dir):
    """ContractArtifact for contracts/Token.sol deployed on the test network."""
    return make_artifact("Token", source_path=str(project_dir / "contracts" / "Token.sol"))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
