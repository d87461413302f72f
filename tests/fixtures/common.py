"""
Common test fixtures shared by all modules.

Provides factory functions for:
- Truffle-style artifact documents and ContractArtifact
- VerificationOptions
- Explorer API responses and a scripted HTTP client
"""

import json
from pathlib import Path
from typing import Any, Optional
from unittest.mock import Mock

from core.http import HttpResponse
from core.schemas import ContractArtifact, VerificationOptions


NETWORK_ID = "42"
CONTRACT_ADDRESS = "0x" + "ab" * 20
BYTECODE = "0x6080604052348015600f57600080fd5b50"
CONSTRUCTOR_ARGS = "000000000000000000000000" + "cd" * 20
API_URL = "https://explorer.example.org/api"
EXPLORER_URL = "https://explorer.example.org"


# =============================================================================
# Artifact Factories
# =============================================================================

def make_artifact_dict(
    contract_name: str = "Token",
    *,
    source_path: str = "/project/contracts/Token.sol",
    network_id: Optional[str] = NETWORK_ID,
    address: str = CONTRACT_ADDRESS,
    links: Optional[dict[str, str]] = None,
    bytecode: str = BYTECODE,
    compiler_version: str = "0.5.13+commit.5b0b510c.Emscripten.clang",
) -> dict[str, Any]:
    """
    Create a Truffle-style artifact document.

    Args:
        contract_name: Contract name.
        source_path: Main source file of the contract.
        network_id: Network the contract is deployed on (None for undeployed).
        address: Deployed address.
        links: Linked libraries for that network.
        bytecode: Creation bytecode.
        compiler_version: Version string as Truffle records it.
    """
    networks: dict[str, Any] = {}
    if network_id is not None:
        networks[network_id] = {
            "address": address,
            "links": links or {},
            "transactionHash": "0x" + "11" * 32,
        }
    return {
        "contractName": contract_name,
        "abi": [],
        "bytecode": bytecode,
        "sourcePath": source_path,
        "compiler": {"name": "solc", "version": compiler_version},
        "networks": networks,
    }


def make_artifact(contract_name: str = "Token", **kwargs: Any) -> ContractArtifact:
    """Create a ContractArtifact (see make_artifact_dict for arguments)."""
    return ContractArtifact.from_build_json(make_artifact_dict(contract_name, **kwargs))


def write_artifact(build_dir: Path, data: dict[str, Any], name: Optional[str] = None) -> Path:
    """Write an artifact document to {build_dir}/{name}.json."""
    path = build_dir / f"{name or data['contractName']}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# =============================================================================
# Options Factory
# =============================================================================

def make_options(build_dir: str = "/project/build/contracts", **overrides: Any) -> VerificationOptions:
    """Create VerificationOptions for the test network."""
    fields: dict[str, Any] = {
        "network_id": NETWORK_ID,
        "network_name": "kovan",
        "api_url": API_URL,
        "explorer_url": EXPLORER_URL,
        "working_dir": "/project",
        "build_dir": build_dir,
        "optimizer_enabled": True,
        "optimizer_runs": 200,
    }
    fields.update(overrides)
    return VerificationOptions(**fields)


# =============================================================================
# Explorer Response Factories
# =============================================================================

def json_response(payload: Any, status_code: int = 200) -> HttpResponse:
    """HttpResponse carrying a JSON body."""
    return HttpResponse(
        status_code=status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"content-type": "application/json"},
    )


def envelope(result: Any, status: str = "1", message: str = "OK") -> HttpResponse:
    """Explorer {status, message, result} envelope."""
    return json_response({"status": status, "message": message, "result": result})


def sourcecode_response(source_code: str = "") -> HttpResponse:
    """getsourcecode answer; empty source means not verified."""
    return envelope([{"SourceCode": source_code, "ABI": "", "ContractName": ""}])


def txlist_response(args: str = CONSTRUCTOR_ARGS, bytecode: str = BYTECODE) -> HttpResponse:
    """txlist answer whose first transaction deploys `bytecode` with `args`."""
    return envelope([{"hash": "0x" + "11" * 32, "input": bytecode + args}])


def make_http(
    get: Optional[list[Any]] = None,
    post: Optional[list[Any]] = None,
) -> Mock:
    """
    Mock HttpClient answering GET/POST calls from scripted lists.

    List items are HttpResponse objects or exceptions to raise.
    """
    http = Mock()
    http.get.side_effect = list(get or [])
    http.post.side_effect = list(post or [])
    return http


def get_actions(http: Mock) -> list[str]:
    """The `action` query parameter of every GET issued, in order."""
    return [c.kwargs["params"]["action"] for c in http.get.call_args_list]
