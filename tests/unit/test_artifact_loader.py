"""
Artifact Loader Tests

Tests for reading build artifacts and the ContractArtifact schema.
"""

import pytest

from core.schemas import (
    ArtifactInvalid,
    ArtifactNotFound,
    ContractArtifact,
    ErrorCodes,
)
from orchestrator.artifacts import artifact_path, load_artifact

from fixtures.common import CONTRACT_ADDRESS, make_artifact_dict, write_artifact


class TestLoadArtifact:
    """Tests for load_artifact()."""

    def test_loads_truffle_artifact(self, options, project_dir):
        build_dir = project_dir / "build" / "contracts"
        write_artifact(build_dir, make_artifact_dict("Token", links={"SafeMath": "0x" + "01" * 20}))

        artifact = load_artifact("Token", options)

        assert artifact.contract_name == "Token"
        assert artifact.compiler_version == "0.5.13+commit.5b0b510c.Emscripten.clang"
        deployment = artifact.deployment("42")
        assert deployment.address == CONTRACT_ADDRESS
        assert deployment.links == {"SafeMath": "0x" + "01" * 20}

    def test_nested_name_loads_from_subdirectory(self, options, project_dir):
        build_dir = project_dir / "build" / "contracts"
        write_artifact(build_dir, make_artifact_dict("SafeMath"), name="libs/SafeMath")

        artifact = load_artifact("libs/SafeMath", options)

        assert artifact.contract_name == "SafeMath"

    def test_missing_artifact(self, options):
        with pytest.raises(ArtifactNotFound) as exc_info:
            load_artifact("Missing", options)

        assert exc_info.value.code == ErrorCodes.ARTIFACT_NOT_FOUND
        assert exc_info.value.details["path"] == str(artifact_path("Missing", options))

    def test_unparseable_artifact(self, options, project_dir):
        (project_dir / "build" / "contracts" / "Token.json").write_text("{broken")

        with pytest.raises(ArtifactInvalid) as exc_info:
            load_artifact("Token", options)

        assert exc_info.value.code == ErrorCodes.ARTIFACT_INVALID

    def test_artifact_missing_fields(self, options, project_dir):
        data = make_artifact_dict("Token")
        del data["sourcePath"]
        write_artifact(project_dir / "build" / "contracts", data)

        with pytest.raises(ArtifactInvalid, match="missing required fields"):
            load_artifact("Token", options)

    def test_artifact_not_an_object(self, options, project_dir):
        (project_dir / "build" / "contracts" / "Token.json").write_text("[1, 2]")

        with pytest.raises(ArtifactInvalid):
            load_artifact("Token", options)

    def test_reads_fresh_on_every_call(self, options, project_dir):
        build_dir = project_dir / "build" / "contracts"
        write_artifact(build_dir, make_artifact_dict("Token", network_id=None))
        assert load_artifact("Token", options).deployment("42") is None

        write_artifact(build_dir, make_artifact_dict("Token"))
        assert load_artifact("Token", options).deployment("42") is not None


class TestContractArtifact:
    """Tests for the ContractArtifact schema."""

    def test_explorer_compiler_version(self):
        artifact = ContractArtifact.from_build_json(make_artifact_dict())

        assert artifact.explorer_compiler_version == "v0.5.13+commit.5b0b510c"

    def test_explorer_compiler_version_without_suffix(self):
        artifact = ContractArtifact.from_build_json(
            make_artifact_dict(compiler_version="0.8.19+commit.7dd6d404")
        )

        assert artifact.explorer_compiler_version == "v0.8.19+commit.7dd6d404"

    def test_bytecode_must_be_prefixed(self):
        with pytest.raises(ValueError):
            ContractArtifact.from_build_json(make_artifact_dict(bytecode="6080"))

    def test_deployment_lookup_accepts_int(self):
        artifact = ContractArtifact.from_build_json(make_artifact_dict())

        assert artifact.deployment(42) is not None
        assert artifact.deployment("1") is None

    def test_unused_artifact_keys_ignored(self):
        data = make_artifact_dict()
        data["ast"] = {"nodeType": "SourceUnit"}

        artifact = ContractArtifact.from_build_json(data)

        assert set(artifact.model_dump()) == {
            "contract_name",
            "bytecode",
            "compiler_version",
            "source_path",
            "networks",
        }
        assert set(artifact.deployment("42").model_dump()) == {"address", "links"}
