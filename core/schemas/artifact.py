"""
Module 01 - Schemas
File: artifact.py

Purpose: Read-only view of a compiled contract's build artifact.
Artifacts are produced by the build tool (Truffle layout) and are
loaded fresh for every contract.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NetworkDeployment(BaseModel):
    """Deployment record of a contract on one network."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    address: str = Field(
        ...,
        description="Deployed contract address",
        min_length=1,
    )
    links: dict[str, str] = Field(
        default_factory=dict,
        description="Linked library name -> deployed library address",
    )


class ContractArtifact(BaseModel):
    """
    A compiled contract as described by its build artifact.

    Only the fields needed for verification are modelled; everything
    else in the artifact file is ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    contract_name: str = Field(
        ...,
        description="Contract name as declared in source",
        min_length=1,
    )
    bytecode: str = Field(
        ...,
        description="Creation bytecode as a 0x-prefixed hex string",
    )
    compiler_version: str = Field(
        ...,
        description="Compiler version string as reported by the build tool",
        min_length=1,
    )
    source_path: str = Field(
        ...,
        description="Absolute path of the contract's main source file",
        min_length=1,
    )
    networks: dict[str, NetworkDeployment] = Field(
        default_factory=dict,
        description="Deployment records keyed by network id",
    )

    @field_validator("bytecode")
    @classmethod
    def validate_bytecode_hex(cls, v: str) -> str:
        """Bytecode must be hex (library placeholders are allowed)."""
        if not v.startswith("0x"):
            raise ValueError("bytecode must be 0x-prefixed")
        return v

    @classmethod
    def from_build_json(cls, data: dict[str, Any]) -> "ContractArtifact":
        """Build from a Truffle-style artifact document."""
        compiler = data.get("compiler") or {}
        networks: dict[str, Any] = {}
        for network_id, record in (data.get("networks") or {}).items():
            if not isinstance(record, dict):
                continue
            networks[str(network_id)] = {
                "address": record.get("address"),
                "links": record.get("links") or {},
            }
        return cls(
            contract_name=data.get("contractName"),
            bytecode=data.get("bytecode"),
            compiler_version=compiler.get("version"),
            source_path=data.get("sourcePath"),
            networks=networks,
        )

    def deployment(self, network_id: str) -> NetworkDeployment | None:
        """Return the deployment record for a network, if any."""
        return self.networks.get(str(network_id))

    @property
    def explorer_compiler_version(self) -> str:
        """Compiler version in the form the explorer expects (v-prefixed)."""
        return "v" + self.compiler_version.replace(".Emscripten.clang", "")
