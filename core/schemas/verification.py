"""
Module 01 - Schemas
File: verification.py

Purpose: Verification request, outcome and result records.
The explorer's wire strings live here so that the client and the
tests agree on them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import LibraryLimitExceeded, VerifierError


# The explorer API accepts at most this many linked libraries per request.
MAX_LIBRARIES = 5


class RequestStatus:
    """Envelope status values returned by the explorer API."""

    OK = "1"
    KO = "0"


class ExplorerMessages:
    """Result strings returned by the explorer's verification endpoints."""

    FAILED = "Fail - Unable to verify"
    SUCCESS = "Pass - Verified"
    PENDING = "Pending in queue"
    ALREADY_VERIFIED = "Contract source code already verified"
    NOT_DEPLOYED = "Contract not deployed in the network"


class VerificationOutcome(str, Enum):
    """Outcome of verifying one contract."""

    PENDING = "pending"
    SUCCESS = "success"
    ALREADY_VERIFIED = "already_verified"
    FAILED = "failed"
    NOT_DEPLOYED = "not_deployed"

    @property
    def is_terminal(self) -> bool:
        return self is not VerificationOutcome.PENDING

    @property
    def label(self) -> str:
        """Human-readable label used in CLI output."""
        return _OUTCOME_LABELS[self]


_OUTCOME_LABELS = {
    VerificationOutcome.PENDING: ExplorerMessages.PENDING,
    VerificationOutcome.SUCCESS: ExplorerMessages.SUCCESS,
    VerificationOutcome.ALREADY_VERIFIED: ExplorerMessages.ALREADY_VERIFIED,
    VerificationOutcome.FAILED: ExplorerMessages.FAILED,
    VerificationOutcome.NOT_DEPLOYED: ExplorerMessages.NOT_DEPLOYED,
}


class LibraryLink(BaseModel):
    """A library linked into the deployed bytecode."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)


def link_libraries(links: dict[str, str]) -> tuple[LibraryLink, ...]:
    """
    Convert an artifact's link map into ordered request entries.

    Raises:
        LibraryLimitExceeded: if more than MAX_LIBRARIES are linked.
    """
    if len(links) > MAX_LIBRARIES:
        raise LibraryLimitExceeded(
            f"Can not link more than {MAX_LIBRARIES} libraries with the explorer API "
            f"(got {len(links)})",
            count=len(links),
        )
    return tuple(LibraryLink(name=name, address=address) for name, address in links.items())


class VerificationRequest(BaseModel):
    """
    Payload of one verification submission.

    Built once per submission and never mutated after it is sent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="Deployed contract address", min_length=1)
    source: str = Field(..., description="Flattened contract source")
    contract_name: str = Field(..., min_length=1)
    compiler_version: str = Field(..., description="v-prefixed compiler version", min_length=1)
    optimization: bool = Field(..., description="Value sent in the optimization field")
    runs: int = Field(..., ge=0)
    constructor_arguments: str = Field(
        default="",
        description="ABI-encoded constructor arguments (hex, no 0x prefix)",
    )
    libraries: tuple[LibraryLink, ...] = Field(
        default=(),
        max_length=MAX_LIBRARIES,
    )
    proxy_address: str | None = Field(default=None)

    def to_form(self) -> dict[str, str]:
        """Form-encoded fields for POST ?module=contract&action=verify."""
        form = {
            "addressHash": self.address,
            "contractSourceCode": self.source,
            "name": self.contract_name,
            "compilerVersion": self.compiler_version,
            "optimization": "true" if self.optimization else "false",
            "optimizationRuns": str(self.runs),
            "constructorArguments": self.constructor_arguments,
        }
        if self.proxy_address:
            form["proxyAddress"] = self.proxy_address
        for index, library in enumerate(self.libraries, start=1):
            form[f"library{index}Name"] = library.name
            form[f"library{index}Address"] = library.address
        return form


class ContractResult(BaseModel):
    """
    Terminal result for one contract.

    A discriminated record: `outcome` says which terminal state was
    reached, `error` carries the failure kind when outcome is FAILED.
    """

    model_config = ConfigDict(extra="forbid")

    contract_name: str = Field(..., min_length=1)
    outcome: VerificationOutcome
    message: str = Field(default="")
    address: str | None = Field(default=None)
    explorer_link: str | None = Field(default=None)
    error: VerifierError | None = Field(default=None)
    polls: int = Field(default=0, ge=0, description="Status polls issued")

    @property
    def failed(self) -> bool:
        return self.outcome is VerificationOutcome.FAILED

    def summary_line(self) -> str:
        """One-line human summary, as printed by the CLI."""
        if self.outcome in (VerificationOutcome.SUCCESS, VerificationOutcome.ALREADY_VERIFIED):
            if self.explorer_link:
                return f"{self.outcome.label}: {self.explorer_link}"
            return self.outcome.label
        if self.message:
            return f"{self.outcome.label}: {self.message}"
        return self.outcome.label


class VerificationReport(BaseModel):
    """Aggregated results of one invocation, in processing order."""

    model_config = ConfigDict(extra="forbid")

    network_id: str = Field(default="")
    results: list[ContractResult] = Field(default_factory=list)

    def add(self, result: ContractResult) -> None:
        self.results.append(result)

    def _names(self, outcome: VerificationOutcome) -> list[str]:
        return [r.contract_name for r in self.results if r.outcome is outcome]

    @property
    def verified(self) -> list[str]:
        return self._names(VerificationOutcome.SUCCESS)

    @property
    def already_verified(self) -> list[str]:
        return self._names(VerificationOutcome.ALREADY_VERIFIED)

    @property
    def not_deployed(self) -> list[str]:
        return self._names(VerificationOutcome.NOT_DEPLOYED)

    @property
    def failed(self) -> list[str]:
        return self._names(VerificationOutcome.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "network_id": self.network_id,
            "verified": self.verified,
            "already_verified": self.already_verified,
            "not_deployed": self.not_deployed,
            "failed": self.failed,
            "results": [r.model_dump(mode="json") for r in self.results],
        }
