"""
Module 06 - Verification Run

Sequential runner: loads each requested contract's artifact and hands
it to the VerificationClient, collecting one terminal result per
contract into a VerificationReport.

Key features:
- Contracts are processed in the order given, one at a time
- A failing contract never aborts the ones after it
- The run fails iff at least one contract failed
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from core.schemas import (
    ContractArtifact,
    ContractResult,
    VerificationOptions,
    VerificationOutcome,
    VerificationReport,
    VerificationTimeout,
    VerifierError,
    VerifierException,
)

from orchestrator.artifacts import load_artifact
from orchestrator.cancellation import CancelToken
from orchestrator.verification_client import VerificationClient


logger = logging.getLogger(__name__)


ArtifactLoader = Callable[[str, VerificationOptions], ContractArtifact]
ResultCallback = Callable[[ContractResult], None]


class VerificationRun:
    """
    Runs verification for a list of contracts.

    Usage:
        run = VerificationRun(options, client)
        report = run.run(["Token", "Vault"])
        if not report.ok:
            ...
    """

    def __init__(
        self,
        options: VerificationOptions,
        client: VerificationClient,
        *,
        loader: ArtifactLoader = load_artifact,
        on_result: Optional[ResultCallback] = None,
    ) -> None:
        """
        Initialize the run.

        Args:
            options: Resolved options shared by every contract
            client: Client used to verify each loaded artifact
            loader: Artifact loader (defaults to reading {build_dir}/{name}.json)
            on_result: Called with each result as soon as it is known
        """
        self.options = options
        self.client = client
        self._loader = loader
        self._on_result = on_result

    def verify_one(self, contract_name: str, *, cancel: Optional[CancelToken] = None) -> ContractResult:
        """Verify a single contract, converting any per-contract error into a FAILED result."""
        logger.info(f"Verifying {contract_name}")
        try:
            artifact = self._loader(contract_name, self.options)
            result = self.client.verify(artifact, cancel=cancel)
        except VerifierException as e:
            logger.error(e.message)
            return ContractResult(
                contract_name=contract_name,
                outcome=VerificationOutcome.FAILED,
                message=e.message,
                error=e.to_error_model(),
            )
        except (OSError, ValueError) as e:
            logger.error(f"Unexpected error while verifying {contract_name}: {e}")
            return ContractResult(
                contract_name=contract_name,
                outcome=VerificationOutcome.FAILED,
                message=str(e),
                error=VerifierError(code="UNEXPECTED_ERROR", message=str(e)),
            )

        # Report under the requested name (it may be a nested path).
        if result.contract_name != contract_name:
            result = result.model_copy(update={"contract_name": contract_name})
        return result

    def run(self, contract_names: Sequence[str], *, cancel: Optional[CancelToken] = None) -> VerificationReport:
        """Verify every contract in order and return the aggregated report."""
        report = VerificationReport(network_id=self.options.network_id)

        for contract_name in contract_names:
            if cancel is not None and cancel.cancelled:
                result = ContractResult(
                    contract_name=contract_name,
                    outcome=VerificationOutcome.FAILED,
                    message="Run cancelled before this contract was processed",
                    error=VerificationTimeout("Run cancelled").to_error_model(),
                )
            else:
                result = self.verify_one(contract_name, cancel=cancel)

            report.add(result)
            if self._on_result is not None:
                self._on_result(result)

        if report.ok:
            logger.info(f"Processed {len(report.results)} contract(s) without failures")
        else:
            logger.warning(f"Failed to verify {len(report.failed)} contract(s): {', '.join(report.failed)}")
        return report
