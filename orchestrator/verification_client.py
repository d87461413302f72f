"""
Module 05 - Verification Client

Drives one contract through submission and confirmation against an
explorer's contract-verification API.

State machine per contract:
    NotDeployed      no deployment record for the target network (no HTTP)
    Unchecked   ->   getsourcecode: verified source present -> AlreadyVerified
    Unverified  ->   build request (constructor args, flattened source,
                     library links, optional proxy) -> POST verify
    Confirming  ->   bounded polling until Success / AlreadyVerified / Failed

`verify()` always returns a ContractResult; per-contract failures are
reported through `outcome=FAILED` and a structured `error`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from core.chain import ProxyRegistryResolver
from core.config.runtime import PollConfig
from core.http import HttpClient, HttpError
from core.schemas import (
    ConnectivityError,
    ConstructorFetchError,
    ContractArtifact,
    ContractResult,
    ExplorerMessages,
    ExplorerRejected,
    LibraryLink,
    NetworkDeployment,
    RequestStatus,
    VerificationOptions,
    VerificationOutcome,
    VerificationRequest,
    VerificationTimeout,
    VerifierException,
    link_libraries,
)
from orchestrator.cancellation import CancelToken
from orchestrator.source import assemble_source


logger = logging.getLogger(__name__)


def _reports_already_verified(value: Any) -> bool:
    """Blockscout and Etherscan word this differently; both contain "already verified"."""
    return isinstance(value, str) and "already verified" in value.lower()


@dataclass
class Submission:
    """What the explorer answered to a verification POST."""
    already_verified: bool = False
    guid: Optional[str] = None


@dataclass
class Confirmation:
    """Terminal state reached while polling."""
    outcome: VerificationOutcome
    message: str = ""
    polls: int = 0
    error: Optional[VerifierException] = None


class VerificationClient:
    """
    Explorer verification client.

    Usage:
        with HttpClient() as http:
            client = VerificationClient(options, http=http)
            result = client.verify(artifact)
    """

    def __init__(
        self,
        options: VerificationOptions,
        *,
        http: HttpClient,
        poll: Optional[PollConfig] = None,
        proxy_resolver: Optional[ProxyRegistryResolver] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the client.

        Args:
            options: Resolved options for this invocation
            http: HTTP client used for every explorer call
            poll: Confirmation polling policy (defaults to 5 attempts, 1s apart)
            proxy_resolver: Optional proxy registry lookup
            sleep: Wait function used between polls when no cancel token is given
            clock: Monotonic clock used for the poll deadline
        """
        self.options = options
        self.http = http
        self.poll = poll or PollConfig()
        self.proxy_resolver = proxy_resolver
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------
    # Explorer API access
    # ------------------------------------------------------------------

    def _call(self, method: str, params: dict[str, str], data: Optional[dict[str, str]] = None) -> dict[str, Any]:
        """Issue one API call and return the decoded {status, result} envelope."""
        query = dict(params)
        if self.options.api_key:
            query["apikey"] = self.options.api_key
        url = self.options.api_url

        try:
            if method == "POST":
                response = self.http.post(url, params=query, data=data)
            else:
                response = self.http.get(url, params=query)
        except HttpError as e:
            raise ConnectivityError(
                f"Failed to connect to explorer API at url {url}",
                url=url,
                details={"reason": str(e), "action": params.get("action")},
            ) from e

        if not response.ok:
            raise ConnectivityError(
                f"Explorer API at url {url} returned HTTP {response.status_code}",
                url=url,
                details={"status_code": response.status_code, "action": params.get("action")},
            )

        try:
            envelope = response.json()
        except ValueError as e:
            raise ConnectivityError(
                f"Explorer API at url {url} returned a non-JSON response",
                url=url,
                details={"action": params.get("action")},
            ) from e

        if not isinstance(envelope, dict) or "result" not in envelope:
            raise ConnectivityError(
                f"Explorer API at url {url} returned a malformed response",
                url=url,
                details={"action": params.get("action")},
            )
        return envelope

    def is_verified(self, address: str) -> bool:
        """True when the explorer already holds verified source for `address`."""
        envelope = self._call("GET", {
            "module": "contract",
            "action": "getsourcecode",
            "address": address,
        })
        result = envelope.get("result")
        if isinstance(result, dict):
            result = [result]
        if not isinstance(result, list) or not result or not isinstance(result[0], dict):
            return False
        return bool(str(result[0].get("SourceCode") or "").strip())

    def fetch_constructor_arguments(self, artifact: ContractArtifact, address: str) -> str:
        """
        Recover ABI-encoded constructor arguments from the deployment transaction.

        The deployment input is the creation bytecode followed by the
        encoded arguments, so the arguments are everything past
        len(bytecode).

        Raises:
            ConstructorFetchError: if the lookup fails or is not OK
        """
        try:
            envelope = self._call("GET", {
                "module": "account",
                "action": "txlist",
                "address": address,
                "page": "1",
                "sort": "asc",
                "offset": "1",
            })
        except ConnectivityError as e:
            raise ConstructorFetchError(
                f"Failed to fetch constructor arguments for {artifact.contract_name}: {e.message}",
                details=e.details,
            ) from e

        result = envelope.get("result")
        if str(envelope.get("status")) != RequestStatus.OK or not isinstance(result, list) or not result:
            raise ConstructorFetchError(
                f"Failed to fetch constructor arguments for {artifact.contract_name}",
                details={"status": envelope.get("status"), "result": str(result)[:200]},
            )

        tx_input = result[0].get("input") if isinstance(result[0], dict) else None
        if not isinstance(tx_input, str):
            raise ConstructorFetchError(
                f"Deployment transaction of {artifact.contract_name} has no input data",
            )
        return tx_input[len(artifact.bytecode):]

    def check_status(self, guid: str) -> str:
        """Ask the explorer for the status of a submission."""
        envelope = self._call("GET", {
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        })
        return str(envelope.get("result") or "")

    # ------------------------------------------------------------------
    # Request construction and submission
    # ------------------------------------------------------------------

    def _import_paths(self) -> list[Path]:
        working_dir = Path(self.options.working_dir)
        roots = [working_dir / p for p in self.options.import_paths]
        roots.extend([working_dir, working_dir / "node_modules"])
        return roots

    def _resolve_proxy(self, contract_name: str) -> Optional[str]:
        if self.proxy_resolver is None:
            return None
        return self.proxy_resolver.resolve(contract_name)

    def build_request(
        self,
        artifact: ContractArtifact,
        deployment: NetworkDeployment,
        libraries: tuple[LibraryLink, ...],
    ) -> VerificationRequest:
        """Assemble the verification payload for a deployed contract."""
        constructor_arguments = self.fetch_constructor_arguments(artifact, deployment.address)
        source = assemble_source(
            artifact.source_path,
            self.options.preamble,
            import_paths=self._import_paths(),
        )

        optimization = self.options.optimizer_enabled
        if self.options.invert_optimization_flag:
            optimization = not optimization

        return VerificationRequest(
            address=deployment.address,
            source=source,
            contract_name=artifact.contract_name,
            compiler_version=artifact.explorer_compiler_version,
            optimization=optimization,
            runs=self.options.optimizer_runs,
            constructor_arguments=constructor_arguments,
            libraries=libraries,
            proxy_address=self._resolve_proxy(artifact.contract_name),
        )

    def submit(self, request: VerificationRequest) -> Submission:
        """
        POST the request to the explorer.

        Raises:
            ConnectivityError: on transport failure or malformed response
            ExplorerRejected: when the explorer answers with a non-OK status
        """
        logger.info(f"Submitting {request.contract_name} to {self.options.api_url}?module=contract&action=verify")
        envelope = self._call(
            "POST",
            {"module": "contract", "action": "verify"},
            data=request.to_form(),
        )

        result = envelope.get("result")
        if _reports_already_verified(result):
            return Submission(already_verified=True)

        if str(envelope.get("status")) != RequestStatus.OK:
            message = result if isinstance(result, str) and result else envelope.get("message")
            raise ExplorerRejected(
                str(message or "Verification request rejected"),
                details={"status": envelope.get("status")},
            )

        if isinstance(result, str) and result.strip():
            return Submission(guid=result.strip())
        return Submission()

    # ------------------------------------------------------------------
    # Confirmation
    # ------------------------------------------------------------------

    def _wait(self, seconds: float, cancel: Optional[CancelToken]) -> bool:
        """Wait between polls; True when the wait was cut short by cancellation."""
        if cancel is not None:
            return cancel.wait(seconds)
        self._sleep(seconds)
        return False

    def confirm(
        self,
        address: str,
        guid: Optional[str] = None,
        *,
        cancel: Optional[CancelToken] = None,
    ) -> Confirmation:
        """
        Poll until the explorer reports a terminal state.

        With a guid the submission status endpoint is polled; without
        one the address is re-checked for verified source. Either way at
        most `poll.max_attempts` polls are made, `poll.interval_s` apart,
        and a still-pending submission ends as FAILED.
        """
        started = self._clock()
        polls = 0

        for _ in range(self.poll.max_attempts):
            if self._wait(self.poll.interval_s, cancel):
                return Confirmation(
                    VerificationOutcome.FAILED,
                    "Verification cancelled while waiting for confirmation",
                    polls,
                    VerificationTimeout("Verification cancelled", attempts=polls),
                )
            if self.poll.deadline_s is not None and self._clock() - started > self.poll.deadline_s:
                return Confirmation(
                    VerificationOutcome.FAILED,
                    f"Verification not confirmed within {self.poll.deadline_s}s",
                    polls,
                    VerificationTimeout("Confirmation deadline exceeded", attempts=polls),
                )

            polls += 1
            try:
                if guid is None:
                    if self.is_verified(address):
                        return Confirmation(VerificationOutcome.SUCCESS, ExplorerMessages.SUCCESS, polls)
                    logger.debug(f"Poll {polls}/{self.poll.max_attempts}: {address} not verified yet")
                    continue

                status = self.check_status(guid)
            except ConnectivityError as e:
                return Confirmation(VerificationOutcome.FAILED, e.message, polls, e)

            logger.debug(f"Poll {polls}/{self.poll.max_attempts}: {status}")
            if status == ExplorerMessages.PENDING:
                continue
            if status == ExplorerMessages.SUCCESS:
                return Confirmation(VerificationOutcome.SUCCESS, status, polls)
            if _reports_already_verified(status):
                return Confirmation(VerificationOutcome.ALREADY_VERIFIED, status, polls)
            return Confirmation(
                VerificationOutcome.FAILED,
                status,
                polls,
                ExplorerRejected(status or "Verification failed", details={"guid": guid}),
            )

        return Confirmation(
            VerificationOutcome.FAILED,
            f"Verification still pending after {polls} attempts",
            polls,
            VerificationTimeout(f"Verification still pending after {polls} attempts", attempts=polls),
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def verify(self, artifact: ContractArtifact, *, cancel: Optional[CancelToken] = None) -> ContractResult:
        """
        Verify one contract and return its terminal result.

        Never raises for per-contract failures.
        """
        name = artifact.contract_name
        deployment = artifact.deployment(self.options.network_id)
        if deployment is None:
            message = (
                f"No instance of contract {name} found for network id "
                f"{self.options.network_id} and network name {self.options.network_name}"
            )
            logger.info(message)
            return ContractResult(
                contract_name=name,
                outcome=VerificationOutcome.NOT_DEPLOYED,
                message=message,
            )

        address = deployment.address
        link = self.options.explorer_link(address)

        try:
            libraries = link_libraries(deployment.links)

            if self.is_verified(address):
                logger.info(f"{name} at {address} is already verified")
                return ContractResult(
                    contract_name=name,
                    outcome=VerificationOutcome.ALREADY_VERIFIED,
                    message=ExplorerMessages.ALREADY_VERIFIED,
                    address=address,
                    explorer_link=link,
                )

            request = self.build_request(artifact, deployment, libraries)
            submission = self.submit(request)
        except VerifierException as e:
            logger.error(f"Verification of {name} failed: {e.message}")
            return ContractResult(
                contract_name=name,
                outcome=VerificationOutcome.FAILED,
                message=e.message,
                address=address,
                error=e.to_error_model(),
            )

        if submission.already_verified:
            return ContractResult(
                contract_name=name,
                outcome=VerificationOutcome.ALREADY_VERIFIED,
                message=ExplorerMessages.ALREADY_VERIFIED,
                address=address,
                explorer_link=link,
            )

        confirmation = self.confirm(address, submission.guid, cancel=cancel)
        if confirmation.outcome is VerificationOutcome.FAILED:
            logger.error(f"Verification of {name} failed: {confirmation.message}")

        succeeded = confirmation.outcome in (VerificationOutcome.SUCCESS, VerificationOutcome.ALREADY_VERIFIED)
        return ContractResult(
            contract_name=name,
            outcome=confirmation.outcome,
            message=confirmation.message,
            address=address,
            explorer_link=link if succeeded else None,
            error=confirmation.error.to_error_model() if confirmation.error else None,
            polls=confirmation.polls,
        )
