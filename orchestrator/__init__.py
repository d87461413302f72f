"""
Verification Workflow

Config resolution, artifact loading, source assembly and the explorer
verification client, composed by a sequential VerificationRun.

Public API:
- resolve_options: Build VerificationOptions from the build-tool config
- load_project_config: Read the build-tool config from JSON/YAML
- load_artifact: Read a contract's build artifact
- assemble_source: Flatten a contract's sources (with optional preamble)
- VerificationClient: Submit and confirm one contract
- VerificationRun: Process several contracts into a VerificationReport
- CancelToken: Abort a run that is waiting on confirmation
"""

from orchestrator.artifacts import artifact_path, load_artifact
from orchestrator.cancellation import CancelToken
from orchestrator.config_resolver import (
    ALL_CONTRACTS,
    ResolvedConfig,
    discover_contract_names,
    load_project_config,
    resolve_options,
)
from orchestrator.pipeline import VerificationRun
from orchestrator.source import SourceAssembler, assemble_source
from orchestrator.verification_client import (
    Confirmation,
    Submission,
    VerificationClient,
)


__all__ = [
    # Config
    "ALL_CONTRACTS",
    "ResolvedConfig",
    "discover_contract_names",
    "load_project_config",
    "resolve_options",
    # Artifacts & sources
    "artifact_path",
    "load_artifact",
    "SourceAssembler",
    "assemble_source",
    # Verification
    "CancelToken",
    "Confirmation",
    "Submission",
    "VerificationClient",
    "VerificationRun",
]
