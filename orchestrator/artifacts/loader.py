"""
Module 03 - Artifact Loader
File: loader.py

Purpose: Read per-contract build artifacts from disk.
Artifacts are produced by an external build step, so every call
re-reads the file; nothing is cached.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core.schemas import (
    ArtifactInvalid,
    ArtifactNotFound,
    ContractArtifact,
    VerificationOptions,
)


logger = logging.getLogger(__name__)


def artifact_path(contract_name: str, options: VerificationOptions) -> Path:
    """Location of a contract's artifact: {build_dir}/{contract_name}.json."""
    return Path(options.build_dir) / f"{contract_name}.json"


def load_artifact(contract_name: str, options: VerificationOptions) -> ContractArtifact:
    """
    Load and parse a contract's build artifact.

    Raises:
        ArtifactNotFound: if the artifact file does not exist
        ArtifactInvalid: if it exists but is not a usable artifact
    """
    path = artifact_path(contract_name, options)
    if not path.is_file():
        raise ArtifactNotFound(
            f"Could not find {contract_name} artifact at {path}",
            path=str(path),
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactInvalid(f"Could not read {contract_name} artifact at {path}: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise ArtifactInvalid(f"Artifact {path} is not a JSON object", path=str(path))

    try:
        artifact = ContractArtifact.from_build_json(data)
    except ValidationError as e:
        raise ArtifactInvalid(
            f"Artifact {path} is missing required fields",
            path=str(path),
            details={"errors": [err["loc"] for err in e.errors()]},
        ) from e

    logger.debug(f"Loaded artifact {artifact.contract_name} from {path}")
    return artifact
