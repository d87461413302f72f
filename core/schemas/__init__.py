"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    ArtifactInvalid,
    ArtifactNotFound,
    ConfigError,
    ConnectivityError,
    ConstructorFetchError,
    ErrorCodes,
    ExplorerRejected,
    LibraryLimitExceeded,
    SourceNotFound,
    VerificationTimeout,
    VerifierError,
    VerifierException,
)

# Artifact schemas
from .artifact import (
    ContractArtifact,
    NetworkDeployment,
)

# Options
from .options import (
    ProxyRegistryConfig,
    VerificationOptions,
)

# Verification schemas
from .verification import (
    MAX_LIBRARIES,
    ContractResult,
    ExplorerMessages,
    LibraryLink,
    RequestStatus,
    VerificationOutcome,
    VerificationReport,
    VerificationRequest,
    link_libraries,
)

__all__ = [
    # Errors
    "ArtifactInvalid",
    "ArtifactNotFound",
    "ConfigError",
    "ConnectivityError",
    "ConstructorFetchError",
    "ErrorCodes",
    "ExplorerRejected",
    "LibraryLimitExceeded",
    "SourceNotFound",
    "VerificationTimeout",
    "VerifierError",
    "VerifierException",
    # Artifact
    "ContractArtifact",
    "NetworkDeployment",
    # Options
    "ProxyRegistryConfig",
    "VerificationOptions",
    # Verification
    "MAX_LIBRARIES",
    "ContractResult",
    "ExplorerMessages",
    "LibraryLink",
    "RequestStatus",
    "VerificationOutcome",
    "VerificationReport",
    "VerificationRequest",
    "link_libraries",
]
