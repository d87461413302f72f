"""
Module 01 - Schemas
File: errors.py

Purpose: Error taxonomy for the verification workflow.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the workflow."""

    # Configuration Errors (fatal)
    CONFIG_ERROR = "CONFIG_ERROR"

    # Local Input Errors
    ARTIFACT_NOT_FOUND = "ARTIFACT_NOT_FOUND"
    ARTIFACT_INVALID = "ARTIFACT_INVALID"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"

    # Request Construction Errors
    LIBRARY_LIMIT_EXCEEDED = "LIBRARY_LIMIT_EXCEEDED"
    CONSTRUCTOR_FETCH_ERROR = "CONSTRUCTOR_FETCH_ERROR"

    # Explorer Errors
    CONNECTIVITY_ERROR = "CONNECTIVITY_ERROR"
    EXPLORER_REJECTED = "EXPLORER_REJECTED"
    VERIFICATION_TIMEOUT = "VERIFICATION_TIMEOUT"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class VerifierError(BaseModel):
    """
    Structured error attached to a failed contract result.

    Lets callers inspect why a contract failed without relying on
    exception semantics.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.CONNECTIVITY_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class VerifierException(Exception):
    """
    Base exception for all verification workflow errors.

    Carries structured error information and converts to a
    VerifierError model for ContractResult.error.
    """

    def __init__(
        self,
        message: str,
        code: str = "VERIFIER_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> VerifierError:
        """Convert this exception to a VerifierError model."""
        return VerifierError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConfigError(VerifierException):
    """Raised when the invocation cannot be configured (aborts the run)."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=details,
            retryable=False,
        )


class ArtifactNotFound(VerifierException):
    """Raised when a contract's build artifact is absent."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
        code: str = ErrorCodes.ARTIFACT_NOT_FOUND,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class ArtifactInvalid(ArtifactNotFound):
    """Raised when an artifact exists but cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            path=path,
            details=details,
            code=ErrorCodes.ARTIFACT_INVALID,
        )


class SourceNotFound(VerifierException):
    """Raised when a contract source file (or one of its imports) is absent."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.SOURCE_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class LibraryLimitExceeded(VerifierException):
    """Raised when an artifact links more libraries than the API accepts."""

    def __init__(
        self,
        message: str,
        count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if count is not None:
            full_details["count"] = count
        super().__init__(
            message=message,
            code=ErrorCodes.LIBRARY_LIMIT_EXCEEDED,
            details=full_details,
            retryable=False,
        )


class ConstructorFetchError(VerifierException):
    """Raised when the deployment transaction cannot be looked up."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONSTRUCTOR_FETCH_ERROR,
            details=details,
            retryable=True,
        )


class ConnectivityError(VerifierException):
    """Raised when the explorer API is unreachable or replies with garbage."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if url:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=ErrorCodes.CONNECTIVITY_ERROR,
            details=full_details,
            retryable=True,
        )


class ExplorerRejected(VerifierException):
    """Raised when the explorer answers a request with a non-OK status."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EXPLORER_REJECTED,
            details=details,
            retryable=False,
        )


class VerificationTimeout(VerifierException):
    """Raised when confirmation does not reach a terminal state in time."""

    def __init__(
        self,
        message: str,
        attempts: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if attempts is not None:
            full_details["attempts"] = attempts
        super().__init__(
            message=message,
            code=ErrorCodes.VERIFICATION_TIMEOUT,
            details=full_details,
            retryable=True,
        )
