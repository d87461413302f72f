"""
Module 01 - Schemas
File: options.py

Purpose: Normalized, immutable options for one verification invocation.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProxyRegistryConfig(BaseModel):
    """Where to look up proxy addresses for verified contracts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rpc_url: str = Field(
        ...,
        description="JSON-RPC endpoint of the chain hosting the registry",
        min_length=1,
    )
    registry_address: str = Field(
        ...,
        description="Address of the name -> address registry contract",
        min_length=1,
    )


class VerificationOptions(BaseModel):
    """
    Options resolved from the build-tool configuration.

    Constructed once per invocation and shared read-only by every
    contract processed in that invocation.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    network_id: str = Field(
        ...,
        description="Target network id (artifact networks are keyed by it)",
        min_length=1,
    )
    network_name: str = Field(
        default="",
        description="Human-readable network name",
    )
    api_url: str = Field(
        ...,
        description="Explorer API base URL",
        min_length=1,
    )
    explorer_url: str = Field(
        ...,
        description="Explorer web base URL (used for result links)",
        min_length=1,
    )
    working_dir: str = Field(
        default=".",
        description="Project working directory",
    )
    build_dir: str = Field(
        ...,
        description="Directory holding the build artifacts",
        min_length=1,
    )
    preamble: str | None = Field(
        default=None,
        description="Optional text prepended to the flattened source as a comment",
    )
    optimizer_enabled: bool = Field(
        default=False,
        description="Whether the optimizer was enabled at compile time",
    )
    optimizer_runs: int = Field(
        default=200,
        description="Optimizer run count",
        ge=0,
    )
    api_key: str | None = Field(
        default=None,
        description="Explorer API key, sent as the apikey query parameter",
    )
    invert_optimization_flag: bool = Field(
        default=True,
        description="Send the optimization field inverted (observed explorer behaviour)",
    )
    import_paths: tuple[str, ...] = Field(
        default=(),
        description="Extra roots used to resolve non-relative source imports",
    )
    proxy_registry: ProxyRegistryConfig | None = Field(
        default=None,
        description="Optional proxy registry lookup",
    )

    def explorer_link(self, address: str) -> str:
        """Link to the verified contract page on the explorer."""
        return f"{self.explorer_url.rstrip('/')}/address/{address}/contracts"
