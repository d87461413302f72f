"""
Module 02 - Config Resolver

Turns the build tool's raw configuration into VerificationOptions and
expands the "all" sentinel into the contract names found in the build
directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from core.config.networks import NetworkRegistry
from core.schemas import ConfigError, ProxyRegistryConfig, VerificationOptions


logger = logging.getLogger(__name__)


ALL_CONTRACTS = "all"
ARTIFACT_EXTENSION = ".json"


@dataclass(frozen=True)
class ResolvedConfig:
    """Options for the invocation plus the contract names to process."""
    options: VerificationOptions
    contract_names: list[str]


def load_project_config(path: str | Path) -> dict[str, Any]:
    """
    Read the build-tool configuration from a JSON or YAML file.

    Relative `working_directory` values are resolved against the file's
    directory; a missing one defaults to that directory.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Project config not found: {path}", details={"path": str(path)})

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            import yaml
            data = yaml.safe_load(text)
    except Exception as e:
        raise ConfigError(f"Could not parse project config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Project config {path} must be a mapping")

    working_dir = Path(data.get("working_directory") or ".")
    if not working_dir.is_absolute():
        working_dir = path.resolve().parent / working_dir
    data["working_directory"] = str(working_dir)
    return data


def _get_path(data: Mapping[str, Any], *keys: str) -> Any:
    """Walk nested mappings, returning None when any level is missing."""
    current: Any = data
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _resolve_build_dir(raw_config: Mapping[str, Any], working_dir: Path, network_name: str) -> Path:
    # Per-network build output takes precedence when the build tool produced it.
    if network_name:
        per_network = working_dir / "build" / network_name / "contracts"
        if per_network.is_dir():
            return per_network

    configured = raw_config.get("contracts_build_directory")
    if configured:
        configured_path = Path(configured)
        if not configured_path.is_absolute():
            configured_path = working_dir / configured_path
        return configured_path

    return working_dir / "build" / "contracts"


def discover_contract_names(build_dir: str | Path) -> list[str]:
    """
    List artifact names under `build_dir`, descending into subdirectories.

    Names are artifact paths relative to `build_dir` without the
    extension, so nested artifacts load from where they were found.
    Ordering is sorted and therefore stable across runs.
    """
    root = Path(build_dir)
    if not root.is_dir():
        return []

    names: list[str] = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if entry.is_dir():
            names.extend(
                f"{entry.name}/{nested}" for nested in discover_contract_names(entry)
            )
        elif entry.is_file() and entry.suffix == ARTIFACT_EXTENSION:
            names.append(entry.stem)
    return names


def resolve_options(
    raw_config: Mapping[str, Any],
    contract_names: Sequence[str],
    *,
    networks: Optional[NetworkRegistry] = None,
    api_key: Optional[str] = None,
) -> ResolvedConfig:
    """
    Resolve VerificationOptions from the raw build-tool configuration.

    Args:
        raw_config: Build tool configuration (Truffle layout)
        contract_names: Requested contract names, or ["all"]
        networks: Network registry (defaults to the built-in one)
        api_key: Explorer API key used when the project config has none

    Returns:
        ResolvedConfig with the options and the names to process

    Raises:
        ConfigError: when the network has no explorer endpoints or when
            no contract names were supplied
    """
    network_id = raw_config.get("network_id")
    network_name = str(raw_config.get("network") or "")
    if network_id is None or str(network_id) == "":
        raise ConfigError("No network id configured")
    network_id = str(network_id)

    verify_section = raw_config.get("verify") or {}
    registry = (networks or NetworkRegistry.default()).with_overrides(verify_section.get("networks"))
    info = registry.get(network_id)

    api_url = verify_section.get("api_url") or (info.api_url if info else None)
    explorer_url = verify_section.get("explorer_url") or (info.explorer_url if info else None)
    if not api_url or not explorer_url:
        raise ConfigError(
            f"No explorer support for network {network_name or '?'} with id {network_id}",
            details={"network_id": network_id, "network": network_name},
        )

    requested = [name for name in contract_names if name]
    if not requested:
        raise ConfigError("No contract name(s) specified")

    working_dir = Path(raw_config.get("working_directory") or ".")
    build_dir = _resolve_build_dir(raw_config, working_dir, network_name)

    optimizer = _get_path(raw_config, "compilers", "solc", "settings", "optimizer") or {}

    proxy_registry = None
    proxy_section = verify_section.get("proxy_registry")
    if proxy_section:
        try:
            proxy_registry = ProxyRegistryConfig(**proxy_section)
        except Exception as e:
            raise ConfigError(f"Invalid verify.proxy_registry section: {e}") from e

    options = VerificationOptions(
        network_id=network_id,
        network_name=network_name or (info.name if info else ""),
        api_url=str(api_url),
        explorer_url=str(explorer_url),
        working_dir=str(working_dir),
        build_dir=str(build_dir),
        preamble=verify_section.get("preamble") or None,
        optimizer_enabled=bool(optimizer.get("enabled", False)),
        optimizer_runs=int(optimizer.get("runs", 200)),
        api_key=verify_section.get("api_key") or api_key,
        invert_optimization_flag=bool(verify_section.get("invert_optimization_flag", True)),
        import_paths=tuple(str(p) for p in verify_section.get("import_paths") or ()),
        proxy_registry=proxy_registry,
    )

    logger.debug(f"Contracts build dir {options.build_dir}")
    logger.debug(f"Working dir {options.working_dir}")

    if ALL_CONTRACTS in requested:
        names = discover_contract_names(build_dir)
        if not names:
            raise ConfigError(f"No contract artifacts found in {build_dir}")
        logger.info(f"Discovered {len(names)} contract artifact(s) in {build_dir}")
    else:
        names = requested

    return ResolvedConfig(options=options, contract_names=names)
