"""
CLI Verify Command

Verify deployed contracts on the network's block explorer.

Usage:
    scanverify verify Token Vault --project scanverify.yaml
    scanverify verify all --network kovan --network-id 42 [--timeout N] [--json] [--debug]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any, Optional

from core.chain import ProxyRegistryResolver
from core.config import RuntimeConfig
from core.http import HttpClient
from core.schemas import ConfigError, ContractResult, VerificationOptions, VerificationReport
from orchestrator import (
    CancelToken,
    VerificationClient,
    VerificationRun,
    load_project_config,
    resolve_options,
)


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

DEFAULT_PROJECT_FILES = ("scanverify.yaml", "scanverify.yml", "scanverify.json")


def find_project_file(explicit: Optional[str]) -> Path:
    """Return the project config path, falling back to the default names in cwd."""
    if explicit:
        return Path(explicit)
    for name in DEFAULT_PROJECT_FILES:
        candidate = Path.cwd() / name
        if candidate.exists():
            return candidate
    raise ConfigError(
        f"No project config given and none of {', '.join(DEFAULT_PROJECT_FILES)} found in {Path.cwd()}"
    )


def build_raw_config(args: Namespace) -> dict[str, Any]:
    """Load the project config and apply command-line overrides."""
    raw = load_project_config(find_project_file(args.project))
    if args.network:
        raw["network"] = args.network
    if args.network_id:
        raw["network_id"] = args.network_id
    if args.working_dir:
        raw["working_directory"] = str(Path(args.working_dir).resolve())
    return raw


def create_proxy_resolver(options: VerificationOptions) -> Optional[ProxyRegistryResolver]:
    """Proxy resolver for the configured registry, if any (connects lazily)."""
    if options.proxy_registry is None:
        return None
    return ProxyRegistryResolver(
        options.proxy_registry.rpc_url,
        options.proxy_registry.registry_address,
    )


def print_result_human(result: ContractResult) -> None:
    """Print one contract's outcome as soon as it is known."""
    print(f"{result.contract_name}: {result.summary_line()}")


def print_report_human(report: VerificationReport) -> None:
    """Print the closing summary."""
    print()
    if report.already_verified:
        print(f"already verified: {', '.join(report.already_verified)}")
    if report.not_deployed:
        print(f"not deployed: {', '.join(report.not_deployed)}")
    if report.ok:
        print(f"Successfully verified {len(report.verified)} contract(s).")
    else:
        print(
            f"Failed to verify {len(report.failed)} contract(s): {', '.join(report.failed)}",
            file=sys.stderr,
        )


def print_report_json(report: VerificationReport) -> None:
    print(json.dumps(report.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    runtime: RuntimeConfig = getattr(args, "runtime_config", None) or RuntimeConfig.from_env()
    output_json = args.json

    try:
        raw = build_raw_config(args)
        resolved = resolve_options(raw, args.contracts, api_key=runtime.explorer.api_key)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    options = resolved.options
    logger.info(
        f"Verifying {len(resolved.contract_names)} contract(s) on network "
        f"{options.network_name or '?'} ({options.network_id}) via {options.api_url}"
    )

    cancel = CancelToken(deadline_s=args.timeout)
    http = HttpClient(
        timeout=runtime.http.timeout,
        default_headers={"User-Agent": runtime.http.user_agent},
        proxy=runtime.proxy,
    )
    with http:
        client = VerificationClient(
            options,
            http=http,
            poll=runtime.poll,
            proxy_resolver=create_proxy_resolver(options),
        )
        run = VerificationRun(
            options,
            client,
            on_result=None if output_json else print_result_human,
        )
        report = run.run(resolved.contract_names, cancel=cancel)

    if output_json:
        print_report_json(report)
    else:
        print_report_human(report)

    return EXIT_SUCCESS if report.ok else EXIT_VERIFICATION_FAILED
