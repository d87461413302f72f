"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m scanverify_cli verify <contract>... [--project PATH] [--network NAME] [--network-id ID]
    python -m scanverify_cli verify all --project scanverify.yaml --json
    python -m scanverify_cli networks [--json]
    python -m scanverify_cli config --init

Environment Variables:
    SCANVERIFY_API_KEY          Explorer API key
    SCANVERIFY_RPC_URL          JSON-RPC endpoint for proxy lookups
    SCANVERIFY_POLL_ATTEMPTS    Maximum confirmation polls (default: 5)
    SCANVERIFY_POLL_INTERVAL    Seconds between polls (default: 1.0)
    SCANVERIFY_LOG_LEVEL        Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config import NetworkRegistry, RuntimeConfig, get_default_config_template
from scanverify_cli import __version__
from scanverify_cli.commands import verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="scanverify",
        description="Verify deployed smart contracts on a block explorer.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to runtime configuration file (YAML)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify contracts on the explorer",
        description="Submit contract sources for verification and wait for confirmation.",
    )
    verify_parser.add_argument(
        "contracts",
        nargs="*",
        help='Contract names to verify, or "all" for every artifact in the build directory',
    )
    verify_parser.add_argument(
        "--project", "-p",
        type=str,
        default=None,
        help="Project (build tool) config, JSON or YAML (default: ./scanverify.yaml)",
    )
    verify_parser.add_argument(
        "--network",
        type=str,
        default=None,
        help="Network name (overrides project config)",
    )
    verify_parser.add_argument(
        "--network-id",
        type=str,
        default=None,
        help="Network id (overrides project config)",
    )
    verify_parser.add_argument(
        "--working-dir",
        type=str,
        default=None,
        help="Project working directory (overrides project config)",
    )
    verify_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort confirmations still waiting after this many seconds in total",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- networks command ---
    networks_parser = subparsers.add_parser(
        "networks",
        help="List built-in explorer networks",
        description="Show the networks with known explorer endpoints.",
    )
    networks_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="JSON output",
    )
    networks_parser.set_defaults(func=networks_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage runtime configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="scanverify.config.yaml",
        help="Path for config file (default: scanverify.config.yaml)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (SCANVERIFY_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: scanverify config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def networks_cmd(args: argparse.Namespace) -> int:
    """Handle networks command."""
    networks = NetworkRegistry.default().list()

    if args.json:
        data = [
            {
                "network_id": n.network_id,
                "name": n.name,
                "api_url": n.api_url,
                "explorer_url": n.explorer_url,
            }
            for n in networks
        ]
        print(json.dumps(data, indent=2))
        return EXIT_SUCCESS

    for n in networks:
        print(f"{n.network_id:>6}  {n.name:<10} {n.api_url}")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = RuntimeConfig.load(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
