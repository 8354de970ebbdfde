"""
Mesh policy index CLI entry point.

This module provides the command-line interface for inspecting the
pod settings and named ports the index derives from manifests.
"""

from __future__ import annotations

import argparse
import sys

from meshindex import __version__
from meshindex.cli_commands import (
    cmd_config,
    cmd_port_names,
    cmd_ports,
    cmd_settings,
)
from meshindex.config import ConfigError, IndexConfig, load_config_from_env
from meshindex.index.policy import DefaultPolicy
from meshindex.observability.logging import configure_logging


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="meshindex",
        description="Inspect per-pod mesh policy settings derived from Kubernetes manifests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"meshindex {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )

    parser.add_argument(
        "--log-format",
        choices=["human", "json"],
        help="Log output format (overrides configuration)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    policy_choices = [mode.value for mode in DefaultPolicy]

    # ports command
    ports_parser = subparsers.add_parser(
        "ports",
        help="Parse a port specification",
        description="Parse a comma-separated list of ports and port ranges.",
    )
    ports_parser.add_argument("spec", help="Port specification, e.g. '25,443,8000-8100'")
    ports_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    # settings command
    settings_parser = subparsers.add_parser(
        "settings",
        help="Show pod settings derived from manifest annotations",
        description="Read Pods and pod-templated workloads from a YAML file "
        "and show the settings their annotations produce.",
    )
    settings_parser.add_argument("manifest", help="YAML manifest file ('-' for stdin)")
    settings_parser.add_argument(
        "--default-policy",
        choices=policy_choices,
        help="Cluster default inbound policy (overrides configuration)",
    )
    settings_parser.add_argument("--config", help="Index configuration file (JSON or YAML)")
    settings_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    # port-names command
    port_names_parser = subparsers.add_parser(
        "port-names",
        help="Show named TCP container ports",
        description="Show the named TCP container ports of each workload in a YAML file.",
    )
    port_names_parser.add_argument("manifest", help="YAML manifest file ('-' for stdin)")
    port_names_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective index configuration",
    )
    config_parser.add_argument(
        "--default-policy",
        choices=policy_choices,
        help="Cluster default inbound policy (overrides configuration)",
    )
    config_parser.add_argument("--config", help="Index configuration file (JSON or YAML)")
    config_parser.add_argument("--json", action="store_true", help="Output in JSON format")

    # version command
    subparsers.add_parser("version", help="Show version information")

    return parser


def _setup_logging(args: argparse.Namespace) -> None:
    """
    Apply the configured log level and format.

    ``-v`` overrides the configured level and ``--log-format`` the
    configured format.
    """
    config_path = getattr(args, "config", None)
    config = IndexConfig.from_file(config_path) if config_path else load_config_from_env()

    level = config.log_level
    if args.verbose:
        level = "DEBUG" if args.verbose > 1 else "INFO"
    configure_logging(level=level, format=args.log_format or config.log_format)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        _setup_logging(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "version":
        print(f"meshindex version {__version__}")
        return 0

    command_handlers = {
        "ports": cmd_ports,
        "settings": cmd_settings,
        "port-names": cmd_port_names,
        "config": cmd_config,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    print(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
