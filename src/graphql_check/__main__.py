#!/usr/bin/env python3
"""
graphql-check entry point

Checks a GraphQL endpoint once and exits non-zero if it is misconfigured.
Positional arguments follow the GitHub Action inputs: endpoint, auth,
subgraph, allow_introspection, insecure_subgraph.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from .engine import CheckEngine
from .errors import ConfigurationError
from .models import CheckConfig
from .reporter import Reporter


def setup_logging():
    """Configure logging for graphql-check."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    return logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphql-check",
        description="Check a deployed GraphQL endpoint for configuration problems",
    )
    parser.add_argument("endpoint", nargs="?", help="GraphQL endpoint to check (env: INPUT_ENDPOINT)")
    parser.add_argument("auth", nargs="?", help='Auth header line, e.g. "Authorization: Bearer ..." (env: INPUT_AUTH)')
    parser.add_argument("subgraph", nargs="?", help="Whether the endpoint is a subgraph: true/false (env: INPUT_SUBGRAPH)")
    parser.add_argument("allow_introspection", nargs="?",
                        help="Whether introspection is allowed, defaults to value of subgraph (env: INPUT_ALLOW_INTROSPECTION)")
    parser.add_argument("insecure_subgraph", nargs="?",
                        help="Whether the subgraph may be served without auth (env: INPUT_INSECURE_SUBGRAPH)")
    parser.add_argument("--timeout", help="Per-request timeout in seconds (env: GRAPHQL_CHECK_TIMEOUT)")
    parser.add_argument("--verbose", action="store_true", help="Print check details")
    parser.add_argument("--export", choices=["json", "junit"], help="Export results to format")
    parser.add_argument("--output", help="Output file for export")
    return parser


def config_from_args(args: argparse.Namespace) -> CheckConfig:
    """Build the run configuration, falling back to the Actions environment."""
    def pick(value: Optional[str], env_var: str, default: str = "") -> str:
        if value is not None:
            return value
        return os.getenv(env_var) or default

    return CheckConfig.from_inputs(
        endpoint=pick(args.endpoint, "INPUT_ENDPOINT"),
        auth=pick(args.auth, "INPUT_AUTH"),
        subgraph=pick(args.subgraph, "INPUT_SUBGRAPH", "false") or "false",
        allow_introspection=pick(args.allow_introspection, "INPUT_ALLOW_INTROSPECTION"),
        insecure_subgraph=pick(args.insecure_subgraph, "INPUT_INSECURE_SUBGRAPH", "false") or "false",
        timeout=args.timeout or os.getenv("GRAPHQL_CHECK_TIMEOUT"),
    )


def report_configuration_error(error: ConfigurationError) -> None:
    print(f"Error: {error}", file=sys.stderr)
    github_output = os.getenv("GITHUB_OUTPUT")
    if github_output:
        with open(github_output, "a") as f:
            f.write(f"error={error}\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    logger = setup_logging()

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        report_configuration_error(e)
        return 1

    logger.info(f"🚀 Starting GraphQL check with config: {config.to_dict()}")
    verdict = asyncio.run(CheckEngine(config).run())

    reporter = Reporter(verdict, config)
    reporter.print_results(verbose=args.verbose)
    reporter.write_github_output()

    if args.export:
        output = reporter.export_results(args.export)
        if args.output:
            with open(args.output, "w") as f:
                f.write(output)
            print(f"\nResults exported to: {args.output}")
        else:
            print(f"\n{output}")

    if not verdict.overall_success:
        print(f"Error: {reporter.error}", file=sys.stderr)

    return reporter.exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
