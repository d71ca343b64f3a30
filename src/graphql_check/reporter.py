#!/usr/bin/env python3
"""
Result reporting for graphql-check.

Turns a Verdict into console output, the GitHub Actions ``error`` output,
optional JSON/JUnit exports and the process exit code.
"""

import json
import logging
import os
import time
from typing import Optional, TextIO
from xml.sax.saxutils import quoteattr

from colorama import init, Fore, Style

from .models import CheckConfig, CheckStatus, Verdict

logger = logging.getLogger(__name__)

# Initialize colorama for cross-platform color support
init(autoreset=True)

STATUS_LABELS = {
    CheckStatus.PASS: f"{Fore.GREEN}✓ PASS{Style.RESET_ALL}",
    CheckStatus.FAIL: f"{Fore.RED}✗ FAIL{Style.RESET_ALL}",
    CheckStatus.SKIPPED: f"{Fore.YELLOW}- SKIP{Style.RESET_ALL}",
}


class Reporter:
    """Reports a verdict to the caller."""

    def __init__(self, verdict: Verdict, config: Optional[CheckConfig] = None):
        self.verdict = verdict
        self.config = config

    @property
    def error(self) -> str:
        """The ``error`` output: empty on success."""
        return self.verdict.error_message

    @property
    def exit_code(self) -> int:
        return 0 if self.verdict.overall_success else 1

    def print_results(self, verbose: bool = False, stream: Optional[TextIO] = None):
        """Print check results with colors."""
        def emit(line: str = "") -> None:
            print(line, file=stream)

        emit("\n" + "=" * 60)
        emit("GRAPHQL CHECK RESULTS")
        if self.config is not None:
            emit(self.config.endpoint)
        emit("=" * 60 + "\n")

        for outcome in self.verdict.outcomes:
            emit(f"{STATUS_LABELS[outcome.status]} {outcome.check_id:<25} ({outcome.latency_ms:.0f}ms)")
            emit(f"       {outcome.detail}")

            if verbose and outcome.details:
                emit(f"       Details: {json.dumps(outcome.details, indent=2, default=str)}")

        counts = {status: 0 for status in CheckStatus}
        for outcome in self.verdict.outcomes:
            counts[outcome.status] += 1
        total_time = sum(o.latency_ms for o in self.verdict.outcomes)

        emit("\n" + "-" * 60)
        emit(f"Total: {len(self.verdict.outcomes)} checks")
        emit(f"Passed: {Fore.GREEN}{counts[CheckStatus.PASS]}{Style.RESET_ALL}")
        emit(f"Failed: {Fore.RED}{counts[CheckStatus.FAIL]}{Style.RESET_ALL}")
        emit(f"Skipped: {Fore.YELLOW}{counts[CheckStatus.SKIPPED]}{Style.RESET_ALL}")
        emit(f"Duration: {total_time:.0f}ms")
        emit("-" * 60)

        if self.verdict.overall_success:
            emit(f"\n{Fore.GREEN}✓ GraphQL endpoint is correctly configured{Style.RESET_ALL}")
        else:
            emit(f"\n{Fore.RED}✗ Error: {self.error}{Style.RESET_ALL}")

    def write_github_output(self, path: Optional[str] = None) -> bool:
        """Append ``error=<message>`` to the GitHub Actions output file.

        Returns:
            True if an output file was written
        """
        path = path or os.getenv("GITHUB_OUTPUT")
        if not path:
            return False

        message = " ".join(self.error.splitlines())
        with open(path, "a") as f:
            f.write(f"error={message}\n")
        logger.debug(f"Wrote error output to {path}")
        return True

    def export_results(self, format: str = "json") -> str:
        """Export results in specified format."""
        outcomes = self.verdict.outcomes

        if format == "json":
            data = {
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
                "endpoint": self.config.endpoint if self.config else None,
                "summary": {
                    "total": len(outcomes),
                    "passed": sum(1 for o in outcomes if o.status == CheckStatus.PASS),
                    "failed": sum(1 for o in outcomes if o.status == CheckStatus.FAIL),
                    "skipped": sum(1 for o in outcomes if o.status == CheckStatus.SKIPPED),
                    "duration_ms": sum(o.latency_ms for o in outcomes),
                },
                **self.verdict.to_dict(),
            }
            return json.dumps(data, indent=2, default=str)

        elif format == "junit":
            # JUnit XML format for CI integration
            xml_lines = ['<?xml version="1.0" encoding="UTF-8"?>']
            xml_lines.append('<testsuites>')
            xml_lines.append('  <testsuite name="GraphQL Check" tests="{}" failures="{}" skipped="{}">'.format(
                len(outcomes),
                sum(1 for o in outcomes if o.status == CheckStatus.FAIL),
                sum(1 for o in outcomes if o.status == CheckStatus.SKIPPED),
            ))

            for outcome in outcomes:
                xml_lines.append(
                    f'    <testcase name={quoteattr(outcome.check_id)} time="{outcome.latency_ms / 1000:.3f}">'
                )
                if outcome.status == CheckStatus.FAIL:
                    xml_lines.append(f'      <failure message={quoteattr(outcome.detail)}/>')
                elif outcome.status == CheckStatus.SKIPPED:
                    xml_lines.append(f'      <skipped message={quoteattr(outcome.detail)}/>')
                xml_lines.append('    </testcase>')

            xml_lines.append('  </testsuite>')
            xml_lines.append('</testsuites>')

            return '\n'.join(xml_lines)

        else:
            raise ValueError(f"Unsupported format: {format}")
