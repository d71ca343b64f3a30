#!/usr/bin/env python3
"""
Unit tests for Reporter output, GitHub Actions output and exports.
"""

import io
import json
import os
from unittest.mock import patch
from xml.etree import ElementTree

import pytest

from graphql_check.models import CheckConfig, CheckOutcome, CheckStatus, Verdict
from graphql_check.reporter import Reporter

ENDPOINT = "https://graphql.example.com/graphql"


@pytest.fixture
def failing_verdict():
    return Verdict([
        CheckOutcome(check_id="reachability", status=CheckStatus.PASS, detail="Endpoint answered as `Query`"),
        CheckOutcome(check_id="subgraph_detection", status=CheckStatus.SKIPPED, detail="Endpoint not declared as a subgraph"),
        CheckOutcome(check_id="introspection", status=CheckStatus.FAIL,
                     detail="Introspection is enabled for the GraphQL server but not allowed"),
        CheckOutcome(check_id="auth_enforcement", status=CheckStatus.FAIL,
                     detail="Subgraph is publicly accessible without authentication"),
    ])


@pytest.fixture
def passing_verdict():
    return Verdict([
        CheckOutcome(check_id="reachability", status=CheckStatus.PASS, detail="ok"),
    ])


class TestReporter:
    """Test suite for Reporter."""

    def test_exit_code_and_error(self, failing_verdict, passing_verdict):
        failing = Reporter(failing_verdict)
        assert failing.exit_code == 1
        assert failing.error == (
            "Introspection is enabled for the GraphQL server but not allowed, "
            "Subgraph is publicly accessible without authentication"
        )

        passing = Reporter(passing_verdict)
        assert passing.exit_code == 0
        assert passing.error == ""

    def test_print_results(self, failing_verdict):
        stream = io.StringIO()
        Reporter(failing_verdict, CheckConfig(endpoint=ENDPOINT)).print_results(stream=stream)
        output = stream.getvalue()

        assert "GRAPHQL CHECK RESULTS" in output
        assert ENDPOINT in output
        assert "introspection" in output
        assert "Total: 4 checks" in output
        assert "Error: Introspection is enabled" in output

    def test_print_results_verbose_includes_details(self, passing_verdict):
        passing_verdict.outcomes[0].details = {"typename": "Query"}
        stream = io.StringIO()
        Reporter(passing_verdict).print_results(verbose=True, stream=stream)

        assert '"typename": "Query"' in stream.getvalue()

    def test_write_github_output_appends(self, failing_verdict, tmp_path):
        output_file = tmp_path / "github_output"
        output_file.write_text("previous=1\n")

        written = Reporter(failing_verdict).write_github_output(str(output_file))

        assert written is True
        lines = output_file.read_text().splitlines()
        assert lines[0] == "previous=1"
        assert lines[1].startswith("error=Introspection is enabled")

    def test_write_github_output_empty_on_success(self, passing_verdict, tmp_path):
        output_file = tmp_path / "github_output"
        with patch.dict(os.environ, {"GITHUB_OUTPUT": str(output_file)}):
            Reporter(passing_verdict).write_github_output()

        assert output_file.read_text() == "error=\n"

    def test_write_github_output_without_path(self, passing_verdict):
        with patch.dict(os.environ, {}, clear=True):
            assert Reporter(passing_verdict).write_github_output() is False

    def test_export_json(self, failing_verdict):
        data = json.loads(Reporter(failing_verdict, CheckConfig(endpoint=ENDPOINT)).export_results("json"))

        assert data["endpoint"] == ENDPOINT
        assert data["overall_success"] is False
        assert data["summary"] == {
            "total": 4, "passed": 1, "failed": 2, "skipped": 1, "duration_ms": 0.0
        }
        assert [o["status"] for o in data["outcomes"]] == ["pass", "skipped", "fail", "fail"]

    def test_export_junit(self, failing_verdict):
        xml = Reporter(failing_verdict).export_results("junit")
        root = ElementTree.fromstring(xml)

        suite = root.find("testsuite")
        assert suite.get("tests") == "4"
        assert suite.get("failures") == "2"
        assert suite.get("skipped") == "1"
        assert len(suite.findall("testcase/failure")) == 2

    def test_export_unsupported_format(self, passing_verdict):
        with pytest.raises(ValueError):
            Reporter(passing_verdict).export_results("csv")
