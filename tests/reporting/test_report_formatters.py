"""Tests for report formatters."""

import json
import xml.etree.ElementTree as ET

import pytest

from axecore.commons.results import AxeResult
from axecore.reporting import FORMATS, format_results


@pytest.fixture
def result(sample_report) -> AxeResult:
    return AxeResult.from_raw(sample_report)


@pytest.fixture
def error_result() -> AxeResult:
    return AxeResult.from_raw({"url": "http://localhost/broken.html", "error": "axe.run failed"})


class TestJsonFormat:
    def test_summary_and_raw_report(self, result, sample_report) -> None:
        output = json.loads(format_results([result], "json"))

        assert "generated_at" in output
        page = output["pages"][0]
        assert page["summary"]["violations"] == 2
        assert page["summary"]["url"] == "http://localhost/basic.html"
        assert page["report"] == sample_report


class TestJunitFormat:
    def test_one_testcase_per_rule(self, result) -> None:
        root = ET.fromstring(format_results([result], "junit"))

        suite = root.find("testsuite")
        assert suite is not None
        assert suite.get("name") == "http://localhost/basic.html"
        assert suite.get("tests") == "3"
        assert suite.get("failures") == "2"
        assert [case.get("name") for case in suite.findall("testcase")] == [
            "aria-roles",
            "color-contrast",
            "region",
        ]

    def test_failure_details(self, result) -> None:
        root = ET.fromstring(format_results([result], "junit"))

        case = root.find("testsuite/testcase[@name='color-contrast']")
        failure = case.find("failure")
        assert failure.get("type") == "serious"
        assert failure.get("message") == "Elements must meet minimum color contrast ratio thresholds"
        assert ".low" in failure.text
        assert root.find("testsuite/testcase[@name='region']/failure") is None

    def test_scan_error(self, result, error_result) -> None:
        root = ET.fromstring(format_results([result, error_result], "junit"))

        suites = root.findall("testsuite")
        assert len(suites) == 2
        assert suites[1].find("error").get("message") == "axe.run failed"
        assert root.get("tests") == "3"


class TestTapFormat:
    def test_output(self, result) -> None:
        lines = format_results([result], "tap").splitlines()

        assert lines[0] == "TAP version 13"
        assert lines[1] == "1..3"
        assert "not ok 1 - aria-roles (http://localhost/basic.html)" in lines
        assert "ok 3 - region (http://localhost/basic.html)" in lines
        assert "  impact: critical" in lines
        assert lines[-3:] == ["# Total: 3", "# Passed: 1", "# Failed: 2"]


class TestTextFormat:
    def test_summary(self, result) -> None:
        output = format_results([result], "text")

        assert "URL: http://localhost/basic.html" in output
        assert "axe-core: 4.10.2" in output
        assert "Violations: 2 rules, 3 nodes" in output
        assert "[SERIOUS] color-contrast" in output
        assert '["#shadow-host", "div[role=bar]"]' in output

    def test_error(self, error_result) -> None:
        assert "Error: axe.run failed" in format_results([error_result], "text")


def test_all_formats_listed(result) -> None:
    for format_type in FORMATS:
        assert format_results([result], format_type)


def test_unknown_format(result) -> None:
    with pytest.raises(ValueError, match="Unknown format type"):
        format_results([result], "html")
