"""Result formatters for axe reports.

Provides formatting for scan results in multiple formats:
- JSON: Machine-readable format
- JUnit XML: CI/CD integration format, one test case per rule
- TAP: Test Anything Protocol format
- Text: Human-readable summary
"""

import json
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Any

from ..commons.results import AxeResult, AxeResultItem

FORMATS = ("json", "junit", "tap", "text")


def format_results(results: list[AxeResult], format_type: str) -> str:
    """Format scan results in the specified format.

    Args:
        results: One report per scanned page
        format_type: Output format ("json", "junit", "tap" or "text")

    Returns:
        Formatted string output

    Raises:
        ValueError: If format_type is not recognized
    """
    if format_type == "json":
        return _format_json(results)
    elif format_type == "junit":
        return _format_junit(results)
    elif format_type == "tap":
        return _format_tap(results)
    elif format_type == "text":
        return _format_text(results)
    else:
        raise ValueError(f"Unknown format type: {format_type}")


def _rule_cases(result: AxeResult) -> list[tuple[AxeResultItem, bool]]:
    """Rules checked on a page, paired with whether they passed."""
    cases = [(item, False) for item in result.violations or []]
    cases.extend((item, True) for item in result.passes or [])
    return sorted(cases, key=lambda case: case[0].id)


def _failure_message(item: AxeResultItem) -> str:
    targets = [", ".join(str(t) for t in node.target or []) for node in item.nodes]
    lines = [f"{item.help or item.id} ({item.impact or 'unknown'} impact)"]
    lines.extend(f"  - {target}" for target in targets if target)
    if item.help_url:
        lines.append(item.help_url)
    return "\n".join(lines)


def _format_json(results: list[AxeResult]) -> str:
    """Format results as JSON: one summary per page plus the raw reports."""
    output: dict[str, Any] = {
        "generated_at": datetime.now().isoformat(),
        "pages": [
            {"summary": result.summary(), "report": result.raw or result.model_dump(mode="json")}
            for result in results
        ],
    }
    return json.dumps(output, indent=2)


def _format_junit(results: list[AxeResult]) -> str:
    """Format results as JUnit XML, one testsuite per page."""
    testsuites = ET.Element("testsuites")
    total_tests = 0
    total_failures = 0

    for result in results:
        cases = _rule_cases(result)
        failures = sum(1 for _, passed in cases if not passed)
        total_tests += len(cases)
        total_failures += failures

        testsuite = ET.SubElement(testsuites, "testsuite")
        testsuite.set("name", result.url or "axe")
        testsuite.set("tests", str(len(cases)))
        testsuite.set("failures", str(failures))
        if result.timestamp:
            testsuite.set("timestamp", result.timestamp.isoformat())

        for item, passed in cases:
            testcase = ET.SubElement(testsuite, "testcase")
            testcase.set("name", item.id)
            testcase.set("classname", "axe.rules")

            if not passed:
                failure = ET.SubElement(testcase, "failure")
                failure.set("message", item.help or item.id)
                failure.set("type", item.impact or "violation")
                failure.text = _failure_message(item)

        if result.error:
            error = ET.SubElement(testsuite, "error")
            error.set("message", result.error)

    testsuites.set("tests", str(total_tests))
    testsuites.set("failures", str(total_failures))

    xml_string = ET.tostring(testsuites, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def _format_tap(results: list[AxeResult]) -> str:
    """Format results as TAP (Test Anything Protocol)."""
    cases = [(result, item, passed) for result in results for item, passed in _rule_cases(result)]
    lines = ["TAP version 13", f"1..{len(cases)}"]

    for i, (result, item, passed) in enumerate(cases, 1):
        name = f"{item.id} ({result.url})" if result.url else item.id
        lines.append(f"{'ok' if passed else 'not ok'} {i} - {name}")

        if not passed:
            lines.append("  ---")
            lines.append(f"  impact: {item.impact or 'unknown'}")
            lines.append(f"  nodes: {len(item.nodes)}")
            if item.help_url:
                lines.append(f"  help_url: {item.help_url}")
            lines.append("  ...")

    failed = sum(1 for _, _, passed in cases if not passed)
    lines.append("")
    lines.append(f"# Total: {len(cases)}")
    lines.append(f"# Passed: {len(cases) - failed}")
    lines.append(f"# Failed: {failed}")

    return "\n".join(lines)


def _format_text(results: list[AxeResult]) -> str:
    """Format results as a console summary."""
    lines = []

    for result in results:
        summary = result.summary()
        lines.append("=" * 60)
        lines.append(f"URL: {result.url or 'unknown'}")
        if result.test_engine_version:
            lines.append(f"axe-core: {result.test_engine_version}")
        lines.append("=" * 60)

        if result.error:
            lines.append(f"Error: {result.error}")

        lines.append(
            f"Violations: {summary['violations']} rules, {summary['violation_nodes']} nodes"
        )
        lines.append(f"Passes: {summary['passes']}")
        lines.append(f"Incomplete: {summary['incomplete']}")
        lines.append(f"Inapplicable: {summary['inapplicable']}")

        if result.violations:
            lines.append("")
            lines.append("--- Violations ---")
            for item in result.violations:
                lines.append(f"[{(item.impact or 'unknown').upper()}] {item.id}: {item.help}")
                for node in item.nodes:
                    target = ", ".join(str(t) for t in node.target or [])
                    lines.append(f"    {target}")
        lines.append("")

    return "\n".join(lines)
