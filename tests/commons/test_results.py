"""Tests for axe result models."""

from datetime import datetime, timezone

from axecore.commons.results import (
    AxeResult,
    AxeResultTarget,
    AxeRuleMetadata,
)


class TestAxeResultTarget:
    """Tests for AxeResultTarget."""

    def test_plain_selector(self) -> None:
        target = AxeResultTarget.model_validate("#id-example")

        assert target.selector == "#id-example"
        assert target.fragments is None
        assert str(target) == "#id-example"

    def test_shadow_selector_path(self) -> None:
        target = AxeResultTarget.model_validate(["#shadow-host", "div[role=bar]"])

        assert target.selector is None
        assert target.fragments == ["#shadow-host", "div[role=bar]"]
        assert str(target) == '["#shadow-host", "div[role=bar]"]'


class TestAxeResult:
    """Tests for AxeResult.from_raw."""

    def test_top_level_fields(self, sample_report) -> None:
        result = AxeResult.from_raw(sample_report)

        assert result.url == "http://localhost/basic.html"
        assert result.timestamp == datetime(2024, 5, 1, 10, 20, 30, tzinfo=timezone.utc)
        assert result.test_engine_name == "axe-core"
        assert result.test_engine_version == "4.10.2"
        assert result.test_runner is not None
        assert result.test_runner.name == "axe"
        assert result.test_environment is not None
        assert result.test_environment.window_width == 1280
        assert result.test_environment.orientation_type == "landscape-primary"
        assert result.tool_options == {"reporter": "v1"}
        assert result.error is None
        assert result.raw == sample_report

    def test_violation_items(self, sample_report) -> None:
        result = AxeResult.from_raw(sample_report)

        assert result.violations is not None
        violation = result.violations[0]
        assert violation.id == "color-contrast"
        assert violation.impact == "serious"
        assert violation.help_url == "https://dequeuniversity.com/rules/axe/4.10/color-contrast"
        assert "wcag2aa" in violation.tags

        node = violation.nodes[0]
        assert node.failure_summary == "Fix any of the following: ..."
        assert [str(t) for t in node.target] == [".low"]
        check = node.any[0]
        assert check.data == {"contrastRatio": 1.5}
        assert str(check.related_nodes[0].target[0]) == "body"

    def test_frame_and_shadow_targets(self, sample_report) -> None:
        result = AxeResult.from_raw(sample_report)

        aria = result.violations[1]
        frame_target = [str(t) for t in aria.nodes[0].target]
        shadow_target = aria.nodes[1].target[0]

        assert frame_target == ["#ifr-foo", "#div-fail"]
        assert shadow_target.fragments == ["#shadow-host", "div[role=bar]"]

    def test_missing_groups_stay_none(self) -> None:
        result = AxeResult.from_raw({"url": "about:blank"})

        assert result.violations is None
        assert result.passes is None
        assert result.test_engine_name is None
        assert result.violation_count() == 0

    def test_error_report(self) -> None:
        result = AxeResult.from_raw({"error": "axe is not defined"})

        assert result.error == "axe is not defined"

    def test_summary(self, sample_report) -> None:
        summary = AxeResult.from_raw(sample_report).summary()

        assert summary["violations"] == 2
        assert summary["violation_nodes"] == 3
        assert summary["passes"] == 1
        assert summary["incomplete"] == 0
        assert summary["inapplicable"] == 1
        assert summary["impacts"] == {"serious": 1, "critical": 1}

    def test_raw_is_not_serialized(self, sample_report) -> None:
        data = AxeResult.from_raw(sample_report).model_dump()

        assert "raw" not in data


class TestAxeRuleMetadata:
    def test_from_get_rules(self) -> None:
        rule = AxeRuleMetadata.model_validate(
            {
                "ruleId": "area-alt",
                "description": "Ensures <area> elements of image maps have alternate text",
                "help": "Active <area> elements must have alternate text",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.10/area-alt",
                "tags": ["cat.text-alternatives", "wcag2a"],
            }
        )

        assert rule.rule_id == "area-alt"
        assert rule.help_url.endswith("area-alt")
        assert "wcag2a" in rule.tags
