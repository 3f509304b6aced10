"""
Tests for the fluent configuration shared by both builders.

Uses the Selenium AxeBuilder with a mocked driver, since configuration
never touches the browser.
"""

import json
from unittest.mock import MagicMock

import pytest

from axecore.commons.options import AxeRunOptions, ResultType
from axecore.exceptions import AxeValidationError
from axecore.selenium import AxeBuilder


@pytest.fixture
def builder(builder_options):
    return AxeBuilder(MagicMock(), builder_options)


class TestValidation:
    """Tests for argument validation."""

    def test_driver_is_required(self, builder_options) -> None:
        with pytest.raises(AxeValidationError):
            AxeBuilder(None, builder_options)

    def test_validation_error_is_value_error(self, builder) -> None:
        with pytest.raises(ValueError):
            builder.with_tags("wcag2a", "")

    @pytest.mark.parametrize("method", ["with_tags", "with_rules", "disable_rules", "include", "exclude"])
    def test_empty_items_rejected(self, builder, method) -> None:
        with pytest.raises(AxeValidationError, match="There is some items null or empty"):
            getattr(builder, method)("valid", "")

    @pytest.mark.parametrize("method", ["with_tags", "with_rules", "disable_rules", "include", "exclude"])
    def test_none_items_rejected(self, builder, method) -> None:
        with pytest.raises(AxeValidationError):
            getattr(builder, method)(None)

    def test_with_options_requires_value(self, builder) -> None:
        with pytest.raises(AxeValidationError):
            builder.with_options(None)

    def test_with_output_file_requires_value(self, builder) -> None:
        with pytest.raises(AxeValidationError):
            builder.with_output_file(None)


class TestRunOptions:
    """Tests for building run options."""

    def test_with_tags(self, builder) -> None:
        builder.with_tags("wcag2a", "wcag2aa")

        assert json.loads(builder.serialized_run_options()) == {
            "runOnly": {"type": "tag", "values": ["wcag2a", "wcag2aa"]}
        }

    def test_with_rules_replaces_tags(self, builder) -> None:
        builder.with_tags("wcag2a").with_rules("color-contrast")

        assert json.loads(builder.serialized_run_options()) == {
            "runOnly": {"type": "rule", "values": ["color-contrast"]}
        }

    def test_disable_rules(self, builder) -> None:
        builder.disable_rules("color-contrast", "region")

        assert json.loads(builder.serialized_run_options()) == {
            "rules": {"color-contrast": {"enabled": False}, "region": {"enabled": False}}
        }

    def test_disable_rules_replaces_previous_map(self, builder) -> None:
        builder.disable_rules("color-contrast").disable_rules("region")

        assert set(builder.run_options.rules) == {"region"}

    def test_with_options_overrides_earlier_settings(self, builder) -> None:
        builder.with_tags("wcag2a").disable_rules("region")
        builder.with_options(AxeRunOptions(result_types={ResultType.VIOLATIONS}))

        assert json.loads(builder.serialized_run_options()) == {"resultTypes": ["violations"]}

    def test_settings_after_with_options_apply_to_new_options(self, builder) -> None:
        options = AxeRunOptions(xpath=True)
        builder.with_options(options).with_tags("best-practice")

        assert options.run_only is not None
        assert json.loads(builder.serialized_run_options())["xpath"] is True

    def test_iframes_enabled(self, builder) -> None:
        assert builder.iframes_enabled is True
        builder.with_options(AxeRunOptions(iframes=False))
        assert builder.iframes_enabled is False


class TestContext:
    """Tests for include/exclude context."""

    def test_no_context_means_whole_document(self, builder) -> None:
        assert builder.serialized_context() is None

    def test_include_and_exclude(self, builder) -> None:
        builder.include("#parent-iframe1", "#element-inside-iframe").include("#main")
        builder.exclude("#ads")

        assert json.loads(builder.serialized_context()) == {
            "include": [["#parent-iframe1", "#element-inside-iframe"], ["#main"]],
            "exclude": [["#ads"]],
        }

    def test_exclude_only(self, builder) -> None:
        builder.exclude("a")

        assert json.loads(builder.serialized_context()) == {"exclude": [["a"]]}


class TestLegacyMode:
    def test_use_legacy_mode_warns(self, builder) -> None:
        with pytest.warns(DeprecationWarning):
            result = builder.use_legacy_mode(True)

        assert result is builder
        assert builder.legacy_mode is True

    def test_default_from_settings(self, monkeypatch, builder_options) -> None:
        monkeypatch.setenv("AXECORE_LEGACY_MODE", "true")

        assert AxeBuilder(MagicMock(), builder_options).legacy_mode is True


class TestOutputFile:
    def test_write_output_file(self, builder, tmp_path) -> None:
        path = tmp_path / "report.json"
        path.write_text("previous content that is longer than the report")
        builder.with_output_file(path)

        builder.write_output_file({"violations": [], "url": "http://localhost/é"})

        raw = path.read_bytes()
        assert not raw.startswith(b"\xef\xbb\xbf")
        assert json.loads(raw.decode("utf-8")) == {"violations": [], "url": "http://localhost/é"}

    def test_non_mapping_is_not_written(self, builder, tmp_path) -> None:
        path = tmp_path / "report.json"
        builder.with_output_file(path)

        builder.write_output_file(["not", "a", "report"])

        assert not path.exists()
