"""
Fluent configuration shared by the Selenium and Playwright builders.

Both builders collect the same run options, include/exclude context and
output settings before a scan; only the way they talk to the browser
differs.
"""

from __future__ import annotations

import json
import warnings
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TypeVar

from ..config import get_settings
from ..exceptions import AxeValidationError
from .options import AxeRunContext, AxeRunOptions, RuleOptions, RunOnlyOptions
from .script_provider import AxeBuilderOptions

B = TypeVar("B", bound="AxeBuilderBase")

MODE_RUN_PARTIAL = "run-partial"
MODE_LEGACY = "legacy"


def validate_not_none(value: Any, parameter_name: str) -> None:
    if value is None:
        raise AxeValidationError("Value cannot be null", parameter_name)


def validate_parameters(values: Iterable[str] | None, parameter_name: str) -> None:
    validate_not_none(values, parameter_name)
    if any(value is None or value == "" for value in values):  # type: ignore[union-attr]
        raise AxeValidationError("There is some items null or empty", parameter_name)


class AxeBuilderBase:
    """
    Holds everything a scan is configured with.

    Configuration methods return the builder so calls can be chained::

        builder.with_tags("wcag2a", "wcag2aa").exclude("#ads").analyze()
    """

    def __init__(self, options: AxeBuilderOptions | None = None) -> None:
        if options is None:
            options = AxeBuilderOptions()
        validate_not_none(options.script_provider, "options.script_provider")

        self.builder_options = options
        self.run_context = AxeRunContext()
        self.run_options = AxeRunOptions()
        self.output_file_path: Path | None = None
        self.legacy_mode = get_settings().legacy_mode

    def use_legacy_mode(self: B, legacy_mode: bool = False) -> B:
        """
        Scan with axe.run instead of axe.runPartial and axe.finishRun.

        Legacy mode only reaches same-origin frames.
        """
        warnings.warn(
            "Legacy mode is being removed in the future. Use with caution!",
            DeprecationWarning,
            stacklevel=2,
        )
        self.legacy_mode = legacy_mode
        return self

    def with_options(self: B, run_options: AxeRunOptions) -> B:
        """Replace the run options, discarding earlier tag, rule and disable settings."""
        validate_not_none(run_options, "run_options")
        self.run_options = run_options
        return self

    def with_tags(self: B, *tags: str) -> B:
        """Limit the scan to rules carrying any of the given tags."""
        validate_parameters(tags, "tags")
        self.run_options.run_only = RunOnlyOptions(type="tag", values=list(tags))
        return self

    def with_rules(self: B, *rules: str) -> B:
        """Limit the scan to the given rule IDs."""
        validate_parameters(rules, "rules")
        self.run_options.run_only = RunOnlyOptions(type="rule", values=list(rules))
        return self

    def disable_rules(self: B, *rules: str) -> B:
        """Skip the given rule IDs."""
        validate_parameters(rules, "rules")
        self.run_options.rules = {rule: RuleOptions(enabled=False) for rule in rules}
        return self

    def include(self: B, *selectors: str) -> B:
        """
        Add one element to scan.

        The selectors identify a single element; leading selectors walk into
        iframes, so ``include("#parent-iframe", "#inside")`` targets
        ``#inside`` within ``#parent-iframe``.
        """
        validate_parameters(selectors, "selectors")
        if self.run_context.include is None:
            self.run_context.include = []
        self.run_context.include.append(list(selectors))
        return self

    def exclude(self: B, *selectors: str) -> B:
        """Add one element to skip. Selectors work as in ``include``."""
        validate_parameters(selectors, "selectors")
        if self.run_context.exclude is None:
            self.run_context.exclude = []
        self.run_context.exclude.append(list(selectors))
        return self

    def with_output_file(self: B, path: str | Path) -> B:
        """Also write the raw report to ``path`` as JSON, overwriting it."""
        validate_not_none(path, "path")
        self.output_file_path = Path(path)
        return self

    def serialized_run_options(self) -> str:
        return self.run_options.to_json()

    def serialized_context(self) -> str | None:
        """The include/exclude context as JSON, or None to scan the whole document."""
        if not self.run_context.has_data():
            return None
        return self.run_context.to_json()

    @property
    def iframes_enabled(self) -> bool:
        return self.run_options.iframes is not False

    def write_output_file(self, result: Any) -> None:
        """Write the raw report when an output file is configured."""
        if self.output_file_path is None or not isinstance(result, dict):
            return
        with open(self.output_file_path, "w", encoding="utf-8") as f:
            json.dump(result, f, separators=(",", ":"), ensure_ascii=False)
