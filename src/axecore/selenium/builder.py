"""
Selenium WebDriver integration.

``AxeBuilder`` injects axe-core into the page under test and runs it in one
of two modes:

run-partial
    ``axe.runPartial`` runs separately in the top frame and in every
    descendant frame, including cross-origin ones. The collected partial
    results are combined by ``axe.finishRun`` in a blank window, so no page
    script can interfere with the final report. A child frame that fails
    contributes a ``None`` partial instead of failing the whole scan.

legacy
    axe is injected into every frame and ``axe.run`` is called once from the
    top frame. Cross-origin frames are not tested. Used when the loaded axe
    predates ``runPartial`` or when legacy mode is requested.

Usage::

    from axecore.selenium import AxeBuilder

    result = AxeBuilder(driver).with_tags("wcag2a", "wcag2aa").analyze()
    for violation in result.violations:
        print(violation.id, violation.impact)
"""

from __future__ import annotations

import json
from typing import Any

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from ..commons import scripts
from ..commons.builder import MODE_LEGACY, MODE_RUN_PARTIAL, AxeBuilderBase, validate_not_none
from ..commons.options import AxeFrameContext
from ..commons.results import AxeResult
from ..commons.script_provider import AxeBuilderOptions
from ..config import get_settings
from ..exceptions import AxeScanError, AxeWindowError
from ..logging import ScanLogger
from .frames import for_each_frame_context

WINDOW_ERROR_MESSAGE = (
    "Failed to switch windows. Please make sure you have popup blockers disabled "
    "and you are using the correct browser drivers."
)


class AxeBuilder(AxeBuilderBase):
    """
    Fluent builder for running axe through Selenium.

    Configure the scan with ``include``, ``exclude``, ``with_tags``,
    ``with_rules``, ``disable_rules`` or ``with_options`` and call
    ``analyze`` to run it.
    """

    def __init__(self, driver: WebDriver, options: AxeBuilderOptions | None = None) -> None:
        validate_not_none(driver, "driver")
        super().__init__(options)
        self.driver = driver
        self.scan_logger = ScanLogger()
        self._scan_context: dict[str, Any] = {}

    def analyze(self, context: WebElement | None = None) -> AxeResult:
        """
        Run axe and return the report.

        Args:
            context: Element to scan together with its descendants. When
                omitted the whole page is scanned, limited by any
                ``include``/``exclude`` selectors.

        Returns:
            The axe report.
        """
        if context is not None:
            return self._analyze_raw_context(context)
        return self._analyze_raw_context(self.serialized_context())

    def _analyze_raw_context(self, raw_context: Any) -> AxeResult:
        """Scan with ``raw_context`` passed through to axe as its context argument."""
        self._configure_axe()

        run_partial_exists = bool(
            self.driver.execute_script(scripts.get_script(scripts.RUN_PARTIAL_EXISTS))
        )
        legacy = self.legacy_mode or not run_partial_exists
        self._scan_context = self.scan_logger.log_scan_start(
            "selenium", MODE_LEGACY if legacy else MODE_RUN_PARTIAL
        )

        frames: int | None = None
        try:
            if legacy:
                raw_result = self._analyze_legacy(raw_context)
            else:
                options = self.serialized_run_options()
                partial_results = self._run_partial_recursive(options, raw_context, True)
                frames = len(partial_results)
                raw_result = self._isolated_finish_run(partial_results, options)
        except Exception as e:
            self.scan_logger.log_scan_end(self._scan_context, success=False, error=e)
            raise

        if not isinstance(raw_result, dict):
            error = AxeScanError(f"axe returned an unexpected result: {raw_result!r}")
            self.scan_logger.log_scan_end(
                self._scan_context, success=False, frames=frames, error=error
            )
            raise error

        self.write_output_file(raw_result)
        result = AxeResult.from_raw(raw_result)
        self.scan_logger.log_scan_end(
            self._scan_context,
            success=result.error is None,
            frames=frames,
            violations=result.violation_count(),
        )
        return result

    def get_rules(self, tags: list[str] | None = None) -> list[dict[str, Any]]:
        """Raw rule metadata from axe.getRules, optionally filtered by tags."""
        self._configure_axe()
        return list(self.driver.execute_script(scripts.get_script(scripts.GET_RULES), tags))

    def _run_partial_recursive(
        self, options: str, context: Any, is_top_level: bool
    ) -> list[Any]:
        """
        Collect partial results for the current frame and its descendants.

        Results are ordered depth-first, each frame before its children.
        """
        partial_results: list[Any] = []
        try:
            if not is_top_level:
                self._configure_axe()
            partial = self.driver.execute_async_script(
                scripts.get_script(scripts.RUN_PARTIAL), context, options
            )
            # Re-serialized later as a list of objects, not a list of strings
            partial_results.append(json.loads(partial))
        except Exception as e:
            if is_top_level:
                raise
            self.scan_logger.log_frame_failure(self._scan_context, str(context), e)
            partial_results.append(None)
            return partial_results

        if not self.iframes_enabled:
            return partial_results

        try:
            frame_contexts = self._get_frame_contexts(context)
        except Exception as e:
            if is_top_level:
                raise
            self.scan_logger.log_frame_failure(self._scan_context, str(context), e)
            return partial_results

        for frame_context in frame_contexts:
            frame_selector = json.dumps(frame_context.selector)
            try:
                frame = self.driver.execute_script(
                    scripts.get_script(scripts.SHADOW_SELECT), frame_selector
                )
                self.driver.switch_to.frame(frame)
            except Exception as e:
                # Still in the current frame, nothing to switch back from
                self.scan_logger.log_frame_failure(self._scan_context, frame_selector, e)
                partial_results.append(None)
                continue

            try:
                partial_results.extend(
                    self._run_partial_recursive(
                        options, json.dumps(frame_context.context), False
                    )
                )
            except Exception as e:
                self.scan_logger.log_frame_failure(self._scan_context, frame_selector, e)
                partial_results.append(None)
            finally:
                self.driver.switch_to.parent_frame()

        return partial_results

    def _isolated_finish_run(self, partial_results: list[Any], options: str) -> Any:
        """Combine partial results in a blank window, away from page scripts."""
        original_window_handle = self.driver.current_window_handle
        known_handles = set(self.driver.window_handles)

        try:
            self.driver.execute_script("window.open('about:blank', '_blank')")
        except WebDriverException as e:
            raise AxeWindowError(WINDOW_ERROR_MESSAGE) from e

        try:
            self.driver.switch_to.window(self.driver.window_handles[-1])
            self.driver.get("about:blank")
        except WebDriverException as e:
            self._close_finish_windows(original_window_handle, known_handles)
            raise AxeWindowError(WINDOW_ERROR_MESSAGE) from e

        try:
            self._configure_axe()
            return self.driver.execute_async_script(
                scripts.get_script(scripts.FINISH_RUN), json.dumps(partial_results), options
            )
        finally:
            self._close_finish_windows(original_window_handle, known_handles)

    def _close_finish_windows(self, original_window_handle: str, known_handles: set[str]) -> None:
        """Close every window opened since ``known_handles`` and return to the page."""
        opened = [handle for handle in self.driver.window_handles if handle not in known_handles]
        for handle in opened:
            self.driver.switch_to.window(handle)
            self.driver.close()
        self.driver.switch_to.window(original_window_handle)

    def _analyze_legacy(self, raw_context: Any) -> Any:
        if self.iframes_enabled:
            for_each_frame_context(self.driver, self._configure_axe)

        return self.driver.execute_async_script(
            scripts.get_script(scripts.LEGACY_SCAN), raw_context, self.serialized_run_options()
        )

    def _get_frame_contexts(self, context: Any) -> list[AxeFrameContext]:
        """Ask axe which frames the context reaches, via axe.utils.getFrameContexts."""
        raw = self.driver.execute_script(scripts.get_script(scripts.GET_FRAME_CONTEXTS), context)
        return [AxeFrameContext.model_validate(item) for item in json.loads(raw)]

    def _configure_axe(self) -> None:
        """Inject axe into the current frame and configure it."""
        self.driver.execute_script(self.builder_options.script_provider.get_script())
        run_partial_exists = self.driver.execute_script(
            scripts.get_script(scripts.RUN_PARTIAL_EXISTS)
        )

        if not run_partial_exists and not self.legacy_mode:
            self.driver.execute_script(scripts.get_script(scripts.ALLOW_IFRAME_UNSAFE))

        self.driver.execute_script(
            scripts.get_script(scripts.BRANDING), get_settings().branding_application
        )


def analyze(
    driver: WebDriver,
    context: WebElement | None = None,
    options: AxeBuilderOptions | None = None,
) -> AxeResult:
    """Scan the current page with default settings."""
    return AxeBuilder(driver, options).analyze(context)
