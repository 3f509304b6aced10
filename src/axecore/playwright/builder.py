"""
Playwright integration.

``PlaywrightAxeBuilder`` runs the same two scan modes as the Selenium
builder over Playwright's async API. Instead of switching the driver into
each frame, child frames are resolved from their host element with
``ElementHandle.content_frame`` and scanned directly, each bounded by the
configured frame timeout.

Usage::

    from axecore.playwright import PlaywrightAxeBuilder

    result = await PlaywrightAxeBuilder(page).with_tags("wcag2a").analyze()
"""

from __future__ import annotations

from typing import Any

from playwright.async_api import Frame, Locator, Page

from ..commons import scripts
from ..commons.builder import MODE_LEGACY, MODE_RUN_PARTIAL, AxeBuilderBase, validate_not_none
from ..commons.options import AxeFrameContext
from ..commons.results import AxeResult
from ..commons.script_provider import AxeBuilderOptions
from ..config import get_settings
from ..exceptions import AxeScanError, FrameScanError, with_timeout
from ..logging import ScanLogger


def _script(name: str) -> str:
    return scripts.get_script(name, scripts.PLAYWRIGHT)


class PlaywrightAxeBuilder(AxeBuilderBase):
    """Fluent builder for running axe on a Playwright page."""

    def __init__(self, page: Page, options: AxeBuilderOptions | None = None) -> None:
        validate_not_none(page, "page")
        super().__init__(options)
        self.page = page
        self.frame_timeout = get_settings().frame_timeout
        self.scan_logger = ScanLogger()
        self._scan_context: dict[str, Any] = {}

    async def analyze(self, locator: Locator | None = None) -> AxeResult:
        """
        Run axe and return the report.

        Args:
            locator: Element to scan together with its descendants. When
                omitted the whole page is scanned, limited by any
                ``include``/``exclude`` selectors.
        """
        if locator is None:
            context = self.run_context.to_dict() if self.run_context.has_data() else None
            return await self._analyze_context(context)

        element = await locator.element_handle()
        try:
            return await self._analyze_context(element)
        finally:
            await element.dispose()

    async def _analyze_context(self, context: Any) -> AxeResult:
        """Scan with ``context`` passed through to axe as its context argument."""
        main_frame = self.page.main_frame
        await self._configure_axe(main_frame)
        run_partial_exists = bool(await main_frame.evaluate(_script(scripts.RUN_PARTIAL_EXISTS)))
        legacy = self.legacy_mode or not run_partial_exists
        self._scan_context = self.scan_logger.log_scan_start(
            "playwright", MODE_LEGACY if legacy else MODE_RUN_PARTIAL, url=self.page.url
        )

        frames: int | None = None
        try:
            if legacy:
                raw_result = await self._analyze_legacy(context)
            else:
                options = self.run_options.to_dict()
                partial_results = await self._run_partial_recursive(
                    main_frame, options, context, True
                )
                frames = len(partial_results)
                raw_result = await self._isolated_finish_run(partial_results, options)
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

    async def get_rules(self, tags: list[str] | None = None) -> list[dict[str, Any]]:
        """Raw rule metadata from axe.getRules, optionally filtered by tags."""
        await self._configure_axe(self.page.main_frame)
        return list(await self.page.main_frame.evaluate(_script(scripts.GET_RULES), tags))

    async def _run_partial_recursive(
        self, frame: Frame, options: dict[str, Any], context: Any, is_top_level: bool
    ) -> list[Any]:
        """
        Collect partial results for ``frame`` and its descendants, depth-first.

        Each step in a child frame is bounded by the frame timeout on its
        own, so a slow descendant never costs its ancestors their partials.
        """
        partial_results: list[Any] = []
        try:
            partial_results.append(
                await self._in_frame(
                    self._frame_partial(frame, options, context, is_top_level),
                    is_top_level,
                    f"runPartial in frame {frame.url}",
                )
            )
        except Exception as e:
            if is_top_level:
                raise
            self.scan_logger.log_frame_failure(self._scan_context, frame.url, e)
            partial_results.append(None)
            return partial_results

        if not self.iframes_enabled:
            return partial_results

        try:
            frame_contexts = await self._in_frame(
                self._get_frame_contexts(frame, context),
                is_top_level,
                f"getFrameContexts in frame {frame.url}",
            )
        except Exception as e:
            if is_top_level:
                raise
            self.scan_logger.log_frame_failure(self._scan_context, frame.url, e)
            return partial_results

        for frame_context in frame_contexts:
            try:
                child = await with_timeout(
                    self._content_frame(frame, frame_context),
                    timeout_seconds=self.frame_timeout,
                    operation_name=f"locate frame {frame_context.selector!r}",
                )
            except Exception as e:
                self.scan_logger.log_frame_failure(
                    self._scan_context, str(frame_context.selector), e
                )
                partial_results.append(None)
                continue

            partial_results.extend(
                await self._run_partial_recursive(child, options, frame_context.context, False)
            )

        return partial_results

    async def _frame_partial(
        self, frame: Frame, options: dict[str, Any], context: Any, is_top_level: bool
    ) -> Any:
        if not is_top_level:
            await self._configure_axe(frame)
        return await frame.evaluate(_script(scripts.RUN_PARTIAL), [context, options])

    async def _in_frame(self, coro: Any, is_top_level: bool, operation_name: str) -> Any:
        """Await ``coro``, bounded by the frame timeout unless it runs in the top frame."""
        if is_top_level:
            return await coro
        return await with_timeout(
            coro, timeout_seconds=self.frame_timeout, operation_name=operation_name
        )

    async def _content_frame(self, frame: Frame, frame_context: AxeFrameContext) -> Frame:
        """Resolve the frame hosted by the element ``frame_context`` selects."""
        handle = await frame.evaluate_handle(_script(scripts.SHADOW_SELECT), frame_context.selector)
        try:
            element = handle.as_element()
            child = await element.content_frame() if element is not None else None
        finally:
            await handle.dispose()
        if child is None:
            raise FrameScanError(f"No frame found for selector {frame_context.selector!r}")
        return child

    async def _get_frame_contexts(self, frame: Frame, context: Any) -> list[AxeFrameContext]:
        raw = await frame.evaluate(_script(scripts.GET_FRAME_CONTEXTS), context)
        return [AxeFrameContext.model_validate(item) for item in raw or []]

    async def _isolated_finish_run(
        self, partial_results: list[Any], options: dict[str, Any]
    ) -> Any:
        """Combine partial results in a blank page of the same browser context."""
        blank_page = await self.page.context.new_page()
        try:
            await blank_page.goto("about:blank")
            await self._configure_axe(blank_page.main_frame)
            return await blank_page.main_frame.evaluate(
                _script(scripts.FINISH_RUN), [partial_results, options]
            )
        finally:
            await blank_page.close()

    async def _analyze_legacy(self, context: Any) -> Any:
        main_frame = self.page.main_frame
        if self.iframes_enabled:
            for frame in self.page.frames:
                if frame == main_frame:
                    continue
                try:
                    await with_timeout(
                        self._configure_axe(frame),
                        timeout_seconds=self.frame_timeout,
                        operation_name=f"inject axe into frame {frame.url}",
                    )
                except Exception as e:
                    self.scan_logger.log_frame_failure(self._scan_context, frame.url, e)

        return await main_frame.evaluate(
            _script(scripts.LEGACY_SCAN), [context, self.run_options.to_dict()]
        )

    async def _configure_axe(self, frame: Frame) -> None:
        """Inject axe into ``frame`` and configure it."""
        await frame.evaluate(self.builder_options.script_provider.get_script())
        run_partial_exists = await frame.evaluate(_script(scripts.RUN_PARTIAL_EXISTS))

        if not run_partial_exists and not self.legacy_mode:
            await frame.evaluate(_script(scripts.ALLOW_IFRAME_UNSAFE))

        await frame.evaluate(_script(scripts.BRANDING), get_settings().branding_application)
