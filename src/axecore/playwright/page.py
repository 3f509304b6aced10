"""Convenience functions for scanning Playwright pages and locators."""

from __future__ import annotations

from playwright.async_api import Locator, Page

from ..commons.options import AxeRunContext, AxeRunOptions
from ..commons.results import AxeResult, AxeRuleMetadata
from ..commons.script_provider import AxeBuilderOptions
from .builder import PlaywrightAxeBuilder


async def run_axe(
    page: Page,
    options: AxeRunOptions | None = None,
    context: AxeRunContext | None = None,
    builder_options: AxeBuilderOptions | None = None,
) -> AxeResult:
    """
    Scan a page.

    Args:
        page: Page to scan.
        options: Run options; axe defaults apply when omitted.
        context: Elements to include or exclude; the whole page when omitted.
        builder_options: Where to load axe-core from.

    Returns:
        The axe report.
    """
    builder = PlaywrightAxeBuilder(page, builder_options)
    if options is not None:
        builder.with_options(options)
    if context is not None:
        builder.run_context = context
    return await builder.analyze()


async def run_axe_on_locator(
    locator: Locator,
    options: AxeRunOptions | None = None,
    builder_options: AxeBuilderOptions | None = None,
) -> AxeResult:
    """Scan the element ``locator`` resolves to, with its descendants."""
    builder = PlaywrightAxeBuilder(locator.page, builder_options)
    if options is not None:
        builder.with_options(options)
    return await builder.analyze(locator)


async def get_axe_rules(
    page: Page,
    tags: list[str] | None = None,
    builder_options: AxeBuilderOptions | None = None,
) -> list[AxeRuleMetadata]:
    """List the rules the loaded axe-core knows, optionally only those with one of ``tags``."""
    builder = PlaywrightAxeBuilder(page, builder_options)
    rules = await builder.get_rules(tags)
    return [AxeRuleMetadata.model_validate(rule) for rule in rules]
