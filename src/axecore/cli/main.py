"""axecore CLI - Main entry point.

Provides commands for scanning pages and listing axe rules.

Exit codes:
    0: Success
    1: Violations found (with --fail-on-violations)
    2: Configuration error
    3: Runtime error
"""

import asyncio
import sys
from collections.abc import Callable

import click

from .. import __version__
from ..commons.builder import AxeBuilderBase
from ..commons.results import AxeResult, AxeRuleMetadata
from ..exceptions import AxeScriptProviderError, AxeValidationError
from ..logging import get_logger, setup_logging
from ..reporting import FORMATS, format_results

# Exit codes
EXIT_SUCCESS = 0
EXIT_VIOLATIONS_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3

ENGINES = ("playwright", "selenium")

logger = get_logger(__name__)


async def _scan_with_playwright(
    url: str, configure: Callable[[AxeBuilderBase], None], headless: bool
) -> AxeResult:
    from playwright.async_api import async_playwright

    from ..playwright import PlaywrightAxeBuilder

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=headless)
        try:
            page = await browser.new_page()
            await page.goto(url)
            builder = PlaywrightAxeBuilder(page)
            configure(builder)
            return await builder.analyze()
        finally:
            await browser.close()


def _scan_with_selenium(
    url: str, configure: Callable[[AxeBuilderBase], None], headless: bool
) -> AxeResult:
    from selenium import webdriver
    from selenium.webdriver.chrome.options import Options as ChromeOptions

    from ..selenium import AxeBuilder

    options = ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
    driver = webdriver.Chrome(options=options)
    try:
        driver.get(url)
        builder = AxeBuilder(driver)
        configure(builder)
        return builder.analyze()
    finally:
        driver.quit()


def scan_url(
    url: str,
    engine: str,
    configure: Callable[[AxeBuilderBase], None],
    headless: bool = True,
) -> AxeResult:
    """Open ``url`` in a fresh browser and scan it.

    Args:
        url: Page to scan
        engine: "playwright" or "selenium"
        configure: Applies the command line options to the builder
        headless: Run the browser without a window

    Returns:
        The axe report
    """
    if engine == "playwright":
        return asyncio.run(_scan_with_playwright(url, configure, headless))
    elif engine == "selenium":
        return _scan_with_selenium(url, configure, headless)
    else:
        raise ValueError(f"Unknown engine: {engine}")


def list_rules(tags: list[str] | None, headless: bool = True) -> list[AxeRuleMetadata]:
    """Load axe-core into a blank page and return its rule metadata."""

    async def _list() -> list[AxeRuleMetadata]:
        from playwright.async_api import async_playwright

        from ..playwright import get_axe_rules

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=headless)
            try:
                page = await browser.new_page()
                return await get_axe_rules(page, tags)
            finally:
                await browser.close()

    return asyncio.run(_list())


@click.group()
@click.version_option(version=__version__, prog_name="axecore")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """axecore CLI - Accessibility scans with axe-core.

    Scan pages through Playwright or Selenium and report the results.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        setup_logging(level="DEBUG")


@main.command()
@click.argument("url")
@click.option(
    "--engine",
    "-e",
    type=click.Choice(ENGINES),
    default="playwright",
    show_default=True,
    help="Browser automation backend",
)
@click.option("--tags", "-t", multiple=True, help="Only run rules with these tags")
@click.option("--rules", "-r", multiple=True, help="Only run these rule IDs")
@click.option("--disable-rule", "-d", multiple=True, help="Skip these rule IDs")
@click.option("--include", "include_selectors", multiple=True, help="CSS selector to scan")
@click.option("--exclude", "exclude_selectors", multiple=True, help="CSS selector to skip")
@click.option("--legacy", is_flag=True, help="Use axe.run instead of runPartial/finishRun")
@click.option("--output", "-o", type=click.Path(), help="Write the raw axe report to this file")
@click.option(
    "--format",
    "-f",
    "format_type",
    type=click.Choice(FORMATS),
    default="text",
    show_default=True,
    help="Report format printed to stdout",
)
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option(
    "--fail-on-violations", is_flag=True, help="Exit with code 1 when violations are found"
)
@click.pass_context
def scan(
    ctx: click.Context,
    url: str,
    engine: str,
    tags: tuple[str, ...],
    rules: tuple[str, ...],
    disable_rule: tuple[str, ...],
    include_selectors: tuple[str, ...],
    exclude_selectors: tuple[str, ...],
    legacy: bool,
    output: str | None,
    format_type: str,
    headed: bool,
    fail_on_violations: bool,
) -> None:
    """Scan a page for accessibility violations.

    URL: Address of the page to scan
    """
    if tags and rules:
        click.echo("Error: --tags and --rules cannot be combined", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    def configure(builder: AxeBuilderBase) -> None:
        if tags:
            builder.with_tags(*tags)
        if rules:
            builder.with_rules(*rules)
        if disable_rule:
            builder.disable_rules(*disable_rule)
        for selector in include_selectors:
            builder.include(selector)
        for selector in exclude_selectors:
            builder.exclude(selector)
        if legacy:
            builder.legacy_mode = True
        if output:
            builder.with_output_file(output)

    try:
        result = scan_url(url, engine, configure, headless=not headed)
    except (AxeValidationError, AxeScriptProviderError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except ImportError as e:
        click.echo(f"Error: Missing dependency: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        logger.error("scan_failed", url=url, engine=engine, error=str(e))
        click.echo(f"Runtime error: {e}", err=True)
        if ctx.obj.get("verbose"):
            import traceback

            traceback.print_exc()
        sys.exit(EXIT_RUNTIME_ERROR)

    click.echo(format_results([result], format_type))

    if result.error:
        sys.exit(EXIT_RUNTIME_ERROR)
    if fail_on_violations and result.violation_count() > 0:
        sys.exit(EXIT_VIOLATIONS_FOUND)
    sys.exit(EXIT_SUCCESS)


@main.command(name="rules")
@click.option("--tags", "-t", multiple=True, help="Only list rules with one of these tags")
@click.option("--headed", is_flag=True, help="Show the browser window")
def rules_command(tags: tuple[str, ...], headed: bool) -> None:
    """List the rules of the configured axe-core version."""
    try:
        rules = list_rules(list(tags) or None, headless=not headed)
    except AxeScriptProviderError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        click.echo(f"Runtime error: {e}", err=True)
        sys.exit(EXIT_RUNTIME_ERROR)

    for rule in rules:
        click.echo(f"{rule.rule_id}\t{', '.join(rule.tags)}\t{rule.help or ''}")
    sys.exit(EXIT_SUCCESS)


if __name__ == "__main__":
    main()
