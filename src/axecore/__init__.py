"""axecore: run axe-core accessibility scans from Selenium and Playwright.

Injects axe-core into every frame of a page, runs it with the configured
rules and context, and returns the report as typed objects.
"""

from .commons import (
    AxeBuilderOptions,
    AxeResult,
    AxeResultItem,
    AxeResultNode,
    AxeResultTarget,
    AxeRuleMetadata,
    AxeRunContext,
    AxeRunOptions,
    CachedAxeScriptProvider,
    CdnAxeScriptProvider,
    FileAxeScriptProvider,
    ResultType,
    RuleOptions,
    RunOnlyOptions,
)
from .exceptions import (
    AxeError,
    AxeScanError,
    AxeScriptProviderError,
    AxeTimeoutError,
    AxeValidationError,
    AxeWindowError,
    FrameScanError,
)
from .playwright import PlaywrightAxeBuilder, get_axe_rules, run_axe, run_axe_on_locator
from .selenium import AxeBuilder

__version__ = "0.1.0"

__all__ = [
    "AxeBuilder",
    "AxeBuilderOptions",
    "AxeError",
    "AxeResult",
    "AxeResultItem",
    "AxeResultNode",
    "AxeResultTarget",
    "AxeRuleMetadata",
    "AxeRunContext",
    "AxeRunOptions",
    "AxeScanError",
    "AxeScriptProviderError",
    "AxeTimeoutError",
    "AxeValidationError",
    "AxeWindowError",
    "CachedAxeScriptProvider",
    "CdnAxeScriptProvider",
    "FileAxeScriptProvider",
    "FrameScanError",
    "PlaywrightAxeBuilder",
    "ResultType",
    "RuleOptions",
    "RunOnlyOptions",
    "get_axe_rules",
    "run_axe",
    "run_axe_on_locator",
]
