"""Types and helpers shared by the Selenium and Playwright integrations."""

from .builder import AxeBuilderBase
from .options import (
    AxeFrameContext,
    AxeRunContext,
    AxeRunOptions,
    ResultType,
    RuleOptions,
    RunOnlyOptions,
)
from .results import (
    AxeResult,
    AxeResultCheck,
    AxeResultItem,
    AxeResultNode,
    AxeResultRelatedNode,
    AxeResultTarget,
    AxeRuleMetadata,
    AxeTestEnvironment,
    AxeTestRunner,
)
from .script_provider import (
    AxeBuilderOptions,
    AxeScriptProvider,
    CachedAxeScriptProvider,
    CdnAxeScriptProvider,
    FileAxeScriptProvider,
    default_script_provider,
)

__all__ = [
    "AxeBuilderBase",
    "AxeBuilderOptions",
    "AxeFrameContext",
    "AxeResult",
    "AxeResultCheck",
    "AxeResultItem",
    "AxeResultNode",
    "AxeResultRelatedNode",
    "AxeResultTarget",
    "AxeRuleMetadata",
    "AxeRunContext",
    "AxeRunOptions",
    "AxeScriptProvider",
    "AxeTestEnvironment",
    "AxeTestRunner",
    "CachedAxeScriptProvider",
    "CdnAxeScriptProvider",
    "FileAxeScriptProvider",
    "ResultType",
    "RuleOptions",
    "RunOnlyOptions",
    "default_script_provider",
]
