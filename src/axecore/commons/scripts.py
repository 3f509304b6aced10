"""
JavaScript snippets executed around axe-core.

Selenium snippets are script bodies that read ``arguments`` (async ones call
the trailing callback); Playwright snippets are arrow functions that take a
single argument.
"""

from functools import lru_cache
from pathlib import Path

RESOURCES_PATH = Path(__file__).parent / "resources"

SELENIUM = "selenium"
PLAYWRIGHT = "playwright"

RUN_PARTIAL_EXISTS = "runPartialExists.js"
RUN_PARTIAL = "runPartial.js"
FINISH_RUN = "finishRun.js"
LEGACY_SCAN = "legacyScan.js"
GET_FRAME_CONTEXTS = "getFrameContexts.js"
SHADOW_SELECT = "shadowSelect.js"
ALLOW_IFRAME_UNSAFE = "allowIframeUnsafe.js"
BRANDING = "branding.js"
GET_RULES = "getRules.js"


@lru_cache(maxsize=None)
def get_script(name: str, flavor: str = SELENIUM) -> str:
    """
    Read a bundled script.

    Args:
        name: Script file name, e.g. ``RUN_PARTIAL``.
        flavor: ``SELENIUM`` or ``PLAYWRIGHT``.

    Returns:
        The script source.
    """
    if flavor not in (SELENIUM, PLAYWRIGHT):
        raise ValueError(f"Unknown script flavor: {flavor}")
    with open(RESOURCES_PATH / flavor / name, encoding="utf-8") as f:
        return f.read()


__all__ = [
    "ALLOW_IFRAME_UNSAFE",
    "BRANDING",
    "FINISH_RUN",
    "GET_FRAME_CONTEXTS",
    "GET_RULES",
    "LEGACY_SCAN",
    "PLAYWRIGHT",
    "RESOURCES_PATH",
    "RUN_PARTIAL",
    "RUN_PARTIAL_EXISTS",
    "SELENIUM",
    "SHADOW_SELECT",
    "get_script",
]
