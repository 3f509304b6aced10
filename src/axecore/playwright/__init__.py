"""Run axe-core through Playwright's async API."""

from .builder import PlaywrightAxeBuilder
from .page import get_axe_rules, run_axe, run_axe_on_locator

__all__ = [
    "PlaywrightAxeBuilder",
    "get_axe_rules",
    "run_axe",
    "run_axe_on_locator",
]
