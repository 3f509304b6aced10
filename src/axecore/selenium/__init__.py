"""Run axe-core through Selenium WebDriver."""

from .builder import AxeBuilder, analyze
from .frames import for_each_frame_context

__all__ = ["AxeBuilder", "analyze", "for_each_frame_context"]
