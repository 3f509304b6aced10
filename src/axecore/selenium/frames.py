"""Frame traversal helpers for Selenium WebDriver."""

from __future__ import annotations

import logging
from collections.abc import Callable

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver

logger = logging.getLogger(__name__)

FRAME_TAGS = ("iframe", "frame")


def for_each_frame_context(driver: WebDriver, action: Callable[[], None]) -> None:
    """
    Run ``action`` in the current frame and in every nested frame.

    Frames are visited depth-first. The driver is switched back to the
    parent after each child, so it ends in the frame it started in. A frame
    that cannot be entered is skipped along with its descendants.
    """
    action()

    frames = []
    for tag in FRAME_TAGS:
        frames.extend(driver.find_elements(By.TAG_NAME, tag))

    for frame in frames:
        try:
            driver.switch_to.frame(frame)
        except WebDriverException as e:
            logger.warning(f"Skipping frame that could not be entered: {e}")
            continue
        try:
            for_each_frame_context(driver, action)
        finally:
            driver.switch_to.parent_frame()
