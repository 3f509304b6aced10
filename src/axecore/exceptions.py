"""
Exception types and timeout utilities for axe scans.

Provides:
- Specific exception types for different failure modes
- Timeout handling for async frame scans
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)


class AxeError(Exception):
    """Base exception for axecore errors."""

    pass


class AxeValidationError(AxeError, ValueError):
    """Raised when a builder argument is missing or empty."""

    def __init__(self, message: str, parameter_name: str | None = None) -> None:
        self.parameter_name = parameter_name
        if parameter_name:
            message = f"{message} (Parameter '{parameter_name}')"
        super().__init__(message)


class AxeScriptProviderError(AxeError):
    """Raised when the axe-core source cannot be loaded."""

    pass


class AxeScanError(AxeError):
    """Raised when axe returns something that is not a report."""

    pass


class AxeWindowError(AxeError):
    """Raised when the isolated finishRun window cannot be opened."""

    pass


class FrameScanError(AxeError):
    """Raised when scanning a child frame fails."""

    pass


class AxeTimeoutError(AxeError):
    """Raised when a scan operation times out."""

    pass


async def with_timeout(
    coro: Any,
    timeout_seconds: float,
    operation_name: str = "operation",
) -> Any:
    """
    Execute a coroutine with a timeout.

    Args:
        coro: Coroutine to execute.
        timeout_seconds: Timeout in seconds.
        operation_name: Name for error messages.

    Returns:
        Result of the coroutine.

    Raises:
        AxeTimeoutError: If the operation times out.
    """
    try:
        return await asyncio.wait_for(coro, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        raise AxeTimeoutError(f"{operation_name} timed out after {timeout_seconds}s")
