"""Logging module for axecore."""

from .logger import ScanLogger, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "ScanLogger",
]
