"""axecore Command Line Interface.

Usage:
    python -m axecore.cli --help
    python -m axecore.cli scan https://example.com --tags wcag2a --format junit

Or via the installed entry point:
    axecore --help
"""

from .main import main

__all__ = ["main"]
