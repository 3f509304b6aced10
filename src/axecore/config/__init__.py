"""Configuration for axecore."""

from .settings import AxeSettings, get_settings, reset_settings

__all__ = ["AxeSettings", "get_settings", "reset_settings"]
