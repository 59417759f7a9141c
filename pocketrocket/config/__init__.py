"""
Configuration management for pocketrocket.

This module handles settings, defaults, and environment overrides.
"""

from .settings import Settings
from .defaults import DEFAULT_SETTINGS, DEFAULT_REGION, ENV_OVERRIDES

__all__ = ["Settings", "DEFAULT_SETTINGS", "DEFAULT_REGION", "ENV_OVERRIDES"]
