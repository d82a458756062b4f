"""
Storage Layer.

This package handles persistence of the command-line application's settings.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
