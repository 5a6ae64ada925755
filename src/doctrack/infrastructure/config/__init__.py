"""
Configuration infrastructure package.

File-backed loading of the compliance configuration.
"""

from doctrack.infrastructure.config.manager import ConfigManager
from doctrack.infrastructure.config.repository import CONFIG_FILENAME, ConfigRepository

__all__ = ["CONFIG_FILENAME", "ConfigManager", "ConfigRepository"]
