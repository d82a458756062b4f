"""
Manages loading and saving of the INI settings file used by the command line.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from lastfm_client.exceptions import ConfigurationError
from lastfm_client.models.config import AppSettings

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path

    def load_settings(self) -> AppSettings:
        """
        Loads and validates the settings from the INI file.

        Returns:
            The validated settings.

        Raises:
            ConfigurationError: If the file is missing, unparsable, or invalid.
        """
        if not self.config_file_path.is_file():
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'. "
                "Please run 'lastfm-client init' first."
            )

        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        section = parser["DEFAULT"]
        values = {
            key: section[key] for key in AppSettings.get_ini_keys() if key in section
        }
        unknown = set(section) - set(values)
        if unknown:
            log.debug(f"Ignoring unknown configuration keys: {sorted(unknown)}")

        try:
            return AppSettings(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_settings(self, settings: AppSettings) -> None:
        """
        Writes the settings to the INI file, replacing its previous content.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {
            key: str(getattr(settings, key)) for key in AppSettings.get_ini_keys()
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e
        log.debug(f"Configuration saved to {self.config_file_path}")

    def update_settings(self, **changes: Any) -> AppSettings:
        """Loads the stored settings, applies ``changes``, and saves them back."""
        settings = self.load_settings()
        try:
            updated = AppSettings(**{**settings.model_dump(), **changes})
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e
        self.save_settings(updated)
        return updated
