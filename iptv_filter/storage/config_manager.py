"""
Manages loading and validation of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from iptv_filter.exceptions import ConfigurationError
from iptv_filter.models.config import FilterConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> FilterConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing file is not an error: built-in defaults are used instead.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated FilterConfig object.

        Raises:
            ConfigurationError: If the config file is invalid or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            config_from_file = self._get_config_as_dict()
        else:
            log.debug(f"No config file at '{self.config_file_path}', using defaults.")

        # Override with CLI options
        if cli_options:
            config_from_file.update(cli_options)

        try:
            return FilterConfig(
                **config_from_file, config_path=str(self.config_file_path.parent)
            )
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """
        Creates and saves a new configuration file with every known key.

        Args:
            settings: Values that override the model defaults.
        """
        settings = settings or {}
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}

        defaults = FilterConfig()
        for key in sorted(FilterConfig.get_ini_keys()):
            value = settings.get(key, getattr(defaults, key))
            if isinstance(value, bool):
                config["DEFAULT"][key] = "true" if value else "false"
            else:
                config["DEFAULT"][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the keys present in the 'DEFAULT' section into a typed dictionary."""
        section = self._parser["DEFAULT"]
        readers = {
            "master_url": section.get,
            "output_path": section.get,
            "user_agent": section.get,
            "max_concurrent": section.getint,
            "range_bytes": section.getint,
            "timeout": section.getfloat,
            "master_timeout": section.getfloat,
            "preserve_completion_order": section.getboolean,
        }
        config: dict[str, Any] = {}
        for key, read in readers.items():
            if key not in section:
                continue
            try:
                config[key] = read(key)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid value for '{key}' in configuration file: {e}"
                ) from e

        unknown = set(section) - set(readers)
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown config keys: {', '.join(sorted(unknown))}"
                "[/yellow]"
            )
        return config
