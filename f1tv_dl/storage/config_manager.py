"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from f1tv_dl.exceptions import ConfigurationError
from f1tv_dl.models.config import AppConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """
    Handles the application's optional INI config file.

    Only persistent defaults live in the file. The entitlement token and the
    other per-run options are supplied on the command line every time.
    """

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> AppConfig:
        """
        Loads configuration from the INI file (if present), applies environment
        and CLI overrides, and validates it.

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

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )
            config_from_file = self._get_config_as_dict()

        if not config_from_file.get("output_directory") and os.getenv("F1TV_OUTDIR"):
            config_from_file["output_directory"] = os.environ["F1TV_OUTDIR"]

        if cli_options:
            config_from_file.update(
                {k: v for k, v in cli_options.items() if v is not None}
            )

        try:
            return AppConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """Creates and saves a configuration file with every persistent key."""
        settings = settings or {}
        defaults = AppConfig()
        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {}

        for key in sorted(AppConfig.get_ini_keys()):
            value = settings.get(key, getattr(defaults, key))
            config["DEFAULT"][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        values: dict[str, Any] = {
            key: section.get(key) for key in AppConfig.get_ini_keys() if key in section
        }
        if "token" in section:
            log.warning(
                "[yellow]Ignoring 'token' in the configuration file; tokens are "
                "never read from disk.[/yellow]"
            )
        return values

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        defaults = AppConfig()
        config_section = self._parser["DEFAULT"]
        needs_saving = False

        for key in sorted(AppConfig.get_ini_keys()):
            if key not in config_section:
                config_section[key] = str(getattr(defaults, key))
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving

    def get_config_as_dict(self) -> dict[str, Any]:
        """Returns the file's settings, reading the file if needed."""
        if not self._parser.defaults() and self.config_file_path.is_file():
            self._parser.read(self.config_file_path, encoding="utf-8")
        return self._get_config_as_dict()
