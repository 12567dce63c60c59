# launcher/config_loader.py
# -*- coding: utf-8 -*-
"""
Configuration loader for the launcher.

Handles loading settings from Pydantic model defaults, the stack's `.env`
file, environment variables, an optional YAML file and command-line options,
applying this order of precedence (later wins):
1. Pydantic Model Defaults
2. The `.env` file (once it exists)
3. Environment Variables
4. YAML Configuration File
5. Command-Line Options
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)

CONFIG_FILE_DEFAULT = "launcher.yaml"


def _deep_update(
    source: Dict[str, Any], overrides: Dict[str, Any]
) -> Dict[str, Any]:
    """
    Recursively updates `source` with the non-None values of `overrides`.

    Nested dictionaries are merged key by key; any other value replaces the
    one in `source`.

    Parameters:
        source: Dict[str, Any]
            The dictionary to be updated. This dictionary gets modified in place.
        overrides: Dict[str, Any]
            The dictionary containing values to update or add to the `source`.

    Returns:
        Dict[str, Any]:
            The updated dictionary after applying all `overrides` to the input `source`.
    """
    for key, value in overrides.items():
        if (
            isinstance(value, dict)
            and key in source
            and isinstance(source[key], dict)
        ):
            source[key] = _deep_update(source[key], value)
        elif value is not None:
            source[key] = value
    return source


def load_yaml_config(
    config_file_path: Union[str, Path],
    current_logger: Optional[logging.Logger] = None,
) -> Dict[str, Any]:
    """
    Read a YAML mapping of settings. A missing or invalid file yields {}.
    """
    logger_to_use = current_logger if current_logger else module_logger
    yaml_config_path = Path(config_file_path)

    if not yaml_config_path.is_file():
        logger_to_use.debug(
            f"Configuration file '{yaml_config_path}' not found. Using defaults, environment variables, and CLI options."
        )
        return {}

    try:
        with open(yaml_config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger_to_use.warning(
            f"Could not parse YAML config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}
    except OSError as e:
        logger_to_use.warning(
            f"Could not read config file '{yaml_config_path}': {e}. Using defaults and environment variables."
        )
        return {}

    if yaml_data is None:
        return {}
    if not isinstance(yaml_data, dict):
        logger_to_use.warning(
            f"Config file '{yaml_config_path}' does not contain a valid YAML dictionary. Ignoring."
        )
        return {}

    logger_to_use.debug(f"Loaded configuration from {yaml_config_path}")
    return yaml_data


def load_app_settings(
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    env_file: Optional[Union[str, Path]] = None,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Loads application settings.

    Args:
        cli_overrides: Values given on the command line, keyed by field name.
            None values are ignored.
        config_file_path: Path to the optional YAML configuration file.
        env_file: The stack's environment file. Read only if it exists;
            process environment variables take precedence over it.
        current_logger: Optional logger to use instead of the module logger.

    Returns:
        An instance of AppSettings with the fully resolved configuration.

    Raises:
        SystemExit: The merged configuration failed validation.
    """
    logger_to_use = current_logger if current_logger else module_logger

    dotenv_path: Optional[Path] = None
    if env_file is not None and Path(env_file).is_file():
        dotenv_path = Path(env_file)
        logger_to_use.debug(f"Reading environment file {dotenv_path}")

    try:
        # Defaults < .env file < environment variables
        settings_after_env_and_defaults = AppSettings(_env_file=dotenv_path)
        current_values_dict = settings_after_env_and_defaults.model_dump(
            exclude_defaults=False
        )

        current_values_dict = _deep_update(
            current_values_dict, load_yaml_config(config_file_path, logger_to_use)
        )
        if cli_overrides:
            current_values_dict = _deep_update(
                current_values_dict, dict(cli_overrides)
            )

        # The service-role key is excluded from dumps, so it is re-read
        # from the environment and .env file here unless overridden.
        final_settings = AppSettings(_env_file=dotenv_path, **current_values_dict)
    except ValidationError as e:
        logger_to_use.error(f"Configuration validation failed: {e}")
        raise SystemExit(f"Configuration error: {e}") from e

    logger_to_use.debug("Successfully loaded and validated application settings")
    return final_settings


def reload_with_env_file(
    app_settings: AppSettings,
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Load settings again, now reading the environment file named by `app_settings`.
    """
    return load_app_settings(
        cli_overrides=cli_overrides,
        config_file_path=config_file_path,
        env_file=app_settings.env_file,
        current_logger=current_logger,
    )
