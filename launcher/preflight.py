# launcher/preflight.py
# -*- coding: utf-8 -*-
"""
Preflight checks run before anything touches Docker or the network.

The compose-file check comes first, so a missing stack definition aborts the
launcher before `docker info` is even run.
"""

import logging
import subprocess
from typing import Any, Dict, Optional

from common.command_utils import get_symbols, log_message, run_command
from common.file_utils import copy_file_if_missing

from .config_models import AppSettings
from .exceptions import PreflightError

module_logger = logging.getLogger(__name__)


def check_compose_file(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Ensure the stack-definition file exists.

    Raises:
        PreflightError: The compose file is missing.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not app_settings.compose_file.is_file():
        raise PreflightError(f"{app_settings.compose_file} not found")
    log_message(
        f"{symbols.get('success', '✅')} Compose file found",
        "success",
        logger_to_use,
        app_settings,
    )


def check_docker_running(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Ensure the Docker daemon answers `docker info`.

    Raises:
        PreflightError: The runtime binary is missing or the daemon is not
            reachable.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    runtime = app_settings.container_runtime_command

    try:
        run_command(
            [runtime, "info"],
            app_settings,
            check=True,
            capture_output=True,
            current_logger=logger_to_use,
        )
    except FileNotFoundError as e:
        raise PreflightError(
            f"'{runtime}' is not installed or not on PATH."
        ) from e
    except subprocess.CalledProcessError as e:
        raise PreflightError(
            "Docker is not running. Please start Docker Desktop."
        ) from e
    log_message(
        f"{symbols.get('success', '✅')} Docker is running",
        "success",
        logger_to_use,
        app_settings,
    )


def ensure_env_file(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> bool:
    """
    Make sure the environment file exists, copying the template if needed.

    Returns:
        True if the template was copied, False if the file already existed.

    Raises:
        PreflightError: Neither the environment file nor its template exist.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    env_file = app_settings.env_file
    template = app_settings.env_template_file

    copied = False
    if not env_file.exists():
        log_message(
            f"{env_file} not found, copying from {template}",
            "warning",
            logger_to_use,
            app_settings,
        )
        try:
            copied = copy_file_if_missing(
                template, env_file, app_settings, logger_to_use
            )
        except FileNotFoundError as e:
            raise PreflightError(str(e)) from e

    log_message(
        f"{symbols.get('success', '✅')} Environment file ready",
        "success",
        logger_to_use,
        app_settings,
    )
    return copied


def run_preflight(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Run every preflight check in order. Any failure raises PreflightError.
    """
    check_compose_file(app_settings, current_logger)
    check_docker_running(app_settings, current_logger)
    copied = ensure_env_file(app_settings, current_logger)
    if context is not None:
        context["env_file_copied"] = copied
