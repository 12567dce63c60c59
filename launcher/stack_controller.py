# launcher/stack_controller.py
# -*- coding: utf-8 -*-
"""
Controls the docker compose lifecycle of the full stack.

Every operation addresses all services in the compose file; there is no
partial start.
"""

import logging
import subprocess
from typing import Any, Dict, List, Optional

from common.command_utils import get_symbols, log_message, run_command

from .config_models import AppSettings
from .exceptions import StackError

module_logger = logging.getLogger(__name__)


def compose_command(app_settings: AppSettings, *args: str) -> List[str]:
    """Build `docker compose -f <compose file> <args...>`."""
    return app_settings.compose_base_command() + list(args)


def stop_stack(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
) -> bool:
    """
    Tear down any running containers of the stack.

    Failures are logged at debug level and otherwise ignored: there may be
    nothing to stop.

    Returns:
        True if `down` exited cleanly, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    log_message(
        "Stopping any existing containers...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        result = run_command(
            compose_command(app_settings, "down"),
            app_settings,
            check=False,
            capture_output=True,
            current_logger=logger_to_use,
        )
    except OSError as e:
        log_message(
            f"Ignoring teardown failure: {e}",
            "debug",
            logger_to_use,
            app_settings,
        )
        return False
    return result.returncode == 0


def start_stack(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    build: bool = True,
) -> None:
    """
    Build (unless disabled) and start every service, detached.

    Output streams straight to the terminal so image builds show progress.

    Raises:
        StackError: `docker compose up` failed or could not be run.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    up_args = ["up", "-d"]
    if build:
        up_args.append("--build")
        log_message(
            "Building and starting services (this may take a few minutes on first run)...",
            "info",
            logger_to_use,
            app_settings,
        )
    else:
        log_message(
            "Starting services...",
            "info",
            logger_to_use,
            app_settings,
        )

    try:
        run_command(
            compose_command(app_settings, *up_args),
            app_settings,
            check=True,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError as e:
        raise StackError(
            f"docker compose up exited with status {e.returncode}"
        ) from e
    except FileNotFoundError as e:
        raise StackError(
            f"'{app_settings.container_runtime_command}' is not installed or not on PATH."
        ) from e

    log_message(
        f"{symbols.get('rocket', '🚀')} Services started",
        "success",
        logger_to_use,
        app_settings,
    )


def restart_stack(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    build: bool = True,
) -> None:
    """Tear down, then build and start the whole stack."""
    stop_stack(app_settings, current_logger)
    start_stack(app_settings, current_logger, build=build)


def follow_logs(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    follow: bool = True,
) -> int:
    """
    Stream the stack's logs to the terminal.

    Returns:
        The exit status of `docker compose logs`.
    """
    logs_args = ["logs", "-f"] if follow else ["logs"]
    result = run_command(
        compose_command(app_settings, *logs_args),
        app_settings,
        check=False,
        current_logger=current_logger,
    )
    return result.returncode
