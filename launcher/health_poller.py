# launcher/health_poller.py
# -*- coding: utf-8 -*-
"""
Waits for the stack's HTTP endpoints to answer.

Services are polled one after another. Each gets at most
`health_max_attempts` requests with `health_interval` seconds between them;
a service that never answers is reported as still starting and the
bootstrap continues.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from common.command_utils import get_symbols, log_message
from common.network_utils import is_url_reachable

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


class ServiceHealth(BaseModel):
    """Result of waiting for one service."""

    name: str
    url: str
    ready: bool
    attempts: int


def default_endpoints(app_settings: AppSettings) -> List[Tuple[str, str]]:
    """The (service name, health URL) pairs checked after start-up."""
    return [
        ("Supabase Studio", f"http://localhost:{app_settings.supabase_studio_port}"),
        ("Archon Server", f"http://localhost:{app_settings.archon_server_port}/health"),
        ("Archon UI", f"http://localhost:{app_settings.archon_ui_port}"),
    ]


def wait_for_service(
    name: str,
    url: str,
    max_attempts: int,
    interval: float,
    request_timeout: float = 5.0,
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> ServiceHealth:
    """
    Poll a URL until it answers or runs out of attempts.

    Any HTTP response counts as ready. There is no sleep after the last
    attempt.

    Args:
        name: Display name of the service.
        url: URL to request.
        max_attempts: Maximum number of requests.
        interval: Seconds between requests.
        request_timeout: Timeout of each request.
        app_settings: Settings providing log symbols.
        current_logger: Optional logger instance.

    Returns:
        ServiceHealth with the number of attempts made.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    for attempt in range(1, max_attempts + 1):
        if is_url_reachable(url, timeout=request_timeout, current_logger=logger_to_use):
            log_message(
                f"{symbols.get('success', '✅')} {name} is ready",
                "success",
                logger_to_use,
                app_settings,
            )
            return ServiceHealth(name=name, url=url, ready=True, attempts=attempt)
        if attempt < max_attempts:
            time.sleep(interval)

    log_message(
        f"{name} may still be starting",
        "warning",
        logger_to_use,
        app_settings,
    )
    return ServiceHealth(name=name, url=url, ready=False, attempts=max_attempts)


def poll_services(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    endpoints: Optional[List[Tuple[str, str]]] = None,
) -> List[ServiceHealth]:
    """
    Wait for each endpoint in turn.

    Returns:
        One ServiceHealth per endpoint, in polling order.
    """
    logger_to_use = current_logger if current_logger else module_logger
    log_message(
        "Waiting for services to be ready...",
        "info",
        logger_to_use,
        app_settings,
    )
    results = []
    for name, url in endpoints if endpoints is not None else default_endpoints(app_settings):
        results.append(
            wait_for_service(
                name,
                url,
                max_attempts=app_settings.health_max_attempts,
                interval=app_settings.health_interval,
                request_timeout=app_settings.health_request_timeout,
                app_settings=app_settings,
                current_logger=logger_to_use,
            )
        )
    return results
