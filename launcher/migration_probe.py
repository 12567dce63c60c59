# launcher/migration_probe.py
# -*- coding: utf-8 -*-
"""
Checks whether the Archon database schema has been created.

A single authenticated request against the Supabase REST API for the
`archon_settings` table decides it: HTTP 200 means the migration ran, any
other answer (or none) means the operator still has to run it by hand.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel

from common.command_utils import get_symbols, log_message
from common.network_utils import NO_RESPONSE_STATUS, http_get_status

from .config_models import AppSettings
from .report import print_migration_instructions

module_logger = logging.getLogger(__name__)

PROBE_TABLE = "archon_settings"


class MigrationStatus(BaseModel):
    """Result of the migration probe."""

    status_code: int
    configured: bool

    @property
    def reachable(self) -> bool:
        return self.status_code != NO_RESPONSE_STATUS


def probe_url(app_settings: AppSettings) -> str:
    return f"http://localhost:{app_settings.supabase_api_port}/rest/v1/{PROBE_TABLE}?limit=1"


def probe_headers(app_settings: AppSettings) -> Dict[str, str]:
    key = app_settings.service_role_key
    return {"apikey": key, "Authorization": f"Bearer {key}"}


def classify_status(status_code: int) -> MigrationStatus:
    """Only HTTP 200 counts as configured."""
    return MigrationStatus(status_code=status_code, configured=status_code == 200)


def probe_migration_status(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
    show_instructions: bool = True,
) -> MigrationStatus:
    """
    Probe the REST API and report whether the migration is needed.

    The remediation instructions are printed only when it is.

    Returns:
        The MigrationStatus of the probe.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_message(
        "Checking database setup...",
        "info",
        logger_to_use,
        app_settings,
    )
    if not app_settings.service_role_key:
        log_message(
            f"SERVICE_ROLE_KEY is not set in {app_settings.env_file}; the probe will be rejected.",
            "debug",
            logger_to_use,
            app_settings,
        )

    status = classify_status(
        http_get_status(
            probe_url(app_settings),
            timeout=app_settings.health_request_timeout,
            headers=probe_headers(app_settings),
            current_logger=logger_to_use,
        )
    )

    if status.configured:
        log_message(
            f"{symbols.get('success', '✅')} Database already configured",
            "success",
            logger_to_use,
            app_settings,
        )
        return status

    log_message(
        f"Database migration needed (probe status {status.status_code:03d})",
        "warning",
        logger_to_use,
        app_settings,
    )
    if not app_settings.migration_file.is_file():
        log_message(
            f"Migration script {app_settings.migration_file} was not found in this directory.",
            "warning",
            logger_to_use,
            app_settings,
        )
    if show_instructions:
        print_migration_instructions(app_settings)
    return status
