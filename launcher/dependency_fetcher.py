# launcher/dependency_fetcher.py
# -*- coding: utf-8 -*-
"""
Fetches the Supabase support files the compose stack mounts (init SQL
scripts and the Kong gateway config) when they are missing locally.

There is no checksum verification and no retry. A failed download is
reported and the bootstrap carries on.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from common.command_utils import get_symbols, log_message
from common.file_utils import file_has_content
from common.network_utils import download_file

from .config_models import AppSettings

module_logger = logging.getLogger(__name__)


class FetchResult(BaseModel):
    """Outcome of one fetch pass over the required files."""

    present: List[str] = Field(default_factory=list)
    fetched: List[str] = Field(default_factory=list)
    failed: List[str] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed


def find_missing_files(app_settings: AppSettings) -> List[str]:
    """Return the required files that do not exist, in declared order."""
    return [
        relative_path
        for relative_path in app_settings.required_files
        if not Path(relative_path).is_file()
    ]


def remote_url_for(app_settings: AppSettings, relative_path: str) -> str:
    """The URL a required file is fetched from."""
    base_url = app_settings.supabase_config_base_url.rstrip("/")
    return f"{base_url}/{relative_path.lstrip('/')}"


def fetch_missing_files(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    context: Optional[Dict[str, Any]] = None,
) -> FetchResult:
    """
    Download every required file that is not present on disk.

    Args:
        app_settings: Settings naming the files and the remote base URL.
        current_logger: Optional logger instance.
        context: Orchestrator context; unused.

    Returns:
        A FetchResult listing present, fetched and failed paths.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    missing = find_missing_files(app_settings)
    result = FetchResult(
        present=[p for p in app_settings.required_files if p not in missing]
    )

    if not missing:
        log_message(
            f"{symbols.get('success', '✅')} Supabase config files present",
            "success",
            logger_to_use,
            app_settings,
        )
        return result

    log_message(
        "Downloading missing Supabase config files...",
        "warning",
        logger_to_use,
        app_settings,
    )
    for relative_path in missing:
        log_message(
            f"  Downloading {relative_path}...",
            "info",
            logger_to_use,
            app_settings,
        )
        downloaded = download_file(
            remote_url_for(app_settings, relative_path),
            relative_path,
            timeout=app_settings.download_timeout,
            current_logger=logger_to_use,
        )
        if downloaded and file_has_content(relative_path):
            result.fetched.append(relative_path)
        else:
            result.failed.append(relative_path)

    if result.complete:
        log_message(
            f"{symbols.get('success', '✅')} Supabase config files downloaded",
            "success",
            logger_to_use,
            app_settings,
        )
    else:
        log_message(
            f"Could not download {len(result.failed)} of {len(missing)} Supabase config files: "
            f"{', '.join(result.failed)}. Continuing; the stack may fail to start.",
            "warning",
            logger_to_use,
            app_settings,
        )
    return result
