# launcher/bootstrap.py
# -*- coding: utf-8 -*-
"""
The start-up sequence: Preflight → Fetch → Start → Poll → Probe → Report.

Each stage runs once. Preflight, loading the environment file and
`compose up` are fatal; everything else only warns.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from common.orchestrator import SETTINGS_CONTEXT_KEY, Orchestrator

from .config_loader import CONFIG_FILE_DEFAULT, reload_with_env_file
from .config_models import AppSettings
from .dependency_fetcher import fetch_missing_files
from .health_poller import poll_services
from .migration_probe import probe_migration_status
from .preflight import run_preflight
from .report import print_summary
from .stack_controller import start_stack, stop_stack

module_logger = logging.getLogger(__name__)


def load_environment(
    app_settings: AppSettings,
    context: Dict[str, Any],
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    current_logger: Optional[logging.Logger] = None,
) -> AppSettings:
    """
    Re-read settings now that the environment file exists, and hand the
    result to the remaining tasks.
    """
    settings = reload_with_env_file(
        app_settings,
        cli_overrides=cli_overrides,
        config_file_path=config_file_path,
        current_logger=current_logger,
    )
    context[SETTINGS_CONTEXT_KEY] = settings
    return settings


def build_pipeline(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    config_file_path: Union[str, Path] = CONFIG_FILE_DEFAULT,
    skip_fetch: bool = False,
    build: bool = True,
) -> Orchestrator:
    """
    Assemble the start-up tasks.

    Args:
        app_settings: Settings resolved before the environment file is read.
        logger: Logger shared by the orchestrator and every task.
        cli_overrides: Command-line values, re-applied when settings reload.
        config_file_path: YAML configuration file, re-read on reload.
        skip_fetch: Do not download missing support files.
        build: Pass --build to `docker compose up`.
    """
    logger_to_use = logger if logger else module_logger
    orchestrator = Orchestrator(app_settings, logger_to_use)
    task_logger = {"current_logger": logger_to_use}

    orchestrator.add_task("Preflight checks", run_preflight, kwargs=dict(task_logger))
    orchestrator.add_task(
        "Load environment file",
        load_environment,
        kwargs={
            "cli_overrides": cli_overrides,
            "config_file_path": config_file_path,
            **task_logger,
        },
    )
    if not skip_fetch:
        orchestrator.add_task(
            "Fetch support files", fetch_missing_files, kwargs=dict(task_logger), fatal=False
        )
    orchestrator.add_task("Stop existing stack", stop_stack, kwargs=dict(task_logger), fatal=False)
    orchestrator.add_task(
        "Start stack", start_stack, kwargs={"build": build, **task_logger}
    )
    orchestrator.add_task("Wait for services", poll_services, kwargs=dict(task_logger), fatal=False)
    orchestrator.add_task(
        "Check database setup", probe_migration_status, kwargs=dict(task_logger), fatal=False
    )
    orchestrator.add_task("Print summary", _print_summary_task, fatal=False)
    return orchestrator


def _print_summary_task(app_settings: AppSettings, context: Dict[str, Any]) -> None:
    print_summary(app_settings)


def run_bootstrap(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    **pipeline_options: Any,
) -> int:
    """
    Run the start-up sequence.

    Fatal stages exit the process with status 1; otherwise the exit code is
    0 whatever the health and migration outcomes were.
    """
    build_pipeline(app_settings, logger, **pipeline_options).run()
    return 0
