# -*- coding: utf-8 -*-
from unittest.mock import MagicMock

import pytest

from common.orchestrator import SETTINGS_CONTEXT_KEY
from launcher.bootstrap import build_pipeline, load_environment, run_bootstrap
from launcher.config_models import (
    SUPABASE_API_PORT_DEFAULT,
    SUPABASE_STUDIO_PORT_DEFAULT,
    AppSettings,
)
from launcher.exceptions import PreflightError, StackError

STAGES = [
    "run_preflight",
    "fetch_missing_files",
    "stop_stack",
    "start_stack",
    "poll_services",
    "probe_migration_status",
    "print_summary",
]


@pytest.fixture
def stages(mocker):
    """Replace every stage function with a mock sharing one call record."""
    manager = MagicMock()
    for name in STAGES:
        mocker.patch(f"launcher.bootstrap.{name}", getattr(manager, name))
    return manager


def _called(manager):
    return [call[0] for call in manager.mock_calls if "." not in call[0]]


def test_pipeline_task_order(stages, app_settings):
    orchestrator = build_pipeline(app_settings)

    assert [task["name"] for task in orchestrator.tasks] == [
        "Preflight checks",
        "Load environment file",
        "Fetch support files",
        "Stop existing stack",
        "Start stack",
        "Wait for services",
        "Check database setup",
        "Print summary",
    ]
    assert [task["fatal"] for task in orchestrator.tasks] == [
        True, True, False, False, True, False, False, False
    ]


def test_skip_fetch_omits_download(stages, app_settings):
    orchestrator = build_pipeline(app_settings, skip_fetch=True)
    assert "Fetch support files" not in [task["name"] for task in orchestrator.tasks]


def test_run_bootstrap_runs_stages_in_order(stages, app_settings, mock_logger):
    assert run_bootstrap(app_settings, mock_logger) == 0

    assert _called(stages) == STAGES
    assert stages.start_stack.call_args.kwargs["build"] is True


def test_run_bootstrap_without_build(stages, app_settings, mock_logger):
    run_bootstrap(app_settings, mock_logger, build=False)
    assert stages.start_stack.call_args.kwargs["build"] is False


def test_preflight_failure_exits_before_docker(stages, app_settings, mock_logger):
    stages.run_preflight.side_effect = PreflightError("docker-compose.full.yml not found")

    with pytest.raises(SystemExit) as excinfo:
        run_bootstrap(app_settings, mock_logger)

    assert excinfo.value.code == 1
    assert _called(stages) == ["run_preflight"]
    assert "docker-compose.full.yml not found" in mock_logger.critical.call_args.args[0]


def test_start_failure_exits_without_polling(stages, app_settings, mock_logger):
    stages.start_stack.side_effect = StackError("docker compose up exited with status 1")

    with pytest.raises(SystemExit):
        run_bootstrap(app_settings, mock_logger)

    assert "poll_services" not in _called(stages)
    assert "probe_migration_status" not in _called(stages)


def test_non_fatal_failures_continue(stages, app_settings, mock_logger):
    stages.fetch_missing_files.side_effect = OSError("disk full")
    stages.poll_services.side_effect = RuntimeError("boom")

    assert run_bootstrap(app_settings, mock_logger) == 0
    assert _called(stages) == STAGES
    assert mock_logger.warning.call_count == 2


def test_later_stages_see_settings_from_env_file(stages, tmp_path, mock_logger):
    (tmp_path / ".env").write_text(
        "SUPABASE_API_PORT=28000\nSERVICE_ROLE_KEY=from-dotenv\n", encoding="utf-8"
    )

    run_bootstrap(AppSettings(), mock_logger)

    probed_settings = stages.probe_migration_status.call_args.kwargs["app_settings"]
    assert probed_settings.supabase_api_port == 28000
    assert probed_settings.service_role_key == "from-dotenv"
    # Preflight ran before the file was read.
    assert stages.run_preflight.call_args.kwargs["app_settings"].service_role_key == ""


def test_load_environment_keeps_cli_overrides(tmp_path):
    (tmp_path / ".env").write_text("ARCHON_UI_PORT=4000\n", encoding="utf-8")
    context = {}

    settings = load_environment(
        AppSettings(), context, cli_overrides={"health_max_attempts": 7}
    )

    assert context[SETTINGS_CONTEXT_KEY] is settings
    assert settings.archon_ui_port == 4000
    assert settings.health_max_attempts == 7


def test_blank_env_file_values_fall_back_to_defaults(stages, tmp_path, mock_logger):
    (tmp_path / ".env").write_text(
        "SUPABASE_API_PORT=\nSUPABASE_STUDIO_PORT=\nSERVICE_ROLE_KEY=k\n", encoding="utf-8"
    )

    assert run_bootstrap(AppSettings(), mock_logger) == 0

    probed_settings = stages.probe_migration_status.call_args.kwargs["app_settings"]
    assert probed_settings.supabase_api_port == SUPABASE_API_PORT_DEFAULT
    assert probed_settings.supabase_studio_port == SUPABASE_STUDIO_PORT_DEFAULT
    assert probed_settings.service_role_key == "k"
