# tests/conftest.py
import logging
from unittest.mock import MagicMock

import pytest

from launcher.config_models import AppSettings

STACK_ENV_VARS = [
    "ARCHON_UI_PORT",
    "ARCHON_SERVER_PORT",
    "ARCHON_MCP_PORT",
    "SUPABASE_API_PORT",
    "SUPABASE_STUDIO_PORT",
    "SUPABASE_DB_PORT",
    "SERVICE_ROLE_KEY",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Run every test in an empty directory without stack variables set."""
    for name in STACK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def app_settings():
    """Settings with few health checks and no sleeping."""
    return AppSettings(
        health_max_attempts=3,
        health_interval=0,
        health_request_timeout=1,
        service_role_key="test-service-key",
    )


@pytest.fixture
def mock_logger():
    """Fixture to create a mock logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def compose_file(tmp_path, app_settings):
    path = tmp_path / app_settings.compose_file
    path.write_text("services: {}\n", encoding="utf-8")
    return path


@pytest.fixture
def env_template(tmp_path, app_settings):
    path = tmp_path / app_settings.env_template_file
    path.write_text(
        "SERVICE_ROLE_KEY=template-key\nSUPABASE_API_PORT=28000\n",
        encoding="utf-8",
    )
    return path
