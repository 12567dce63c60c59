# -*- coding: utf-8 -*-
import pytest
import requests

from launcher.migration_probe import (
    classify_status,
    probe_headers,
    probe_migration_status,
    probe_url,
)


def test_probe_url_and_headers(app_settings):
    assert probe_url(app_settings) == (
        "http://localhost:18000/rest/v1/archon_settings?limit=1"
    )
    assert probe_headers(app_settings) == {
        "apikey": "test-service-key",
        "Authorization": "Bearer test-service-key",
    }


@pytest.mark.parametrize(
    "status_code, configured",
    [(200, True), (401, False), (404, False), (500, False), (0, False)],
)
def test_classify_status(status_code, configured):
    assert classify_status(status_code).configured is configured


def test_probe_configured_prints_no_instructions(mocker, app_settings, mock_logger):
    mock_get = mocker.patch(
        "common.network_utils.requests.get",
        return_value=mocker.Mock(status_code=200),
    )
    mock_instructions = mocker.patch("launcher.migration_probe.print_migration_instructions")

    status = probe_migration_status(app_settings, mock_logger)

    assert status.configured is True
    assert status.status_code == 200
    mock_instructions.assert_not_called()
    assert mock_get.call_args.kwargs["headers"]["apikey"] == "test-service-key"
    assert "Database already configured" in mock_logger.info.call_args.args[0]


def test_probe_missing_table_prints_instructions(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.network_utils.requests.get",
        return_value=mocker.Mock(status_code=404),
    )
    mock_instructions = mocker.patch("launcher.migration_probe.print_migration_instructions")

    status = probe_migration_status(app_settings, mock_logger)

    assert status.configured is False
    mock_instructions.assert_called_once_with(app_settings)
    warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
    assert "Database migration needed (probe status 404)" in warnings


def test_probe_unreachable_uses_sentinel(mocker, app_settings, mock_logger):
    mocker.patch(
        "common.network_utils.requests.get",
        side_effect=requests.exceptions.ConnectionError("refused"),
    )
    mock_instructions = mocker.patch("launcher.migration_probe.print_migration_instructions")

    status = probe_migration_status(app_settings, mock_logger)

    assert status.status_code == 0
    assert status.reachable is False
    assert status.configured is False
    mock_instructions.assert_called_once()
    warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
    assert "Database migration needed (probe status 000)" in warnings


def test_probe_warns_when_migration_script_missing(mocker, app_settings, mock_logger, tmp_path):
    mocker.patch(
        "common.network_utils.requests.get",
        return_value=mocker.Mock(status_code=404),
    )
    mocker.patch("launcher.migration_probe.print_migration_instructions")

    probe_migration_status(app_settings, mock_logger)
    warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
    assert any("migration/complete_setup.sql" in w for w in warnings)

    mock_logger.reset_mock()
    (tmp_path / "migration").mkdir()
    (tmp_path / "migration" / "complete_setup.sql").write_text("create table archon_settings();")

    probe_migration_status(app_settings, mock_logger)
    warnings = [c.args[0] for c in mock_logger.warning.call_args_list]
    assert not any("was not found" in w for w in warnings)


def test_probe_instructions_printed_to_terminal(mocker, app_settings, capsys):
    mocker.patch(
        "common.network_utils.requests.get",
        return_value=mocker.Mock(status_code=401),
    )

    probe_migration_status(app_settings)

    out = capsys.readouterr().out
    assert "ACTION REQUIRED: Run database migration" in out
    assert "http://localhost:18323" in out
