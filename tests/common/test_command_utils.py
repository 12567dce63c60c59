import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from common.command_utils import (
    get_symbols,
    log_message,
    run_command,
)
from launcher.config_models import SYMBOLS_DEFAULT, AppSettings


def test_get_symbols_defaults_without_settings():
    assert get_symbols(None) == SYMBOLS_DEFAULT


def test_get_symbols_from_settings():
    settings = AppSettings(symbols={"success": "OK"})
    assert get_symbols(settings) == {"success": "OK"}


@pytest.mark.parametrize(
    "level, method",
    [
        ("debug", "debug"),
        ("info", "info"),
        ("success", "info"),
        ("warning", "warning"),
        ("error", "error"),
        ("critical", "critical"),
    ],
)
def test_log_message_dispatches_levels(mock_logger, level, method):
    log_message("hello", level, mock_logger)
    getattr(mock_logger, method).assert_called_once_with(
        "hello", exc_info=False
    )


def test_run_command_success(mocker, mock_logger):
    """run_command passes the list through and returns the process."""
    completed = subprocess.CompletedProcess(
        ["docker", "info"], 0, stdout="Server: ok\n", stderr=""
    )
    mock_run = mocker.patch(
        "common.command_utils.subprocess.run", return_value=completed
    )

    result = run_command(
        ["docker", "info"],
        None,
        capture_output=True,
        current_logger=mock_logger,
    )

    assert result is completed
    mock_run.assert_called_once_with(
        ["docker", "info"],
        check=True,
        capture_output=True,
        text=True,
        cwd=None,
        env=None,
    )


def test_run_command_splits_string_commands(mocker):
    mock_run = mocker.patch(
        "common.command_utils.subprocess.run",
        return_value=subprocess.CompletedProcess(["docker", "ps"], 0),
    )

    run_command("docker ps", None)

    assert mock_run.call_args.args[0] == ["docker", "ps"]


def test_run_command_called_process_error_is_logged_and_raised(
    mocker, mock_logger
):
    mocker.patch(
        "common.command_utils.subprocess.run",
        side_effect=subprocess.CalledProcessError(
            1, ["docker", "info"], stderr="Cannot connect"
        ),
    )

    with pytest.raises(subprocess.CalledProcessError):
        run_command(["docker", "info"], None, current_logger=mock_logger)

    logged = [c.args[0] for c in mock_logger.error.call_args_list]
    assert any("failed (rc 1)" in message for message in logged)
    assert any("Cannot connect" in message for message in logged)


def test_run_command_missing_binary(mocker, mock_logger):
    error = FileNotFoundError(2, "No such file", "docker")
    mocker.patch("common.command_utils.subprocess.run", side_effect=error)

    with pytest.raises(FileNotFoundError):
        run_command(["docker", "info"], None, current_logger=mock_logger)

    assert "Command not found: docker" in mock_logger.error.call_args.args[0]


def test_log_message_uses_module_logger_by_default(caplog):
    with caplog.at_level(logging.INFO, logger="common.command_utils"):
        log_message("from module logger")
    assert "from module logger" in caplog.text


def test_run_command_logs_captured_output(mocker):
    logger = MagicMock(spec=logging.Logger)
    mocker.patch(
        "common.command_utils.subprocess.run",
        return_value=subprocess.CompletedProcess(
            ["docker", "info"], 0, stdout="out\n", stderr="warn\n"
        ),
    )

    run_command(["docker", "info"], None, capture_output=True, current_logger=logger)

    debug_messages = [c.args[0] for c in logger.debug.call_args_list]
    assert "   stdout: out" in debug_messages
    assert "   stderr: warn" in debug_messages
