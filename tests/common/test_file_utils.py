import pytest

from common.file_utils import copy_file_if_missing, file_has_content


def test_file_has_content(tmp_path):
    full = tmp_path / "full.sql"
    full.write_text("select 1;")
    empty = tmp_path / "empty.sql"
    empty.write_text("")

    assert file_has_content(full) is True
    assert file_has_content(empty) is False
    assert file_has_content(tmp_path / "missing.sql") is False
    assert file_has_content(tmp_path) is False


def test_copy_file_if_missing_copies_template(tmp_path, app_settings, mock_logger):
    template = tmp_path / ".env.example"
    template.write_text("A=1\n")
    destination = tmp_path / ".env"

    assert copy_file_if_missing(template, destination, app_settings, mock_logger) is True
    assert destination.read_text() == "A=1\n"


def test_copy_file_if_missing_keeps_existing(tmp_path, app_settings, mock_logger):
    template = tmp_path / ".env.example"
    template.write_text("A=1\n")
    destination = tmp_path / ".env"
    destination.write_text("A=2\n")

    assert copy_file_if_missing(template, destination, app_settings, mock_logger) is False
    assert destination.read_text() == "A=2\n"


def test_copy_file_if_missing_without_template(tmp_path, app_settings):
    with pytest.raises(FileNotFoundError, match="template"):
        copy_file_if_missing(
            tmp_path / ".env.example", tmp_path / ".env", app_settings
        )
    assert not (tmp_path / ".env").exists()


def test_copy_file_if_missing_creates_parent_directories(tmp_path, app_settings):
    template = tmp_path / "template.yml"
    template.write_text("x: 1\n")
    destination = tmp_path / "nested" / "dir" / "copy.yml"

    copy_file_if_missing(template, destination, None)

    assert destination.read_text() == "x: 1\n"
