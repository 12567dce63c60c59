# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions used while preparing the stack's working tree.
"""

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from launcher.config_models import AppSettings

from .command_utils import get_symbols, log_message

module_logger = logging.getLogger(__name__)


def file_has_content(file_path: Union[str, Path]) -> bool:
    """
    Return True if the path is a regular file with at least one byte.
    """
    path = Path(file_path)
    return path.is_file() and path.stat().st_size > 0


def copy_file_if_missing(
    source_path: Union[str, Path],
    destination_path: Union[str, Path],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Copy a template file into place unless the destination already exists.

    Parameters:
        source_path: The template to copy from.
        destination_path: The file to create.
        app_settings (Optional[AppSettings]): Settings providing log symbols.
        current_logger (Optional[logging.Logger]): Logger instance to use.

    Returns:
        bool: True if a copy was made, False if the destination already
        existed.

    Raises:
        FileNotFoundError: The destination is missing and so is the template.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    source = Path(source_path)
    destination = Path(destination_path)

    if destination.exists():
        log_message(
            f"{destination} already exists. Not copying {source}.",
            "debug",
            logger_to_use,
            app_settings,
        )
        return False

    if not source.is_file():
        raise FileNotFoundError(
            f"Cannot create {destination}: template {source} not found"
        )

    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, destination)
    log_message(
        f"{symbols.get('info', 'ℹ️')} Copied {source} to {destination}",
        "debug",
        logger_to_use,
        app_settings,
    )
    return True
