# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions.
"""
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import requests

module_logger = logging.getLogger(__name__)

# Reported when no HTTP response was received at all.
NO_RESPONSE_STATUS: int = 0


def http_get_status(
    url: str,
    timeout: float = 5.0,
    headers: Optional[Dict[str, str]] = None,
    current_logger: Optional[logging.Logger] = None,
) -> int:
    """
    Issue a GET request and return its HTTP status code.

    Args:
        url: The URL to request.
        timeout: Seconds to wait for a connection and for the response.
        headers: Optional request headers.
        current_logger: Optional logger instance.

    Returns:
        The response status code, or NO_RESPONSE_STATUS when the request
        failed before a response arrived (refused, timed out, bad URL).
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        response = requests.get(
            url, headers=headers, timeout=timeout, allow_redirects=True
        )
    except requests.exceptions.RequestException as req_err:
        logger_to_use.debug(f"GET {url} failed: {req_err}")
        return NO_RESPONSE_STATUS
    logger_to_use.debug(f"GET {url} -> {response.status_code}")
    return response.status_code


def is_url_reachable(
    url: str,
    timeout: float = 5.0,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Return True if the URL answered with any HTTP response.

    An error status still means something is listening, so it counts as
    reachable.
    """
    return (
        http_get_status(url, timeout=timeout, current_logger=current_logger)
        != NO_RESPONSE_STATUS
    )


def download_file(
    url: str,
    download_to_path: Union[str, Path],
    timeout: float = 60.0,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Download a URL to a local path, creating parent directories.

    The body is streamed to a `.part` file next to the destination and moved
    into place only once it is complete, so an HTTP error or a dropped
    connection never leaves an error page or a truncated file behind.

    Args:
        url: The URL to download.
        download_to_path: Where to save the body.
        timeout: Request timeout in seconds.
        current_logger: Optional logger instance.

    Returns:
        True if the download was successful, False otherwise.
    """
    logger_to_use = current_logger if current_logger else module_logger
    download_path = Path(download_to_path)
    partial_path = download_path.with_name(download_path.name + ".part")
    response: Optional[requests.Response] = None

    try:
        download_path.parent.mkdir(parents=True, exist_ok=True)
        with requests.get(url, stream=True, timeout=timeout) as response:
            response.raise_for_status()

            with open(partial_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)
        partial_path.replace(download_path)
        logger_to_use.debug(f"Downloaded {url} to {download_path}")
        return True
    except requests.exceptions.HTTPError as http_err:
        status_code = (
            response.status_code if response is not None else "Unknown"
        )
        logger_to_use.warning(
            f"HTTP error downloading {url}: {http_err} - Status code: {status_code}"
        )
    except requests.exceptions.ConnectionError as conn_err:
        logger_to_use.warning(f"Connection error downloading {url}: {conn_err}")
    except requests.exceptions.Timeout as timeout_err:
        logger_to_use.warning(f"Timeout downloading {url}: {timeout_err}")
    except requests.exceptions.RequestException as req_err:
        logger_to_use.warning(f"Error downloading {url}: {req_err}")
    except OSError as io_err:
        logger_to_use.warning(
            f"File I/O error saving {url} to {download_path}: {io_err}"
        )

    if partial_path.is_file():
        partial_path.unlink()
    return False
