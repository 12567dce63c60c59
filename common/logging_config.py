# -*- coding: utf-8 -*-
"""
Logging configuration for the launcher.

Console output is human-readable by default, with a status symbol per level.
Setting LOG_FORMAT=json switches every handler to one JSON object per record,
for when the launcher runs under a log collector.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from launcher.config_models import SYMBOLS_DEFAULT

SIMPLE_LOG_FORMAT_NO_PREFIX = "%(symbol)s%(message)s"
SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER = "{log_prefix}%(symbol)s%(message)s"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_RECORD_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
        "symbol",
        "message",
        "asctime",
    ]
)


class SymbolFormatter(logging.Formatter):
    """
    A formatter that adds a `symbol` attribute based on the log level.

    Messages that already start with one of the symbols get an empty
    `symbol`, so "✅ Docker is running" is not printed as "ℹ️ ✅ ...".
    """

    def __init__(
        self, fmt=None, datefmt=None, style="%", validate=True, symbols=None
    ):
        super().__init__(fmt, datefmt, style, validate)
        self.symbols = symbols or SYMBOLS_DEFAULT

    def format(self, record):
        message = record.getMessage().lstrip()
        if any(
            message.startswith(symbol)
            for symbol in self.symbols.values()
            if symbol
        ):
            record.symbol = ""
        elif record.levelno == logging.DEBUG:
            record.symbol = self.symbols.get("debug", "🐛")
        elif record.levelno == logging.INFO:
            record.symbol = self.symbols.get("info", "ℹ️")
        elif record.levelno == logging.WARNING:
            record.symbol = self.symbols.get("warning", "⚠️")
        elif record.levelno == logging.ERROR:
            record.symbol = self.symbols.get("error", "❌")
        elif record.levelno == logging.CRITICAL:
            record.symbol = self.symbols.get("critical", "🔥")
        else:
            record.symbol = ""

        if record.symbol:
            record.symbol += " "
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON documents.
    """

    def __init__(self, service_name: str = "archon-launcher"):
        super().__init__()
        self.service_name = service_name
        self.hostname = os.environ.get("HOSTNAME", "unknown")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
            "hostname": self.hostname,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def resolve_log_level(log_level: Optional[str] = None) -> int:
    """
    Turn a level name into a logging level, falling back to LOG_LEVEL and INFO.
    """
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL", "INFO")
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_prefix: Optional[str] = None,
    json_format: Optional[bool] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures the root logger.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        Also write records to this file when given.
    log_to_console: bool
        Whether to log to the console (stdout).
    log_prefix: Optional[str]
        A string prepended to every human-readable console line.
    json_format: Optional[bool]
        Emit JSON records. When None, LOG_FORMAT=json in the environment
        turns it on.
    symbols: Optional[Dict[str, str]]
        Symbol table for the human-readable formatter.
    """
    if json_format is None:
        json_format = os.environ.get("LOG_FORMAT", "").lower() == "json"

    handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path, mode="a"))
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if log_to_console or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter: logging.Formatter
    if json_format:
        formatter = JSONFormatter()
    else:
        actual_prefix = (
            (log_prefix.strip() + " ")
            if log_prefix and log_prefix.strip()
            else ""
        )
        if actual_prefix:
            final_format_str = SIMPLE_LOG_FORMAT_WITH_PREFIX_PLACEHOLDER.format(
                log_prefix=actual_prefix
            )
        else:
            final_format_str = SIMPLE_LOG_FORMAT_NO_PREFIX
        if log_level <= logging.DEBUG:
            final_format_str = "%(asctime)s " + final_format_str
        formatter = SymbolFormatter(
            fmt=final_format_str,
            datefmt="%Y-%m-%d %H:%M:%S",
            symbols=symbols,
        )

    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)

    logging.getLogger(__name__).debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. JSON: {json_format}"
    )
