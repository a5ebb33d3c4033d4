"""
Logging for the CDN77 client.

Logs go to stderr, never stdout, so they can be silenced or redirected without
touching command output. The defaults come from config/settings/logging.yaml
and the --verbose/--debug flags override the level.

A JSON record carries:
    timestamp   - ISO 8601, UTC
    level       - debug, info, warning, error, critical
    logger      - Module path, e.g. cdn77_client.api.client
    event       - Message
    func_name   - Emitting function
    lineno      - Emitting line
    source      - cli or api layer, passed by the caller (see log_with_source)

Usage:
    logger = get_logger(__name__)
    log_with_source(logger, "api", "debug", "API request", method="GET", path="/cdn")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

from cdn77_client.core.config import load_yaml_config

VALID_SOURCES = frozenset({"cli", "api", "internal"})

# Third-party loggers that would otherwise echo every request at DEBUG.
_QUIET_LOGGERS = ("httpx", "httpcore")

_logging_config: dict[str, Any] | None = None


def _load_logging_config() -> dict[str, Any]:
    """Read logging.yaml once and cache it for the process."""
    global _logging_config
    if _logging_config is None:
        _logging_config = load_yaml_config("logging.yaml")
    return _logging_config


def _resolve_log_path(configured_path: str) -> Path:
    """Relative log paths are taken from the working directory."""
    path = Path(configured_path).expanduser()
    if path.is_absolute():
        return path
    return Path.cwd() / path


def _record_processors() -> list[Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
            additional_ignores=[__name__],
        ),
    ]


def _formatter(renderer: Processor, pre_chain: list[Processor]) -> logging.Formatter:
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def _file_handler(file_config: dict[str, Any], formatter: logging.Formatter) -> logging.Handler:
    log_path = _resolve_log_path(file_config["path"])
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=file_config["max_bytes"],
        backupCount=file_config["backup_count"],
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    enable_console: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Route structlog and stdlib logging to stderr and, optionally, a JSONL file.

    Every argument left as None falls back to logging.yaml. The file always
    gets JSON; the console gets JSON or the human readable renderer depending
    on format_type. Calling it again replaces the handlers installed before.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        format_type: 'json' or 'console'
        enable_console: Write to stderr
        enable_file_logging: Write to the rotating file from logging.yaml
    """
    config = _load_logging_config()
    console_config = config["handlers"]["console"]
    file_config = config["handlers"]["file"]

    log_level = getattr(logging, (level or config["level"]).upper())
    use_console = console_config["enabled"] if enable_console is None else enable_console
    use_file = file_config["enabled"] if enable_file_logging is None else enable_file_logging

    processors = _record_processors()
    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = _formatter(structlog.processors.JSONRenderer(), processors)
    if (format_type or config["format"]) == "console":
        console_formatter = _formatter(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()), processors)
    else:
        console_formatter = json_formatter

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if use_console:
        root_logger.addHandler(_console_handler(console_formatter))
    if use_file:
        root_logger.addHandler(_file_handler(file_config, json_formatter))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message tagged with the layer it came from.

    Raises:
        ValueError: If source is not one of VALID_SOURCES
        AttributeError: If level is not a log method of the logger
    """
    if source not in VALID_SOURCES:
        raise ValueError(f"Unknown log source '{source}', expected one of {sorted(VALID_SOURCES)}")
    log_method = getattr(logger, level.lower())
    log_method(message, source=source, **kwargs)
