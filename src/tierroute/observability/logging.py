"""Structured logging configuration for tierroute.

Configures structlog with a shared processor chain. Development mode renders
human-readable console lines, production mode renders JSON. An optional
daily-rotating file handler always receives JSON.

Event naming convention:
- dot.notation, ``domain.entity.verb_past_tense``
  (e.g. ``routing.decision.made``, ``escalation.tier.upgraded``)

Standard log keys:
- agent: Normalized agent label
- tier: Routing tier value
- word_count: Prompt size (prompt text itself is never logged)

Usage:
    from tierroute.observability import configure_logging, get_logger

    configure_logging(LoggingConfig(mode=LogMode.PROD))
    log = get_logger(__name__)
    log.info("routing.decision.made", tier="high", agent="oracle")
"""

from __future__ import annotations

from enum import Enum
import logging
from logging.handlers import TimedRotatingFileHandler
import os
from pathlib import Path
import sys
from typing import Any

from pydantic import BaseModel, Field
import structlog


class LogMode(str, Enum):
    """Logging output mode."""

    DEV = "dev"
    PROD = "prod"


class LoggingConfig(BaseModel):
    """Configuration for structured logging.

    Attributes:
        mode: Output mode (dev for console rendering, prod for JSON).
        log_level: Minimum log level to output.
        log_dir: Directory for log files. Defaults to ~/.tierroute/logs/.
        max_log_days: Number of rotated log files to keep.
        enable_file_logging: Whether to also write JSON logs to a file.
    """

    mode: LogMode = Field(default=LogMode.DEV)
    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default_factory=lambda: Path.home() / ".tierroute" / "logs")
    max_log_days: int = Field(default=7, ge=1, le=365)
    enable_file_logging: bool = Field(default=False)

    model_config = {"frozen": True}


_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_configured: bool = False
_current_config: LoggingConfig | None = None
_console_logging_enabled: bool = True


def _config_from_env() -> LoggingConfig:
    """Build a LoggingConfig from TIERROUTE_LOG_MODE and TIERROUTE_LOG_LEVEL."""
    env_mode = os.environ.get("TIERROUTE_LOG_MODE", "dev").lower()
    mode = LogMode.PROD if env_mode == "prod" else LogMode.DEV
    level = os.environ.get("TIERROUTE_LOG_LEVEL", "INFO")
    return LoggingConfig(mode=mode, log_level=level)


def _get_log_level(level_str: str) -> int:
    """Convert a level name to its logging constant, defaulting to INFO."""
    return _LEVELS.get(level_str.upper(), logging.INFO)


def _setup_file_handler(config: LoggingConfig) -> TimedRotatingFileHandler | None:
    """Create the midnight-rotating file handler, or None when disabled."""
    if not config.enable_file_logging:
        return None

    config.log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(config.log_dir / "tierroute.log"),
        when="midnight",
        interval=1,
        backupCount=config.max_log_days,
        encoding="utf-8",
        utc=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(_get_log_level(config.log_level))
    return handler


def _get_processors(mode: LogMode) -> list[Any]:
    """Build the structlog processor chain ending in the mode's renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if mode == LogMode.DEV:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())
    return processors


def set_console_logging(enabled: bool) -> None:
    """Enable or disable console (stderr) log output."""
    global _console_logging_enabled
    _console_logging_enabled = enabled


class _StderrAndFileLogger:
    """Logger that prints rendered lines to stderr and mirrors them to a file."""

    def __init__(self, file_handler: TimedRotatingFileHandler | None = None) -> None:
        self._file_handler = file_handler

    def _emit(self, message: str, level: int) -> None:
        if _console_logging_enabled:
            print(message, file=sys.stderr)
        if self._file_handler is not None:
            record = logging.LogRecord(
                name="tierroute",
                level=level,
                pathname="",
                lineno=0,
                msg=message,
                args=(),
                exc_info=None,
            )
            self._file_handler.emit(record)

    def msg(self, message: str) -> None:
        self._emit(message, logging.INFO)

    def debug(self, message: str) -> None:
        self._emit(message, logging.DEBUG)

    def info(self, message: str) -> None:
        self._emit(message, logging.INFO)

    def warning(self, message: str) -> None:
        self._emit(message, logging.WARNING)

    warn = warning

    def error(self, message: str) -> None:
        self._emit(message, logging.ERROR)

    exception = error

    def critical(self, message: str) -> None:
        self._emit(message, logging.CRITICAL)

    fatal = critical


class _StderrAndFileLoggerFactory:
    """structlog logger factory sharing one optional file handler."""

    def __init__(self, file_handler: TimedRotatingFileHandler | None = None) -> None:
        self._file_handler = file_handler

    def __call__(self, *_args: Any) -> _StderrAndFileLogger:
        return _StderrAndFileLogger(self._file_handler)


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog for the process.

    Call once at startup. Reconfiguring replaces the previous file handler.

    Args:
        config: Logging configuration. If None, mode and level are read from
            TIERROUTE_LOG_MODE and TIERROUTE_LOG_LEVEL.
    """
    global _configured, _current_config

    if config is None:
        config = _config_from_env()
    _current_config = config

    log_level = _get_log_level(config.log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        if isinstance(handler, TimedRotatingFileHandler):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = _setup_file_handler(config)
    if file_handler is not None:
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=_get_processors(config.mode),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=_StderrAndFileLoggerFactory(file_handler),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger, configuring logging with defaults on first use.

    Args:
        name: Optional logger name, usually ``__name__``.
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in every subsequent log entry.

    Example:
        bind_context(request_id="req_42", agent="oracle")
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove context variables from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


def get_current_config() -> LoggingConfig | None:
    """Return the active LoggingConfig, or None if not configured."""
    return _current_config


def is_configured() -> bool:
    """Return True once configure_logging has run."""
    return _configured


def reset_logging() -> None:
    """Reset module state and structlog defaults. Intended for tests."""
    global _configured, _current_config
    _configured = False
    _current_config = None
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
