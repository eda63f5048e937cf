"""
Structured Logging for headerdoc.

Every module gets its logger from here rather than from ``logging`` directly:

    from headerdoc.core.logging import get_logger
    logger = get_logger(__name__)

Logger Types
------------
**StructuredLogger**
    Base logger. Extra keyword arguments are appended to the message as
    ``key=value`` pairs:

        logger = get_logger(__name__)
        logger.debug("Declaration", kind="Struct", name="Vec3")

**UnitLogger**
    Tracks the stages a single input unit goes through (parse, build,
    render, write) with timing:

        ulog = UnitLogger("include/vec.h")
        ulog.start_stage("parse")
        ulog.finish(success=True, declarations=42)

Loggers are cached by name; ``configure_logging`` changes the default
configuration and reconfigures every logger created so far.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.logging import RichHandler


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_path: Optional[Path] = None
    console: bool = True


class _ConfigHolder:
    """Holds the default logging configuration."""

    _config: LogConfig = LogConfig()

    @classmethod
    def get_config(cls) -> LogConfig:
        """Get the default config."""
        return cls._config

    @classmethod
    def set_config(cls, config: LogConfig) -> None:
        """Set the default config."""
        cls._config = config


class StructuredLogger:
    """
    Structured logger with key=value fields.

    Wraps a standard library logger; output goes to the console through
    Rich and optionally to a log file.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        self.logger = logging.getLogger(name)
        self.config = config or _ConfigHolder.get_config()
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger."""
        level = getattr(logging, self.config.level.upper(), logging.INFO)
        self.logger.setLevel(level)

        # Remove existing handlers
        self.logger.handlers.clear()

        if self.config.console:
            console_handler = RichHandler(
                show_time=True,
                show_path=False,
                markup=False,
                rich_tracebacks=True,
            )
            console_handler.setLevel(level)
            self.logger.addHandler(console_handler)

        if self.config.file_path:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter(self.config.format, datefmt=self.config.date_format)
            )
            self.logger.addHandler(file_handler)

    def reconfigure(self, config: LogConfig) -> None:
        """Apply a new configuration to this logger."""
        self.config = config
        self._setup_logger()

    def _format_message(self, message: str, **kwargs: Any) -> str:
        """Append keyword fields to the message."""
        if kwargs:
            field_str = " | ".join(f"{k}={v}" for k, v in kwargs.items())
            return f"{message} | {field_str}"
        return message

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self.logger.exception(self._format_message(message, **kwargs))


# Module-level logger factory
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, config: Optional[LogConfig] = None) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name (typically __name__).
        config: Optional logging configuration.

    Returns:
        Configured StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, config)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure global logging settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for log output.
        console: Whether to log to console.
    """
    config = LogConfig(level=level, file_path=log_file, console=console)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    _ConfigHolder.set_config(config)

    for logger in _loggers.values():
        logger.reconfigure(config)


class UnitLogger:
    """
    Specialized logger for one input unit.

    Tracks processing stages and provides timing information.
    """

    def __init__(self, unit: str) -> None:
        self.unit = unit
        self.logger = get_logger("headerdoc.pipeline")
        self._stage_start: Optional[datetime] = None
        self._current_stage: Optional[str] = None

    def start_stage(self, stage: str) -> None:
        """Mark the start of a processing stage."""
        self._finish_current_stage()
        self._current_stage = stage
        self._stage_start = datetime.now()
        self.logger.debug("Starting stage", unit=self.unit, stage=stage)

    def _finish_current_stage(self) -> None:
        """Log completion of current stage if any."""
        if self._current_stage and self._stage_start:
            duration = (datetime.now() - self._stage_start).total_seconds()
            self.logger.debug(
                "Completed stage",
                unit=self.unit,
                stage=self._current_stage,
                duration_sec=f"{duration:.3f}",
            )
        self._current_stage = None
        self._stage_start = None

    def finish(
        self, success: bool, declarations: int = 0, error: Optional[str] = None
    ) -> None:
        """Mark unit completion."""
        self._finish_current_stage()
        if success:
            self.logger.info(
                "Unit documented",
                unit=self.unit,
                declarations=declarations,
            )
        else:
            self.logger.error("Unit failed", unit=self.unit, error=error)
