"""Shared utilities for takeout_datefix packages."""

from .config import ConfigLoader
from .logging import setup_logging, setup_logging_from_config, LogContext
from .logging_config import LoggingConfig
from .errors import DateFixError, ConfigurationError, ToolNotFoundError, ParseError

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'setup_logging_from_config',
    'LogContext',
    'DateFixError',
    'ConfigurationError',
    'ToolNotFoundError',
    'ParseError',
]
