"""Base error definitions for takeout_datefix packages."""

from typing import Any, Dict


class DateFixError(Exception):
    """Base exception for all takeout_datefix errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class ConfigurationError(DateFixError):
    """Configuration is invalid or missing."""
    pass


class ToolNotFoundError(DateFixError):
    """Required external tool is not available."""
    pass


class ParseError(DateFixError):
    """A sidecar or metadata value could not be parsed."""
    pass
