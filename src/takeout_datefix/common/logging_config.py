"""Logging section of the configuration file."""

from pathlib import Path
from typing import Literal, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class LoggingConfig(BaseModel):
    """Where log records go and how they are rendered.

    The ``file`` handler always writes JSON lines regardless of ``format``;
    ``format`` only selects the console renderer.
    """

    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level"
    )
    format: Literal["simple", "detailed", "json"] = Field(
        default="simple",
        description="Console renderer"
    )
    file: str | None = Field(default=None, description="Optional rotating log file")
    max_file_size_mb: int = Field(default=10, ge=1, description="Rotate log file after this size")
    backup_count: int = Field(default=3, ge=0, description="Rotated log files to keep")

    @field_validator('level', mode='before')
    @classmethod
    def upper_level(cls, v: str) -> str:
        """Accept 'debug', 'Info' and so on."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator('format', mode='before')
    @classmethod
    def lower_format(cls, v: str) -> str:
        if isinstance(v, str):
            return v.lower()
        return v

    @property
    def file_path(self) -> Optional[Path]:
        """Log file as an expanded ``Path``, or None when file logging is off."""
        if not self.file:
            return None
        return Path(self.file).expanduser()
