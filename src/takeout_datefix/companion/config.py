"""Configuration models for the date fixer."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict
from takeout_datefix.common import LoggingConfig


class ExifToolConfig(BaseModel):
    """How ExifTool is invoked."""

    model_config = ConfigDict(extra='forbid')

    enabled: bool = Field(
        default=True,
        description="Use exiftool for reading and writing. When off, only still images can be verified and nothing is written."
    )
    executable: str = Field(
        default="exiftool",
        description="Command name or absolute path of exiftool"
    )
    timeout_seconds: int = Field(
        default=30,
        ge=1,
        description="Timeout for a single exiftool invocation"
    )
    delete_backup: bool = Field(
        default=True,
        description="Delete the <file>_original backup exiftool leaves after a write"
    )


class DateFixConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra='forbid')

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    exiftool: ExifToolConfig = Field(default_factory=ExifToolConfig)
    error_dir: str | None = Field(
        default=None,
        description="Directory receiving copies of files whose metadata could not be written"
    )

    @property
    def error_dir_path(self) -> Optional[Path]:
        return Path(self.error_dir).expanduser() if self.error_dir else None
