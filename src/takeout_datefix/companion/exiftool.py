"""Thin subprocess wrapper around the ``exiftool`` command."""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

from takeout_datefix.common.errors import ToolNotFoundError
from .errors import MetadataReadError, MetadataWriteError

logger = logging.getLogger(__name__)


class ExifTool:
    """Runs ExifTool once per call; no persistent ``-stay_open`` process.

    Args:
        executable: Command name or full path of exiftool
        timeout_seconds: Per-invocation timeout
    """

    def __init__(self, executable: str = 'exiftool', timeout_seconds: int = 30) -> None:
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.executable, *args],
                capture_output=True,
                text=True,
                encoding='utf-8',  # non-ASCII album and file names
                check=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise ToolNotFoundError(
                f"exiftool not found: {self.executable}", executable=self.executable
            ) from e

    def read_tags(self, file_path: Path, tags: Iterable[str]) -> Dict[str, Any]:
        """
        Read the requested tags as raw strings.

        Args:
            file_path: File to read
            tags: Tag names without the leading dash, e.g. "DateTimeOriginal"

        Returns:
            Mapping of tag name to value for the tags that are present

        Raises:
            ToolNotFoundError: If exiftool is not installed
            MetadataReadError: If exiftool fails or prints unparseable output
        """
        args = ['-json', *[f'-{tag}' for tag in tags], str(file_path)]
        try:
            result = self._run(args)
            data = json.loads(result.stdout)
        except subprocess.CalledProcessError as e:
            raise MetadataReadError(
                f"exiftool failed reading {file_path}: {(e.stderr or '').strip()}", path=str(file_path)
            ) from e
        except subprocess.TimeoutExpired as e:
            raise MetadataReadError(f"exiftool timed out reading {file_path}", path=str(file_path)) from e
        except json.JSONDecodeError as e:
            raise MetadataReadError(f"Unparseable exiftool output for {file_path}", path=str(file_path)) from e

        if not data:
            return {}
        # One object per input file; SourceFile is always present
        record = dict(data[0])
        record.pop('SourceFile', None)
        return record

    def write_tags(self, file_path: Path, values: Mapping[str, str]) -> None:
        """
        Write tag values in place.

        ExifTool keeps the previous version as ``<file>_original``; removing it
        is the caller's decision.

        Raises:
            ToolNotFoundError: If exiftool is not installed
            MetadataWriteError: If exiftool fails or times out
        """
        args = [*[f'-{tag}={value}' for tag, value in values.items()], str(file_path)]
        try:
            self._run(args)
        except subprocess.CalledProcessError as e:
            raise MetadataWriteError(
                f"exiftool failed writing {file_path}: {(e.stderr or '').strip()}", path=str(file_path)
            ) from e
        except subprocess.TimeoutExpired as e:
            raise MetadataWriteError(f"exiftool timed out writing {file_path}", path=str(file_path)) from e

        logger.debug(f"Tags written: {{'path': {str(file_path)!r}, 'tags': {sorted(values)!r}}}")
