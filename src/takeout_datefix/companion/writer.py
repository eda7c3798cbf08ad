"""Writing the sidecar capture time into the media file."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from takeout_datefix.common import DateFixError
from .errors import MetadataWriteError
from .exiftool import ExifTool
from .media_types import build_tag_values, supports_embedded_metadata
from .timestamps import format_exif_timestamp

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = '_original'


class MetadataWriter:
    """Applies a UTC capture timestamp to a file's embedded date tags.

    Args:
        exiftool: ExifTool runner
        delete_backup: Remove the ``<file>_original`` copy ExifTool leaves behind
    """

    def __init__(self, exiftool: Optional[ExifTool] = None, delete_backup: bool = True) -> None:
        self.exiftool = exiftool or ExifTool()
        self.delete_backup = delete_backup

    def write(
        self,
        path: Path,
        timestamp_utc: datetime,
        tag_set: Optional[Sequence[str]] = None,
    ) -> bool:
        """
        Write ``timestamp_utc`` into ``path``.

        Args:
            path: Media file to modify in place
            timestamp_utc: Capture time; naive values are taken as UTC
            tag_set: Tags to write; defaults to the set for the file's category

        Returns:
            True if the file was modified, False if its format carries no
            embedded metadata and nothing was done

        Raises:
            MetadataWriteError: If the write failed; the file may need quarantining
        """
        path = Path(path)
        if not supports_embedded_metadata(path):
            logger.debug(f"Write skipped, format has no embedded metadata: {{'path': {str(path)!r}}}")
            return False

        formatted = format_exif_timestamp(timestamp_utc)
        values = build_tag_values(path, formatted, tag_set)

        try:
            self.exiftool.write_tags(path, values)
            if self.delete_backup:
                Path(f"{path}{BACKUP_SUFFIX}").unlink(missing_ok=True)
        except MetadataWriteError:
            raise
        except (DateFixError, OSError) as e:
            raise MetadataWriteError(f"Cannot write capture time to {path}: {e}", path=str(path)) from e

        logger.info(f"Capture time written: {{'path': {str(path)!r}, 'timestamp': {formatted!r}, 'tags': {list(values)!r}}}")
        return True
