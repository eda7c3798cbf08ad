"""Comparing a file's embedded capture time with its sidecar's."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image, ExifTags, UnidentifiedImageError

from takeout_datefix.common import DateFixError
from .errors import MetadataReadError
from .exiftool import ExifTool
from .media_types import is_video_file, supports_embedded_metadata
from .timestamps import parse_exif_datetime, same_instant, to_utc

logger = logging.getLogger(__name__)

READ_TAGS = ('DateTimeOriginal', 'OffsetTimeOriginal')


def parse_embedded_value(path: Path, value: object, offset: object = None) -> datetime:
    """
    Parse a DateTimeOriginal that is present on the file.

    Raises:
        MetadataReadError: If the value is zeroed or not a date
    """
    parsed = parse_exif_datetime(str(value), str(offset) if offset else None)
    if parsed is None:
        raise MetadataReadError(
            f"Unparseable DateTimeOriginal in {path}: {value!r}", path=str(path), value=str(value)
        )
    return parsed


def read_with_pillow(path: Path) -> Optional[datetime]:
    """
    Read DateTimeOriginal from a still image without ExifTool.

    Raises:
        MetadataReadError: If Pillow cannot open the file
    """
    try:
        with Image.open(path) as img:
            exif_ifd = img.getexif().get_ifd(ExifTags.IFD.Exif)
    except (UnidentifiedImageError, OSError) as e:
        raise MetadataReadError(f"Pillow cannot read {path}: {e}", path=str(path)) from e

    value = exif_ifd.get(ExifTags.Base.DateTimeOriginal)
    offset = exif_ifd.get(ExifTags.Base.OffsetTimeOriginal)
    if not value:
        return None
    return parse_embedded_value(path, value, offset)


class MetadataVerifier:
    """Reads embedded capture times and decides whether a rewrite is needed.

    Args:
        exiftool: ExifTool runner, used for every format when ``use_exiftool``
        use_exiftool: When False, still images are read with Pillow and videos
            cannot be read at all
    """

    def __init__(self, exiftool: Optional[ExifTool] = None, use_exiftool: bool = True) -> None:
        self.exiftool = exiftool or ExifTool()
        self.use_exiftool = use_exiftool

    def read(self, path: Path) -> Optional[datetime]:
        """
        Read the embedded capture time of ``path``.

        Returns:
            UTC datetime, or None if the file has no DateTimeOriginal

        Raises:
            MetadataReadError: If the metadata cannot be read or holds no valid date
            ToolNotFoundError: If ExifTool is enabled but missing
        """
        path = Path(path)
        if self.use_exiftool:
            tags = self.exiftool.read_tags(path, READ_TAGS)
            value = tags.get('DateTimeOriginal')
            if not value:
                return None
            return parse_embedded_value(path, value, tags.get('OffsetTimeOriginal'))

        if is_video_file(path):
            raise MetadataReadError(f"Video metadata needs exiftool: {path}", path=str(path))
        return read_with_pillow(path)

    def matches(self, path: Path, expected_utc: Optional[datetime]) -> bool:
        """
        Whether the embedded capture time already equals ``expected_utc``.

        Errs on the side of "matches" so that nothing is rewritten on doubt:
        unsupported formats, a missing expected value, read failures and
        unparseable embedded dates all return True. A file with no embedded
        capture time returns False.
        """
        path = Path(path)
        if not supports_embedded_metadata(path):
            return True
        if expected_utc is None:
            return True

        try:
            embedded = self.read(path)
        except DateFixError as e:
            logger.warning(f"Cannot read embedded capture time, leaving file as is: {{'path': {str(path)!r}, 'error': {str(e)!r}}}")
            return True

        if embedded is None:
            return False

        result = same_instant(embedded, expected_utc)
        if not result:
            logger.debug(
                f"Capture time differs: {{'path': {str(path)!r}, 'embedded': {embedded.isoformat()!r}, 'expected': {to_utc(expected_utc).isoformat()!r}}}"
            )
        return result
