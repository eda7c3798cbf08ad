"""Static file-category table shared by the resolver and the metadata writer.

Extensions are stored lowercase with the leading dot; callers pass whatever
case is on disk.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

# Preference order matters: the cross-media fallback tries these in sequence.
IMAGE_EXTENSIONS: Tuple[str, ...] = ('.jpg', '.jpeg', '.png', '.gif', '.bmp', '.heic', '.webp')

VIDEO_EXTENSIONS: Tuple[str, ...] = ('.mp4', '.mov', '.avi', '.mkv', '.webm', '.flv', '.wmv', '.m4v')

# Formats ExifTool can write a capture date into.
EMBEDDED_METADATA_EXTENSIONS = frozenset({
    '.jpg', '.jpeg', '.png', '.gif', '.heic', '.webp', '.tif', '.tiff',
    '.dng', '.cr2', '.nef', '.arw',
    '.mp4', '.mov', '.m4v', '.avi',
})

# Containers that also get the QuickTime-style create dates.
VIDEO_TAG_SET_EXTENSIONS = frozenset({'.mp4', '.mov', '.avi'})

IMAGE_TAGS: Tuple[str, ...] = ('DateTimeOriginal',)
VIDEO_TAGS: Tuple[str, ...] = ('DateTimeOriginal', 'CreateDate', 'MediaCreateDate')


def _ext(path_or_ext: str | Path) -> str:
    # Path('.mp4').suffix is '' so a bare extension falls through as itself
    return (Path(path_or_ext).suffix or str(path_or_ext)).lower()


def is_video_file(path: str | Path) -> bool:
    """True for any recognized video extension, e.g. ``.MP4`` or ``.m4v``."""
    return _ext(path) in VIDEO_EXTENSIONS


def supports_embedded_metadata(path: str | Path) -> bool:
    """True when a capture timestamp can be written into the file itself."""
    return _ext(path) in EMBEDDED_METADATA_EXTENSIONS


def select_tag_set(path: str | Path) -> Tuple[str, ...]:
    """Pick the tags that receive the capture timestamp for this file."""
    if _ext(path) in VIDEO_TAG_SET_EXTENSIONS:
        return VIDEO_TAGS
    return IMAGE_TAGS


def build_tag_values(
    path: str | Path,
    formatted_timestamp: str,
    tag_set: Optional[Sequence[str]] = None,
) -> Dict[str, str]:
    """Map every tag to the same formatted timestamp.

    ``tag_set`` defaults to the set selected for the file's category.
    """
    tags = select_tag_set(path) if tag_set is None else tag_set
    return {tag: formatted_timestamp for tag in tags}
