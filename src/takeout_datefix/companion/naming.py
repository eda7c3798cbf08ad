"""Filename normalization shared by every companion strategy.

Google Takeout names sidecars after the *original* media name, but the media
file on disk may carry decorations the sidecar name does not:

- ``IMG_1234-edited.jpg`` is an edit made inside Google Photos and has no
  sidecar of its own; it uses ``IMG_1234.jpg``'s.
- ``IMG_1234(1).jpg`` is a duplicate name; its sidecar is ``IMG_1234.jpg(1).json``
  because the exporter moves the counter to the very end.
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

EDITED_SUFFIX_RE = re.compile(r'-edited$', re.IGNORECASE)
COUNTER_SUFFIX_RE = re.compile(r'^(?P<base>.*)(?P<counter>\(\d+\))$')
SIDECAR_COUNTER_RE = re.compile(r'\(\d+\)\.json$')

JSON_SUFFIX = '.json'
SUPPLEMENTAL_SUFFIX = '.supplemental-metadata'

# Truncation artifacts on the media stem, most specific first.
TRAILING_ARTIFACTS: Tuple[str, ...] = ('_n-', '_n', '_')


def strip_edited_suffix(stem: str) -> str:
    """Remove exactly one trailing '-edited' (any case).

    >>> strip_edited_suffix('foo-edited-edited')
    'foo-edited'
    """
    return EDITED_SUFFIX_RE.sub('', stem, count=1)


def split_counter(stem: str) -> Tuple[str, Optional[str]]:
    """Split a trailing duplicate counter off a stem.

    Returns:
        ``(base, counter)`` where counter keeps its parentheses, e.g.
        ``('foo', '(1)')`` for ``'foo(1)'``; ``(stem, None)`` when there is none.
    """
    match = COUNTER_SUFFIX_RE.match(stem)
    if match is None:
        return stem, None
    return match.group('base'), match.group('counter')


def sidecar_has_counter(filename: str) -> bool:
    """True for sidecar names like ``foo.jpg(2).json``."""
    return SIDECAR_COUNTER_RE.search(filename) is not None


def split_media_path(media_path: str | Path) -> Tuple[Path, str, str]:
    """Split a media path into (directory, extension, normalized stem)."""
    path = Path(media_path)
    stem, extension = os.path.splitext(path.name)
    return path.parent, extension, strip_edited_suffix(stem)


@dataclass(frozen=True)
class MediaReference:
    """A media file as seen by the companion strategies.

    Attributes:
        path: Absolute path to the media file (need not exist)
        directory: Directory that is searched for the sidecar
        extension: Extension as found on disk, including the dot (".MP4")
        stem: Base name without extension and without one '-edited' suffix
        counter: Trailing "(n)" of the stem, or None
        stem_without_counter: Stem with the counter removed
    """
    path: Path
    directory: Path
    extension: str
    stem: str
    counter: Optional[str]
    stem_without_counter: str

    @classmethod
    def from_path(cls, media_path: str | Path) -> "MediaReference":
        path = Path(os.path.abspath(media_path))
        directory, extension, stem = split_media_path(path)
        base, counter = split_counter(stem)
        return cls(
            path=path,
            directory=directory,
            extension=extension,
            stem=stem,
            counter=counter,
            stem_without_counter=base,
        )

    @property
    def has_counter(self) -> bool:
        return self.counter is not None

    def sibling(self, filename: str) -> Path:
        """Path of ``filename`` in the media file's directory."""
        return self.directory / filename


def direct_names(base: str, extension: str) -> Tuple[str, str, str]:
    """The three plain sidecar spellings Takeout uses for ``base`` + ``extension``."""
    return (
        f"{base}{JSON_SUFFIX}",
        f"{base}{extension}{JSON_SUFFIX}",
        f"{base}{extension}{SUPPLEMENTAL_SUFFIX}{JSON_SUFFIX}",
    )
