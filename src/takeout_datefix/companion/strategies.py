"""Candidate strategies for locating a media file's JSON sidecar.

Each strategy turns a ``MediaReference`` into an ordered stream of candidate
filenames in the media file's directory. Strategies never check whether their
candidates exist; the resolver does that, so a strategy that scans the
directory listing can be tested without caring about filesystem races.

Priority order (see ``DEFAULT_STRATEGIES``):

1. direct names              foo.json, foo.jpg.json, foo.jpg.supplemental-metadata.json
2. trailing-character fix    foo_n-.jpg -> foo_n.json ...
3. supplemental prefix scan  foo.HEIC.supplemental-metadata.json for foo.MP4
4. json prefix scan          foo_high.json for foo.mp4, counter parity enforced
5. reverse truncation scan   foo_talkv.json for foo_talkv_high.mp4
6. cross-media fallback      IMG.jpg.supplemental-metadata.json for IMG.MP4
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterator, List, Sequence

from .media_types import IMAGE_EXTENSIONS, is_video_file
from .naming import (
    JSON_SUFFIX,
    SUPPLEMENTAL_SUFFIX,
    TRAILING_ARTIFACTS,
    MediaReference,
    direct_names,
    sidecar_has_counter,
)

logger = logging.getLogger(__name__)


def list_directory(directory: os.PathLike | str) -> List[str]:
    """List a directory's entry names, sorted; empty if it cannot be read.

    Sorting makes multi-match directories resolve the same way on every
    filesystem instead of depending on on-disk entry order.
    """
    try:
        return sorted(os.listdir(directory))
    except OSError as e:
        logger.debug(f"Directory not listable: {{'path': {str(directory)!r}, 'error': {str(e)!r}}}")
        return []


class CandidateStrategy(ABC):
    """One rule for guessing sidecar filenames."""

    name: str = ""

    @abstractmethod
    def candidates(self, media: MediaReference) -> Iterator[str]:
        """Yield candidate filenames, best first."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DirectNameStrategy(CandidateStrategy):
    """Sidecar names derived directly from the stem and extension."""

    name = "direct_name"

    def candidates(self, media: MediaReference) -> Iterator[str]:
        yield from direct_names(media.stem, media.extension)

        if media.has_counter:
            # foo(1).jpg -> foo.jpg(1).json / foo.jpg.supplemental-metadata(1).json
            base = media.stem_without_counter
            yield f"{base}{media.extension}{media.counter}{JSON_SUFFIX}"
            yield f"{base}{media.extension}{SUPPLEMENTAL_SUFFIX}{media.counter}{JSON_SUFFIX}"


class TrailingCharacterStrategy(CandidateStrategy):
    """Undo one extra character Takeout appends to some truncated stems.

    filename_n-.jpg pairs with filename_n.json, filename_n.jpg with
    filename_.json and filename_.jpg with filename.json.
    """

    name = "trailing_character"

    def candidates(self, media: MediaReference) -> Iterator[str]:
        if not media.stem.endswith(TRAILING_ARTIFACTS):
            return
        yield from direct_names(media.stem[:-1], media.extension)


class DirectoryScanStrategy(CandidateStrategy):
    """Base for strategies that filter the directory listing."""

    def candidates(self, media: MediaReference) -> Iterator[str]:
        for entry in list_directory(media.directory):
            if self.accepts(entry, media):
                yield entry

    @abstractmethod
    def accepts(self, entry: str, media: MediaReference) -> bool:
        """Whether a directory entry could be this media file's sidecar."""


class SupplementalPrefixStrategy(DirectoryScanStrategy):
    """Any ``<stem>*.supplemental-metadata.json``.

    Covers image/video pairs sharing one sidecar, e.g. IMG_0201.MP4 using
    IMG_0201.HEIC.supplemental-metadata.json.
    """

    name = "supplemental_prefix_scan"

    def accepts(self, entry: str, media: MediaReference) -> bool:
        return entry.startswith(media.stem) and entry.endswith(SUPPLEMENTAL_SUFFIX + JSON_SUFFIX)


class JsonPrefixStrategy(DirectoryScanStrategy):
    """Any ``<stem>*.json`` whose counter-ness matches the media stem's.

    Without the parity check SNOW.mp4 would claim
    SNOW.mp4.supplemental-metadata(1).json, which belongs to SNOW(1).mp4.
    """

    name = "json_prefix_scan"

    def accepts(self, entry: str, media: MediaReference) -> bool:
        if not (entry.startswith(media.stem) and entry.endswith(JSON_SUFFIX)):
            return False
        return sidecar_has_counter(entry) == media.has_counter


class ReverseTruncationStrategy(DirectoryScanStrategy):
    """Any ``X.json`` where X is a prefix of the media stem.

    The sidecar name was cut shorter than the media name, e.g.
    ``clip_talkv.json`` for ``clip_talkv_high.mp4``.
    """

    name = "reverse_truncation_scan"

    def accepts(self, entry: str, media: MediaReference) -> bool:
        if not entry.endswith(JSON_SUFFIX):
            return False
        sidecar_base = entry[:-len(JSON_SUFFIX)]
        # A bare ".json" would be a prefix of every stem
        return bool(sidecar_base) and media.stem.startswith(sidecar_base)


class CrossMediaStrategy(CandidateStrategy):
    """Videos borrowing the sidecar of a same-named still image.

    Takeout sometimes exports one sidecar for an image/video pair (motion
    photos, Live Photos) and names it after the image only.
    """

    name = "cross_media"

    def __init__(self, image_extensions: Sequence[str] = IMAGE_EXTENSIONS) -> None:
        self.image_extensions = tuple(image_extensions)

    def candidates(self, media: MediaReference) -> Iterator[str]:
        if not is_video_file(media.extension):
            return

        for image_ext in self.image_extensions:
            yield from self._same_counter(media, image_ext)
            yield from self._without_counter(media, image_ext)

    def _same_counter(self, media: MediaReference, image_ext: str) -> Iterator[str]:
        # FullSizeRender(1).MP4 next to FullSizeRender(1).jpg
        if not os.path.exists(media.sibling(f"{media.stem}{image_ext}")):
            return
        if media.has_counter:
            yield (
                f"{media.stem_without_counter}{image_ext}"
                f"{SUPPLEMENTAL_SUFFIX}{media.counter}{JSON_SUFFIX}"
            )
        yield f"{media.stem}{image_ext}{JSON_SUFFIX}"
        yield f"{media.stem}{image_ext}{SUPPLEMENTAL_SUFFIX}{JSON_SUFFIX}"

    def _without_counter(self, media: MediaReference, image_ext: str) -> Iterator[str]:
        # FullSizeRender(1).MP4 next to FullSizeRender.jpg
        if not media.has_counter or not media.stem_without_counter:
            return
        base = media.stem_without_counter
        if not os.path.exists(media.sibling(f"{base}{image_ext}")):
            return
        yield f"{base}{image_ext}{SUPPLEMENTAL_SUFFIX}{JSON_SUFFIX}"
        yield f"{base}{image_ext}{JSON_SUFFIX}"


DEFAULT_STRATEGIES: tuple[CandidateStrategy, ...] = (
    DirectNameStrategy(),
    TrailingCharacterStrategy(),
    SupplementalPrefixStrategy(),
    JsonPrefixStrategy(),
    ReverseTruncationStrategy(),
    CrossMediaStrategy(),
)
