"""Companion resolver: first existing candidate across prioritized strategies."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .naming import MediaReference
from .strategies import DEFAULT_STRATEGIES, CandidateStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one media file.

    Attributes:
        media_path: Absolute media path that was resolved
        sidecar_path: Existing sidecar path, or None when nothing matched
        strategy: Name of the strategy that produced the match
    """
    media_path: Path
    sidecar_path: Optional[Path] = None
    strategy: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.sidecar_path is not None


class CompanionResolver:
    """Walks strategies in order and returns the first candidate that exists.

    Holds no per-call state, so one instance can serve many threads.

    Example:
        >>> resolver = CompanionResolver()
        >>> resolver.resolve("/takeout/Photos from 2019/IMG_0201.MP4").sidecar_path
        PosixPath('/takeout/Photos from 2019/IMG_0201.jpg.supplemental-metadata.json')
    """

    def __init__(self, strategies: Sequence[CandidateStrategy] = DEFAULT_STRATEGIES) -> None:
        self.strategies = tuple(strategies)

    def resolve(self, media_path: str | Path) -> Resolution:
        media = MediaReference.from_path(media_path)

        for strategy in self.strategies:
            for candidate in strategy.candidates(media):
                candidate_path = media.sibling(candidate)
                # os.path.exists swallows permission errors and races
                if os.path.exists(candidate_path):
                    logger.debug(
                        f"Companion found: {{'media': {media.path.name!r}, 'sidecar': {candidate!r}, 'strategy': {strategy.name!r}}}"
                    )
                    return Resolution(media.path, candidate_path, strategy.name)

        logger.debug(f"No companion found: {{'media': {str(media.path)!r}}}")
        return Resolution(media.path)


_default_resolver = CompanionResolver()


def resolve_companion(media_path: str | Path) -> Optional[Path]:
    """Return the JSON sidecar for ``media_path``, or None if there is none.

    A returned path existed at the moment it was returned.
    """
    return _default_resolver.resolve(media_path).sidecar_path
