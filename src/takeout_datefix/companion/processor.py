"""Per-file pipeline: resolve sidecar, compare capture time, rewrite or quarantine."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from takeout_datefix.common import LogContext
from .errors import MetadataWriteError, classify_error
from .quarantine import quarantine_files
from .resolver import CompanionResolver
from .sidecar import read_photo_taken_time
from .verifier import MetadataVerifier
from .writer import MetadataWriter

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    NO_SIDECAR = 'no_sidecar'
    NO_TIMESTAMP = 'no_timestamp'
    UNCHANGED = 'unchanged'
    NEEDS_UPDATE = 'needs_update'
    UPDATED = 'updated'
    QUARANTINED = 'quarantined'


@dataclass
class FileOutcome:
    """What happened to one media file."""
    media_path: Path
    status: OutcomeStatus
    sidecar_path: Optional[Path] = None
    strategy: Optional[str] = None
    photo_taken_time: Optional[datetime] = None
    error_category: Optional[str] = None
    error_message: Optional[str] = None


class MediaFileProcessor:
    """Bundles the resolver and the metadata collaborators for repeated use.

    Args:
        writer: Metadata writer
        verifier: Metadata verifier
        error_dir: Where failed files are copied; None disables quarantining
        resolver: Companion resolver
        dry_run: Report files needing an update without writing them
    """

    def __init__(
        self,
        writer: MetadataWriter,
        verifier: MetadataVerifier,
        error_dir: Optional[Path] = None,
        resolver: Optional[CompanionResolver] = None,
        dry_run: bool = False,
    ) -> None:
        self.writer = writer
        self.verifier = verifier
        self.error_dir = error_dir
        self.resolver = resolver or CompanionResolver()
        self.dry_run = dry_run

    def process(self, media_path: Path) -> FileOutcome:
        """Fix one media file's capture time. Never raises for per-file failures."""
        media_path = Path(media_path)
        with LogContext(media=str(media_path)):
            return self._process(media_path)

    def _process(self, media_path: Path) -> FileOutcome:
        resolution = self.resolver.resolve(media_path)
        if not resolution.found:
            logger.info(f"No sidecar: {{'media': {media_path.name!r}}}")
            return FileOutcome(media_path, OutcomeStatus.NO_SIDECAR)

        sidecar_path = resolution.sidecar_path
        taken = read_photo_taken_time(sidecar_path)
        outcome = FileOutcome(
            media_path,
            OutcomeStatus.NO_TIMESTAMP,
            sidecar_path=sidecar_path,
            strategy=resolution.strategy,
            photo_taken_time=taken,
        )
        if taken is None:
            return outcome

        if self.verifier.matches(media_path, taken):
            outcome.status = OutcomeStatus.UNCHANGED
            return outcome

        if self.dry_run:
            outcome.status = OutcomeStatus.NEEDS_UPDATE
            return outcome

        try:
            written = self.writer.write(media_path, taken)
        except MetadataWriteError as e:
            logger.error(f"Capture time not written: {{'media': {str(media_path)!r}, 'error': {e.message!r}}}")
            if self.error_dir is not None:
                quarantine_files(self.error_dir, media_path, sidecar_path)
            outcome.status = OutcomeStatus.QUARANTINED
            outcome.error_category = classify_error(e)
            outcome.error_message = e.message
            return outcome

        outcome.status = OutcomeStatus.UPDATED if written else OutcomeStatus.UNCHANGED
        return outcome


def process_media_file(
    media_path: Path,
    writer: MetadataWriter,
    verifier: MetadataVerifier,
    error_dir: Optional[Path] = None,
    dry_run: bool = False,
) -> FileOutcome:
    """One-shot convenience wrapper around ``MediaFileProcessor``."""
    return MediaFileProcessor(writer, verifier, error_dir, dry_run=dry_run).process(media_path)
