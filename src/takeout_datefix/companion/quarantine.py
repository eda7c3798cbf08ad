"""Copying files whose metadata could not be fixed into an error directory."""

import logging
import shutil
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def quarantine_files(
    error_dir: Path,
    media_path: Path,
    sidecar_path: Optional[Path] = None,
) -> List[Path]:
    """
    Copy a media file and its sidecar into ``error_dir``.

    Original filenames are kept; the originals are left in place. Failures
    are logged, never raised, so one bad file cannot stop a batch.

    Args:
        error_dir: Destination directory, created if missing
        media_path: Media file that failed
        sidecar_path: Resolved sidecar, copied only if it exists

    Returns:
        Paths of the copies that were made
    """
    error_dir = Path(error_dir)
    media_path = Path(media_path)
    sources = [media_path]
    if sidecar_path is not None and Path(sidecar_path).exists():
        sources.append(Path(sidecar_path))

    try:
        error_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create error directory: {{'path': {str(error_dir)!r}, 'error': {str(e)!r}}}")
        return []

    copied = []
    for source in sources:
        destination = error_dir / source.name
        try:
            shutil.copy2(source, destination)
        except OSError as e:
            logger.error(f"Quarantine copy failed: {{'source': {str(source)!r}, 'error': {str(e)!r}}}")
            continue
        copied.append(destination)

    logger.info(f"Files quarantined: {{'media': {media_path.name!r}, 'copied': {len(copied)}, 'error_dir': {str(error_dir)!r}}}")
    return copied
