"""Command-line entry point operating on explicitly listed media files."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from takeout_datefix.common import ConfigLoader, DateFixError, setup_logging_from_config
from .config import DateFixConfig
from .exiftool import ExifTool
from .processor import MediaFileProcessor
from .resolver import CompanionResolver
from .tool_checker import check_required_tools
from .verifier import MetadataVerifier
from .writer import MetadataWriter

APP_NAME = "takeout-datefix"

logger = logging.getLogger(__package__ or __name__)


def resolve_command(media_paths: Sequence[Path]) -> int:
    """Print ``media<TAB>sidecar`` (or ``-``) for every media path."""
    resolver = CompanionResolver()
    for media_path in media_paths:
        resolution = resolver.resolve(media_path)
        sidecar = str(resolution.sidecar_path) if resolution.found else "-"
        print(f"{media_path}\t{sidecar}")
    return 0


def fix_command(
    config: DateFixConfig,
    media_paths: Sequence[Path],
    error_dir_override: Optional[Path] = None,
    dry_run: bool = False,
) -> int:
    """Fix capture times of the given files.

    Returns:
        Exit code; per-file failures are reported, not fatal
    """
    exiftool_config = config.exiftool
    try:
        check_required_tools(use_exiftool=exiftool_config.enabled, executable=exiftool_config.executable)
    except DateFixError as e:
        logger.error(e.message)
        return 2

    exiftool = ExifTool(exiftool_config.executable, exiftool_config.timeout_seconds)
    processor = MediaFileProcessor(
        writer=MetadataWriter(exiftool, delete_backup=exiftool_config.delete_backup),
        verifier=MetadataVerifier(exiftool, use_exiftool=exiftool_config.enabled),
        error_dir=error_dir_override or config.error_dir_path,
        # Without exiftool nothing can be written
        dry_run=dry_run or not exiftool_config.enabled,
    )

    counts: dict[str, int] = {}
    for media_path in media_paths:
        outcome = processor.process(media_path)
        counts[outcome.status.value] = counts.get(outcome.status.value, 0) + 1
        print(f"{media_path}\t{outcome.status.value}")

    logger.info(f"Run complete: {counts}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Restore capture dates of Google Takeout media files from their JSON sidecars"
    )
    parser.add_argument("media", nargs="+", type=Path, help="Media files to process")
    parser.add_argument("--config", type=Path, help="Path to a TOML config file")
    parser.add_argument(
        "--error-dir",
        type=Path,
        help="Copy files that fail to update here (overrides config)"
    )
    parser.add_argument(
        "--resolve-only",
        action="store_true",
        help="Only print the sidecar each media file resolves to"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report files whose capture time differs without writing"
    )
    args = parser.parse_args(argv)

    loader = ConfigLoader(DateFixConfig, app_name=APP_NAME)
    try:
        config = loader.load(config_path=args.config)
    except DateFixError as e:
        print(e.message, file=sys.stderr)
        return 2

    setup_logging_from_config(config.logging)

    if args.resolve_only:
        return resolve_command(args.media)
    return fix_command(config, args.media, error_dir_override=args.error_dir, dry_run=args.dry_run)


if __name__ == "__main__":
    sys.exit(main())
