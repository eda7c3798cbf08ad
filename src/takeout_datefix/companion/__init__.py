"""Pairing Google Takeout media files with their JSON sidecars and fixing capture dates."""

from .resolver import CompanionResolver, Resolution, resolve_companion
from .writer import MetadataWriter
from .verifier import MetadataVerifier
from .processor import MediaFileProcessor, FileOutcome, OutcomeStatus, process_media_file
from .config import DateFixConfig, ExifToolConfig

__all__ = [
    'CompanionResolver',
    'Resolution',
    'resolve_companion',
    'MetadataWriter',
    'MetadataVerifier',
    'MediaFileProcessor',
    'FileOutcome',
    'OutcomeStatus',
    'process_media_file',
    'DateFixConfig',
    'ExifToolConfig',
]
