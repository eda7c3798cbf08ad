"""Reading the capture timestamp out of a Google Takeout JSON sidecar."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from takeout_datefix.common.errors import ParseError

logger = logging.getLogger(__name__)

# photoTakenTime is what the camera recorded; creationTime is the upload time
# and only used when the former is missing.
TIMESTAMP_FIELDS = ('photoTakenTime', 'creationTime')


def load_sidecar(sidecar_path: Path) -> Dict[str, Any]:
    """
    Load a sidecar JSON document.

    Raises:
        OSError: If the file cannot be read
        ParseError: If the content is not JSON or the top level is not an object
    """
    try:
        with open(sidecar_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Sidecar is not valid JSON: {sidecar_path}: {e}", path=str(sidecar_path)) from e
    if not isinstance(data, dict):
        raise ParseError(f"Sidecar is not a JSON object: {sidecar_path}", path=str(sidecar_path))
    return data


def _epoch_field(data: Dict[str, Any], field: str) -> Optional[datetime]:
    entry = data.get(field)
    if not isinstance(entry, dict) or 'timestamp' not in entry:
        return None
    # Takeout writes epoch seconds as a string: {"timestamp": "1609459200"}
    try:
        return datetime.fromtimestamp(int(entry['timestamp']), tz=timezone.utc)
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.debug(f"Unusable sidecar timestamp: {{'field': {field!r}, 'value': {entry['timestamp']!r}, 'error': {str(e)!r}}}")
        return None


def read_photo_taken_time(sidecar_path: Path) -> Optional[datetime]:
    """Extract the capture time from a sidecar.

    Args:
        sidecar_path: Path to the resolved sidecar

    Returns:
        Timezone-aware UTC datetime, or None when the sidecar is unreadable or
        carries no usable timestamp
    """
    try:
        data = load_sidecar(sidecar_path)
    except (ParseError, OSError) as e:
        logger.warning(f"Failed to read sidecar timestamp: {{'path': {str(sidecar_path)!r}, 'error': {str(e)!r}}}")
        return None

    for field in TIMESTAMP_FIELDS:
        value = _epoch_field(data, field)
        if value is not None:
            return value

    logger.debug(f"No timestamp in sidecar: {{'path': {str(sidecar_path)!r}}}")
    return None
