"""Availability check for the external exiftool binary."""

import logging
import shutil
from typing import Dict

from takeout_datefix.common.errors import ToolNotFoundError

logger = logging.getLogger(__name__)

EXIFTOOL_INSTALL_INSTRUCTIONS = (
    "ExifTool reads and writes the capture dates. Install it:\n"
    "  - Windows: Download from https://exiftool.org/\n"
    "  - macOS: brew install exiftool\n"
    "  - Linux: sudo apt-get install libimage-exiftool-perl"
)


def check_tool_availability(executable: str = 'exiftool') -> Dict[str, bool]:
    """
    Check which external tools can be found on PATH.

    Returns:
        Dictionary mapping tool name to availability, currently only 'exiftool'
    """
    return {'exiftool': shutil.which(executable) is not None}


def check_required_tools(use_exiftool: bool = True, executable: str = 'exiftool') -> None:
    """
    Fail early when exiftool is enabled in config but missing.

    Raises:
        ToolNotFoundError: If exiftool is enabled but not found
    """
    if not use_exiftool:
        logger.info("Tool disabled: {'tool': 'exiftool', 'reason': 'config'}")
        return

    if check_tool_availability(executable)['exiftool']:
        logger.info(f"Tool available: {{'tool': 'exiftool', 'executable': {executable!r}}}")
        return

    logger.error(f"Tool not found: {{'tool': 'exiftool', 'executable': {executable!r}}}")
    raise ToolNotFoundError(
        f"Tool 'exiftool' is enabled in config but not available.\n\n{EXIFTOOL_INSTALL_INSTRUCTIONS}",
        executable=executable,
    )
