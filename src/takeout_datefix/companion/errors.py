"""Error classes for companion resolution and metadata rewriting."""

from takeout_datefix.common import DateFixError
from takeout_datefix.common.errors import ParseError, ToolNotFoundError


class CompanionError(DateFixError):
    """Base error for companion processing."""
    pass


class MetadataReadError(CompanionError):
    """Embedded metadata could not be read."""
    pass


class MetadataWriteError(CompanionError):
    """Embedded metadata could not be written."""
    pass


def classify_error(exception: Exception) -> str:
    """
    Classify an exception into an outcome category.

    Args:
        exception: The exception to classify

    Returns:
        One of 'write', 'read', 'tool_missing', 'permission',
        'parse', 'io' or 'unknown'
    """
    # Wrapped errors are classified by their cause first
    cause = exception.__cause__
    if isinstance(exception, (MetadataWriteError, MetadataReadError)) and cause is not None:
        category = classify_error(cause)
        if category != 'unknown':
            return category

    if isinstance(exception, ToolNotFoundError):
        return 'tool_missing'
    elif isinstance(exception, MetadataWriteError):
        return 'write'
    elif isinstance(exception, MetadataReadError):
        return 'read'
    elif isinstance(exception, PermissionError):
        return 'permission'
    elif isinstance(exception, (ParseError, ValueError, KeyError)):
        return 'parse'
    elif isinstance(exception, OSError):
        return 'io'
    else:
        return 'unknown'
