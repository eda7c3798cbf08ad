"""Conversions between UTC instants and EXIF date strings."""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

EXIF_DATETIME_RE = re.compile(
    r'^(?P<date>\d{4}[:-]\d{2}[:-]\d{2})[ T]'
    r'(?P<time>\d{2}:\d{2}:\d{2})'
    r'(?P<fraction>\.\d+)?'
    r'(?P<offset>Z|[+-]\d{2}:?\d{2})?$'
)
OFFSET_RE = re.compile(r'^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$')


def to_utc(value: datetime) -> datetime:
    """Make ``value`` an aware UTC datetime; naive input is taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_exif_timestamp(value: datetime) -> str:
    """Render an instant the way ExifTool is asked to write it.

    Always UTC with an explicit ``+00:00`` offset, whole seconds:

    >>> format_exif_timestamp(datetime(2021, 1, 1, tzinfo=timezone.utc))
    '2021:01:01 00:00:00+00:00'
    """
    return to_utc(value).strftime('%Y:%m:%d %H:%M:%S') + '+00:00'


def _parse_offset(offset: str) -> Optional[timezone]:
    if offset == 'Z':
        return timezone.utc
    match = OFFSET_RE.match(offset)
    if match is None:
        return None
    delta = timedelta(hours=int(match.group('hours')), minutes=int(match.group('minutes')))
    return timezone(-delta if match.group('sign') == '-' else delta)


def parse_exif_datetime(value: str, offset: Optional[str] = None) -> Optional[datetime]:
    """
    Parse an EXIF/ExifTool date string into an aware UTC datetime.

    Accepts "2020:01:01 12:00:00", "2020:01:01 12:00:00+02:00" and ISO-style
    "2020-01-01T12:00:00Z". An offset embedded in ``value`` wins over the
    separate ``offset`` (OffsetTimeOriginal); with neither, UTC is assumed
    because that is how the writer stores it.

    Returns:
        UTC datetime, or None for empty or zeroed ("0000:00:00 00:00:00") values
    """
    if not value:
        return None
    match = EXIF_DATETIME_RE.match(str(value).strip())
    if match is None:
        return None

    date_part = match.group('date').replace(':', '-')
    if date_part.startswith('0000'):
        return None

    try:
        parsed = datetime.fromisoformat(f"{date_part}T{match.group('time')}")
    except ValueError:
        return None

    if match.group('fraction'):
        micros = int((match.group('fraction')[1:] + '000000')[:6])
        parsed = parsed.replace(microsecond=micros)

    tz = None
    if match.group('offset'):
        tz = _parse_offset(match.group('offset'))
    elif offset:
        tz = _parse_offset(offset.strip())

    return to_utc(parsed.replace(tzinfo=tz or timezone.utc))


def same_instant(a: Optional[datetime], b: Optional[datetime]) -> bool:
    """Exact equality of two instants, independent of how their zone is expressed."""
    if a is None or b is None:
        return False
    return to_utc(a) == to_utc(b)
