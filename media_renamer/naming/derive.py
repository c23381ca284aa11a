"""
Destination file name derivation.

Everything here is a pure function of a TagRecord plus the timezone and
prefix: no filesystem access, no clock, no hidden state. The same inputs
always produce the same name.
"""
import os
import re
from datetime import datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from .. import config
from ..exceptions import NoTimestampError, TimestampFormatError
from ..models import DerivedName, TagRecord

UTC = ZoneInfo("UTC")

# strptime alone accepts single-digit fields; exif dates are fixed width.
# A fractional-seconds suffix is tolerated and dropped.
_EXIF_DATE_RE = re.compile(r"(\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2})(?:\.\d+)?")


def resolve_timestamp(tags: TagRecord, timezone: tzinfo = UTC) -> datetime:
    """
    Parses the highest-priority date tag as wall-clock time in `timezone`.
    """
    value = tags.captured_at
    if not value:
        raise NoTimestampError("no date tag found")

    match = _EXIF_DATE_RE.fullmatch(value)
    if not match:
        raise TimestampFormatError(f"cannot parse date {value!r}")
    try:
        naive = datetime.strptime(match.group(1), config.EXIF_DATE_FORMAT)
    except ValueError as e:
        # e.g. exiftool's "0000:00:00 00:00:00" placeholder
        raise TimestampFormatError(f"cannot parse date {value!r}: {e}") from e

    return naive.replace(tzinfo=timezone)


def format_timestamp(ts: datetime) -> str:
    """RFC 3339 rendering: 2016-05-24T22:14:54Z or 2016-05-24T22:14:54+02:00."""
    text = ts.isoformat(timespec="seconds")
    if ts.utcoffset() == timedelta(0):
        text = text[:-len("+00:00")] + "Z"
    return text


def resolve_device(tags: TagRecord) -> str:
    return tags.device_model or tags.device_info


def file_number_from_name(name: str) -> str:
    """
    Returns the trailing run of decimal digits of the name without its
    extension: 'DSCF6165.JPG' -> '6165', '100-7429.jpg' -> '7429', 'a.jpg' -> ''.
    """
    base, _ = os.path.splitext(name)
    end = len(base)
    start = end
    while start > 0 and base[start - 1].isdecimal():
        start -= 1
    return base[start:end]


def resolve_file_number(tags: TagRecord, file_name: str = "") -> str:
    if tags.file_number:
        return tags.file_number
    return file_number_from_name(tags.source_file_name or file_name)


def sanitize(base: str) -> str:
    """Makes a base name safe on every filesystem we care about."""
    base = base.replace(":", ".")   # illegal on Windows/HFS
    base = base.replace(" ", "")
    base = base.replace("\x00", "")
    return base


def derive_name(tags: TagRecord,
                timezone: tzinfo = UTC,
                prefix: str = "",
                file_name: str = "") -> DerivedName:
    """
    Builds '[prefix]_<timestamp>_[device]_[number].<ext>' from the tags.

    `file_name` is the on-disk name, used when exiftool reported no FileName.

    Raises:
        NoTimestampError: none of the date tags is set.
        TimestampFormatError: the selected date tag is malformed.
    """
    timestamp = resolve_timestamp(tags, timezone)

    fields = [prefix, format_timestamp(timestamp), resolve_device(tags), resolve_file_number(tags, file_name)]
    base = sanitize(config.NAME_SEPARATOR.join(f for f in fields if f))

    _, ext = os.path.splitext(tags.source_file_name or file_name)
    return DerivedName(name=base + ext.lower(), timestamp=timestamp)
