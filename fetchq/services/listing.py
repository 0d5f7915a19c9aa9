"""Directory listing parser.

Parses the output of ``cls --date --time-style='%F %T %z %Z'``, one directory
per line::

    2016-01-02 15:04:05 +0100 CET /misc/The.Wire.S01E01/
"""
from __future__ import annotations

import re
from datetime import datetime

from ..core.errors import ListingParseError
from ..core.models import DirectoryEntry

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"
ZONE_PATTERN = re.compile(r"^(?:[A-Za-z]{1,6}|[+-]\d{2,4})$")


def parse_timestamp(date: str, time: str, offset: str, zone: str) -> datetime:
    """Parse the four timestamp tokens of a listing line."""
    if not ZONE_PATTERN.match(zone):
        raise ListingParseError(f"invalid zone abbreviation: {zone!r}")
    try:
        return datetime.strptime(f"{date} {time} {offset}", TIMESTAMP_FORMAT)
    except ValueError as e:
        raise ListingParseError(
            f"invalid timestamp {' '.join((date, time, offset, zone))!r}: {e}"
        ) from e


def parse_listing_line(line: str) -> DirectoryEntry:
    """Parse one listing line into a DirectoryEntry.

    The name is the remainder of the line after the timestamp, so it may
    contain spaces. A trailing ``@`` marks a symlink.
    """
    words = line.strip().split(None, 4)
    if len(words) != 5:
        raise ListingParseError(f"expected 5 words, found {len(words)}: {line!r}")
    created = parse_timestamp(*words[:4])
    name = words[4]
    is_symlink = name.endswith("@")
    name = name.rstrip("@/")
    if not name:
        raise ListingParseError(f"empty name: {line!r}")
    return DirectoryEntry(path=name, created=created, is_symlink=is_symlink)


def parse_listing(text: str) -> list[DirectoryEntry]:
    """Parse every non-blank line of a listing.

    The first malformed line aborts the whole listing.
    """
    return [parse_listing_line(line) for line in text.splitlines() if line.strip()]
