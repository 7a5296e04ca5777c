#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Beatmap descriptor parser.

Reads the loosely structured .osu text format. Only three metadata keys
and the first background image object are of interest; every other line
is ignored so newer format versions keep working.

Example:
    [Metadata]
    Title:Foo
    Artist:Bar
    ...
    [Events]
    0,0,"bg.jpg",0,0
"""

import re
from typing import Dict, Optional

from .base import BeatmapMetadata, DescriptorError


REQUIRED_KEYS = ('audiofilename', 'title', 'artist')

METADATA_LINE = re.compile(
    r'^\s*(AudioFilename|Title|Artist)\s*:\s*(.*?)\s*$',
    re.IGNORECASE
)

# <int>,<int>[,<int>],"<name>.(png|jpg|jpeg)"[,<int>,<int>]
IMAGE_OBJECT_LINE = re.compile(
    r'^-?\d+,-?\d+(?:,-?\d+)?,"(.*\.(?:png|jpe?g))"(?:,-?\d+,-?\d+)?\s*$',
    re.IGNORECASE
)


def scan_metadata(text: str) -> Dict[str, str]:
    """
    Collect the wanted Key: Value pairs from descriptor text.

    Keys are lower-cased, values trimmed. Last occurrence wins.
    """
    fields: Dict[str, str] = {}
    for line in text.splitlines():
        match = METADATA_LINE.match(line)
        if match:
            fields[match.group(1).lower()] = match.group(2)
    return fields


def find_thumbnail(text: str) -> Optional[str]:
    """Return the filename from the first image object line, if any"""
    for line in text.splitlines():
        match = IMAGE_OBJECT_LINE.match(line)
        if match:
            return match.group(1)
    return None


def parse_beatmap(text: str) -> BeatmapMetadata:
    """
    Parse raw descriptor text.

    Args:
        text: Full contents of one .osu file

    Returns:
        BeatmapMetadata with the thumbnail set when an image object was found

    Raises:
        DescriptorError: if AudioFilename, Title or Artist is missing or empty
    """
    fields = scan_metadata(text)

    missing = [key for key in REQUIRED_KEYS if not fields.get(key)]
    if missing:
        raise DescriptorError(f"Missing required field(s): {', '.join(missing)}", missing)

    return BeatmapMetadata(
        audio_filename=fields['audiofilename'],
        title=fields['title'],
        artist=fields['artist'],
        thumbnail=find_thumbnail(text)
    )
