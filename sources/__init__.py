# Beatmap Sources
# Descriptor parsing and song identifier resolution

from .base import BeatmapMetadata, DescriptorError, SongRecord
from .beatmap import parse_beatmap
from .identifiers import IdentifierResolver, FALLBACK_ID_START

__all__ = [
    'BeatmapMetadata',
    'DescriptorError',
    'SongRecord',
    'parse_beatmap',         # .osu text -> BeatmapMetadata
    'IdentifierResolver',    # folder name -> song id
    'FALLBACK_ID_START'
]
