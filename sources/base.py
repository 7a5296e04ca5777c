#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared data types for beatmap sources.
The scanner produces SongRecords, the pipeline consumes them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


class DescriptorError(ValueError):
    """Raised when a beatmap descriptor lacks a required field"""

    def __init__(self, message: str, missing: Optional[list] = None):
        super().__init__(message)
        self.missing = missing or []


@dataclass(frozen=True)
class BeatmapMetadata:
    """Fields parsed out of one descriptor file"""
    audio_filename: str
    title: str
    artist: str
    thumbnail: Optional[str] = None  # relative to the song folder


@dataclass(frozen=True)
class SongRecord:
    """One song folder, ready for the mux pipeline"""
    song_id: str
    audio_path: str
    title: str
    artist: str
    thumbnail_path: Optional[str] = None
    descriptor_path: Optional[str] = None
    folder: Optional[str] = None

    @property
    def has_thumbnail(self) -> bool:
        return self.thumbnail_path is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "song_id": self.song_id,
            "audio_path": self.audio_path,
            "title": self.title,
            "artist": self.artist,
            "thumbnail_path": self.thumbnail_path,
            "descriptor_path": self.descriptor_path,
            "folder": self.folder
        }
