#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Verifier Agent - Reads written files back and checks their tags.

Responsibilities:
- Confirm artist/title/album tags were written
- Confirm the cover art stream was attached when one was muxed in
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import mutagen
from mutagen.id3 import ID3, ID3NoHeaderError

from .base import BaseAgent


@dataclass
class VerifyResult:
    """Result of checking one output file"""
    path: str
    ok: bool = False
    has_cover: bool = False
    tags: Dict[str, Optional[str]] = field(default_factory=dict)
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "ok": self.ok,
            "has_cover": self.has_cover,
            "tags": self.tags,
            "issues": self.issues
        }


class VerifierAgent(BaseAgent):
    """
    Verifier agent for freshly muxed output files.
    """

    @property
    def name(self) -> str:
        return "Verifier"

    def process(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Verify a single output file.

        Args:
            item: Dictionary with 'path', 'artist', 'title', 'album' and
                  'expect_cover' keys

        Returns:
            Verification results
        """
        path = item.get('path')
        if not path:
            return {"status": "error", "error": "No path provided"}

        result = self.verify_file(
            path,
            artist=item.get('artist'),
            title=item.get('title'),
            album=item.get('album'),
            expect_cover=item.get('expect_cover', False)
        )

        return {
            "status": "success" if result.ok else "unverified",
            "path": path,
            "issues": result.issues,
            "data": result.to_dict()
        }

    def verify_file(self, path: str, artist: Optional[str] = None, title: Optional[str] = None,
                    album: Optional[str] = None, expect_cover: bool = False) -> VerifyResult:
        result = VerifyResult(path=path)

        if not os.path.exists(path):
            result.issues.append("Output file missing")
            return result

        if path.lower().endswith('.mp3'):
            self._read_id3(path, result)
        else:
            self._read_generic(path, result)

        expected = {'artist': artist, 'title': title, 'album': album}
        for key, want in expected.items():
            have = result.tags.get(key)
            if not have:
                result.issues.append(f"Missing {key} tag")
            elif want is not None and have != want:
                result.issues.append(f"{key} tag is '{have}', expected '{want}'")

        if expect_cover and not result.has_cover:
            result.issues.append("Cover art not embedded")

        result.ok = not result.issues
        if result.ok:
            self.log_debug(f"Verified {os.path.basename(path)}")
        return result

    def _read_id3(self, path: str, result: VerifyResult) -> None:
        try:
            tags = ID3(path)
        except ID3NoHeaderError:
            return
        except mutagen.MutagenError as e:
            result.issues.append(f"Unreadable tags: {e}")
            return

        for key, frame_id in (('artist', 'TPE1'), ('title', 'TIT2'), ('album', 'TALB')):
            frame = tags.get(frame_id)
            result.tags[key] = str(frame.text[0]) if frame and frame.text else None

        result.has_cover = bool(tags.getall('APIC'))

    def _read_generic(self, path: str, result: VerifyResult) -> None:
        try:
            audio = mutagen.File(path, easy=True)
        except mutagen.MutagenError as e:
            result.issues.append(f"Unreadable tags: {e}")
            return

        if audio is None or audio.tags is None:
            return

        for key in ('artist', 'title', 'album'):
            values = audio.tags.get(key)
            result.tags[key] = values[0] if values else None

        # Easy wrappers hide pictures; reopen for the raw tag set
        raw = mutagen.File(path)
        pictures = getattr(raw, 'pictures', None)
        result.has_cover = bool(pictures) or bool(raw is not None and raw.tags and 'covr' in raw.tags)
