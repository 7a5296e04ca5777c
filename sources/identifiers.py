#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Song identifier resolution from folder names.
"""

import re
from typing import Dict, Optional, Tuple


FOLDER_ID_PATTERN = re.compile(r'^(\d+)')

# Above any beatmap set id the game hands out
FALLBACK_ID_START = 2 ** 30


class IdentifierResolver:
    """
    Assigns a unique id per song folder.

    Folders named "<digits> Artist - Title" keep their digit run as id.
    Anything else, or a digit run already taken, gets the next fallback id.
    """

    def __init__(self, fallback_start: int = FALLBACK_ID_START):
        self._next_fallback = fallback_start
        # id -> folder it was issued to
        self._owners: Dict[str, str] = {}

    def resolve(self, folder_name: str) -> Tuple[str, bool]:
        """
        Resolve an id for a folder.

        Args:
            folder_name: Base name of the song folder

        Returns:
            (song_id, is_fallback)
        """
        match = FOLDER_ID_PATTERN.match(folder_name)
        if match and match.group(1) not in self._owners:
            song_id = match.group(1)
            self._owners[song_id] = folder_name
            return song_id, False

        return self._fallback(folder_name), True

    def collision(self, folder_name: str) -> Optional[Tuple[str, str]]:
        """
        Return (prefix, owner folder) when the folder's digit prefix is
        already issued, None otherwise. Call it after resolve() handed out
        a fallback id.
        """
        match = FOLDER_ID_PATTERN.match(folder_name)
        if not match:
            return None
        owner = self._owners.get(match.group(1))
        if owner is None:
            return None
        return match.group(1), owner

    def _fallback(self, folder_name: str) -> str:
        song_id = str(self._next_fallback)
        while song_id in self._owners:
            self._next_fallback += 1
            song_id = str(self._next_fallback)
        self._next_fallback += 1
        self._owners[song_id] = folder_name
        return song_id

    @property
    def issued_count(self) -> int:
        return len(self._owners)
