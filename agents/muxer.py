#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Muxer Agent - Turns song records into tagged audio files.

Responsibilities:
- Decide skip/process from destination existence and overwrite policy
- Crop the background image into a square cover in the cache
- Mux audio + cover with ffmpeg and write ID3v2.3 tags into a temp
  file, moved onto the destination only once ffmpeg succeeded
- Skip a destination an earlier song of the same run already took
- Remove the cached cover once the mux is done
- Short-circuit everything external in dry-run mode
"""

import os
from typing import Any, Dict, Optional, Set

from orchestrator.config import RunConfig
from sources.base import SongRecord
from utilities.filenames import output_filename, strip_invalid_chars
from utilities.tools import ExternalTools

from .base import BaseAgent
from .verifier import VerifierAgent


class MuxAgent(BaseAgent):
    """
    Muxer agent, processes one SongRecord at a time.

    Every outcome is returned as a status dict so a failing song never
    stops the batch:
        processed, skipped, would_process, failed
    """

    def __init__(self, config, run: RunConfig, tools: Optional[ExternalTools] = None,
                 verifier: Optional[VerifierAgent] = None, reporter=None):
        super().__init__(config, reporter)
        self.run = run
        self.tools = tools or ExternalTools.from_config(config)
        self.verifier = verifier or VerifierAgent(config, self.reporter)
        # Destinations taken by earlier records of this run
        self._claimed: Set[str] = set()

    @property
    def name(self) -> str:
        return "Muxer"

    def reset(self) -> None:
        """Forget destinations claimed by a previous run"""
        self._claimed.clear()

    def destination_for(self, record: SongRecord) -> str:
        for field, value in (("artist", record.artist), ("title", record.title)):
            if not strip_invalid_chars(value).strip():
                self.log_warning(f"Empty {field} after removing invalid characters for {record.song_id}: {value!r}")
        return os.path.join(
            self.run.output_dir,
            output_filename(record.artist, record.title, record.audio_path)
        )

    def cache_path_for(self, record: SongRecord) -> str:
        return os.path.join(self.run.cache_dir, f"{record.song_id}.jpg")

    def temp_path_for(self, dest: str) -> str:
        """Sibling of dest that keeps its extension, so ffmpeg picks the same muxer"""
        base, ext = os.path.splitext(dest)
        return f"{base}.part{ext}"

    def process(self, item: SongRecord) -> Dict[str, Any]:
        """
        Process a single song record.

        Args:
            item: SongRecord from the scanner

        Returns:
            Result with 'status', 'destination' and a one-line 'message'
        """
        record = item
        dest = self.destination_for(record)
        label = f"{record.artist} - {record.title}"
        result = {
            "song_id": record.song_id,
            "destination": dest,
            "cover": False,
            "verified": None
        }

        if not self.run.overwrite:
            if os.path.exists(dest):
                result["status"] = "skipped"
                result["message"] = f"file {dest} already exists. Skipping ..."
                return result
            if dest in self._claimed:
                result["status"] = "skipped"
                result["message"] = f"file {dest} already written by an earlier song. Skipping ..."
                return result

        if self.run.dry_run:
            self._claimed.add(dest)
            cover_note = "with cover" if record.has_thumbnail else "without cover"
            result["status"] = "would_process"
            result["cover"] = record.has_thumbnail
            result["message"] = f"Would embed metadata ({cover_note}): {dest}"
            return result

        if not os.path.isfile(record.audio_path):
            return self._failed(result, label, f"Audio file not found: {record.audio_path}")

        cache_image = self.cache_path_for(record)
        temp = self.temp_path_for(dest)
        try:
            cover = self._prepare_cover(record, cache_image)
            if cover is None and self.run.require_cover:
                return self._failed(result, label, "No usable cover art")

            self.log_verbose(f"Embedding metadata: {dest}")
            # The temp file is ours; a leftover from an interrupted run is replaced
            mux = self.tools.mux(
                record.audio_path, temp,
                artist=record.artist,
                title=record.title,
                album=self.run.album,
                cover=cover,
                overwrite=True
            )
            if mux.success:
                os.replace(temp, dest)
        finally:
            self._remove_cache_image(cache_image)
            self._remove_partial(temp)

        if not mux.success:
            return self._failed(result, label, mux.error)

        self._claimed.add(dest)
        result["status"] = "processed"
        result["cover"] = cover is not None
        result["message"] = f"Embedded metadata: {label}"

        if self.run.verify:
            check = self.verifier.verify_file(
                dest,
                artist=record.artist,
                title=record.title,
                album=self.run.album,
                expect_cover=result["cover"]
            )
            result["verified"] = check.ok
            if not check.ok:
                self.log_warning(f"{os.path.basename(dest)}: {'; '.join(check.issues)}")

        return result

    def _prepare_cover(self, record: SongRecord, cache_image: str) -> Optional[str]:
        """Normalize the thumbnail into the cache, None when there is no usable cover"""
        if not record.has_thumbnail:
            self.log_verbose(f"No thumbnail for {record.song_id}, muxing without cover")
            return None

        if not os.path.isfile(record.thumbnail_path):
            self.log_warning(f"Thumbnail not found: {record.thumbnail_path}")
            return None

        converted = self.tools.normalize_thumbnail(
            record.thumbnail_path, cache_image, self.run.thumbnail_size
        )
        if not converted.success:
            self.log_warning(f"Thumbnail conversion failed for {record.song_id}: {converted.error}")
            return None

        self.log_verbose(f"Converted thumbnail {os.path.basename(cache_image)}.")
        return cache_image

    def _remove_cache_image(self, cache_image: str) -> None:
        try:
            os.remove(cache_image)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.log_warning(f"Could not remove cache image {cache_image}: {e}")

    def _remove_partial(self, temp: str) -> None:
        if os.path.exists(temp):
            try:
                os.remove(temp)
            except OSError as e:
                self.log_warning(f"Could not remove partial output {temp}: {e}")

    def _failed(self, result: Dict[str, Any], label: str, error: Optional[str]) -> Dict[str, Any]:
        self.log_error(f"{label}: {error}")
        result["status"] = "failed"
        result["error"] = error
        result["message"] = f"Failed: {label}"
        return result
