#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Scanner Agent - Builds the song collection from an osu! Songs tree.

Responsibilities:
- Traverse directory structure in a stable, sorted order
- Pick one descriptor per song folder (first seen wins)
- Read descriptors concurrently, parse once all reads have settled
- Resolve song ids and relative asset paths
"""

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sources.base import DescriptorError, SongRecord
from sources.beatmap import parse_beatmap
from sources.identifiers import IdentifierResolver

from .base import BaseAgent


@dataclass
class ScanResult:
    """Finished song collection plus scan statistics"""
    root: str
    records: Mapping[str, SongRecord]
    stats: Dict[str, int] = field(default_factory=dict)
    failures: List[Dict[str, str]] = field(default_factory=list)

    @property
    def record_count(self) -> int:
        return len(self.records)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "root": self.root,
            "record_count": self.record_count,
            "stats": dict(self.stats),
            "failures": list(self.failures),
            "records": [r.to_dict() for r in self.records.values()]
        }


class ScannerAgent(BaseAgent):
    """
    Scanner agent for discovering song folders.

    Walks the input root, reads each folder's first descriptor and turns it
    into a SongRecord keyed by song id.
    """

    def __init__(self, config, reporter=None):
        super().__init__(config, reporter)
        self.extension = config.descriptor_extension.lower()
        self.workers = max(1, config.scan_workers)

    @property
    def name(self) -> str:
        return "Scanner"

    def process(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Scan one input root.

        Args:
            item: Dictionary with 'path' key pointing to the Songs folder

        Returns:
            Scan results including the finished ScanResult under 'data'
        """
        root = item.get('path')
        if not root:
            return {"status": "error", "error": "No path provided"}

        try:
            scan = self.build_collection(root)
        except OSError as e:
            self.log_error(f"Error scanning {root}: {e}")
            return {"status": "error", "path": root, "error": str(e)}

        return {
            "status": "success",
            "path": root,
            "record_count": scan.record_count,
            "data": scan
        }

    def build_collection(self, root: str) -> ScanResult:
        """
        Build the immutable id -> SongRecord mapping for a tree.

        Args:
            root: Directory to walk

        Returns:
            ScanResult with records ordered by numeric id
        """
        stats = {
            "descriptors_found": 0,
            "folders": 0,
            "records": 0,
            "parse_failures": 0,
            "duplicate_descriptors": 0,
            "fallback_ids": 0,
            "id_collisions": 0,
            "missing_thumbnails": 0
        }
        failures: List[Dict[str, str]] = []

        descriptors = self._find_descriptors(root, stats)
        self.log_verbose(f"Found {len(descriptors)} song folders under {root}")

        # Reads run concurrently; map() only returns once every read settled
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            contents = list(pool.map(self._read_descriptor, descriptors))

        resolver = IdentifierResolver()
        records: Dict[str, SongRecord] = {}

        for descriptor, (text, read_error) in zip(descriptors, contents):
            folder = os.path.dirname(descriptor)

            if read_error:
                stats["parse_failures"] += 1
                failures.append({"path": descriptor, "error": read_error})
                self.log_error(f"Cannot read {descriptor}: {read_error}")
                continue

            record = self._build_record(descriptor, folder, text, resolver, stats, failures)
            if record:
                records[record.song_id] = record

        stats["records"] = len(records)
        ordered = dict(sorted(records.items(), key=lambda kv: int(kv[0])))

        return ScanResult(
            root=root,
            records=MappingProxyType(ordered),
            stats=stats,
            failures=failures
        )

    def _find_descriptors(self, root: str, stats: Dict[str, int]) -> List[str]:
        """Return the first descriptor of every folder, in sorted walk order"""
        if not os.path.isdir(root):
            raise FileNotFoundError(f"Not a directory: {root}")

        seen_folders = set()
        descriptors = []

        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for filename in sorted(filenames):
                if os.path.splitext(filename)[1].lower() != self.extension:
                    continue

                stats["descriptors_found"] += 1
                if dirpath in seen_folders:
                    stats["duplicate_descriptors"] += 1
                    self.log_debug(f"Ignoring extra descriptor: {os.path.join(dirpath, filename)}")
                    continue

                seen_folders.add(dirpath)
                descriptors.append(os.path.abspath(os.path.join(dirpath, filename)))

        stats["folders"] = len(seen_folders)
        return descriptors

    def _read_descriptor(self, path: str) -> Tuple[Optional[str], Optional[str]]:
        try:
            with open(path, 'r', encoding='utf-8-sig', errors='replace') as f:
                return f.read(), None
        except OSError as e:
            return None, str(e)

    def _build_record(
        self,
        descriptor: str,
        folder: str,
        text: str,
        resolver: IdentifierResolver,
        stats: Dict[str, int],
        failures: List[Dict[str, str]]
    ) -> Optional[SongRecord]:
        try:
            metadata = parse_beatmap(text)
        except DescriptorError as e:
            stats["parse_failures"] += 1
            failures.append({"path": descriptor, "error": str(e)})
            self.log_error(f"Skipping {descriptor}: {e}")
            return None

        folder_name = os.path.basename(folder)
        song_id, is_fallback = resolver.resolve(folder_name)
        if is_fallback:
            stats["fallback_ids"] += 1
            collision = resolver.collision(folder_name)
            if collision:
                stats["id_collisions"] += 1
                prefix, owner = collision
                self.log_verbose(f"Prefix {prefix} already used by '{owner}', assigned {song_id} to '{folder_name}'")
            else:
                self.log_verbose(f"No usable id prefix in '{folder_name}', assigned {song_id}")

        thumbnail_path = None
        if metadata.thumbnail:
            thumbnail_path = os.path.join(folder, metadata.thumbnail)
        else:
            stats["missing_thumbnails"] += 1
            self.log_debug(f"No thumbnail: {descriptor}")

        return SongRecord(
            song_id=song_id,
            audio_path=os.path.join(folder, metadata.audio_filename),
            title=metadata.title,
            artist=metadata.artist,
            thumbnail_path=thumbnail_path,
            descriptor_path=descriptor,
            folder=folder
        )
