#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Wrappers around the external image and media tools.

ImageMagick `convert` crops thumbnails into square covers, `ffmpeg` muxes
the audio with the cover and writes ID3v2.3 tags. Every call returns a
ToolResult instead of raising so the caller decides what a failure means
for the current song.
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ToolResult:
    success: bool
    command: List[str]
    returncode: Optional[int] = None
    error: Optional[str] = None


class ExternalTools:
    """
    Invokes convert and ffmpeg, one process at a time.
    """

    def __init__(self, convert_cmd: str = 'convert', ffmpeg_cmd: str = 'ffmpeg',
                 timeout: int = 300):
        self.convert_cmd = convert_cmd
        self.ffmpeg_cmd = ffmpeg_cmd
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> 'ExternalTools':
        return cls(
            convert_cmd=config.get('tools.convert', 'convert'),
            ffmpeg_cmd=config.get('tools.ffmpeg', 'ffmpeg'),
            timeout=int(config.get('tools.timeout', 300))
        )

    def thumbnail_command(self, source: str, dest: str, size: int) -> List[str]:
        box = f"{size}x{size}"
        return [
            self.convert_cmd,
            '-define', f'jpeg:size={box}', source,
            '-thumbnail', f'{box}^',
            '-gravity', 'center',
            '-extent', box,
            '+profile', '*',
            dest
        ]

    def mux_command(self, audio: str, dest: str, artist: str, title: str, album: str,
                    cover: Optional[str] = None, overwrite: bool = False) -> List[str]:
        cmd = [self.ffmpeg_cmd, '-i', audio]
        if cover:
            cmd += ['-i', cover]
        cmd += ['-map', '0:0']
        if cover:
            cmd += ['-map', '1:0']
        cmd += ['-c', 'copy', '-id3v2_version', '3']
        if cover:
            cmd += [
                '-metadata:s:v', 'title=Album Cover',
                '-metadata:s:v', 'comment=Cover (Front)'
            ]
        cmd += [
            '-metadata', f'artist={artist}',
            '-metadata', f'title={title}',
            '-metadata', f'album={album}',
            '-y' if overwrite else '-n',
            dest
        ]
        return cmd

    def normalize_thumbnail(self, source: str, dest: str, size: int = 400) -> ToolResult:
        """Crop source image to a size x size JPEG at dest"""
        return self.run(self.thumbnail_command(source, dest, size))

    def mux(self, audio: str, dest: str, artist: str, title: str, album: str,
            cover: Optional[str] = None, overwrite: bool = False) -> ToolResult:
        """Copy the audio stream into dest with tags and optional cover"""
        return self.run(self.mux_command(audio, dest, artist, title, album, cover, overwrite))

    def run(self, cmd: List[str]) -> ToolResult:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False
            )
        except subprocess.TimeoutExpired:
            return ToolResult(False, cmd, error=f"{cmd[0]} timed out after {self.timeout}s")
        except OSError as e:
            return ToolResult(False, cmd, error=f"{cmd[0]} could not be started: {e}")

        if result.returncode != 0:
            stderr = (result.stderr or '').strip()
            error_msg = stderr.splitlines()[-1] if stderr else "Unknown error"
            return ToolResult(False, cmd, result.returncode,
                              f"{cmd[0]} exited with {result.returncode}: {error_msg[:200]}")

        return ToolResult(True, cmd, result.returncode)
