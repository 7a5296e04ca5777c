"""Shared pytest fixtures for osu-extract tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from orchestrator.config import ConfigManager, RunConfig
from orchestrator.reporter import Level, Reporter
from utilities.tools import ExternalTools, ToolResult


# ============================================================================
# Beatmap Builders
# ============================================================================


def beatmap_text(title="Foo", artist="Bar", audio="audio.mp3", image="bg.jpg", extra=""):
    """Return a small but realistic .osu descriptor."""
    lines = [
        "osu file format v14",
        "",
        "[General]",
        f"AudioFilename: {audio}",
        "AudioLeadIn: 0",
        "PreviewTime: 51234",
        "Mode: 0",
        "",
        "[Metadata]",
        f"Title:{title}",
        f"TitleUnicode:{title}",
        f"Artist:{artist}",
        f"ArtistUnicode:{artist}",
        "Creator:mapper",
        "Version:Hard",
        "",
        "[Events]",
        "//Background and Video events",
    ]
    if image:
        lines.append(f'0,0,"{image}",0,0')
    lines += [
        "//Break Periods",
        "2,51000,53000",
        "",
        "[TimingPoints]",
        "1234,333.333333333333,4,2,1,60,1,0",
        "",
        "[HitObjects]",
        "256,192,1234,5,0,0:0:0:0:",
        "100,100,1567,2,0,B|200:200|250:200,1,140",
    ]
    if extra:
        lines.append(extra)
    return "\n".join(lines) + "\n"


@pytest.fixture
def songs_root(tmp_path: Path) -> Path:
    root = tmp_path / "Songs"
    root.mkdir()
    return root


@pytest.fixture
def make_song(songs_root: Path):
    """Create a song folder with a descriptor, audio and optional image."""

    def _make(folder, title="Foo", artist="Bar", audio="audio.mp3", image="bg.jpg",
              descriptor="song [Hard].osu", text=None, with_files=True):
        path = songs_root / folder
        path.mkdir(parents=True, exist_ok=True)
        body = text if text is not None else beatmap_text(title, artist, audio, image)
        (path / descriptor).write_text(body, encoding="utf-8")
        if with_files:
            (path / audio).write_bytes(b"ID3fake-audio")
            if image:
                (path / image).write_bytes(b"fake-image")
        return path

    return _make


# ============================================================================
# Pipeline Fixtures
# ============================================================================


class FakeTools(ExternalTools):
    """Records commands and writes a placeholder to each destination."""

    def __init__(self, fail=()):
        super().__init__(convert_cmd="convert", ffmpeg_cmd="ffmpeg", timeout=5)
        self.calls = []
        self.fail = set(fail)

    def run(self, cmd):
        self.calls.append(list(cmd))
        if cmd[0] in self.fail:
            return ToolResult(False, cmd, 1, f"{cmd[0]} exited with 1: boom")
        with open(cmd[-1], "wb") as f:
            f.write(f"{cmd[0]} output".encode())
        return ToolResult(True, cmd, 0)

    def commands(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_tools() -> FakeTools:
    return FakeTools()


@pytest.fixture
def config(tmp_path: Path) -> ConfigManager:
    return ConfigManager(str(tmp_path / "missing.yaml"))


@pytest.fixture
def reporter() -> Reporter:
    return Reporter(Level.DEBUG)


@pytest.fixture
def make_run(tmp_path: Path, songs_root: Path, config: ConfigManager):
    def _make(**overrides):
        kwargs = {
            "input_dir": str(songs_root),
            "output_dir": str(tmp_path / "output"),
            "cache_dir": str(tmp_path / "cache"),
        }
        kwargs.update(overrides)
        return RunConfig.from_config(config, **kwargs)

    return _make
