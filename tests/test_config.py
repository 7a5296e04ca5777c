"""Tests for configuration loading and run settings."""

import os

import pytest

from orchestrator.config import ConfigManager, ConfigurationError, RunConfig


def test_defaults_without_file(config):
    assert config.output_path == "./output"
    assert config.cache_path == "./cache"
    assert config.descriptor_extension == ".osu"
    assert config.get("tags.album") == "osu!"
    assert config.get("thumbnail.size") == 400
    assert config.get("no.such.key", "fallback") == "fallback"


def test_yaml_overrides_merge_with_defaults(tmp_path):
    path = tmp_path / "osu-extract.yaml"
    path.write_text("tools:\n  ffmpeg: /opt/ffmpeg\nthumbnail:\n  size: 600\n", encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.get("tools.ffmpeg") == "/opt/ffmpeg"
    assert config.get("tools.convert") == "convert"
    assert config.get("thumbnail.size") == 600


def test_environment_expansion(tmp_path, monkeypatch):
    path = tmp_path / "osu-extract.yaml"
    path.write_text("paths:\n  output: ${OSU_EXTRACT_OUT}\n", encoding="utf-8")
    monkeypatch.setenv("OSU_EXTRACT_OUT", "/music/osu")

    assert ConfigManager(str(path)).output_path == "/music/osu"


def test_invalid_yaml_is_configuration_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("paths: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(str(path))


def test_non_mapping_yaml_is_configuration_error(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(str(path))


def test_run_config_explicit_arguments_win(config, songs_root, tmp_path):
    run = RunConfig.from_config(config, str(songs_root), output_dir=str(tmp_path / "o"), dry_run=True)

    assert run.input_dir == os.path.abspath(str(songs_root))
    assert run.output_dir == str(tmp_path / "o")
    assert run.cache_dir == os.path.abspath("./cache")
    assert run.dry_run and not run.overwrite
    assert run.album == "osu!"


def test_run_config_requires_existing_input(config, tmp_path):
    with pytest.raises(ConfigurationError):
        RunConfig.from_config(config, "")
    with pytest.raises(ConfigurationError):
        RunConfig.from_config(config, str(tmp_path / "missing"))
