#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration management for osu-extract.
Loads an optional YAML config with environment variable support and
builds the per-run settings handed to the pipeline.
"""

import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


DEFAULT_CONFIG_FILE = "osu-extract.yaml"


class ConfigurationError(Exception):
    """Fatal configuration problem, raised before any processing starts"""
    pass


class ConfigManager:
    """
    Configuration manager that loads settings from a YAML file.
    Supports environment variable expansion for path values.
    """

    def __init__(self, config_path: str = DEFAULT_CONFIG_FILE):
        self.config_path = Path(config_path)
        self._config: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration file, falling back to defaults"""
        self._config = self._default_config()

        if not self.config_path.exists():
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config {self.config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config {self.config_path} must be a mapping")

        _merge(self._config, loaded)

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration"""
        return {
            'paths': {
                'output': './output',
                'cache': './cache'
            },
            'scan': {
                'extension': '.osu',
                'workers': 8
            },
            'tools': {
                'convert': 'convert',
                'ffmpeg': 'ffmpeg',
                'timeout': 300
            },
            'thumbnail': {
                'size': 400
            },
            'tags': {
                'album': 'osu!'
            },
            'pipeline': {
                'verify': False,
                'require_cover': False
            }
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value with dot notation.

        Examples:
            config.get('tools.ffmpeg')
            config.get('thumbnail.size')

        Environment variables are expanded if value is like ${VAR_NAME}
        """
        keys = key.split('.')
        value = self._config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default

        if isinstance(value, str) and value.startswith('${') and value.endswith('}'):
            env_var = value[2:-1]
            return os.environ.get(env_var, default)

        return value

    @property
    def output_path(self) -> str:
        return self.get('paths.output', './output')

    @property
    def cache_path(self) -> str:
        return self.get('paths.cache', './cache')

    @property
    def descriptor_extension(self) -> str:
        return self.get('scan.extension', '.osu')

    @property
    def scan_workers(self) -> int:
        return int(self.get('scan.workers', 8))

    def __repr__(self) -> str:
        return f"ConfigManager(config={self.config_path})"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base"""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


@dataclass(frozen=True)
class RunConfig:
    """Settings for one extraction run"""
    input_dir: str
    output_dir: str
    cache_dir: str
    overwrite: bool = False
    dry_run: bool = False
    album: str = 'osu!'
    thumbnail_size: int = 400
    verify: bool = False
    require_cover: bool = False

    @classmethod
    def from_config(
        cls,
        config: ConfigManager,
        input_dir: str,
        output_dir: Optional[str] = None,
        cache_dir: Optional[str] = None,
        overwrite: bool = False,
        dry_run: bool = False
    ) -> 'RunConfig':
        """
        Build run settings. Explicit arguments win over the config file.

        Raises:
            ConfigurationError: if the input directory is missing
        """
        if not input_dir:
            raise ConfigurationError("No input directory given")
        if not Path(input_dir).is_dir():
            raise ConfigurationError(f"Input directory not found: {input_dir}")

        return cls(
            input_dir=os.path.abspath(input_dir),
            output_dir=os.path.abspath(output_dir or config.output_path),
            cache_dir=os.path.abspath(cache_dir or config.cache_path),
            overwrite=overwrite,
            dry_run=dry_run,
            album=config.get('tags.album', 'osu!'),
            thumbnail_size=int(config.get('thumbnail.size', 400)),
            verify=bool(config.get('pipeline.verify', False)),
            require_cover=bool(config.get('pipeline.require_cover', False))
        )
