#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Console reporting with verbosity tiers.
"""

import sys
from enum import IntEnum
from typing import Optional, TextIO

from .config import ConfigurationError


class Level(IntEnum):
    DEBUG = 10
    VERBOSE = 15
    INFO = 20
    WARNING = 30
    ERROR = 40


class Reporter:
    """
    Prints leveled messages to the console.

    Messages below the threshold are dropped. Warnings and errors go to
    stderr, everything else to stdout.
    """

    def __init__(self, level: Level = Level.INFO,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.level = level
        self._out = out
        self._err = err

    @classmethod
    def from_flags(cls, verbose: bool = False, debug: bool = False, **kwargs) -> 'Reporter':
        """
        Create a reporter from the CLI verbosity flags.

        Raises:
            ConfigurationError: if both flags are set
        """
        if verbose and debug:
            raise ConfigurationError("--verbose and --debug are mutually exclusive")
        if debug:
            level = Level.DEBUG
        elif verbose:
            level = Level.VERBOSE
        else:
            level = Level.INFO
        return cls(level, **kwargs)

    def enabled(self, level: Level) -> bool:
        return level >= self.level

    def emit(self, level: Level, message: str) -> None:
        if not self.enabled(level):
            return
        if level >= Level.WARNING:
            print(message, file=self._err or sys.stderr)
        else:
            print(message, file=self._out or sys.stdout)

    def debug(self, message: str) -> None:
        self.emit(Level.DEBUG, message)

    def verbose(self, message: str) -> None:
        self.emit(Level.VERBOSE, message)

    def info(self, message: str) -> None:
        self.emit(Level.INFO, message)

    def warning(self, message: str) -> None:
        self.emit(Level.WARNING, f"WARNING: {message}")

    def error(self, message: str) -> None:
        self.emit(Level.ERROR, f"ERROR: {message}")

    def progress(self, current: int, total: int, message: str) -> None:
        """Report per-item progress as [current/total] message"""
        self.emit(Level.INFO, f"[{current}/{total}] {message}")
