#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base class for processing agents.
All agents (Scanner, Muxer, Verifier) inherit from this.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional
import time

from orchestrator.reporter import Reporter


class BaseAgent(ABC):
    """
    Abstract base class for processing agents.

    Agents are responsible for specific tasks in the pipeline:
    - Scanner: Walk the song tree and build the song collection
    - Muxer: Produce tagged audio files with cover art
    - Verifier: Confirm written files carry the expected tags
    """

    def __init__(self, config, reporter: Optional[Reporter] = None):
        """
        Initialize agent with configuration and reporter.

        Args:
            config: ConfigManager instance
            reporter: Reporter shared by all agents of a run
        """
        self.config = config
        self.reporter = reporter or Reporter()
        self._start_time: Optional[float] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Agent name identifier"""
        pass

    @abstractmethod
    def process(self, item: Any) -> Dict[str, Any]:
        """
        Process a single item.

        Returns:
            Dictionary with at least a 'status' key
        """
        pass

    def process_batch(self, items: list,
                      callback: Optional[Callable[[Any, Dict[str, Any], int], None]] = None) -> Dict[str, Any]:
        """
        Process multiple items one after another.

        Args:
            items: List of items to process
            callback: Optional callback(item, result, index) called after each item

        Returns:
            Summary of batch processing, counted per result status
        """
        results = {
            "total": len(items),
            "counts": {},
            "items": []
        }

        self._start_time = time.time()

        for i, item in enumerate(items):
            try:
                result = self.process(item)
            except Exception as e:
                self.log_error(f"Error processing {item}: {e}")
                result = {"status": "error", "error": str(e)}

            status = result.get("status", "error")
            results["counts"][status] = results["counts"].get(status, 0) + 1
            results["items"].append(result)

            if callback:
                callback(item, result, i)

        results["duration"] = time.time() - self._start_time
        return results

    def log(self, message: str) -> None:
        """Log a message with agent name prefix"""
        self.reporter.info(f"[{self.name}] {message}")

    def log_verbose(self, message: str) -> None:
        self.reporter.verbose(f"[{self.name}] {message}")

    def log_debug(self, message: str) -> None:
        self.reporter.debug(f"[{self.name}] {message}")

    def log_warning(self, message: str) -> None:
        self.reporter.warning(f"[{self.name}] {message}")

    def log_error(self, message: str) -> None:
        """Log an error message"""
        self.reporter.error(f"[{self.name}] {message}")

    def log_progress(self, current: int, total: int, item_name: str = "") -> None:
        """Log progress update"""
        self.reporter.progress(current, total, item_name)

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        return self.config.get(key, default)
