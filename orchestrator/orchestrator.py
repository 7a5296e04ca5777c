#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
osu-extract Orchestrator - Main orchestration class.

Runs the full extraction pipeline:
    Scan -> (Normalize cover -> Mux -> Verify) per song -> Summary

Usage:
    from orchestrator.orchestrator import ExtractOrchestrator

    orch = ExtractOrchestrator(run_config)
    summary = orch.run()
"""

import os
from typing import Any, Dict, Optional

from .config import ConfigManager, RunConfig
from .reporter import Reporter

from agents import MuxAgent, ScannerAgent, ScanResult, VerifierAgent
from utilities.tools import ExternalTools


class ExtractOrchestrator:
    """
    Central orchestrator for one extraction run.

    The whole collection is built before any external process starts;
    songs are then processed strictly one after another.
    """

    def __init__(self, run: RunConfig, config: Optional[ConfigManager] = None,
                 reporter: Optional[Reporter] = None, tools: Optional[ExternalTools] = None):
        """
        Initialize orchestrator.

        Args:
            run: Settings for this run
            config: Loaded configuration (defaults when omitted)
            reporter: Console reporter
            tools: External tool runner, replaceable for tests
        """
        self.run_config = run
        self.config = config or ConfigManager()
        self.reporter = reporter or Reporter()

        self.scanner = ScannerAgent(self.config, self.reporter)
        self.verifier = VerifierAgent(self.config, self.reporter)
        self.muxer = MuxAgent(
            self.config, run,
            tools=tools or ExternalTools.from_config(self.config),
            verifier=self.verifier,
            reporter=self.reporter
        )

    def print_banner(self) -> None:
        """Print run banner"""
        run = self.run_config
        self.reporter.info("Running osu-extract:")
        self.reporter.info(f"  Input Directory:  {run.input_dir}")
        self.reporter.info(f"  Output Directory: {run.output_dir}")
        self.reporter.info(f"  Cache Directory:  {run.cache_dir}")
        if run.dry_run:
            self.reporter.info("  (Dry run - no changes will be made)")

    # ==================== Scanning ====================

    def scan(self) -> ScanResult:
        """Build the song collection for the input directory"""
        return self.scanner.build_collection(self.run_config.input_dir)

    # ==================== Muxing ====================

    def extract(self, scan: ScanResult) -> Dict[str, Any]:
        """
        Run every record through the muxer.

        Args:
            scan: Finished collection from scan()

        Returns:
            Summary counts per status
        """
        records = list(scan.records.values())
        total = len(records)

        self.muxer.reset()
        if not self.run_config.dry_run:
            self._ensure_dirs()

        def report(record, result, index):
            self.reporter.progress(index + 1, total, result.get('message', record.song_id))

        batch = self.muxer.process_batch(records, callback=report)
        counts = batch['counts']

        return {
            'total': total,
            'processed': counts.get('processed', 0),
            'skipped': counts.get('skipped', 0),
            'would_process': counts.get('would_process', 0),
            'failed': counts.get('failed', 0) + counts.get('error', 0),
            'unverified': sum(1 for r in batch['items'] if r.get('verified') is False),
            'dry_run': self.run_config.dry_run,
            'duration': batch['duration'],
            'items': batch['items']
        }

    # ==================== Full run ====================

    def run(self) -> Dict[str, Any]:
        """Scan, extract and print a summary"""
        self.print_banner()

        scan = self.scan()
        stats = scan.stats
        self.reporter.verbose(
            f"Scan complete: {stats['records']} songs, "
            f"{stats['parse_failures']} failed, "
            f"{stats['duplicate_descriptors']} extra descriptors ignored"
        )

        summary = self.extract(scan)
        summary['scan'] = stats
        self.print_summary(summary)
        return summary

    def print_summary(self, summary: Dict[str, Any]) -> None:
        self.reporter.info("")
        self.reporter.info("=== Extraction Results ===")
        self.reporter.info(f"Songs: {summary['total']}")
        if summary['dry_run']:
            self.reporter.info(f"Would process: {summary['would_process']}")
        else:
            self.reporter.info(f"Processed: {summary['processed']}")
        self.reporter.info(f"Skipped: {summary['skipped']}")
        self.reporter.info(f"Failed: {summary['failed']}")
        if summary['unverified']:
            self.reporter.info(f"Unverified: {summary['unverified']}")
        if summary['dry_run']:
            self.reporter.info("(Dry run - no changes made)")

    # ==================== Helpers ====================

    def _ensure_dirs(self) -> None:
        os.makedirs(self.run_config.output_dir, exist_ok=True)
        os.makedirs(self.run_config.cache_dir, exist_ok=True)
