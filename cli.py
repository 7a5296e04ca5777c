#!/usr/bin/env python3
"""
osu-extract CLI

Extracts the songs of an osu! Songs folder into tagged audio files with
the beatmap background as cover art.

Usage:
    python cli.py [options] -- <osu-song-directory>

Requires ImageMagick (convert) and ffmpeg on the PATH.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from orchestrator.config import ConfigManager, ConfigurationError, DEFAULT_CONFIG_FILE, RunConfig
from orchestrator.reporter import Reporter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='osu-extract',
        usage='%(prog)s [options] -- <osu-song-directory>',
        description='Extract osu! songs into tagged audio files with cover art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument('path', nargs='*', help='osu! song directory')
    parser.add_argument('-o', '--output', help='Where the extracted audio files are saved [default: ./output]')
    parser.add_argument('-c', '--cache', help='Where thumbnails are cached during muxing [default: ./cache]')
    parser.add_argument('-d', '--dry', action='store_true', help='Dry run: compute everything, write nothing')
    parser.add_argument('-O', '--overwrite', action='store_true', help='Reprocess songs whose output already exists')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show more detail')
    parser.add_argument('--debug', action='store_true', help='Show everything (cannot be combined with -v)')
    parser.add_argument('--config', default=DEFAULT_CONFIG_FILE, help='YAML config file (optional)')

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        reporter = Reporter.from_flags(verbose=args.verbose, debug=args.debug)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    input_dir = ' '.join(args.path)
    if not input_dir:
        parser.print_help()
        return 1

    try:
        config = ConfigManager(args.config)
        run = RunConfig.from_config(
            config,
            input_dir=input_dir,
            output_dir=args.output,
            cache_dir=args.cache,
            overwrite=args.overwrite,
            dry_run=args.dry
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from orchestrator.orchestrator import ExtractOrchestrator

    try:
        ExtractOrchestrator(run, config=config, reporter=reporter).run()
        return 0
    except KeyboardInterrupt:
        print("\nOperation cancelled.")
        return 130
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
