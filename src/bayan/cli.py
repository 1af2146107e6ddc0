#!/usr/bin/env python3
"""
Bayan CLI: command line interface for duplicate file detection.
Scans the given directories, prints groups of byte-identical files and,
on request, moves all but one file of every group to the system trash.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
import logging
from pathlib import Path
from typing import List, Optional, NoReturn

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from bayan.core.errors import ConfigurationError
from bayan.core.models import ChecksumKind, DeduplicationStats, DuplicateGroup, SearchParams
from bayan.commands import DuplicateSearchCommand
from bayan.utils.convert_utils import ConvertUtils
from bayan.services.file_service import FileService
from bayan.services.duplicate_service import DuplicateService
from bayan.aliases import (
    CHECKSUM_ALIASES, CHECKSUM_CHOICES, CHECKSUM_HELP_TEXT,
    LEVEL_HELP_TEXT, EPILOG_TEXT
)

GROUP_SEPARATOR = "=========="


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="bayan",
            description="Bayan finds files with identical content using incremental block hashing",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        # Scan targets
        parser.add_argument(
            "--directories", "-d",
            nargs="+",
            default=["."],
            type=str,
            metavar='DIR',
            help="Directories (space separated) to scan. Default: current directory"
        )
        parser.add_argument(
            "--excludes", "-e",
            nargs="+",
            default=[],
            type=str,
            metavar='DIR',
            help="Directories (space separated) excluded from scanning"
        )
        parser.add_argument(
            "--level", "-l",
            choices=[0, 1],
            default=0,
            type=int,
            help=LEVEL_HELP_TEXT
        )

        # Filtering options
        parser.add_argument(
            "--min-size", "-s",
            default="1",
            type=str,
            metavar='SIZE',
            help="Minimum file size (e.g., 1, 500KB, 1MB). Default: 1"
        )
        parser.add_argument(
            "--masks", "-m",
            nargs="+",
            default=[],
            type=str,
            metavar='MASK',
            help="Filename masks (space separated), '*' and '?' wildcards, case-insensitive"
        )

        # Comparison options
        parser.add_argument(
            "--block-size", "-b",
            default="1024",
            type=str,
            metavar='SIZE',
            help="Size of the block read and hashed at a time (e.g., 1024, 64K). Default: 1024"
        )
        parser.add_argument(
            "--checksum", "-c",
            choices=CHECKSUM_CHOICES,
            default="crc32",
            type=str,
            help=CHECKSUM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            default=1,
            type=int,
            metavar='N',
            help="Number of threads comparing files in parallel. Default: 1"
        )

        # Actions
        parser.add_argument(
            "--keep-one",
            action="store_true",
            help="Keep the first file of every duplicate group and move the rest to trash. "
                 "Always shows preview before deletion for safety."
        )

        # Output options
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip confirmation prompt when used with --keep-one (for automation/scripts)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics and progress"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and not args.keep_one:
            self.error_exit("--force can only be used with --keep-one")

        # Prevent interactive confirmation in non-TTY environments
        if args.keep_one and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

        for directory in args.directories:
            root_path = Path(directory).resolve()
            if not root_path.exists():
                self.error_exit(f"Directory not found: {directory}")
            if not root_path.is_dir():
                self.error_exit(f"Path is not a directory: {directory}")

        for excl_dir in args.excludes:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_params(self, args: argparse.Namespace) -> SearchParams:
        """Create SearchParams from CLI arguments."""
        try:
            return SearchParams.from_human_readable(
                root_dirs=[str(Path(d.strip()).resolve()) for d in args.directories],
                min_size_str=args.min_size,
                block_size_str=args.block_size,
                excluded_dirs=[str(Path(d.strip()).resolve()) for d in args.excludes],
                masks=args.masks,
                recursive=bool(args.level),
                checksum=CHECKSUM_ALIASES.get(args.checksum, ChecksumKind.CRC32),
                workers=args.workers,
            )
        except ConfigurationError as e:
            self.error_exit(f"Invalid configuration: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def run_search(self, params: SearchParams) -> List[DuplicateGroup]:
        """Execute the search workflow."""
        command = DuplicateSearchCommand()
        if self.verbose:
            print(f"Comparing files (block size: {params.block_size}, checksum: {params.checksum.display_name})...")

        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except ConfigurationError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")

        self.report_warnings(stats)

        if self.verbose:
            print()
            print(stats.print_summary())

        return groups

    def report_warnings(self, stats: DeduplicationStats) -> None:
        for message in stats.warnings:
            self.warning(message)

    def output_results(self, groups: List[DuplicateGroup]) -> None:
        """Output duplicate groups: one path per line, groups split by a separator line."""
        if self.quiet and not groups:
            return

        if not groups:
            print("No duplicates found.")
            return

        print("Duplicates:\n")
        for idx, group in enumerate(groups, 1):
            if self.verbose:
                size_str = ConvertUtils.bytes_to_human(group.size)
                print(f"Group {idx} | Size: {size_str} | Files: {group.duplicate_count}")
            for file in group.files:
                print(file.path)
            print(GROUP_SEPARATOR)

    def execute_keep_one(self, groups: List[DuplicateGroup], force: bool = False) -> None:
        """Keep one file per group, trash the rest. Always shows preview before deletion."""
        if not groups:
            if not self.quiet:
                print("No duplicates found.")
            return

        files_to_delete, _ = DuplicateService.keep_only_one_file_per_group(groups)

        space_saved = DuplicateService.calculate_space_savings(groups, files_to_delete)
        space_saved_str = ConvertUtils.bytes_to_human(space_saved)

        # Always show deletion preview before action (safety first)
        print()
        for idx, group in enumerate(groups, 1):
            size_str = ConvertUtils.bytes_to_human(group.size)
            print(f"Group {idx} | Size: {size_str} | Files: {group.duplicate_count}")
            print("-" * 60)
            print(f"   [KEEP] {group.files[0].path}")
            for file in group.files[1:]:
                print(f"   [DEL]  {file.path}")
            print()

        print("=" * 60)
        print(f"Summary: Keep 1 file per group ({len(groups)} files preserved, {len(files_to_delete)} files deleted)")
        print(f"Total space saved: {space_saved_str}")
        print()

        if force:
            print("WARNING: --force flag skips confirmation. Proceeding with deletion...")
        else:
            # Safety check: confirm we're still in interactive mode
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Lost interactive terminal during operation. "
                    "Use --force to proceed in non-interactive environments."
                )

            response = input(f"Are you sure you want to move {len(files_to_delete)} files to trash? [y/N]: ")
            if response.strip().lower() not in ("y", "yes"):
                print("Deletion cancelled by user.")
                return

        print(f"\nMoving {len(files_to_delete)} files to trash...")
        report = FileService.trash_files(files_to_delete, on_file=self._trash_progress)

        for path, error in report.failed:
            self.warning(f"Failed to delete {path}: {error}")

        if report.failed:
            print(f"\nPartial success: {len(report.moved)}/{len(files_to_delete)} files moved to trash.")
            print(f"Failed to delete {len(report.failed)} file(s):")
            print(report.failure_summary())
        else:
            print(f"Successfully moved {len(report.moved)} files to trash.")
            print(f"Total space saved: {space_saved_str}")

    def _trash_progress(self, index: int, total: int, path: str) -> None:
        if self.verbose:
            print(f"  [{index}/{total}] {os.path.basename(path)}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose:
            logging.getLogger("bayan").setLevel(logging.INFO)

        self.validate_args(args)
        params = self.create_params(args)

        groups = self.run_search(params)

        if args.keep_one:
            self.execute_keep_one(groups, force=args.force)
        else:
            self.output_results(groups)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\nCompleted in {elapsed:.2f} seconds")


def main(argv: Optional[List[str]] = None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
