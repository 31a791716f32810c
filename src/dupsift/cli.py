#!/usr/bin/env python3
"""
dupsift CLI: command line interface for duplicate file detection.
Scans a directory tree and prints every group of files with identical content.
Nothing is ever modified or deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
try:
    import xxhash  # noqa: F401
except ImportError:
    print("❌ Missing required dependency: xxhash", file=sys.stderr)
    print("   pip install xxhash", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupsift.core.errors import FileReadError
from dupsift.core.hasher import SUPPORTED_ALGORITHMS, DeduplicationConfig
from dupsift.core.models import DuplicateGroup
from dupsift.core.params import DeduplicationParams
from dupsift.commands import DeduplicationCommand
from dupsift.utils.convert_utils import ConvertUtils

EPILOG_TEXT = """
Examples:
  Find duplicates in the current directory
  %(prog)s

  Find duplicates in Downloads, ignoring a cache directory
  %(prog)s -i ~/Downloads -e ~/Downloads/.cache

  Sample 64KB windows only for files above 16MB, confirm with BLAKE2b
  %(prog)s -i ~/Videos --sample-threshold 16MB --sample-window 64K --digest blake2b
"""


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dupsift",
            description="dupsift: find duplicate files by size, sampled hash and full hash",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--input", "-i",
            default=os.getcwd(),
            type=str,
            help="Directory to scan for duplicates. Default: current directory"
        )

        parser.add_argument(
            "--excluded-dirs", '-e',
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Excluded/ignored directories (space separated)"
        )

        # Hashing options
        parser.add_argument(
            "--sample-threshold",
            default="3MB",
            type=str,
            metavar='SIZE',
            help="Files larger than this are sampled in the quick pass (e.g., 3MB). Default: 3MB"
        )
        parser.add_argument(
            "--sample-window",
            default="4KB",
            type=str,
            metavar='SIZE',
            help="Size of each sampled window (e.g., 4KB). Default: 4KB"
        )
        parser.add_argument(
            "--digest",
            choices=SUPPORTED_ALGORITHMS,
            default=DeduplicationConfig.DIGEST_ALGORITHM,
            help=f"Digest confirming duplicates. Default: {DeduplicationConfig.DIGEST_ALGORITHM}"
        )
        parser.add_argument(
            "--quick-digest",
            choices=SUPPORTED_ALGORITHMS,
            default=DeduplicationConfig.QUICK_DIGEST_ALGORITHM,
            dest="quick_digest",
            help=f"Digest for the quick pass. Default: {DeduplicationConfig.QUICK_DIGEST_ALGORITHM}"
        )
        parser.add_argument(
            "--no-middle",
            action="store_true",
            dest="no_middle",
            help="Sample only the beginning and end of large files"
        )

        # Output options
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

    def create_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        root_path = os.path.abspath(os.path.expanduser(args.input))
        if not os.path.exists(root_path):
            self.error_exit(f"Directory not found: {args.input}")
        if not os.path.isdir(root_path):
            self.error_exit(f"Path is not a directory: {args.input}")

        for excl_dir in args.excluded_dirs:
            if not os.path.isdir(excl_dir):
                self.warning(f"Excluded directory not found: {excl_dir}")

        try:
            return DeduplicationParams.from_human_readable(
                root_dir=root_path,
                sample_threshold_str=args.sample_threshold,
                sample_window_str=args.sample_window,
                digest_algorithm=args.digest,
                quick_digest_algorithm=args.quick_digest,
                sample_middle=not args.no_middle,
                excluded_dirs=[os.path.abspath(d) for d in args.excluded_dirs],
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

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

    def run_deduplication(self, params: DeduplicationParams) -> List[DuplicateGroup]:
        """Execute deduplication workflow."""
        command = DeduplicationCommand()
        try:
            groups, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except FileReadError as e:
            self.error_exit(f"Deduplication failed: {e}")
        except RuntimeError as e:
            self.error_exit(f"Scan failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
            print(f"\nScanned {len(command.get_files())} files")
            print(stats.print_summary())

        return groups

    @staticmethod
    def format_group(group: DuplicateGroup, digest_label: str) -> str:
        """Render one group as a header line followed by indented paths."""
        lines = [
            f"<Size: {group.size} Bytes, {digest_label}: {group.hash}, "
            f"Duplication: {group.duplicate_count}>"
        ]
        lines.extend(f"  {path}" for path in group.paths)
        return "\n".join(lines) + "\n"

    def output_results(self, groups: List[DuplicateGroup], params: DeduplicationParams) -> None:
        """Output duplicate groups as plain text."""
        if not groups:
            if not self.quiet:
                print("No duplication found!")
            return

        if not self.quiet:
            total_files = sum(g.duplicate_count for g in groups)
            wasted = sum(g.size * (g.duplicate_count - 1) for g in groups)
            print(f"Found {len(groups)} duplicate groups ({total_files} files, "
                  f"{ConvertUtils.bytes_to_human(wasted)} reclaimable)\n")

        digest_label = params.digest_algorithm.upper()
        for idx, group in enumerate(groups):
            print(f"{idx}: {self.format_group(group, digest_label)}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv=None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger().setLevel(logging.INFO)

        params = self.create_params(args)

        if not self.quiet:
            print(f"Looking for duplicated files under {params.root_dir}")

        groups = self.run_deduplication(params)
        self.output_results(groups, params)

        if self.verbose:
            print(f"\n✅ Completed in {time.time() - self.start_time:.2f} seconds")


def main(argv=None) -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run(argv)
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
