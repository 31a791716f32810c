"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Produces the File records consumed by the deduplication pipeline.
Features:
- Recursively scans directories with os.walk
- Skips version-control and platform metadata directories, OS trash and user-excluded paths
- Skips symbolic links, hidden system files and zero-byte files
"""

import os
import stat
import sys
import time
import logging
from pathlib import Path
from typing import List, Optional, Iterable

from dupsift.core.models import File
from dupsift.core.interfaces import FileScanner, ProgressCallback

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDED_NAMES = (".git", ".svn", ".hg", ".bzr", "CVS", "__MACOSX")
DEFAULT_IGNORED_FILES = (".DS_Store", "Thumbs.db", "desktop.ini", ".localized")


class FileScannerImpl(FileScanner):
    """
    Scans directories recursively and returns every non-empty regular file.
    Uses `pathlib.Path` for safe and consistent cross-platform behavior.

    Attributes:
        root_dir: Root directory to scan
        excluded_dirs: Directories (by path) that are skipped with all their content
        excluded_names: Directory names skipped wherever they appear (e.g. ".git")
        ignored_files: File names skipped wherever they appear (e.g. ".DS_Store")
    """

    def __init__(
        self,
        root_dir: str,
        excluded_dirs: Optional[List[str]] = None,
        excluded_names: Optional[Iterable[str]] = None,
        ignored_files: Optional[Iterable[str]] = None,
    ):
        self.root_dir = root_dir
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []
        self.excluded_names = set(DEFAULT_EXCLUDED_NAMES if excluded_names is None else excluded_names)
        self.ignored_files = set(DEFAULT_IGNORED_FILES if ignored_files is None else ignored_files)

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[File]:
        """
        Single-pass scanner with throttled progress updates and debug logging.
        Returns the files found in the directory tree, in traversal order.

        Raises:
            RuntimeError: If the root directory is missing or not a directory
        """
        logger.debug(f"Starting scan of {self.root_dir}")

        found_files = []
        root_path = Path(self.root_dir)
        processed_files = 0

        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        # Progress throttling: update every N files
        progress_interval = 5000
        progress_counter = 0
        start_time = time.time()

        for root, dirs, files in os.walk(str(root_path), onerror=self._on_walk_error):
            # Pre-filter subdirectories BEFORE os.walk enters them
            dirs[:] = [d for d in dirs if self._prefilter_dirs(Path(root) / d)]

            for filename in files:
                file_info = self._process_file(Path(root) / filename)
                if file_info:
                    found_files.append(file_info)
                processed_files += 1
                progress_counter += 1

                if progress_callback and progress_counter >= progress_interval:
                    progress_callback('scanning', processed_files, None)
                    progress_counter = 0

        # Final update for small datasets
        if progress_callback and progress_counter > 0:
            progress_callback('scanning', processed_files, None)

        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.info(f"Scan completed. Found {len(found_files)} candidate files.")
        return found_files

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning(f"Cannot read directory {error.filename}: {error.strerror}")

    @staticmethod
    def _is_system_trash(path: Path) -> bool:
        """
        Check if path belongs to OS trash/recycle bin (cross-platform).
        Returns False on any error (better to scan than skip valid data).
        """
        try:
            path_str = str(path.resolve(strict=False))

            if sys.platform == "win32":
                if "$Recycle.Bin" in path_str or "\\Recycler\\" in path_str:
                    return True
            elif sys.platform == "darwin":
                if "/.Trash/" in path_str or path_str.endswith("/.Trash"):
                    return True
            else:
                # freedesktop.org locations
                if ".local/share/Trash" in path_str or "/.trash/" in path_str:
                    return True

            return False
        except (OSError, ValueError):
            return False

    @staticmethod
    def _is_excluded_directory(path: Path, excluded_dirs: List[str]) -> bool:
        """Check if path is within an excluded directory."""
        try:
            path_str = str(path.resolve(strict=False))
            for excluded_dir in excluded_dirs:
                normalized_excluded = os.path.normpath(excluded_dir)
                if path_str.startswith(normalized_excluded + os.sep) or \
                        path_str == normalized_excluded:
                    return True
            return False
        except (OSError, ValueError):
            return False

    def _prefilter_dirs(self, path: Path) -> bool:
        """Pre-filter directories: skip VCS metadata, trash and excluded locations."""
        if path.name in self.excluded_names:
            logger.debug(f"Skipping excluded directory name: {path}")
            return False

        if path.is_symlink():
            logger.debug(f"Skipping symbolic link to directory: {path}")
            return False

        if FileScannerImpl._is_system_trash(path):
            logger.debug(f"Skipping system trash directory: {path}")
            return False

        if self.excluded_dirs and self._is_excluded_directory(path, self.excluded_dirs):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        return True

    def _process_file(self, path: Path) -> Optional[File]:
        """
        Process an individual file path and return a File if it passes all filters.
        Args:
            path: Path object pointing to the file
        Returns:
            Optional[File]: File object if it passes filters, else None
        """
        if path.name in self.ignored_files:
            logger.debug(f"Skipping ignored file: {path}")
            return None

        try:
            stat_result = path.lstat()
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        # Zero-byte files have no content to deduplicate
        if stat_result.st_size == 0:
            logger.debug(f"Skipping zero-byte file: {path}")
            return None

        return File(path=str(path), size=stat_result.st_size)
