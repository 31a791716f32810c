"""
Unified command orchestrator for deduplication.
Scans the root directory and runs the deduplication pipeline on the result.
"""
from typing import List, Optional, Tuple
from dupsift.core.models import DuplicateGroup, DeduplicationStats, File
from dupsift.core.params import DeduplicationParams
from dupsift.core.scanner import FileScannerImpl
from dupsift.core.deduplicator import DeduplicatorImpl
from dupsift.core.interfaces import ProgressCallback


class DeduplicationCommand:
    """
    Orchestrates the entire deduplication workflow:
    1. Scan the root directory into File records
    2. Build a hasher from the parameters
    3. Execute find_duplicates with progress support

    Usage:
        params = DeduplicationParams(root_dir="~/Downloads")
        groups, stats = DeduplicationCommand().execute(params)
    """

    def __init__(self):
        self._files: List[File] = []

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Execute deduplication with given parameters.

        Args:
            params: Validated deduplication parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            RuntimeError: If the root directory cannot be scanned
            FileReadError: If a candidate file cannot be hashed
        """
        scanner = FileScannerImpl(
            root_dir=params.root_dir,
            excluded_dirs=params.excluded_dirs,
            excluded_names=params.excluded_names,
            ignored_files=params.ignored_files,
        )
        self._files = scanner.scan(progress_callback=progress_callback)

        deduplicator = DeduplicatorImpl(hasher=params.create_hasher())
        return deduplicator.find_duplicates(self._files, progress_callback=progress_callback)

    def get_files(self) -> List[File]:
        """Get scanned files after execution."""
        return self._files.copy()
