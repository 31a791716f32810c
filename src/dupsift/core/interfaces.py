"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the deduplication system.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- HashAlgorithm: Standardized interface for digest functions (e.g., SHA-256, xxHash64).
- Hasher: Interface for computing quick (sampled) and full fingerprints of files.
- FileScanner: Interface for scanning directories and returning file records.
- FileGrouper: Interface for partitioning files by size or by (size, hash).
- SizeStage / HashStage: Interfaces for individual stages in the deduplication pipeline.
- Deduplicator: Interface for the main deduplication engine coordinating all stages.
"""

from typing import Protocol, List, Dict, Tuple, Optional, Callable, Iterable
from dupsift.core.models import File, DuplicateGroup, DeduplicationStats


ProgressCallback = Callable[[str, int, Optional[int]], None]


# ===== Interfaces =====

class Digest(Protocol):
    """Incremental digest object as returned by hashlib.new() or xxhash.xxh64()."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256, MD5, or xxHash
    without affecting the rest of the deduplication logic.
    """
    name: str

    def new(self) -> Digest:
        """Creates a fresh incremental digest."""
        ...

    def hash(self, data: bytes) -> str:
        """Computes the lowercase hex digest of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting file content."""
    def fingerprint(self, file: File, quick: bool) -> str: ...


class FileScanner(Protocol):
    """
    Interface for scanning file systems and collecting file metadata.
    """
    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[File]:
        """
        Scan files from the configured directory.

        Returns:
            List of non-empty regular files that passed the exclusion filters.
        """
        ...


class FileGrouper(Protocol):
    """
    Interface for partitioning files into candidate duplicate groups.
    Every returned group has at least two members.
    """
    def partition_by_size(self, files: Iterable[File]) -> Dict[int, List[File]]:
        """Group files by their size in bytes."""
        ...

    def partition_by_hash(
        self,
        groups: Iterable[Iterable[File]],
        quick: bool
    ) -> Dict[Tuple[int, str], List[File]]:
        """Regroup candidate groups by (size, fingerprint)."""
        ...


# =============================
# Stage Interfaces
# =============================


class SizeStage(Protocol):
    """
    Interface for the first stage of deduplication: grouping files by size.
    """
    def process(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group files by size to find initial duplicate candidates.

        Returns:
            List of groups where each contains 2+ files of the same size.
        """
        ...


class HashStage(Protocol):
    """
    Interface for a deduplication stage that regroups candidates by fingerprint.
    """

    def get_stage_name(self) -> str:
        """Return the name of this stage (used in logging and stats)."""
        ...

    def process(
        self,
        groups: List[DuplicateGroup],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Process groups through this stage.

        Returns:
            List of refined groups, each keyed by (size, hash) and holding 2+ files.
        """
        ...


class Deduplicator(Protocol):
    """
    Interface for the main deduplication engine.

    Coordinates the stages (size → quick hash → full hash).
    Collects detailed statistics about the deduplication process.
    """
    def find_duplicates(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Run the full deduplication pipeline.

        Returns:
            A tuple containing:
                - List of confirmed duplicate groups
                - Statistics collected during processing
        """
        ...
