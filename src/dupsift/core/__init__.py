"""
Core deduplication engine: scanner, hasher, grouper, and pipeline orchestrator.

This package contains the performance-critical foundation of dupsift:
- FileScannerImpl: recursive directory traversal with VCS/system-file exclusions
- HasherImpl: quick (sampled) and full fingerprints with pluggable digests
- FileGrouperImpl: size and (size, hash) partitioning with singleton pruning
- DeduplicatorImpl: three-stage pipeline (size → quick hash → full hash)
- Models: File, DuplicateGroup, and configuration objects
"""

from .errors import FileReadError
from .models import File, FileHashes, DuplicateGroup, DeduplicationStats, Stage
from .hasher import (
    HasherImpl, HashlibAlgorithmImpl, XXHashAlgorithmImpl, DeduplicationConfig,
    SUPPORTED_ALGORITHMS, get_algorithm)
from .grouper import FileGrouperImpl
from .stages import SizeStageImpl, QuickHashStage, FullHashStage
from .deduplicator import DeduplicatorImpl
from .scanner import FileScannerImpl
from .params import DeduplicationParams

__all__ = [
    "FileReadError",
    "File",
    "FileHashes",
    "DuplicateGroup",
    "DeduplicationStats",
    "Stage",
    "HasherImpl",
    "HashlibAlgorithmImpl",
    "XXHashAlgorithmImpl",
    "DeduplicationConfig",
    "SUPPORTED_ALGORITHMS",
    "get_algorithm",
    "FileGrouperImpl",
    "SizeStageImpl",
    "QuickHashStage",
    "FullHashStage",
    "DeduplicatorImpl",
    "FileScannerImpl",
    "DeduplicationParams",
]
