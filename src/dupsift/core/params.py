"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/params.py
DTO for deduplication parameters with built-in validation.
Passed explicitly to the command and hasher; there is no module-level state.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from dupsift.core.hasher import DeduplicationConfig, HasherImpl, get_algorithm
from dupsift.core.scanner import DEFAULT_EXCLUDED_NAMES, DEFAULT_IGNORED_FILES
from dupsift.utils.convert_utils import ConvertUtils


@dataclass
class DeduplicationParams:
    """Parameters for a deduplication run, validated on creation."""
    root_dir: str
    sample_threshold_bytes: int = DeduplicationConfig.SAMPLE_THRESHOLD
    sample_window_bytes: int = DeduplicationConfig.SAMPLE_WINDOW
    digest_algorithm: str = DeduplicationConfig.DIGEST_ALGORITHM
    quick_digest_algorithm: str = DeduplicationConfig.QUICK_DIGEST_ALGORITHM
    sample_middle: bool = True
    excluded_dirs: List[str] = field(default_factory=list)
    excluded_names: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_NAMES))
    ignored_files: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_FILES))

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")

        if self.sample_window_bytes <= 0:
            raise ValueError("Sample window must be positive")

        # End window offset is size - window, so sampled files must be larger than a window
        if self.sample_threshold_bytes <= self.sample_window_bytes:
            raise ValueError("Sample threshold must be greater than the sample window")

        # Normalize and validate algorithm names
        self.digest_algorithm = get_algorithm(self.digest_algorithm).name
        self.quick_digest_algorithm = get_algorithm(self.quick_digest_algorithm).name

    def create_hasher(self) -> HasherImpl:
        """Build the hasher described by these parameters."""
        return HasherImpl(
            algorithm=get_algorithm(self.digest_algorithm),
            quick_algorithm=get_algorithm(self.quick_digest_algorithm),
            sample_threshold=self.sample_threshold_bytes,
            sample_window=self.sample_window_bytes,
            sample_middle=self.sample_middle,
        )

    @staticmethod
    def from_human_readable(
            root_dir: str,
            sample_threshold_str: str = "3MB",
            sample_window_str: str = "4KB",
            digest_algorithm: str = DeduplicationConfig.DIGEST_ALGORITHM,
            quick_digest_algorithm: str = DeduplicationConfig.QUICK_DIGEST_ALGORITHM,
            sample_middle: bool = True,
            excluded_dirs: Optional[List[str]] = None,
    ) -> 'DeduplicationParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        return DeduplicationParams(
            root_dir=root_dir,
            sample_threshold_bytes=ConvertUtils.human_to_bytes(sample_threshold_str),
            sample_window_bytes=ConvertUtils.human_to_bytes(sample_window_str),
            digest_algorithm=digest_algorithm,
            quick_digest_algorithm=quick_digest_algorithm,
            sample_middle=sample_middle,
            excluded_dirs=excluded_dirs or [],
        )
