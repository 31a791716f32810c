"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for file scanning and deduplication.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union
import os
from enum import Enum


# =============================
# Enums
# =============================

class Stage(str, Enum):
    SIZE = "Size grouping"
    QUICK = "Quick Hash"
    FULL = "Full Hash"


# ======================
#  Core Data Models
# ======================

@dataclass
class FileHashes:
    """
    Memoized fingerprints of one file.
    `quick` may come from sampled windows and is only a pre-filter;
    `full` always covers the complete content.
    """
    quick: Optional[str] = None
    full: Optional[str] = None

    def __post_init__(self):
        for key in ("quick", "full"):
            value = getattr(self, key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Field '{key}' must be str or None")


@dataclass
class File:
    """
    Represents a single regular file discovered on the file system.
    `path` and `size` are fixed at discovery; only `hashes` is filled in later.
    """
    path: str
    size: int  # in bytes
    name: Optional[str] = None
    hashes: FileHashes = field(default_factory=FileHashes)

    def __post_init__(self):
        if self.name is None:
            self.name = os.path.basename(self.path)

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    A group of files sharing the same size and hash.
    Between stages `hash` is None (size groups) or a quick fingerprint;
    groups returned by the deduplicator always carry the full digest.
    """
    size: int
    files: List[File]
    hash: Optional[str] = None

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, hash={self.hash}, count={len(self.files)}>"


class DeduplicationStats:
    """
    Statistics collected during the deduplication process.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.stage_stats: Dict[str, Dict[str, Union[int, float]]] = {}

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            Stage.SIZE.value: "📁 Size Groups",
            Stage.QUICK.value: "⚡ Quick Hash Groups",
            Stage.FULL.value: "🔍 Full Content Hash Groups",
        }

        lines = [
            "📊 Deduplication Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage, stage.title())
            lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)
