"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Implements the pipeline-based deduplication engine using File objects:

    size → quick hash → full hash

Each stage only sees groups of 2+ candidates from the previous one. An empty
result after the size or quick stage ends the run early, so full-content reads
happen only for files that survived both cheaper filters.
"""
import logging
import time
from typing import List, Tuple, Optional
from dupsift.core.models import File, DuplicateGroup, DeduplicationStats, Stage
from dupsift.core.grouper import FileGrouperImpl
from dupsift.core.hasher import HasherImpl
from dupsift.core.interfaces import Deduplicator, ProgressCallback
from dupsift.core.stages import SizeStageImpl, QuickHashStage, FullHashStage

logger = logging.getLogger(__name__)


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Implements three-stage duplicate detection and collects per-stage statistics.
    """
    def __init__(self, grouper: Optional[FileGrouperImpl] = None, hasher: Optional[HasherImpl] = None):
        self.grouper = grouper or FileGrouperImpl(hasher)

    def find_duplicates(
        self,
        files: List[File],
        progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main deduplication pipeline using File objects.
        Args:
            files: List of scanned file objects (non-empty regular files)
            progress_callback (Optional[Callable[[str, int, int], None]]): Reports progress per stage.
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats]
        Raises:
            FileReadError: If any file cannot be hashed; no groups are returned
        """
        stats = DeduplicationStats()
        total_start_time = time.time()

        # Stage 1: group by size
        start_time = time.time()
        groups = SizeStageImpl(self.grouper).process(files, progress_callback=progress_callback)
        DeduplicatorImpl._update_stats(stats, Stage.SIZE.value, time.time() - start_time, groups)

        # Stages 2 and 3: quick hash narrows, full hash confirms
        for stage in (QuickHashStage(self.grouper), FullHashStage(self.grouper)):
            if not groups:
                break
            start_time = time.time()
            groups = stage.process(groups, progress_callback=progress_callback)
            DeduplicatorImpl._update_stats(stats, stage.get_stage_name(), time.time() - start_time, groups)

        if not groups:
            logger.info("No duplication found")

        # Sort by descending size, then hash, for stable output
        groups.sort(key=lambda g: (-g.size, g.hash or ""))

        stats.total_time = time.time() - total_start_time
        return groups, stats

    @staticmethod
    def _update_stats(
        stats: DeduplicationStats,
        stage: str,
        duration: float,
        groups: List[DuplicateGroup],
    ):
        """Helper to update DeduplicationStats object."""
        stats.update_stage(
            stage_name=stage,
            groups_found=len(groups),
            files_processed=sum(len(g.files) for g in groups),
            duration=duration
        )
