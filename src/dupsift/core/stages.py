"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Deduplication pipeline stages for the size → quick hash → full hash engine.

CLASS HIERARCHY
---------------
SizeStageImpl   : Initial size-based grouping (SizeStage interface)
HashStageBase   : Shared regrouping logic for fingerprint stages
QuickHashStage  : Sampled fingerprints for large files, narrows candidates cheaply
FullHashStage   : Full-content fingerprints, the only stage that confirms duplicates

STAGE CONTRACTS
---------------
Each stage implements a consistent `process()` interface that:
  • Accepts candidate groups from the previous stage
  • Returns refined groups (2+ files each) for the next stage
  • Reports progress via callback (stage name, processed count, total count)
  • Propagates FileReadError: a failed read aborts the whole run
"""

import logging
from typing import List, Optional
from dupsift.core.models import File, DuplicateGroup, Stage
from dupsift.core.grouper import FileGrouperImpl
from dupsift.core.interfaces import SizeStage, HashStage, ProgressCallback

logger = logging.getLogger(__name__)


class SizeStageImpl(SizeStage):
    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def process(
            self,
            files: List[File],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Group by file size.
        Returns list of DuplicateGroups with 2+ files of same size.
        """
        size_groups = self.grouper.partition_by_size(files)
        groups = [
            DuplicateGroup(size=size, files=files_list)
            for size, files_list in size_groups.items()
        ]

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)  # Fake instant progress

        logger.info(f"{Stage.SIZE.value}: {len(groups)} groups from {len(files)} files")
        return groups


class HashStageBase(HashStage):
    """
    Regroups candidate groups by (size, fingerprint).
    Subclasses choose whether quick or full fingerprints are used.
    """
    quick: bool = False

    def __init__(self, grouper: FileGrouperImpl):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        raise NotImplementedError

    def process(
        self,
        groups: List[DuplicateGroup],
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        stage_name = self.get_stage_name()
        total_files = sum(len(group.files) for group in groups)
        processed_files = 0

        def tracked(files: List[File]):
            nonlocal processed_files
            for file in files:
                yield file
                processed_files += 1
                if progress_callback:
                    progress_callback(stage_name, processed_files, total_files)

        hash_groups = self.grouper.partition_by_hash(
            (tracked(group.files) for group in groups),
            quick=self.quick
        )
        new_groups = [
            DuplicateGroup(size=size, files=files, hash=digest)
            for (size, digest), files in hash_groups.items()
        ]

        logger.info(f"{stage_name}: {len(new_groups)} groups from {total_files} candidates")
        return new_groups


class QuickHashStage(HashStageBase):
    quick = True

    def get_stage_name(self) -> str:
        return Stage.QUICK.value


class FullHashStage(HashStageBase):
    quick = False

    def get_stage_name(self) -> str:
        return Stage.FULL.value
