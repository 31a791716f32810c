"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements the size and hash partitioners using File objects and Hasher.
Both partitioners drop groups with fewer than two files.
"""

from typing import List, Dict, Tuple, Any, Callable, Iterable
from collections import defaultdict
from dupsift.core.interfaces import FileGrouper, Hasher
from dupsift.core.models import File
from dupsift.core.hasher import HasherImpl


class FileGrouperImpl(FileGrouper):
    """
    A concrete implementation of FileGrouper.
    Uses an injected Hasher instance for flexibility and testability.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def partition_by_size(self, files: Iterable[File]) -> Dict[int, List[File]]:
        """Groups files by their exact size. Pure, no I/O."""
        return self._group_by(files, lambda f: f.size)

    def partition_by_hash(
        self,
        groups: Iterable[Iterable[File]],
        quick: bool
    ) -> Dict[Tuple[int, str], List[File]]:
        """
        Regroups every file of every input group by (size, fingerprint).

        With quick=False every file gets a full-content fingerprint, even when
        a quick fingerprint from an earlier pass is cached.

        Raises:
            FileReadError: On the first file that cannot be hashed
        """
        files = (file for group in groups for file in group)
        return self._group_by(files, lambda f: (f.size, self.hasher.fingerprint(f, quick)))

    @staticmethod
    def _group_by(files: Iterable[File], key_func: Callable[[File], Any]) -> Dict[Any, List[File]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: Files to group, in the order they should appear in each group
            key_func: Function that computes a hashable key from a File
        Returns:
            Dict[key, List[File]] without singleton groups
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)

        return {key: group for key, group in groups.items() if len(group) >= 2}
