"""
dupsift is a duplicate file finder that narrows candidates by size, then by a
sampled quick hash, then confirms them with a full-content hash.
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("dupsift")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from dupsift.commands import DeduplicationCommand
from dupsift.core import (
    DeduplicationParams, DeduplicatorImpl, File, DuplicateGroup, FileReadError)
from dupsift.utils.convert_utils import ConvertUtils

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DeduplicatorImpl",
    "File",
    "DuplicateGroup",
    "FileReadError",
    "ConvertUtils",
    "__version__",
]
