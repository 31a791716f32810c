"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements file fingerprinting using the File class and pluggable hash algorithms.

HasherImpl computes two kinds of fingerprints and caches them in File.hashes:
- full:  digest of the complete file content (authoritative)
- quick: digest of the begin/[middle/]end sample windows for large files,
         or of the complete content for files below the sample threshold
         (pre-filter only, never used to confirm a duplicate)
"""

import hashlib
import logging
import os
from typing import List, Optional

import xxhash

from dupsift.core.errors import FileReadError
from dupsift.core.interfaces import Hasher, HashAlgorithm, Digest
from dupsift.core.models import File

logger = logging.getLogger(__name__)

KB = 1024
MB = 1024 * KB


class DeduplicationConfig:
    SAMPLE_THRESHOLD = 3 * MB  # Files larger than this are sampled in the quick stage
    SAMPLE_WINDOW = 4 * KB
    DIGEST_ALGORITHM = "sha256"
    QUICK_DIGEST_ALGORITHM = "xxh64"
    READ_CHUNK_SIZE = 1 * MB  # Streaming buffer for full reads


# =============================
# Hash Algorithms
# =============================

class HashlibAlgorithmImpl(HashAlgorithm):
    """Cryptographic digests from the standard library (sha256, md5, ...)."""

    def __init__(self, name: str):
        if name not in HASHLIB_ALGORITHMS:
            raise ValueError(f"Unsupported hashlib algorithm: '{name}'")
        self.name = name

    def new(self) -> Digest:
        return hashlib.new(self.name)

    def hash(self, data: bytes) -> str:
        return hashlib.new(self.name, data).hexdigest()


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    """Fast non-cryptographic xxHash digests."""

    _FACTORIES = {
        "xxh64": xxhash.xxh64,
        "xxh3_64": xxhash.xxh3_64,
        "xxh128": xxhash.xxh128,
    }

    def __init__(self, name: str = "xxh64"):
        if name not in self._FACTORIES:
            raise ValueError(f"Unsupported xxhash algorithm: '{name}'")
        self.name = name

    def new(self) -> Digest:
        return self._FACTORIES[self.name]()

    def hash(self, data: bytes) -> str:
        return self._FACTORIES[self.name](data).hexdigest()


HASHLIB_ALGORITHMS = ("sha256", "sha1", "sha512", "md5", "blake2b")
XXHASH_ALGORITHMS = tuple(XXHashAlgorithmImpl._FACTORIES)
SUPPORTED_ALGORITHMS = HASHLIB_ALGORITHMS + XXHASH_ALGORITHMS


def get_algorithm(name: str) -> HashAlgorithm:
    """
    Resolve an algorithm by name.

    Raises:
        ValueError: If the name is not one of SUPPORTED_ALGORITHMS
    """
    normalized = name.strip().lower()
    if normalized in HASHLIB_ALGORITHMS:
        return HashlibAlgorithmImpl(normalized)
    if normalized in XXHASH_ALGORITHMS:
        return XXHashAlgorithmImpl(normalized)
    raise ValueError(
        f"Unknown digest algorithm: '{name}'. "
        f"Supported: {', '.join(SUPPORTED_ALGORITHMS)}"
    )


# =============================
# Hasher
# =============================

class HasherImpl(Hasher):
    """
    Computes and caches quick and full fingerprints of files.

    Args:
        algorithm: Digest used for full-content fingerprints
        quick_algorithm: Digest used for quick fingerprints (may be the same)
        sample_threshold: Files larger than this are sampled when quick=True
        sample_window: Size of each sampled window in bytes
        sample_middle: Also sample a window from the middle of the file

    Raises:
        ValueError: If the window is not positive or the threshold does not exceed it
    """

    def __init__(
        self,
        algorithm: Optional[HashAlgorithm] = None,
        quick_algorithm: Optional[HashAlgorithm] = None,
        sample_threshold: int = DeduplicationConfig.SAMPLE_THRESHOLD,
        sample_window: int = DeduplicationConfig.SAMPLE_WINDOW,
        sample_middle: bool = True,
    ):
        if sample_window <= 0:
            raise ValueError("Sample window must be positive")
        if sample_threshold <= sample_window:
            raise ValueError("Sample threshold must be greater than the sample window")

        self.algorithm = algorithm or get_algorithm(DeduplicationConfig.DIGEST_ALGORITHM)
        self.quick_algorithm = quick_algorithm or get_algorithm(DeduplicationConfig.QUICK_DIGEST_ALGORITHM)
        self.sample_threshold = sample_threshold
        self.sample_window = sample_window
        self.sample_middle = sample_middle

    def fingerprint(self, file: File, quick: bool) -> str:
        """
        Returns the quick or full fingerprint of a file, computing it at most once.

        A quick request never reads or writes the full slot with a sampled value,
        so a later full request always covers the complete content.

        Raises:
            FileReadError: If the file cannot be stat'd, opened or read
        """
        cached = file.hashes.quick if quick else file.hashes.full
        if cached is not None:
            return cached

        if not quick:
            result = self._full_fingerprint(file, self.algorithm)
            file.hashes.full = result
            return result

        size = self._current_size(file)
        if size > self.sample_threshold and size > self.sample_window:
            result = self._sampled_fingerprint(file, size)
        else:
            result = self._full_fingerprint(file, self.quick_algorithm)
            # Whole-file read with the full digest is the full fingerprint
            if self.quick_algorithm.name == self.algorithm.name:
                file.hashes.full = result

        file.hashes.quick = result
        return result

    def sample_offsets(self, size: int) -> List[int]:
        """Offsets of the begin, [middle,] end windows for a file of the given size."""
        offsets = [0]
        if self.sample_middle:
            offsets.append((size - self.sample_window) // 2)
        offsets.append(size - self.sample_window)
        return offsets

    @staticmethod
    def _current_size(file: File) -> int:
        try:
            return os.stat(file.path).st_size
        except OSError as e:
            raise FileReadError(file.path, f"Cannot stat file ({e.strerror or e})") from e

    def _sampled_fingerprint(self, file: File, size: int) -> str:
        offsets = self.sample_offsets(size)
        try:
            with open(file.path, 'rb') as f:
                windows = []
                for offset in offsets:
                    f.seek(offset)
                    windows.append(f.read(self.sample_window))
        except OSError as e:
            raise FileReadError(file.path, f"Error reading sample windows ({e.strerror or e})") from e

        digest = self.quick_algorithm.new()
        for offset, window in zip(offsets, windows):
            if len(window) != self.sample_window:
                raise FileReadError(
                    file.path,
                    f"Short read at offset {offset}: got {len(window)} of {self.sample_window} bytes"
                )
            digest.update(window)

        logger.debug(f"Sampled {len(offsets)} windows of {file.path}")
        return digest.hexdigest()

    @staticmethod
    def _full_fingerprint(file: File, algorithm: HashAlgorithm) -> str:
        digest = algorithm.new()
        try:
            with open(file.path, 'rb') as f:
                for chunk in iter(lambda: f.read(DeduplicationConfig.READ_CHUNK_SIZE), b''):
                    digest.update(chunk)
        except OSError as e:
            raise FileReadError(file.path, f"Failed to read file ({e.strerror or e})") from e
        return digest.hexdigest()

