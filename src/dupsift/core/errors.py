"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exceptions raised by the deduplication core.
"""


class FileReadError(OSError):
    """
    A file could not be stat'd, opened or fully read while hashing.
    Aborts the whole run: no partial duplicate groups are produced.
    """

    def __init__(self, path: str, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path
