"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size parsing for the sampling options and size formatting for the report.
"""
import re

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
_MULTIPLIERS = {"": 1, "K": 1024, "M": 1024 ** 2, "G": 1024 ** 3, "T": 1024 ** 4, "P": 1024 ** 5}
_SIZE_RE = re.compile(r"^(?P<value>\d+(?:\.\d+)?)\s*(?P<prefix>[KMGTP]?)B?$")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """Format a byte count with two decimals, e.g. 1.50KB, 3.00MB."""
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in _UNITS:
            if value < 1024:
                return f"{value:.2f}{unit}"
            value /= 1024
        return f"{value:.2f}EB"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parse sizes such as '4096', '4K', '4KB', '1.5MB' or '3m' into bytes.
        Units are binary (1K == 1024). Raises ValueError on anything else,
        including negative values.
        """
        text = size_str.strip().upper()
        if text.startswith("-"):
            raise ValueError(f"Negative size not allowed: '{size_str}'")

        match = _SIZE_RE.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 4096, 4K, 4KB, 1.5MB, 3G"
            )
        return int(float(match.group("value")) * _MULTIPLIERS[match.group("prefix")])

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False
