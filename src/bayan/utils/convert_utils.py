"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Conversions between byte counts and human-readable size strings.
Multiples are binary: 1K == 1KB == 1024 bytes.
"""
import re

_POWERS = {"": 0, "K": 1, "M": 2, "G": 3, "T": 4, "P": 5}
_UNIT_NAMES = ["B", "KB", "MB", "GB", "TB", "PB"]

# number, optional space, optional multiplier, optional trailing B
_SIZE_RE = re.compile(r"^(-?)(\d+(?:\.\d+)?)\s*([KMGTP]?)B?$")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 512B, 1.50KB, 3.20MB).
        """
        if size_bytes < 1024:
            return f"{max(size_bytes, 0)}B"

        size = float(size_bytes)
        power = 0
        while size >= 1024 and power < len(_UNIT_NAMES) - 1:
            size /= 1024
            power += 1
        return f"{size:.2f}{_UNIT_NAMES[power]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Accepts '1000', '512B', '64K', '1.5MB', '2G' and so on, case-insensitive.
        Raises ValueError for negative sizes or invalid formats.
        """
        text = str(size_str).strip().upper()
        if not text:
            raise ValueError("Empty size string")

        match = _SIZE_RE.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{text}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )

        sign, number, multiplier = match.groups()
        if sign:
            raise ValueError(f"Negative size not allowed: '{text}'")
        return int(float(number) * 1024 ** _POWERS[multiplier])

