"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for candidate discovery and duplicate detection.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable
import os
from enum import Enum

from bayan.core.errors import ConfigurationError


# =============================
# Enums
# =============================

class ChecksumKind(Enum):
    """
    Checksum function used for per-block hashing.
    Both are non-cryptographic: they only detect content differences.
    """
    CRC32 = "crc32"
    XXHASH = "xxhash"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            ChecksumKind.CRC32: "CRC-32",
            ChecksumKind.XXHASH: "xxHash32",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class FileCandidate:
    """
    A regular file admitted into the comparison process.
    Identity is the canonical path; size is captured once at discovery.
    """
    path: str
    size: int  # in bytes

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<FileCandidate path={self.path}, size={self.size}>"


@dataclass(frozen=True)
class BlockDigest:
    """Checksum of one block plus the number of bytes it covers."""
    length: int
    checksum: int


@dataclass
class DuplicateGroup:
    """
    An equivalence class of files with identical content.
    Files are kept in discovery order.
    """
    size: int
    files: List[FileCandidate]

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}>"


class DeduplicationStats:
    """
    Statistics collected while comparing candidates.
    """
    COUNTERS = (
        "candidates",
        "comparisons",
        "matches",
        "size_rejections",
        "unreadable",
        "groups",
    )

    def __init__(self):
        self.total_time: float = 0.0
        self.counters: Dict[str, int] = {name: 0 for name in self.COUNTERS}
        self.warnings: List[str] = []
        self._listeners: List[Callable[[str, Dict], None]] = []

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when counters change."""
        self._listeners.append(listener)

    def increment(self, counter: str, amount: int = 1) -> None:
        if counter not in self.counters:
            raise KeyError(f"Unknown counter: {counter}")
        self.counters[counter] += amount
        self._notify(counter, {"value": self.counters[counter]})

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)
        self._notify("warning", {"message": message})

    def _notify(self, event: str, payload: Dict[str, Union[int, str]]) -> None:
        for listener in self._listeners:
            listener(event, payload)

    def get(self, counter: str) -> int:
        return self.counters[counter]

    def print_summary(self) -> str:
        labels = {
            "candidates": "Candidates",
            "comparisons": "Comparisons",
            "matches": "Matches",
            "size_rejections": "Rejected by size",
            "unreadable": "Unreadable files",
            "groups": "Duplicate groups",
        }

        lines = [
            "Search Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
        ]
        for name in self.COUNTERS:
            lines.append(f"{labels[name]}: {self.counters[name]}")

        return "\n".join(lines)


"""
DTO for search parameters with built-in validation.
"""
from bayan.utils.convert_utils import ConvertUtils

DEFAULT_BLOCK_SIZE = 1024
DEFAULT_MIN_SIZE = 1


@dataclass
class SearchParams:
    """Parameters for one duplicate search, validated on creation."""
    root_dirs: List[str]
    excluded_dirs: List[str] = field(default_factory=list)
    masks: List[str] = field(default_factory=list)
    min_size_bytes: int = DEFAULT_MIN_SIZE
    block_size: int = DEFAULT_BLOCK_SIZE
    recursive: bool = False
    checksum: ChecksumKind = ChecksumKind.CRC32
    workers: int = 1

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dirs:
            raise ConfigurationError("At least one directory is required")

        if self.block_size <= 0:
            raise ConfigurationError(f"Block size must be at least 1 byte, got {self.block_size}")

        if self.min_size_bytes < 0:
            raise ConfigurationError("Minimum size cannot be negative")

        if self.workers < 1:
            raise ConfigurationError("Number of workers must be at least 1")

        if not isinstance(self.checksum, ChecksumKind):
            try:
                self.checksum = ChecksumKind(self.checksum)
            except ValueError:
                raise ConfigurationError(f"Unknown checksum: {self.checksum!r}")

        # Drop blank masks left over from comma-separated input
        self.masks = [m.strip() for m in self.masks if m and m.strip()]

    @staticmethod
    def from_human_readable(
            root_dirs: List[str],
            min_size_str: str = "1",
            block_size_str: str = "1024",
            excluded_dirs: Optional[List[str]] = None,
            masks: Optional[List[str]] = None,
            recursive: bool = False,
            checksum: ChecksumKind = ChecksumKind.CRC32,
            workers: int = 1,
    ) -> 'SearchParams':
        """
        Factory method to create params from human-readable inputs.
        Size strings accept the formats of ConvertUtils.human_to_bytes.
        """
        try:
            min_size = ConvertUtils.human_to_bytes(min_size_str)
            block_size = ConvertUtils.human_to_bytes(block_size_str)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        return SearchParams(
            root_dirs=list(root_dirs),
            excluded_dirs=list(excluded_dirs or []),
            masks=list(masks or []),
            min_size_bytes=min_size,
            block_size=block_size,
            recursive=recursive,
            checksum=checksum,
            workers=workers,
        )
