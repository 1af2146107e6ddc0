"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate detection engine.
These protocols use Python's `typing.Protocol` for structural typing, so tests and
alternative implementations can be plugged in without inheritance.

Key Components:
---------------
- ChecksumAlgorithm: Interface for per-block checksum functions (CRC-32, xxHash32).
- BlockHasher: Restartable iterable of BlockDigest values over one open file.
- Comparator: Decides whether two candidates have identical content.
- CandidateScanner: Produces a lazy stream of filtered FileCandidate objects.
- EquivalenceClassBuilder: Maintains the partition of candidates into duplicate groups.
- Deduplicator: Drives the comparator over a candidate stream and returns the groups.
"""

from typing import Protocol, List, Tuple, Optional, Callable, Iterable, Iterator
from bayan.core.models import (
    FileCandidate,
    BlockDigest,
    DuplicateGroup,
    DeduplicationStats,
)


# ===== Interfaces =====

class ChecksumAlgorithm(Protocol):
    """
    Interface for block checksum functions.
    Implementations must be deterministic and return an unsigned integer.
    """

    @staticmethod
    def checksum(data: bytes) -> int:
        """Computes the checksum of the provided byte data."""
        ...


class BlockHasher(Protocol):
    """Restartable lazy sequence of digests over one open file."""
    def __iter__(self) -> Iterator[BlockDigest]: ...


class Comparator(Protocol):
    """Content equality test for two candidates."""
    def compare(self, a: FileCandidate, b: FileCandidate) -> bool:
        """
        Returns True only if both files have identical content.

        Raises:
            UnreadableFileError: if either file cannot be opened or read.
        """
        ...


class CandidateScanner(Protocol):
    """
    Interface for producing candidates from the file system.

    Methods:
        validate: Fails fast on unusable roots.
        scan: Lazily yields candidates that passed all filters.
    """
    def validate(self) -> None: ...
    def scan(self) -> Iterator[FileCandidate]: ...


class EquivalenceClassBuilder(Protocol):
    """
    Interface for the partition of candidates into duplicate groups.
    Classes are only ever merged, never split.
    """
    def add(self, candidate: FileCandidate) -> None: ...
    def find(self, candidate: FileCandidate) -> FileCandidate: ...
    def merge(self, a: FileCandidate, b: FileCandidate) -> None: ...
    def exclude(self, candidate: FileCandidate) -> None: ...
    def classes(self) -> List[List[FileCandidate]]: ...
    def classes_of_size(self, size: int) -> List[List[FileCandidate]]: ...
    def representatives(self) -> List[FileCandidate]: ...
    def groups(self, min_members: int = 2) -> List[DuplicateGroup]: ...


class Deduplicator(Protocol):
    """
    Interface for the main duplicate detection engine.
    """
    def find_duplicates(
        self,
        candidates: Iterable[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Compare every candidate with the classes discovered before it.

        Args:
            candidates: Lazy stream of filtered candidates, in discovery order.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            A tuple containing:
                - Duplicate groups with two or more files
                - Statistics collected during processing
        """
        ...
