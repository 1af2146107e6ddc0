"""
Core duplicate detection engine: scanner, block hasher, comparator, grouper and driver.

This package contains the performance-critical foundation of bayan:
- CandidateScannerImpl: directory traversal with exclusion, mask and size filters
- BlockHasherImpl + Crc32AlgorithmImpl / XXHash32AlgorithmImpl: per-block checksums
- PairwiseComparatorImpl: lockstep block comparison with early exit
- EquivalenceClassBuilderImpl: union-find partition into duplicate groups
- DeduplicatorImpl: feeds candidates through the comparator into the partition
- Models: FileCandidate, DuplicateGroup, SearchParams and statistics

All components are pure Python with no UI dependencies.
"""

from .errors import BayanError, ConfigurationError, UnreadableFileError
from .models import (
    FileCandidate, BlockDigest, DuplicateGroup, DeduplicationStats,
    SearchParams, ChecksumKind)
from .hasher import BlockHasherImpl, Crc32AlgorithmImpl, XXHash32AlgorithmImpl, algorithm_for
from .comparator import PairwiseComparatorImpl
from .grouper import EquivalenceClassBuilderImpl
from .deduplicator import DeduplicatorImpl
from .scanner import CandidateScannerImpl

__all__ = [
    "BayanError",
    "ConfigurationError",
    "UnreadableFileError",
    "FileCandidate",
    "BlockDigest",
    "DuplicateGroup",
    "DeduplicationStats",
    "SearchParams",
    "ChecksumKind",
    "BlockHasherImpl",
    "Crc32AlgorithmImpl",
    "XXHash32AlgorithmImpl",
    "algorithm_for",
    "PairwiseComparatorImpl",
    "EquivalenceClassBuilderImpl",
    "DeduplicatorImpl",
    "CandidateScannerImpl",
]
