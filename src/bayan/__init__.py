"""
Bayan finds files with byte-identical content across directory trees.

Core features:
- Incremental block hashing (CRC-32 or xxHash32): comparison stops at the first differing block
- Size check before any I/O
- Union-find grouping, so duplicate groups stay transitive whatever the discovery order
- Safe "keep one" action that moves the rest to the system trash (via send2trash)
- CLI interface for headless/server usage
"""

from importlib.metadata import PackageNotFoundError, version as _version

try:
    __version__ = _version("bayan")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from bayan.commands import DuplicateSearchCommand
from bayan.core import (
    SearchParams, ChecksumKind, FileCandidate, DuplicateGroup, DeduplicationStats,
    ConfigurationError, UnreadableFileError,
)
from bayan.utils.convert_utils import ConvertUtils
from bayan.services import DuplicateService
from bayan.services.file_service import FileService

__all__ = [
    "DuplicateSearchCommand",
    "SearchParams",
    "ChecksumKind",
    "FileCandidate",
    "DuplicateGroup",
    "DeduplicationStats",
    "ConfigurationError",
    "UnreadableFileError",
    "ConvertUtils",
    "DuplicateService",
    "FileService",
    "__version__",
]
