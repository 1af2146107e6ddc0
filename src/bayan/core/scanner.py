"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Produces the candidate stream for the duplicate detection engine.
Features:
- Scans one or more root directories, top level only or recursively
- Prunes excluded directories before descending into them
- Applies minimum size and filename mask filters
- Yields candidates lazily, so comparison starts before the walk ends
"""

import os
import stat
import time
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Set

logger = logging.getLogger(__name__)

# Local imports
from bayan.core.errors import ConfigurationError
from bayan.core.interfaces import CandidateScanner
from bayan.core.masks import compile_masks, matches_any
from bayan.core.models import FileCandidate, DEFAULT_MIN_SIZE


class CandidateScannerImpl(CandidateScanner):
    """
    Walks directories and yields files that pass all filters.

    Attributes:
        root_dirs: Directories to scan, resolved to absolute paths
        excluded_dirs: Directories skipped together with everything below them
        masks: Filename wildcards; a file must match at least one
        min_size: Minimum file size in bytes
        recursive: Descend into subdirectories when True
    """

    def __init__(
        self,
        root_dirs: List[str],
        excluded_dirs: Optional[List[str]] = None,
        masks: Optional[List[str]] = None,
        min_size: int = DEFAULT_MIN_SIZE,
        recursive: bool = False
    ):
        self.root_dirs = [str(Path(d).resolve()) for d in root_dirs]
        self.excluded_dirs = [str(Path(d).resolve()) for d in excluded_dirs] if excluded_dirs else []
        self.masks = list(masks) if masks else []
        self.min_size = min_size
        self.recursive = recursive
        self._patterns = compile_masks(self.masks)

    def validate(self) -> None:
        """Raises ConfigurationError if any root is missing or not a directory."""
        for root in self.root_dirs:
            root_path = Path(root)
            if not root_path.exists():
                raise ConfigurationError(f"Directory does not exist: {root}")
            if not root_path.is_dir():
                raise ConfigurationError(f"Not a directory: {root}")

    def scan(self) -> Iterator[FileCandidate]:
        """
        Lazily yields candidates in discovery order.
        A file reachable from several roots is yielded once.
        """
        self.validate()
        logger.debug(f"Root directories: {self.root_dirs}")
        logger.debug(f"Filters: min_size={self.min_size}, masks={self.masks}, recursive={self.recursive}")

        seen: Set[str] = set()
        found = 0
        start_time = time.time()

        for root in self.root_dirs:
            if self._is_excluded_directory(root):
                logger.debug(f"Skipping excluded root: {root}")
                continue

            for dirpath, dirs, files in os.walk(root):
                if self.recursive:
                    # Prune subdirectories BEFORE os.walk enters them
                    dirs[:] = sorted(d for d in dirs if self._prefilter_dirs(Path(dirpath) / d))
                else:
                    dirs[:] = []

                for filename in sorted(files):
                    path = str(Path(dirpath) / filename)
                    if path in seen:
                        continue
                    candidate = self._process_file(path)
                    if candidate is None:
                        continue
                    seen.add(path)
                    found += 1
                    yield candidate

        logger.debug(f"Scan completed in {time.time() - start_time:.2f}s, {found} candidates")

    def _is_excluded_directory(self, path: str) -> bool:
        """Check if path is an excluded directory or lies inside one."""
        for excluded_dir in self.excluded_dirs:
            if path == excluded_dir or path.startswith(excluded_dir.rstrip(os.sep) + os.sep):
                return True
        return False

    def _prefilter_dirs(self, path: Path) -> bool:
        """Skip excluded, symlinked and inaccessible directories."""
        if self._is_excluded_directory(str(path)):
            logger.debug(f"Skipping excluded directory: {path}")
            return False

        try:
            if path.is_symlink():
                logger.debug(f"Skipping symlinked directory: {path}")
                return False
            return path.is_dir() and os.access(path, os.R_OK | os.X_OK)
        except OSError:
            logger.debug(f"Skipping inaccessible directory: {path}")
            return False

    def _process_file(self, path: str) -> Optional[FileCandidate]:
        """
        Apply all filters to one path.
        Returns:
            Optional[FileCandidate]: candidate if the file passes, else None
        """
        if not matches_any(os.path.basename(path), self._patterns):
            return None

        try:
            if os.path.islink(path):
                logger.debug(f"Skipping symbolic link: {path}")
                return None
            stat_result = os.stat(path)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        if not stat.S_ISREG(stat_result.st_mode):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        if stat_result.st_size < self.min_size:
            logger.debug(f"Skipping {path} (size {stat_result.st_size} below minimum)")
            return None

        logger.debug(f"Accepted file: {path} ({stat_result.st_size} bytes)")
        return FileCandidate(path=path, size=stat_result.st_size)
