"""
Unified command orchestrator for duplicate search.
This is the SINGLE source of truth for the search workflow. The CLI only
parses arguments and renders results.
"""
import logging
from typing import List, Optional, Callable, Tuple

from bayan.core.comparator import PairwiseComparatorImpl
from bayan.core.deduplicator import DeduplicatorImpl
from bayan.core.hasher import algorithm_for
from bayan.core.models import DuplicateGroup, DeduplicationStats, SearchParams
from bayan.core.scanner import CandidateScannerImpl

logger = logging.getLogger(__name__)


class DuplicateSearchCommand:
    """
    Orchestrates the whole search:
    1. Build the candidate scanner from params and validate the roots
    2. Build the comparator (block size + checksum) and the deduplicator
    3. Stream candidates through the deduplicator

    Usage:
        params = SearchParams(root_dirs=["/data"], recursive=True)
        groups, stats = DuplicateSearchCommand().execute(
            params,
            progress_callback=cli_progress_printer
        )
    """

    def execute(
            self,
            params: SearchParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Execute the search with given parameters.

        Args:
            params: Validated search parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Tuple of (duplicate_groups, statistics)

        Raises:
            ConfigurationError: If a root directory is missing or not a directory
        """
        scanner = CandidateScannerImpl(
            root_dirs=params.root_dirs,
            excluded_dirs=params.excluded_dirs,
            masks=params.masks,
            min_size=params.min_size_bytes,
            recursive=params.recursive
        )
        # Fail before any comparison work starts
        scanner.validate()

        comparator = PairwiseComparatorImpl(
            block_size=params.block_size,
            algorithm=algorithm_for(params.checksum)
        )
        deduplicator = DeduplicatorImpl(comparator, workers=params.workers)

        logger.info(
            f"Searching {len(params.root_dirs)} directories "
            f"(block size {params.block_size}, checksum {params.checksum.display_name})"
        )
        return deduplicator.find_duplicates(scanner.scan(), progress_callback=progress_callback)
