"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Drives the pairwise comparator over a lazy stream of candidates.

For every new candidate:
    - each existing class of the same size is compared through one live member
    - classes of another size are never looked at; a candidate with no
      same-size class is counted as a size rejection and never opened
    - every match is merged into the partition (two matches merge two classes)
    - an unreadable file is excluded and reported, the run continues
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from bayan.core.comparator import PairwiseComparatorImpl
from bayan.core.errors import ConfigurationError, UnreadableFileError
from bayan.core.grouper import EquivalenceClassBuilderImpl
from bayan.core.interfaces import Comparator, Deduplicator
from bayan.core.models import DeduplicationStats, DuplicateGroup, FileCandidate

logger = logging.getLogger(__name__)


@dataclass
class _ClassOutcome:
    """Result of comparing one new candidate with one existing class."""
    match: Optional[FileCandidate] = None
    comparisons: int = 0
    unreadable: List[Tuple[FileCandidate, UnreadableFileError]] = field(default_factory=list)
    candidate_error: Optional[UnreadableFileError] = None


# =============================
# Main Deduplicator Class
# =============================
class DeduplicatorImpl(Deduplicator):
    """
    Builds duplicate groups incrementally as candidates arrive.

    With workers > 1 the per-class comparisons of one candidate run on a thread
    pool. The partition itself is only touched from the calling thread.

    Files are only opened to be compared with a same-size class. A file whose
    size no other candidate shares is never opened, so if it is unreadable it
    is neither excluded nor reported: it simply cannot be a duplicate.
    """
    def __init__(self, comparator: Comparator = None, workers: int = 1):
        if workers < 1:
            raise ConfigurationError("Number of workers must be at least 1")
        self.comparator = comparator or PairwiseComparatorImpl()
        self.workers = workers

    def find_duplicates(
        self,
        candidates: Iterable[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Tuple[List[DuplicateGroup], DeduplicationStats]:
        """
        Main comparison loop.
        Args:
            candidates: Lazy stream of candidates in discovery order
            progress_callback (Optional[Callable[[str, int, object], None]]): Reports progress per candidate.
        Returns:
            Tuple[List[DuplicateGroup], DeduplicationStats]
        """
        stats = DeduplicationStats()
        builder = EquivalenceClassBuilderImpl()
        start_time = time.time()

        executor = ThreadPoolExecutor(max_workers=self.workers) if self.workers > 1 else None
        try:
            for index, candidate in enumerate(candidates, 1):
                if candidate in builder:
                    logger.debug(f"Ignoring repeated candidate: {candidate.path}")
                    continue
                stats.increment("candidates")
                self._process_candidate(candidate, builder, stats, executor)

                if progress_callback:
                    progress_callback("Comparing", index, None)
        finally:
            if executor:
                executor.shutdown(wait=True)

        groups = builder.groups()
        stats.increment("groups", len(groups))
        stats.total_time = time.time() - start_time
        logger.debug(f"Comparison finished: {len(groups)} groups in {stats.total_time:.2f}s")
        return groups, stats

    def _process_candidate(
        self,
        candidate: FileCandidate,
        builder: EquivalenceClassBuilderImpl,
        stats: DeduplicationStats,
        executor: Optional[ThreadPoolExecutor]
    ) -> None:
        # Members of one class share content, hence size
        targets = builder.classes_of_size(candidate.size)
        if not targets and len(builder):
            stats.increment("size_rejections")
        builder.add(candidate)

        if executor and len(targets) > 1:
            futures = [executor.submit(self._compare_with_class, candidate, members) for members in targets]
            outcomes = [f.result() for f in futures]
        else:
            outcomes = []
            for members in targets:
                outcome = self._compare_with_class(candidate, members)
                outcomes.append(outcome)
                if outcome.candidate_error:
                    break

        candidate_error = None
        for outcome in outcomes:
            stats.increment("comparisons", outcome.comparisons)
            for member, error in outcome.unreadable:
                self._exclude(builder, stats, member, error)
            if outcome.candidate_error and candidate_error is None:
                candidate_error = outcome.candidate_error

        if candidate_error:
            self._exclude(builder, stats, candidate, candidate_error)
            return

        for outcome in outcomes:
            if outcome.match is not None:
                logger.debug(f"Duplicate: {candidate.path} == {outcome.match.path}")
                builder.merge(candidate, outcome.match)
                stats.increment("matches")

    def _compare_with_class(self, candidate: FileCandidate, members: List[FileCandidate]) -> _ClassOutcome:
        """
        Compares the candidate with the first readable member of a class.
        Runs on worker threads: must not touch the partition or the stats.
        """
        outcome = _ClassOutcome()
        for member in members:
            outcome.comparisons += 1
            try:
                if self.comparator.compare(candidate, member):
                    outcome.match = member
                return outcome
            except UnreadableFileError as e:
                if e.path == candidate.path:
                    outcome.candidate_error = e
                    return outcome
                # Representative is gone; the next member speaks for the class
                outcome.unreadable.append((member, e))
        return outcome

    @staticmethod
    def _exclude(
        builder: EquivalenceClassBuilderImpl,
        stats: DeduplicationStats,
        candidate: FileCandidate,
        error: UnreadableFileError
    ) -> None:
        if builder.is_excluded(candidate):
            return
        builder.exclude(candidate)
        stats.increment("unreadable")
        message = f"Skipping unreadable file {candidate.path}: {error.reason or error}"
        logger.warning(message)
        stats.add_warning(message)
