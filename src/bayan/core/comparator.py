"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Pairwise content comparison with early termination.

Order of checks:
  1. Size mismatch      → not equal, nothing is opened
  2. Both empty         → equal, nothing is opened
  3. Lockstep blocks    → not equal at the first block whose length or checksum differs
  4. Both streams end   → equal
"""

from contextlib import ExitStack
from itertools import zip_longest
from typing import BinaryIO, Callable

from bayan.core.errors import ConfigurationError, UnreadableFileError
from bayan.core.hasher import BlockHasherImpl, Crc32AlgorithmImpl
from bayan.core.interfaces import ChecksumAlgorithm, Comparator
from bayan.core.models import FileCandidate, DEFAULT_BLOCK_SIZE

Opener = Callable[[str, str], BinaryIO]


class PairwiseComparatorImpl(Comparator):
    """
    Compares two candidates by walking their block digests side by side.
    Holds no mutable state, so one instance can be shared between threads.
    Every call opens its own handles and closes them before returning.
    """

    def __init__(
        self,
        block_size: int = DEFAULT_BLOCK_SIZE,
        algorithm: ChecksumAlgorithm = None,
        opener: Opener = open,
    ):
        if block_size < 1:
            raise ConfigurationError(f"Block size must be at least 1 byte, got {block_size}")
        self.block_size = block_size
        self.algorithm = algorithm or Crc32AlgorithmImpl()
        self.opener = opener

    def compare(self, a: FileCandidate, b: FileCandidate) -> bool:
        if a.size != b.size:
            return False
        if a.size == 0:
            return True

        with ExitStack() as stack:
            first = self._hasher(stack, a)
            second = self._hasher(stack, b)
            for left, right in zip_longest(first, second):
                # One stream ended early: the file changed size since discovery
                if left is None or right is None:
                    return False
                if left != right:
                    return False
        return True

    def _hasher(self, stack: ExitStack, candidate: FileCandidate) -> BlockHasherImpl:
        try:
            handle = stack.enter_context(self.opener(candidate.path, "rb"))
        except OSError as e:
            raise UnreadableFileError(candidate.path, str(e)) from e
        return BlockHasherImpl(handle, self.block_size, self.algorithm, path=candidate.path)
