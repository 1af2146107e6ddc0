"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Block-wise checksum stream over a single file.

Each block is hashed on its own (checksums are not chained), so two streams
can be compared block by block and abandoned at the first disagreement.
"""

import zlib
from typing import BinaryIO, Iterator

import xxhash

from bayan.core.errors import ConfigurationError, UnreadableFileError
from bayan.core.interfaces import BlockHasher, ChecksumAlgorithm
from bayan.core.models import BlockDigest, ChecksumKind, DEFAULT_BLOCK_SIZE


class Crc32AlgorithmImpl(ChecksumAlgorithm):
    """CRC-32 from zlib. The default block checksum."""

    @staticmethod
    def checksum(data: bytes) -> int:
        return zlib.crc32(data) & 0xFFFFFFFF


class XXHash32AlgorithmImpl(ChecksumAlgorithm):
    """xxHash32, faster than CRC-32 on large blocks."""

    @staticmethod
    def checksum(data: bytes) -> int:
        return xxhash.xxh32_intdigest(data)


def algorithm_for(kind: ChecksumKind) -> ChecksumAlgorithm:
    """Returns the checksum implementation for a ChecksumKind."""
    if kind == ChecksumKind.CRC32:
        return Crc32AlgorithmImpl()
    if kind == ChecksumKind.XXHASH:
        return XXHash32AlgorithmImpl()
    raise ConfigurationError(f"Unknown checksum: {kind!r}")


class BlockHasherImpl(BlockHasher):
    """
    Restartable lazy sequence of BlockDigest values for one open file.

    Every iteration seeks back to the start of the file and reads consecutive
    blocks of up to `block_size` bytes until a read returns nothing. Only the
    last block may be shorter than `block_size`.

    Attributes:
        handle: File object opened in binary mode
        path: Path used in error messages
        block_size: Maximum number of bytes per block
        algorithm: Checksum implementation applied to each block
    """

    def __init__(
        self,
        handle: BinaryIO,
        block_size: int = DEFAULT_BLOCK_SIZE,
        algorithm: ChecksumAlgorithm = None,
        path: str = None,
    ):
        if block_size < 1:
            raise ConfigurationError(f"Block size must be at least 1 byte, got {block_size}")
        self.handle = handle
        self.block_size = block_size
        self.algorithm = algorithm or Crc32AlgorithmImpl()
        self.path = path or getattr(handle, "name", "<stream>")

    def __iter__(self) -> Iterator[BlockDigest]:
        try:
            self.handle.seek(0)
        except OSError as e:
            raise UnreadableFileError(self.path, str(e)) from e

        while True:
            try:
                block = self.handle.read(self.block_size)
            except OSError as e:
                raise UnreadableFileError(self.path, str(e)) from e
            if not block:
                return
            yield BlockDigest(length=len(block), checksum=self.algorithm.checksum(block))
