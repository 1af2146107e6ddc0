"""
Unit tests for BlockHasherImpl and the checksum algorithms.
Verifies block boundaries, restartability and error wrapping.
"""
import io
import zlib

import pytest
import xxhash

from bayan.core.errors import ConfigurationError, UnreadableFileError
from bayan.core.hasher import (
    BlockHasherImpl, Crc32AlgorithmImpl, XXHash32AlgorithmImpl, algorithm_for
)
from bayan.core.models import BlockDigest, ChecksumKind


class TestChecksumAlgorithms:
    """Both algorithms return unsigned 32-bit integers."""

    def test_crc32_matches_zlib(self):
        data = b"hello world"
        assert Crc32AlgorithmImpl.checksum(data) == zlib.crc32(data) & 0xFFFFFFFF

    def test_xxhash_matches_xxh32(self):
        data = b"hello world"
        assert XXHash32AlgorithmImpl.checksum(data) == xxhash.xxh32(data).intdigest()

    @pytest.mark.parametrize("algorithm", [Crc32AlgorithmImpl(), XXHash32AlgorithmImpl()])
    def test_values_fit_in_32_bits(self, algorithm):
        for data in (b"", b"\x00", b"\xff" * 1000):
            value = algorithm.checksum(data)
            assert 0 <= value <= 0xFFFFFFFF

    def test_algorithm_for_kind(self):
        assert isinstance(algorithm_for(ChecksumKind.CRC32), Crc32AlgorithmImpl)
        assert isinstance(algorithm_for(ChecksumKind.XXHASH), XXHash32AlgorithmImpl)


class TestBlockHasherImpl:
    """Test block-by-block digest stream."""

    def test_splits_into_full_blocks_and_short_tail(self):
        """25 bytes in blocks of 10 → lengths 10, 10, 5."""
        data = bytes(range(25))
        digests = list(BlockHasherImpl(io.BytesIO(data), block_size=10))

        assert [d.length for d in digests] == [10, 10, 5]
        assert digests[0] == BlockDigest(10, Crc32AlgorithmImpl.checksum(data[:10]))
        assert digests[2] == BlockDigest(5, Crc32AlgorithmImpl.checksum(data[20:]))

    def test_exact_multiple_has_no_empty_tail(self):
        digests = list(BlockHasherImpl(io.BytesIO(b"x" * 30), block_size=10))
        assert [d.length for d in digests] == [10, 10, 10]

    def test_empty_stream_yields_nothing(self):
        assert list(BlockHasherImpl(io.BytesIO(b""), block_size=10)) == []

    def test_blocks_are_hashed_independently(self):
        """Identical blocks at different offsets must produce identical checksums."""
        digests = list(BlockHasherImpl(io.BytesIO(b"abcd" * 3), block_size=4))
        assert len({d.checksum for d in digests}) == 1

    def test_stream_is_restartable(self):
        """Iterating twice seeks back to the start and yields the same digests."""
        hasher = BlockHasherImpl(io.BytesIO(b"restartable content" * 7), block_size=16)
        first = list(hasher)
        second = list(hasher)
        assert first == second
        assert len(first) > 1

    def test_stream_is_lazy(self):
        """Only the blocks actually consumed are read."""
        handle = io.BytesIO(b"z" * 100)
        iterator = iter(BlockHasherImpl(handle, block_size=10))
        next(iterator)
        assert handle.tell() == 10

    def test_block_larger_than_file(self):
        digests = list(BlockHasherImpl(io.BytesIO(b"short"), block_size=4096))
        assert digests == [BlockDigest(5, Crc32AlgorithmImpl.checksum(b"short"))]

    def test_uses_given_algorithm(self):
        digests = list(BlockHasherImpl(io.BytesIO(b"data"), block_size=2, algorithm=XXHash32AlgorithmImpl()))
        assert digests[0].checksum == XXHash32AlgorithmImpl.checksum(b"da")

    @pytest.mark.parametrize("block_size", [0, -1])
    def test_rejects_invalid_block_size(self, block_size):
        with pytest.raises(ConfigurationError):
            BlockHasherImpl(io.BytesIO(b"data"), block_size=block_size)

    def test_read_error_becomes_unreadable_file_error(self):
        """I/O errors during reading are reported with the file path."""
        class FailingHandle(io.BytesIO):
            def read(self, size=-1):
                raise OSError("device not ready")

        hasher = BlockHasherImpl(FailingHandle(b"data"), block_size=2, path="/broken.bin")
        with pytest.raises(UnreadableFileError) as excinfo:
            list(hasher)
        assert excinfo.value.path == "/broken.bin"
        assert "device not ready" in str(excinfo.value)

    def test_reads_real_file(self, temp_dir):
        path = temp_dir / "real.bin"
        path.write_bytes(b"0123456789" * 3)
        with open(path, "rb") as handle:
            digests = list(BlockHasherImpl(handle, block_size=10))
        assert len(digests) == 3
        assert len({d.checksum for d in digests}) == 1
