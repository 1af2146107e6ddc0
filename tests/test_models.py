"""
Tests for data models: search parameter validation, groups and statistics.
"""
import pytest

from bayan.core.errors import ConfigurationError, UnreadableFileError
from bayan.core.models import (
    ChecksumKind, DeduplicationStats, DuplicateGroup, FileCandidate, SearchParams
)


class TestSearchParams:
    """Validation happens at construction time."""

    def test_defaults(self):
        params = SearchParams(root_dirs=["/data"])
        assert params.block_size == 1024
        assert params.min_size_bytes == 1
        assert params.recursive is False
        assert params.checksum is ChecksumKind.CRC32
        assert params.workers == 1

    @pytest.mark.parametrize("kwargs", [
        {"root_dirs": []},
        {"root_dirs": ["/data"], "block_size": 0},
        {"root_dirs": ["/data"], "block_size": -5},
        {"root_dirs": ["/data"], "min_size_bytes": -1},
        {"root_dirs": ["/data"], "workers": 0},
        {"root_dirs": ["/data"], "checksum": "md5"},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ConfigurationError):
            SearchParams(**kwargs)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            SearchParams(root_dirs=["/data"], block_size=0)

    def test_checksum_accepts_enum_value(self):
        params = SearchParams(root_dirs=["/data"], checksum="xxhash")
        assert params.checksum is ChecksumKind.XXHASH

    def test_blank_masks_dropped(self):
        params = SearchParams(root_dirs=["/data"], masks=[" *.jpg ", "", "  "])
        assert params.masks == ["*.jpg"]

    def test_from_human_readable(self):
        params = SearchParams.from_human_readable(
            root_dirs=["/data"], min_size_str="1K", block_size_str="64KB", recursive=True
        )
        assert params.min_size_bytes == 1024
        assert params.block_size == 64 * 1024
        assert params.recursive is True

    @pytest.mark.parametrize("block_size_str", ["0", "abc", "-1"])
    def test_from_human_readable_rejects_bad_block_size(self, block_size_str):
        with pytest.raises(ConfigurationError):
            SearchParams.from_human_readable(root_dirs=["/data"], block_size_str=block_size_str)


class TestDuplicateGroup:

    def test_properties(self):
        files = [FileCandidate("/a", 10), FileCandidate("/b", 10), FileCandidate("/c", 10)]
        group = DuplicateGroup(size=10, files=files)

        assert group.duplicate_count == 3
        assert group.paths == ["/a", "/b", "/c"]

    def test_repr_shows_size_and_count(self):
        group = DuplicateGroup(size=10, files=[FileCandidate("/a", 10)])
        assert repr(group) == "<DuplicateGroup size=10, count=1>"


class TestDeduplicationStats:

    def test_increment_and_get(self):
        stats = DeduplicationStats()
        stats.increment("comparisons")
        stats.increment("comparisons", 4)
        assert stats.get("comparisons") == 5

    def test_unknown_counter_raises(self):
        with pytest.raises(KeyError):
            DeduplicationStats().increment("bogus")

    def test_listeners_receive_updates(self):
        events = []
        stats = DeduplicationStats()
        stats.add_listener(lambda event, payload: events.append((event, payload)))
        stats.increment("matches")
        stats.add_warning("careful")

        assert events == [("matches", {"value": 1}), ("warning", {"message": "careful"})]


class TestErrors:

    def test_unreadable_file_error_carries_path(self):
        error = UnreadableFileError("/x/y.bin", "Permission denied")
        assert error.path == "/x/y.bin"
        assert error.reason == "Permission denied"
        assert "/x/y.bin" in str(error)
