"""Unit tests for the ChunkedFileReader class."""

import errno
import operator
import os
from unittest.mock import MagicMock, patch

import pytest

from chunkcursor.exceptions import ChunkOutOfBoundsError
from chunkcursor.io.chunk_cursor import ChunkCursor
from chunkcursor.io.chunked_file_reader import ChunkedFileReader
from chunkcursor.io.file_size_provider import FileSizeProvider

SAMPLE_CONTENT = b"12345678901234567890"


@pytest.fixture
def reader(sample_file):
    """Byte-sized reader over the 20-byte sample file."""
    with ChunkedFileReader(sample_file) as r:
        yield r


@pytest.fixture
def chunk3_reader(sample_file):
    """Reader over the sample file with 3-byte chunks."""
    with ChunkedFileReader(sample_file, chunk_size=3) as r:
        yield r


def test_reader_is_a_chunk_cursor(reader) -> None:
    """Test that the file reader implements the cursor interface."""
    assert isinstance(reader, ChunkCursor)
    assert reader.chunk_size == 1


def test_missing_file_fails_fast(tmp_path) -> None:
    """Test that constructing a reader on a missing path raises immediately."""
    with pytest.raises(FileNotFoundError):
        ChunkedFileReader(tmp_path / "does-not-exist.bin")


def test_directory_path_is_rejected(tmp_path) -> None:
    """Test that a directory cannot be opened as a chunk source."""
    with pytest.raises(OSError):
        ChunkedFileReader(tmp_path)


@pytest.mark.parametrize("chunk_size", [0, -1])
def test_chunk_size_validation(sample_file, chunk_size) -> None:
    """Test that non-positive chunk sizes are rejected."""
    with pytest.raises(ValueError) as exc_info:
        ChunkedFileReader(sample_file, chunk_size=chunk_size)
    assert "chunk_size must be a positive number of bytes" in str(exc_info.value)


def test_human_readable_chunk_size(sample_file) -> None:
    """Test that chunk sizes may be given as strings."""
    with ChunkedFileReader(sample_file, chunk_size="1KiB") as r:
        assert r.chunk_size == 1024
        assert r.current() == SAMPLE_CONTENT
        assert r.max_index() == 0


def test_path_accepts_strings(sample_file) -> None:
    """Test construction from a plain string path."""
    with ChunkedFileReader(str(sample_file)) as r:
        assert r.path == sample_file
        assert r.current() == b"1"


def test_seek_changes_position_in_bounds(reader) -> None:
    """Test that seek followed by key returns the target index."""
    reader.seek(9)
    assert reader.key() == 9


def test_seek_every_valid_index(reader) -> None:
    """Test seek/key agreement across the whole valid range."""
    for index in range(reader.max_index() + 1):
        reader.seek(index)
        assert reader.key() == index
        assert reader.current() == SAMPLE_CONTENT[index : index + 1]  # noqa: E203


def test_seek_out_of_bounds_raises(reader) -> None:
    """Test that seeking beyond the last chunk raises ChunkOutOfBoundsError."""
    with pytest.raises(ChunkOutOfBoundsError) as exc_info:
        reader.seek(100)
    assert exc_info.value.index == 100
    assert exc_info.value.max_index == 19


def test_out_of_bounds_error_is_an_index_error(reader) -> None:
    """Test that bounds errors can be caught as IndexError."""
    with pytest.raises(IndexError):
        reader.seek(20)


def test_seek_negative_index_raises(reader) -> None:
    """Test that negative indices are never valid."""
    with pytest.raises(ChunkOutOfBoundsError) as exc_info:
        reader.seek(-1)
    assert exc_info.value.index == -1


@pytest.mark.parametrize("bad_index", [1.5, "3", None, True])
def test_seek_rejects_non_integers(reader, bad_index) -> None:
    """Test that seek only accepts integer indices."""
    with pytest.raises(TypeError):
        reader.seek(bad_index)
    assert reader.key() == 0


def test_seek_accepts_integer_like_objects(reader) -> None:
    """Test that objects implementing __index__ are accepted."""

    class Index:
        def __index__(self):
            return 4

    reader.seek(Index())
    assert reader.key() == 4
    assert operator.index(reader.key()) == 4


def test_failed_seek_keeps_previous_position(chunk3_reader) -> None:
    """Test that a rejected seek rolls the position back."""
    chunk3_reader.seek(2)
    with pytest.raises(ChunkOutOfBoundsError):
        chunk3_reader.seek(7)
    assert chunk3_reader.key() == 2
    assert chunk3_reader.valid()
    assert chunk3_reader.current() == b"789"


def test_failed_seek_leaves_handle_untouched(chunk3_reader) -> None:
    """Test that a rejected seek does not move the underlying file cursor."""
    chunk3_reader.seek(1)
    offset = chunk3_reader._handle.tell()
    with pytest.raises(ChunkOutOfBoundsError):
        chunk3_reader.seek(50)
    assert chunk3_reader._handle.tell() == offset


def test_valid_bounds(reader) -> None:
    """Test valid() at the last index and one past it."""
    assert reader.valid()
    reader.seek(19)
    assert reader.valid()
    reader.next()
    assert not reader.valid()


def test_current_returns_chunk_at_position(reader) -> None:
    """Test reading single-byte chunks at several positions."""
    assert reader.current() == b"1"
    reader.seek(1)
    assert reader.current() == b"2"
    reader.seek(9)
    assert reader.current() == b"0"


def test_current_is_idempotent(reader) -> None:
    """Test that current() does not move the position."""
    reader.seek(9)
    assert reader.current() == b"0"
    assert reader.current() == b"0"
    assert reader.key() == 9


def test_key_returns_current_position(reader) -> None:
    """Test key() before and after seeking."""
    assert reader.key() == 0
    reader.seek(9)
    assert reader.key() == 9


def test_rewind_resets_position(reader) -> None:
    """Test that rewind returns to chunk 0 and reads from offset 0."""
    reader.seek(9)
    assert reader.key() == 9
    reader.rewind()
    assert reader.key() == 0
    assert reader._handle.tell() == 0
    assert reader.current() == b"1"


def test_rewind_from_invalid_position(reader) -> None:
    """Test that rewind works after next() moved past the end."""
    reader.seek(19)
    reader.next()
    reader.next()
    reader.rewind()
    assert reader.key() == 0
    assert reader.valid()


def test_next_increases_position_by_one(reader) -> None:
    """Test that next() advances one chunk at a time without bounds checks."""
    reader.seek(9)
    reader.next()
    assert reader.key() == 10
    reader.next()
    assert reader.key() == 11
    for _ in range(20):
        reader.next()
    assert reader.key() == 31
    assert not reader.valid()


def test_next_without_read_between(chunk3_reader) -> None:
    """Test that several next() calls need no intervening read."""
    chunk3_reader.next()
    chunk3_reader.next()
    chunk3_reader.next()
    assert chunk3_reader.current() == b"012"


def test_chunked_reads(chunk3_reader) -> None:
    """Test that chunk size is applied to reads."""
    assert chunk3_reader.current() == b"123"
    chunk3_reader.next()
    assert chunk3_reader.current() == b"456"
    chunk3_reader.seek(0)
    assert chunk3_reader.current() == b"123"
    chunk3_reader.seek(6)
    assert chunk3_reader.current() == b"90"


def test_chunk_size_bounds(chunk3_reader) -> None:
    """Test that bounds are derived from the chunk size."""
    assert chunk3_reader.max_index() == 6
    assert chunk3_reader.chunk_count() == 7
    with pytest.raises(ChunkOutOfBoundsError):
        chunk3_reader.seek(7)


def test_current_past_end_is_empty(chunk3_reader) -> None:
    """Test that reading past the end yields no bytes rather than padding."""
    chunk3_reader.seek(6)
    chunk3_reader.next()
    assert chunk3_reader.current() == b""


def test_iteration_yields_all_chunks(chunk3_reader) -> None:
    """Test that iterating rewinds and walks every chunk in order."""
    chunk3_reader.seek(4)
    chunks = list(chunk3_reader)
    assert chunks == [b"123", b"456", b"789", b"012", b"345", b"678", b"90"]
    assert b"".join(chunks) == SAMPLE_CONTENT
    assert chunk3_reader.key() == 7


def test_items_pairs_indices_with_chunks(chunk3_reader) -> None:
    """Test that items() yields (index, chunk) pairs."""
    items = list(chunk3_reader.items())
    assert items[0] == (0, b"123")
    assert items[-1] == (6, b"90")
    assert [index for index, _ in items] == list(range(7))


def test_empty_file(empty_file) -> None:
    """Test that an empty file has no valid chunks."""
    with ChunkedFileReader(empty_file) as r:
        assert r.size() == 0
        assert r.max_index() == -1
        assert r.chunk_count() == 0
        assert not r.valid()
        assert list(r) == []
        with pytest.raises(ChunkOutOfBoundsError) as exc_info:
            r.seek(0)
        assert "source is empty" in str(exc_info.value)


def test_valid_follows_file_growth(sample_file) -> None:
    """Test that bounds are recomputed when the file changes size."""
    with ChunkedFileReader(sample_file, chunk_size=10) as r:
        assert r.max_index() == 1
        with pytest.raises(ChunkOutOfBoundsError):
            r.seek(2)

        with open(sample_file, "ab") as f:
            f.write(b"abcde")
        r.seek(2)
        assert r.current() == b"abcde"

        os.truncate(sample_file, 5)
        assert not r.valid()
        r.rewind()
        assert r.current() == b"12345"


class CountingSizeProvider(FileSizeProvider):
    """Provider reporting a settable size and recording every query."""

    def __init__(self, size):
        self.size = size
        self.calls = []

    def get_size(self, path):
        self.calls.append(path)
        return self.size


def test_size_provider_is_queried_on_every_check(sample_file) -> None:
    """Test that the injected size provider is consulted without caching."""
    provider = CountingSizeProvider(20)

    with ChunkedFileReader(sample_file, chunk_size=3, size_provider=provider) as r:
        r.valid()
        r.valid()
        r.seek(6)
        assert provider.calls == [r.path, r.path, r.path]

        provider.size = 17
        assert not r.valid()


def test_bounds_come_from_size_provider(sample_file) -> None:
    """Test that max_index is delegated to the provider's floor division."""
    provider = CountingSizeProvider(20)
    provider.max_index = MagicMock(return_value=2)

    with ChunkedFileReader(sample_file, chunk_size=3, size_provider=provider) as r:
        assert r.max_index() == 2
        assert r.chunk_count() == 3
        provider.max_index.assert_called_with(r.path, 3)
        with pytest.raises(ChunkOutOfBoundsError) as exc_info:
            r.seek(3)
        assert exc_info.value.max_index == 2


def test_seek_keeps_position_when_size_query_fails(sample_file) -> None:
    """Test that a seek failing in the size query does not move the cursor."""
    with ChunkedFileReader(sample_file) as r:
        r.seek(2)
        os.unlink(sample_file)
        with pytest.raises(FileNotFoundError):
            r.seek(5)
        assert r.key() == 2


def test_seek_keeps_position_when_byte_seek_fails(sample_file) -> None:
    """Test that a seek failing in the file handle does not move the cursor."""
    with ChunkedFileReader(sample_file, chunk_size=3) as r:
        r.seek(1)
        with patch.object(r, "_seek_bytes", side_effect=OSError(errno.EIO, "Input/output error")):
            with pytest.raises(OSError):
                r.seek(4)
        assert r.key() == 1
        assert r.current() == b"456"


def test_seek_on_closed_reader_keeps_position(sample_file) -> None:
    """Test that a seek rejected by the closed handle leaves the position alone."""
    r = ChunkedFileReader(sample_file)
    r.seek(3)
    r.close()
    with pytest.raises(ValueError, match="closed reader"):
        r.seek(4)
    assert r.key() == 3


def test_close_releases_handle(sample_file) -> None:
    """Test explicit close and closed-state errors."""
    r = ChunkedFileReader(sample_file)
    assert not r.closed
    r.close()
    assert r.closed
    r.close()  # Second close is a no-op

    with pytest.raises(ValueError, match="closed reader"):
        r.current()
    with pytest.raises(ValueError, match="closed reader"):
        r.valid()
    with pytest.raises(ValueError, match="closed reader"):
        r.rewind()


def test_context_manager_closes_on_error(sample_file) -> None:
    """Test that the handle is released even when the with block raises."""
    with pytest.raises(ChunkOutOfBoundsError):
        with ChunkedFileReader(sample_file) as r:
            r.seek(500)
    assert r.closed


def test_independent_readers_share_a_path(sample_file) -> None:
    """Test that two readers on one file keep separate positions."""
    with ChunkedFileReader(sample_file) as first, ChunkedFileReader(sample_file, chunk_size=2) as second:
        first.seek(3)
        second.seek(3)
        assert first.current() == b"4"
        assert second.current() == b"78"
        assert first.key() == second.key() == 3


def test_repr(reader) -> None:
    """Test the string representation."""
    reader.seek(2)
    text = repr(reader)
    assert text.startswith("ChunkedFileReader(path=")
    assert "chunk_size=1" in text
    assert "position=2" in text
