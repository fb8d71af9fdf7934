"""Seekable cursor over fixed-size byte chunks."""

import logging
import operator
from abc import ABC, abstractmethod
from typing import Iterator, Tuple

from chunkcursor.chunk_size import parse_chunk_size
from chunkcursor.exceptions import ChunkOutOfBoundsError
from chunkcursor.types import ChunkSizeType

logger = logging.getLogger(__name__)


class ChunkCursor(ABC):
    """Cursor over a byte source split into fixed-size chunks.

    The source is treated as a sequence of chunks indexed from 0 to
    ``(size - 1) // chunk_size``. The cursor holds a chunk index which can be
    moved with seek(), next() and rewind(), and current() reads the chunk at that
    index. Only seek() enforces bounds; next() may move past the last chunk and
    valid() reports whether the current index is inside the source.

    Every bounds check queries the size of the source afresh, so a cursor stays
    correct when the source grows or shrinks between calls. All arithmetic is on
    Python integers and is exact for any source size.

    Subclasses provide the byte-level access: size(), _seek_bytes() and
    _read_bytes().

    Args:
        chunk_size: Bytes per chunk, as an int or a human-readable string such as
            '4K'. Defaults to 1.

    Raises:
        ValueError: If chunk_size is not a positive size.
        TypeError: If chunk_size is neither an int nor a string.
    """

    def __init__(self, chunk_size: ChunkSizeType = 1) -> None:
        self._chunk_size: int = parse_chunk_size(chunk_size)
        self._position: int = 0

    @property
    def chunk_size(self) -> int:
        """Bytes per chunk."""
        return self._chunk_size

    @abstractmethod
    def size(self) -> int:
        """Return the current size of the source in bytes."""
        pass

    @abstractmethod
    def _seek_bytes(self, offset: int) -> None:
        """Move the underlying byte cursor to an absolute offset."""
        pass

    @abstractmethod
    def _read_bytes(self, count: int) -> bytes:
        """Read up to count bytes from the underlying byte cursor."""
        pass

    def max_index(self) -> int:
        """Return the last valid chunk index, or -1 if the source is empty."""
        return (self.size() - 1) // self._chunk_size

    def chunk_count(self) -> int:
        """Return the number of chunks in the source.

        This is a method rather than ``__len__`` because the count of a very large
        source may exceed what ``len()`` can report.
        """
        return self.max_index() + 1

    def valid(self) -> bool:
        """Check whether the current position is a chunk inside the source.

        Returns:
            True if ``0 <= key() <= max_index()``, False otherwise.
        """
        return 0 <= self._position <= self.max_index()

    def seek(self, index: int) -> None:
        """Move the cursor to the given chunk index.

        The position only changes if the index passes bounds validation and the
        byte cursor was moved. A failed seek, whether rejected by the bounds check
        or by an I/O error, leaves the chunk position where it was.

        Args:
            index: Target chunk index. Any integer-like object is accepted.

        Raises:
            ChunkOutOfBoundsError: If index is negative or beyond the last chunk.
            TypeError: If index is not an integer.
            OSError: If the size query or the byte seek fails.
        """
        if isinstance(index, bool):
            raise TypeError("chunk index must be an integer, got bool")
        index = operator.index(index)

        # The position is committed only after both the bounds check and the byte
        # seek succeed, so any exception leaves the cursor untouched.
        max_index = self.max_index()
        if not 0 <= index <= max_index:
            logger.debug("Rejected seek to chunk %d (max index %d)", index, max_index)
            raise ChunkOutOfBoundsError(index, max_index)

        self._seek_bytes(index * self._chunk_size)
        self._position = index

    def current(self) -> bytes:
        """Read the chunk at the current position.

        The byte offset is recomputed from the position on every call, so repeated
        calls return the same bytes and calls to next() need no intervening read.

        Returns:
            Up to chunk_size bytes. The final chunk may be shorter, and a position
            past the end of the source yields empty bytes.
        """
        self._seek_bytes(self._position * self._chunk_size)
        return self._read_bytes(self._chunk_size)

    def next(self) -> None:
        """Advance the position by one chunk without checking bounds."""
        self._position += 1

    def key(self) -> int:
        """Return the current chunk index."""
        return self._position

    def rewind(self) -> None:
        """Reset the position to chunk 0 and the byte cursor to the start."""
        self._position = 0
        self._seek_bytes(0)

    def items(self) -> Iterator[Tuple[int, bytes]]:
        """Iterate over (index, chunk) pairs from the start of the source.

        Yields:
            Tuples of chunk index and chunk bytes, in order.
        """
        self.rewind()
        while self.valid():
            yield self._position, self.current()
            self.next()

    def __iter__(self) -> Iterator[bytes]:
        """Iterate over all chunks from the start of the source.

        Iteration rewinds first and leaves the cursor one past the last chunk.
        """
        for _, chunk in self.items():
            yield chunk
