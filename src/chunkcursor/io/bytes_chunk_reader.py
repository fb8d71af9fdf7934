"""In-memory chunk cursor."""

import io
import types
from typing import Optional, Type, Union

from chunkcursor.io.chunk_cursor import ChunkCursor
from chunkcursor.types import ChunkSizeType


class BytesChunkReader(ChunkCursor):
    """Seekable chunk cursor over an in-memory byte buffer.

    Behaves exactly like ChunkedFileReader without touching the filesystem, which
    makes it useful wherever a cursor is needed over data already in memory.

    Args:
        data: The bytes to traverse. The buffer is copied.
        chunk_size: Bytes per chunk, as an int or a human-readable string.
            Defaults to 1.

    Example:
        >>> reader = BytesChunkReader(b"12345678901234567890", chunk_size=3)
        >>> reader.current()
        b'123'
        >>> reader.max_index()
        6
        >>> list(reader)[-1]
        b'90'
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview], chunk_size: ChunkSizeType = 1) -> None:
        super().__init__(chunk_size)
        self._data = bytes(data)
        self._buffer = io.BytesIO(self._data)

    def size(self) -> int:
        """Return the size of the buffer in bytes. The copied buffer never changes."""
        return len(self._data)

    def _seek_bytes(self, offset: int) -> None:
        """Move the buffer position; offsets past the end are allowed and read as empty."""
        self._buffer.seek(offset)

    def _read_bytes(self, count: int) -> bytes:
        """Read up to count bytes from the buffer position."""
        return self._buffer.read(count)

    def close(self) -> None:
        """Release the buffer."""
        self._buffer.close()

    def __enter__(self) -> "BytesChunkReader":
        """Enter the context manager.

        Returns:
            self: The reader, for use in the with block.
        """
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Release the buffer when the with block ends."""
        self.close()
