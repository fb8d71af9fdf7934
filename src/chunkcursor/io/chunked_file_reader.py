"""Tools for chunk-based random-access file reading."""

import logging
import types
from pathlib import Path
from typing import BinaryIO, Optional, Type

from chunkcursor.io.chunk_cursor import ChunkCursor
from chunkcursor.io.file_size_provider import FileSizeProvider, StatFileSizeProvider
from chunkcursor.types import ChunkSizeType, PathType

logger = logging.getLogger(__name__)


class ChunkedFileReader(ChunkCursor):
    """Seekable chunk cursor over a file on disk.

    The file is opened read-only in binary mode when the reader is created and the
    handle is owned by the reader until close(). Bounds are validated against the
    size reported by the size provider on every check, so the reader follows the
    file if it grows or shrinks while open.

    Args:
        path: Path of the file to read.
        chunk_size: Bytes per chunk, as an int or a human-readable string such as
            '64K'. Defaults to 1.
        size_provider: Source of file sizes. Defaults to a StatFileSizeProvider.

    Raises:
        FileNotFoundError: If the file does not exist.
        IsADirectoryError: If path names a directory.
        PermissionError: If the file cannot be opened for reading.
        ValueError: If chunk_size is not a positive size.

    Example:
        >>> import tempfile, os
        >>> with tempfile.NamedTemporaryFile(delete=False) as f:
        ...     _ = f.write(b"12345678901234567890")
        >>> with ChunkedFileReader(f.name, chunk_size=3) as reader:
        ...     reader.seek(6)
        ...     reader.current()
        b'90'
        >>> os.unlink(f.name)
    """

    def __init__(
        self,
        path: PathType,
        chunk_size: ChunkSizeType = 1,
        size_provider: Optional[FileSizeProvider] = None,
    ) -> None:
        super().__init__(chunk_size)
        self._path = Path(path)
        self._size_provider: FileSizeProvider = size_provider if size_provider is not None else StatFileSizeProvider()
        self._handle: BinaryIO = self._path.open("rb")
        logger.debug("Opened %s with chunk size %d", self._path, self._chunk_size)

    @property
    def path(self) -> Path:
        """Path of the backing file."""
        return self._path

    @property
    def closed(self) -> bool:
        """True once the file handle has been released."""
        return self._handle.closed

    def _check_open(self) -> None:
        if self._handle.closed:
            raise ValueError("I/O operation on closed reader")

    def size(self) -> int:
        """Return the current size of the backing file in bytes."""
        self._check_open()
        return self._size_provider.get_size(self._path)

    def max_index(self) -> int:
        """Return the last valid chunk index as computed by the size provider."""
        self._check_open()
        return self._size_provider.max_index(self._path, self._chunk_size)

    def _seek_bytes(self, offset: int) -> None:
        self._check_open()
        self._handle.seek(offset)

    def _read_bytes(self, count: int) -> bytes:
        self._check_open()
        return self._handle.read(count)

    def close(self) -> None:
        """Release the file handle. Closing twice is a no-op."""
        if not self._handle.closed:
            self._handle.close()
            logger.debug("Closed %s", self._path)

    def __enter__(self) -> "ChunkedFileReader":
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
        self.close()

    def __repr__(self) -> str:
        return f"ChunkedFileReader(path={str(self._path)!r}, chunk_size={self._chunk_size}, position={self._position})"
