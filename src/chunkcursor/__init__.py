"""Chunked random-access file reading.

This package provides cursors that treat a file (or an in-memory buffer) as a
sequence of fixed-size byte chunks which can be sought, read, advanced and
rewound by chunk index. All size and offset arithmetic uses Python integers,
so files larger than any native integer range are handled exactly.
"""

from importlib.metadata import PackageNotFoundError, version

from chunkcursor.exceptions import ChunkOutOfBoundsError
from chunkcursor.io.bytes_chunk_reader import BytesChunkReader
from chunkcursor.io.chunk_cursor import ChunkCursor
from chunkcursor.io.chunked_file_reader import ChunkedFileReader
from chunkcursor.io.file_size_provider import FileSizeProvider, StatFileSizeProvider

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("chunkcursor")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "BytesChunkReader",
    "ChunkCursor",
    "ChunkOutOfBoundsError",
    "ChunkedFileReader",
    "FileSizeProvider",
    "StatFileSizeProvider",
    "__version__",
]
