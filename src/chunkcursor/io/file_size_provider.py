"""File size queries used for chunk bounds validation."""

import logging
import os
from abc import ABC, abstractmethod

from chunkcursor.types import PathType

logger = logging.getLogger(__name__)


class FileSizeProvider(ABC):
    """
    Abstract base class for reporting the byte size of a file.

    Chunk bounds are derived from the file size on every validity check, so
    implementations must return a fresh, exact value on each call and must not
    cache. Sizes are plain Python integers and are therefore never truncated,
    whatever the size of the file.

    Example:
        >>> class FixedSizeProvider(FileSizeProvider):
        ...     def get_size(self, path):
        ...         return 2**40
        >>> FixedSizeProvider().max_index("huge.bin", 3)
        366503875925
    """

    @abstractmethod
    def get_size(self, path: PathType) -> int:
        """
        Return the current size of the file at path, in bytes.

        Args:
            path: Path of the file to measure.

        Returns:
            int: The non-negative byte size of the file.

        Raises:
            FileNotFoundError: If the file does not exist.
            OSError: If the size cannot be determined.
        """
        pass

    def max_index(self, path: PathType, chunk_size: int) -> int:
        """
        Return the last valid chunk index for the file at path.

        Args:
            path: Path of the file to measure.
            chunk_size: Bytes per chunk, at least 1.

        Returns:
            int: ``(size - 1) // chunk_size``, which is -1 for an empty file.
        """
        return (self.get_size(path) - 1) // chunk_size


class StatFileSizeProvider(FileSizeProvider):
    """Reports file sizes from ``os.stat``, following symlinks."""

    def get_size(self, path: PathType) -> int:
        size = os.stat(path).st_size
        logger.debug("Size of %s is %d bytes", path, size)
        return size
