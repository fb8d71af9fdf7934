"""Chunk size parsing and validation."""

from chunkcursor.types import ChunkSizeType


def parse_chunk_size(value: ChunkSizeType) -> int:
    """Parse a chunk size given as bytes or as a human-readable string.

    Args:
        value: Chunk size like 4096, '4K', '1MiB' or '512'.

    Returns:
        The chunk size in bytes, always at least 1.

    Raises:
        ValueError: If the string is not a valid size or the size is not positive.
        TypeError: If value is neither an int nor a string.
        ImportError: If humanfriendly library is not available

    Example:
        >>> parse_chunk_size(3)
        3
        >>> parse_chunk_size("1KiB")
        1024
    """
    # bool is an int subclass but never a meaningful chunk size
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"chunk_size must be int or str, got {type(value).__name__}")

    if isinstance(value, str):
        try:
            from humanfriendly import parse_size
        except ImportError as e:
            raise ImportError(
                "humanfriendly is required for size parsing. " "Install it with: pip install humanfriendly"
            ) from e

        try:
            size = int(parse_size(value))
        except Exception as e:
            raise ValueError(f"Invalid chunk size format '{value}': {e}") from e
    else:
        size = value

    if size < 1:
        raise ValueError(f"chunk_size must be a positive number of bytes, got {size}")
    return size
