class ChunkOutOfBoundsError(IndexError):
    """
    Exception raised when seeking to a chunk index outside the valid range.

    The valid range is ``0..max_index`` where ``max_index`` is
    ``(size - 1) // chunk_size`` at the moment of the seek. An empty source has a
    ``max_index`` of -1 and therefore no valid indices. The error is recoverable:
    the cursor keeps its previous position and the caller may retry.

    Attributes:
        index (int): The rejected chunk index.
        max_index (int): The last valid chunk index when the seek was attempted.

    Example:
        >>> error = ChunkOutOfBoundsError(7, 6)
        >>> str(error)
        'Chunk index out of bounds: 7 (valid range 0..6)'
        >>> isinstance(error, IndexError)
        True
    """

    def __init__(self, index: int, max_index: int) -> None:
        """
        Initialize the exception with the rejected index and the valid upper bound.

        Args:
            index (int): The chunk index that failed bounds validation.
            max_index (int): The last valid chunk index, or -1 for an empty source.
        """
        self.index = index
        self.max_index = max_index
        if max_index < 0:
            message = f"Chunk index out of bounds: {index} (source is empty)"
        else:
            message = f"Chunk index out of bounds: {index} (valid range 0..{max_index})"
        super().__init__(message)
