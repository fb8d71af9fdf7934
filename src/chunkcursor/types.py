from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Chunk sizes may be given as raw byte counts or human-readable strings ("4K")
ChunkSizeType = Union[int, str]
