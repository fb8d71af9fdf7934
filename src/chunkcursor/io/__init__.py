"""Chunk cursors over files and in-memory buffers."""
