"""Command-line interface for chunkcursor.

This module provides the command-line interface for chunkcursor, which writes a
range of fixed-size chunks from a file to stdout or to another file. It handles
argument parsing, bounds errors and signal management for graceful
interruption, e.g. when piping into `head`.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including an out-of-bounds start index)
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Read chunks 10 and 11 of a file split into 512-byte chunks
    $ chunkcursor -s 512 -i 10 -n 2 /path/to/file

    # Display version information
    $ chunkcursor --version
"""

import logging
import sys
from collections.abc import Mapping
from typing import Optional

from chunkcursor.cli.argparser import create_parser, validate_args
from chunkcursor.cli.safe_writer import SafeWriter
from chunkcursor.cli.signal_handler import interrupt_monitor
from chunkcursor.exceptions import ChunkOutOfBoundsError
from chunkcursor.io.chunk_cursor import ChunkCursor
from chunkcursor.io.chunked_file_reader import ChunkedFileReader

logger = logging.getLogger(__name__)


def format_info(info: Mapping[str, object]) -> str:
    """Format file and chunk geometry into a human-readable string.

    Args:
        info: Mapping with path, size, chunk_size, chunks and max_index entries.

    Returns:
        One labelled line per entry, newline-terminated.
    """
    result = [
        f"File: {info['path']}",
        f"Size: {info['size']} bytes",
        f"Chunk size: {info['chunk_size']} bytes",
        f"Chunks: {info['chunks']}",
        f"Max index: {info['max_index']}",
    ]
    return "\n".join(result) + "\n"


def seek_start(reader: ChunkCursor, start: int) -> bool:
    """Position the reader on the first chunk to output.

    Runs before any output is opened, so a bad start index never truncates an
    existing output file.

    Args:
        reader: Cursor to position.
        start: Index of the first chunk.

    Returns:
        True if there are chunks to write. Starting at 0 on an empty source is not
        an error and returns False.

    Raises:
        ChunkOutOfBoundsError: If start is beyond the last chunk.
    """
    if start == 0 and reader.chunk_count() == 0:
        return False
    reader.seek(start)
    return True


def write_chunks(reader: ChunkCursor, writer: SafeWriter, count: Optional[int]) -> int:
    """Write chunks from the current position until count chunks or the end of the source.

    Args:
        reader: Cursor to read from, already positioned by seek_start().
        writer: Destination for chunk bytes.
        count: Maximum number of chunks to write, or None for all remaining.

    Returns:
        The number of chunks written.
    """
    start = reader.key()
    written = 0
    while reader.valid() and (count is None or written < count):
        writer.write(reader.current())
        reader.next()
        written += 1
    logger.debug("Wrote %d chunks starting at index %d", written, start)
    return written


def main() -> None:
    """Main entry point for the chunkcursor command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    parser = create_parser()
    args = parser.parse_args()
    try:
        validate_args(args)
    except ValueError as e:
        # Exits with status 2
        parser.error(str(e))

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    try:
        with interrupt_monitor, ChunkedFileReader(args.file, args.chunk_size) as reader:
            has_chunks = not args.info and seek_start(reader, args.index)
            output_file = args.output if args.output else sys.stdout.fileno()

            with SafeWriter(output_file) as safe_writer:
                try:
                    if args.info:
                        info = {
                            "path": reader.path,
                            "size": reader.size(),
                            "chunk_size": reader.chunk_size,
                            "chunks": reader.chunk_count(),
                            "max_index": reader.max_index(),
                        }
                        safe_writer.write(format_info(info).encode("utf-8"))
                    elif has_chunks:
                        write_chunks(reader, safe_writer, args.count)
                except BrokenPipeError:
                    pass  # SafeWriter will automatically close in the context manager

    except ChunkOutOfBoundsError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    if interrupt_monitor.interrupted:
        interrupt_monitor.silence_stdout()
        sys.exit(interrupt_monitor.exit_code)


if __name__ == "__main__":
    main()
