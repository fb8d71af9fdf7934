"""Command-line argument parsing for chunkcursor.

This module defines the command-line interface for chunkcursor,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from chunkcursor import __version__
from chunkcursor.chunk_size import parse_chunk_size


def chunk_size_type(value: str) -> int:
    """Argparse type converting a human-readable chunk size to bytes."""
    try:
        return parse_chunk_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def non_negative_int(value: str) -> int:
    """Argparse type for chunk indices."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid integer value: '{value}'") from e
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def positive_int(value: str) -> int:
    """Argparse type for chunk counts."""
    number = non_negative_int(value)
    if number == 0:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with chunkcursor's options.
    """
    description = """
    chunkcursor: Read fixed-size chunks from any position in a file.

    The file is treated as a sequence of chunks of --chunk-size bytes, indexed
    from 0. Chunks are written to the output verbatim, starting at --index and
    continuing for --count chunks or until the end of the file. The final chunk
    may be shorter than the chunk size.

    Chunk indices and offsets are computed exactly for files of any size.
    """

    epilog = """
    Examples:
      # Dump a file one byte at a time (the default chunk size)
      chunkcursor data.bin

      # Read the eighth 4 KiB block
      chunkcursor -s 4KiB -i 7 -n 1 disk.img

      # Copy everything from the 1000th megabyte chunk onwards into a file
      chunkcursor -s 1MiB -i 1000 -o tail.bin huge.img

      # Show chunk geometry without reading any data
      chunkcursor -s 64K --info huge.img

      # Display version information and exit
      chunkcursor -V
    """

    parser = argparse.ArgumentParser(
        prog="chunkcursor",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"chunkcursor {__version__}", help="Show the version and exit"
    )
    parser.add_argument("file", type=Path, help="The file to read.")
    parser.add_argument(
        "-s",
        "--chunk-size",
        type=chunk_size_type,
        metavar="SIZE",
        default=1,
        help="Bytes per chunk, e.g. 512, 4K or 1MiB (default: 1).",
    )
    parser.add_argument(
        "-i",
        "--index",
        type=non_negative_int,
        metavar="INDEX",
        default=0,
        help="Index of the first chunk to read (default: 0).",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=positive_int,
        metavar="COUNT",
        help="Number of chunks to read. If not specified, reads to the end of the file.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print file size and chunk geometry instead of chunk contents.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debugging information to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.info and args.count is not None:
        raise ValueError("--info cannot be combined with -n/--count")
