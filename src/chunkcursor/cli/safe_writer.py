"""Signal-aware binary output for the chunkcursor CLI."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from chunkcursor.cli.signal_handler import interrupt_monitor


class SafeWriter:
    """Writes chunk bytes to a file descriptor or file, stopping on interruption.

    Bytes are written verbatim. Before every write the writer checks whether
    SIGPIPE or SIGINT has been received and, if so, raises BrokenPipeError so the
    output loop ends cleanly.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
        bytes_written: Total number of bytes written so far.
    """

    def __init__(self, file: Union[int, str, Path]):
        """Initialize the safe writer.

        Args:
            file: A file descriptor, or a path that is opened for binary writing.

        Raises:
            TypeError: If file is neither an int nor a path.
        """
        self.file = file
        self.bytes_written = 0
        self._closed = False

        # bool is an int subclass and never a valid descriptor here
        if isinstance(file, int) and not isinstance(file, bool):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: bytes) -> None:
        """Write all of data, checking for signals first.

        Args:
            data: Bytes to write.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if interrupt_monitor.interrupted:
            raise BrokenPipeError()

        view = memoryview(data)
        try:
            # os.write may write only part of a large buffer
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
                self.bytes_written += written
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self) -> None:
        """Close the file if this writer opened it. Closing twice is a no-op."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer, letting an in-flight exception take priority over close errors."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
