"""Interruption tracking for the chunkcursor CLI.

Chunk output can be long-running (a whole disk image at 1-byte chunks), so
SIGINT and SIGPIPE are recorded instead of killing the process mid-write. The
output loop stops at the next chunk boundary and the CLI exits with the status
the shell expects for the signal.
"""

import os
import signal
import sys
import types
from typing import Any, Dict, List, Optional, Type

# Exit status per signal, by name since SIGPIPE does not exist on Windows
INTERRUPT_EXIT_CODES = {"SIGINT": 130, "SIGPIPE": 141}


class InterruptMonitor:
    """Records the first interrupting signal received while chunks are written.

    Used as a context manager: entering installs the recording handlers and
    exiting puts the previous handlers back. Each handler also restores the
    previous handler for its own signal, so a second Ctrl+C behaves as usual.

    Attributes:
        received: Number of the first signal received, or None.
    """

    def __init__(self) -> None:
        self.received: Optional[int] = None
        self._signals: List[int] = [
            getattr(signal, name) for name in INTERRUPT_EXIT_CODES if hasattr(signal, name)
        ]
        self._previous: Dict[int, Any] = {}

    @property
    def interrupted(self) -> bool:
        """True once SIGINT or SIGPIPE has been received."""
        return self.received is not None

    @property
    def exit_code(self) -> int:
        """Exit status for the recorded signal, 0 if none was received."""
        if self.received is None:
            return 0
        return INTERRUPT_EXIT_CODES[signal.Signals(self.received).name]

    def record(self, signum: int, frame: Optional[types.FrameType]) -> None:
        """Signal handler: remember the signal and hand it back to the previous handler."""
        if self.received is None:
            self.received = signum
        signal.signal(signum, self._previous.get(signum, signal.SIG_DFL))

    def install(self) -> None:
        """Route SIGINT and (where available) SIGPIPE to record()."""
        for signum in self._signals:
            self._previous[signum] = signal.signal(signum, self.record)

    def restore(self) -> None:
        """Reinstate the handlers that were active before install()."""
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()

    def silence_stdout(self) -> None:
        """Point stdout at the null device so the final flush cannot hit a closed pipe."""
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())

    def __enter__(self) -> "InterruptMonitor":
        self.install()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.restore()


interrupt_monitor = InterruptMonitor()
