"""
Line-based console input.

A single daemon thread owns the input stream and pushes each line into a
queue. Both the session prompts and the battle's event source read from that
queue, so a blocking ``readline`` never stalls the battle timers and no line
is ever lost to a reader that outlived its battle.
"""

import queue
import sys
import threading
from typing import Optional, TextIO


class ConsoleReader:
    """Reads lines from a text stream on a background thread.

    ``None`` in the queue marks end of input; it is put back after being
    read so every later consumer sees it too.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdin
        self.lines: "queue.Queue[Optional[str]]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._closed = threading.Event()

    @property
    def is_closed(self) -> bool:
        """True once the stream has reached end of input."""
        return self._closed.is_set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._read_loop, name="ConsoleReader", daemon=True)
        self._thread.start()

    def _read_loop(self) -> None:
        for line in iter(self.stream.readline, ''):
            self.lines.put(line.strip())
        self._closed.set()
        self.lines.put(None)

    def read_line(self, timeout: Optional[float] = None) -> Optional[str]:
        """Block for the next line. Returns None on end of input or timeout."""
        self.start()
        try:
            line = self.lines.get(timeout=timeout)
        except queue.Empty:
            return None
        if line is None:
            self.lines.put(None)
        return line
