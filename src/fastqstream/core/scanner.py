"""Line reconstruction over a ChunkBuffer.

The scanner is an explicit three-state machine::

    SCANNING --terminator found--> SCANNING      (emit line)
    SCANNING --no terminator-----> NEEDS_REFILL  (stash tail in partial)
    NEEDS_REFILL --full chunk----> SCANNING      (refill, partial persists)
    NEEDS_REFILL --short/empty---> EXHAUSTED     (emit partial once, if any)
    EXHAUSTED is terminal.

`step()` performs exactly one transition and returns the line it emitted,
if any; `next_line()` drives it until a line is produced or the machine
is exhausted.
"""

from __future__ import annotations

import enum
from typing import Optional

from .buffer import ChunkBuffer

NEWLINE = b"\n"
CR = 0x0D


class ScanState(enum.Enum):
    SCANNING = "scanning"
    NEEDS_REFILL = "needs_refill"
    EXHAUSTED = "exhausted"


class LineScanner:
    """Yields logical lines (bytes, terminator removed) from a ChunkBuffer."""

    def __init__(self, buffer: ChunkBuffer) -> None:
        self.buffer = buffer
        self.state = ScanState.SCANNING
        self.start = buffer.consume_cursor
        self.end = self.start
        self.partial = bytearray()

    @property
    def exhausted(self) -> bool:
        return self.state is ScanState.EXHAUSTED

    def step(self) -> Optional[bytes]:
        state = self.state
        buf = self.buffer

        if state is ScanState.SCANNING:
            found = buf.data.find(NEWLINE, self.start, buf.valid_length)
            if found < 0:
                self.end = buf.valid_length
                self.partial += buf.view[self.start:self.end]
                self.start = self.end
                buf.consume_cursor = self.end
                self.state = ScanState.NEEDS_REFILL
                return None
            self.end = found
            if self.partial:
                self.partial += buf.view[self.start:found]
                line = bytes(self.partial)
                self.partial.clear()
            else:
                line = bytes(buf.view[self.start:found])
            self.start = self.end = found + 1
            buf.consume_cursor = self.start
            if line and line[-1] == CR:
                line = line[:-1]
            return line

        if state is ScanState.NEEDS_REFILL:
            if buf.full and not buf.source.at_end:
                buf.refill()
                self.start = self.end = 0
                self.state = ScanState.SCANNING
                return None
            self.state = ScanState.EXHAUSTED
            if self.partial:
                line = bytes(self.partial)
                self.partial.clear()
                return line
            return None

        return None

    def next_line(self) -> Optional[bytes]:
        """Return the next logical line, or None once the stream is exhausted."""
        while self.state is not ScanState.EXHAUSTED:
            line = self.step()
            if line is not None:
                return line
        return None
