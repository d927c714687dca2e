"""Base protocol and shared helpers for byte sources."""

from typing import BinaryIO, Protocol, Tuple, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for sequential, pull-based byte sources."""

    compressed: bool

    def refill(self, view: memoryview) -> int:
        """Fill `view` with up to len(view) bytes.

        Blocks until the view is full or the source is exhausted.
        Returns 0 at end-of-stream.
        """
        ...

    @property
    def at_end(self) -> bool:
        ...

    def progress(self) -> Tuple[int, int]:
        """Return (bytes_consumed, bytes_total) of the underlying file."""
        ...

    def close(self) -> None:
        ...


def read_fully(stream: BinaryIO, view: memoryview) -> int:
    """Read into `view` until it is full or `stream` returns no more data."""
    filled = 0
    size = len(view)
    while filled < size:
        n = stream.readinto(view[filled:])
        if not n:
            break
        filled += n
    return filled
