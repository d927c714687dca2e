from __future__ import annotations

from .model import CHUNK_SIZE

NEWLINE = 0x0A


class ChunkBuffer:
    """Fixed-capacity byte buffer filled from a ByteSource one chunk at a time."""

    __slots__ = ("source", "capacity", "data", "view", "valid_length", "consume_cursor", "truncated_tail")

    def __init__(self, source, capacity: int = CHUNK_SIZE) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.source = source
        self.capacity = capacity
        self.data = bytearray(capacity)
        self.view = memoryview(self.data)
        self.valid_length = 0
        self.consume_cursor = 0
        self.truncated_tail = False

    def refill(self) -> int:
        """Pull the next chunk; 0 means the stream is exhausted."""
        n = self.source.refill(self.view)
        self.valid_length = n
        self.consume_cursor = 0
        self.truncated_tail = 0 < n < self.capacity and self.data[n - 1] != NEWLINE
        return n

    @property
    def full(self) -> bool:
        return self.valid_length == self.capacity
