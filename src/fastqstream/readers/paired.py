from __future__ import annotations

from typing import Iterator, Optional

from ..core.model import CHUNK_SIZE, ReaderConfig, RecordPair
from .fastq import FastqReader


class PairedReader:
    """Yields left/right RecordPairs from two readers, or from one interleaved reader.

    Both sides are consumed in lock-step; as soon as either side runs out no
    further pairs are produced. The paired reader owns its readers and closes
    them in `close()`.
    """

    def __init__(self, left: FastqReader, right: Optional[FastqReader] = None):
        self.left = left
        self.right = right
        self.interleaved = right is None

    @classmethod
    def from_readers(cls, left: FastqReader, right: FastqReader) -> "PairedReader":
        return cls(left, right)

    @classmethod
    def open(cls, left_path, right_path=None, *, has_quality: bool = True, phred64: bool = False,
             interleaved: bool = False, chunk_size: int = CHUNK_SIZE) -> "PairedReader":
        if interleaved and right_path is not None:
            raise ValueError("interleaved input takes a single file, got a right-hand path too")
        if not interleaved and right_path is None:
            raise ValueError("a right-hand path is required unless the input is interleaved")

        left = FastqReader(ReaderConfig(str(left_path), has_quality, phred64, interleaved, chunk_size))
        if interleaved:
            return cls(left)
        try:
            right = FastqReader(ReaderConfig(str(right_path), has_quality, phred64, False, chunk_size))
        except Exception:
            left.close()
            raise
        return cls(left, right)

    @property
    def error(self) -> Optional[str]:
        if self.left.error:
            return self.left.error
        return self.right.error if self.right is not None else None

    def next(self) -> Optional[RecordPair]:
        """Return the next RecordPair, or None once either side is exhausted."""
        left = self.left.next()
        # always draw the right side too so both streams stay aligned
        right = self.left.next() if self.interleaved else self.right.next()
        if left is None or right is None:
            return None
        return RecordPair(left, right)

    def __iter__(self) -> Iterator[RecordPair]:
        return self

    def __next__(self) -> RecordPair:
        pair = self.next()
        if pair is None:
            raise StopIteration
        return pair

    def close(self) -> None:
        self.left.close()
        if self.right is not None:
            self.right.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_paired_reader(left_path, right_path=None, has_quality: bool = True, phred64: bool = False,
                       interleaved: bool = False, chunk_size: int = CHUNK_SIZE) -> PairedReader:
    """Open a paired-end reader over two files, or one interleaved file."""
    return PairedReader.open(left_path, right_path, has_quality=has_quality, phred64=phred64,
                             interleaved=interleaved, chunk_size=chunk_size)
