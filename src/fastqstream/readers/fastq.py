from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from ..core.buffer import ChunkBuffer
from ..core.model import (
    CHUNK_SIZE, MARKER, PLACEHOLDER_QUALITY, ParseError, ReaderConfig, Record,
)
from ..core.scanner import LineScanner
from ..io import open_source

logger = logging.getLogger(__name__)

_MARKER_BYTE = MARKER.encode("ascii")


def _text(line: bytes) -> str:
    return line.decode("utf-8", errors="replace")


class FastqReader:
    """Pulls Records from a plain or gzip FASTQ source, one chunk at a time.

    A malformed record (sequence/quality length mismatch, or a record cut
    short by the end of input) ends the stream: the problem is logged, kept
    in `error`, and every later call to `next()` returns None.
    """

    def __init__(self, config: ReaderConfig):
        self.config = config
        self.error: Optional[str] = None
        self._finished = False
        self._source = open_source(config.path)
        try:
            self._buffer = ChunkBuffer(self._source, config.chunk_size)
            self._buffer.refill()
        except Exception:
            self._source.close()
            raise
        self._scanner = LineScanner(self._buffer)

    # ------------------------------------------------------------------ #
    @property
    def path(self) -> str:
        return self.config.path

    @property
    def is_zipped(self) -> bool:
        return self._source.compressed

    @property
    def has_no_line_break_at_end(self) -> bool:
        return self._buffer.truncated_tail

    def progress(self) -> Tuple[int, int]:
        """Return (bytes_consumed, bytes_total); diagnostic only."""
        return self._source.progress()

    # ------------------------------------------------------------------ #
    def _next_identifier(self) -> Optional[bytes]:
        # blank and non-marker lines are skipped until input runs out
        line = self._scanner.next_line()
        while line is not None and not line.startswith(_MARKER_BYTE):
            line = self._scanner.next_line()
        return line

    def _stop(self, message: str, level: int, *lines: Optional[bytes]) -> None:
        err = ParseError(message)
        self.error = str(err)
        self._finished = True
        shown = "\n".join(_text(l) if l is not None else "<missing>" for l in lines)
        logger.log(level, "%s in %s:\n%s", err, self.path, shown)

    def next(self) -> Optional[Record]:
        """Return the next Record, or None at end of input or after a parse error."""
        if self._finished:
            return None

        name = self._next_identifier()
        if name is None:
            self._finished = True
            return None

        sequence = self._scanner.next_line()
        strand = self._scanner.next_line()
        if sequence is None or strand is None:
            self._stop("record truncated by end of input", logging.WARNING, name, sequence, strand)
            return None

        seq_text = _text(sequence)
        if not self.config.has_quality:
            quality = PLACEHOLDER_QUALITY * len(seq_text)
            return Record(_text(name), seq_text, _text(strand), quality, self.config.phred64)

        quality = self._scanner.next_line()
        if quality is None:
            # input ended where the quality line belongs; the length check decides
            quality = b""
        qual_text = _text(quality)
        if len(qual_text) != len(seq_text):
            self._stop("sequence and quality have different length", logging.ERROR,
                       name, sequence, strand, quality)
            return None
        return Record(_text(name), seq_text, _text(strand), qual_text, self.config.phred64)

    # ------------------------------------------------------------------ #
    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        rec = self.next()
        if rec is None:
            raise StopIteration
        return rec

    def close(self) -> None:
        """Release the underlying source; safe to call more than once."""
        self._finished = True
        self._source.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_reader(path, has_quality: bool = True, phred64: bool = False,
                chunk_size: int = CHUNK_SIZE) -> FastqReader:
    """Open a single-end FASTQ reader for a path or URL."""
    return FastqReader(ReaderConfig(str(path), has_quality=has_quality, phred64=phred64, chunk_size=chunk_size))
