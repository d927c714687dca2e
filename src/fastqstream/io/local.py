"""Local file byte sources (plain, gzip, stdin)."""

import gzip
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from ..core.model import SourceOpenError
from ..core.util import is_compressed
from .base import read_fully

logger = logging.getLogger(__name__)

STDIN_PATHS = ("-", "/dev/stdin")


class LocalByteSource:
    """Byte source over a local file, decompressing when `compressed` is set."""

    def __init__(self, path: Union[Path, str], compressed: Optional[bool] = None):
        self.path = STDIN_PATHS[1] if str(path) in STDIN_PATHS else str(path)
        self.compressed = is_compressed(self.path) if compressed is None else compressed
        self._raw: Optional[BinaryIO] = None
        self._stream: Optional[BinaryIO] = None
        self._at_end = False

        try:
            self._raw = open(self.path, "rb")
        except OSError as e:
            raise SourceOpenError(f"Failed to open file: {self.path} ({e.strerror or e})") from e

        if self.compressed:
            # the raw handle stays ours so its offset reports compressed bytes consumed
            self._stream = gzip.GzipFile(fileobj=self._raw, mode="rb")
        else:
            self._stream = self._raw
        logger.debug("opened %s (compressed=%s)", self.path, self.compressed)

    @property
    def at_end(self) -> bool:
        return self._at_end

    @property
    def closed(self) -> bool:
        return self._raw is None

    def refill(self, view: memoryview) -> int:
        if self._stream is None:
            return 0
        n = read_fully(self._stream, view)
        if n < len(view):
            self._at_end = True
        return n

    def _total_size(self) -> int:
        # separate handle so the read cursor is untouched
        try:
            with open(self.path, "rb") as f:
                f.seek(0, os.SEEK_END)
                return f.tell()
        except OSError:
            return 0

    def progress(self) -> Tuple[int, int]:
        consumed = 0
        if self._raw is not None:
            try:
                consumed = self._raw.tell()
            except OSError:
                consumed = 0
        return consumed, self._total_size()

    def close(self) -> None:
        """Close the decompressor and the file handle; safe to call repeatedly."""
        if self._stream is not None and self._stream is not self._raw:
            self._stream.close()
        self._stream = None
        if self._raw is not None:
            self._raw.close()
            self._raw = None
            logger.debug("closed %s", self.path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_local_source(path: Union[Path, str], compressed: Optional[bool] = None) -> LocalByteSource:
    """Create a local byte source; `.gz` paths are decompressed."""
    return LocalByteSource(path, compressed)
