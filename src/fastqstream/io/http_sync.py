"""Streaming HTTP byte source using requests."""

import gzip
import logging
from typing import BinaryIO, Optional, Tuple

import requests

from ..core.model import SourceOpenError
from ..core.util import is_compressed
from .base import read_fully

logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPByteSource:
    """Sequential HTTP byte source; `.gz` URLs are decompressed on the fly."""

    def __init__(self, url: str, compressed: Optional[bool] = None, timeout: float = 60):
        self.url = url
        self.compressed = is_compressed(url.split("?", 1)[0]) if compressed is None else compressed
        self.content_length: Optional[int] = None
        self._session = _get_session()
        self._timeout = timeout
        self._response: Optional[requests.Response] = None
        self._stream: Optional[BinaryIO] = None
        self._at_end = False
        self._open()

    def _open(self):
        """Start the streaming GET; the body is pulled lazily by refill()."""
        try:
            response = self._session.get(self.url, stream=True, timeout=self._timeout)
        except requests.RequestException as e:
            raise SourceOpenError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            raise SourceOpenError(f"GET request failed with status {response.status_code}")

        # undo a Content-Encoding layer unless it is the .gz payload itself,
        # which GzipFile below decompresses
        encoding = response.headers.get("content-encoding", "").lower()
        response.raw.decode_content = not (self.compressed and encoding in ("gzip", "x-gzip"))
        self._response = response
        if self.compressed:
            self._stream = gzip.GzipFile(fileobj=response.raw, mode="rb")
        else:
            self._stream = response.raw
        logger.debug("opened %s (compressed=%s)", self.url, self.compressed)

    def _perform_head(self) -> int:
        """Query the total size with an independent HEAD request."""
        if self.content_length is not None:
            return self.content_length
        try:
            response = self._session.head(self.url, timeout=30, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug("HEAD request failed for %s: %s", self.url, e)
            return 0
        header = response.headers.get("content-length")
        if response.status_code < 400 and header and header.isdigit():
            self.content_length = int(header)
            return self.content_length
        return 0

    @property
    def at_end(self) -> bool:
        return self._at_end

    @property
    def closed(self) -> bool:
        return self._response is None

    def refill(self, view: memoryview) -> int:
        if self._stream is None:
            return 0
        n = read_fully(self._stream, view)
        if n < len(view):
            self._at_end = True
        return n

    def progress(self) -> Tuple[int, int]:
        consumed = self._response.raw.tell() if self._response is not None else 0
        return consumed, self._perform_head()

    def close(self) -> None:
        if self._stream is not None and self._response is not None and self._stream is not self._response.raw:
            self._stream.close()
        self._stream = None
        if self._response is not None:
            self._response.close()
            self._response = None
            logger.debug("closed %s", self.url)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def open_http_source(url: str, compressed: Optional[bool] = None) -> HTTPByteSource:
    """Create a streaming HTTP byte source."""
    return HTTPByteSource(url, compressed)
