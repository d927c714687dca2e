"""I/O layer for fastqstream - delivers sequential byte chunks to the scanner."""

# Re-export these for import convenience
from .base import ByteSource, read_fully
from .local import LocalByteSource, open_local_source
from .http_sync import HTTPByteSource, open_http_source


def open_source(source, compressed=None) -> ByteSource:
    """Factory function to create the appropriate ByteSource for a path or URL."""
    source_str = str(source)
    if source_str.startswith(('http://', 'https://')):
        return open_http_source(source_str, compressed)
    return open_local_source(source_str, compressed)


__all__ = [
    "ByteSource", "read_fully",
    "LocalByteSource", "HTTPByteSource",
    "open_source", "open_local_source", "open_http_source",
]
