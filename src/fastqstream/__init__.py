"""fastqstream - a streaming FASTQ reader for plain and gzip input."""

from .core.model import (                                             # re-export
    Record, RecordPair, ReaderConfig, SourceOpenError, ParseError,
    CHUNK_SIZE, MARKER, PLACEHOLDER_QUALITY,
)
from .core.util import is_compressed, is_zip_fastq, is_fastq
from .io import open_source
from .readers import FastqReader, PairedReader, open_reader, open_paired_reader

__version__ = "0.1.0"

__all__ = [
    "open_reader", "open_paired_reader", "open_source",
    "FastqReader", "PairedReader",
    "Record", "RecordPair", "ReaderConfig",
    "SourceOpenError", "ParseError",
    "is_compressed", "is_zip_fastq", "is_fastq",
    "CHUNK_SIZE", "MARKER", "PLACEHOLDER_QUALITY",
]
