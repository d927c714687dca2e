"""Record-level readers layered on the line scanner."""

from .fastq import FastqReader, open_reader
from .paired import PairedReader, open_paired_reader

__all__ = ["FastqReader", "open_reader", "PairedReader", "open_paired_reader"]
