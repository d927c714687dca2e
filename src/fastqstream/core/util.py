from __future__ import annotations
from typing import Dict, Any

from .model import Record, RecordPair

_ZIP_SUFFIXES = (".fastq.gz", ".fq.gz", ".fasta.gz", ".fa.gz")
_PLAIN_SUFFIXES = (".fastq", ".fq", ".fasta", ".fa")


def is_compressed(name: str) -> bool:
    """Only the `.gz` suffix selects decompression."""
    return str(name).endswith(".gz")


def is_zip_fastq(name: str) -> bool:
    return str(name).endswith(_ZIP_SUFFIXES)


def is_fastq(name: str) -> bool:
    return str(name).endswith(_PLAIN_SUFFIXES)


def record_asdict(rec: Record) -> Dict[str, Any]:
    """Return a JSON-serialisable dict for one record."""
    return {
        "id": rec.identifier,
        "name": rec.name,
        "sequence": rec.sequence,
        "quality": rec.quality,
        "length": len(rec),
        "phred64": rec.phred64,
    }


def pair_asdict(pair: RecordPair) -> Dict[str, Any]:
    return {"left": record_asdict(pair.left), "right": record_asdict(pair.right)}
