from __future__ import annotations
from dataclasses import dataclass

MARKER = "@"
PLACEHOLDER_QUALITY = "K"       # synthesized when the source has no quality lines
CHUNK_SIZE = 1 << 20            # 1 MiB


@dataclass(frozen=True, slots=True)
class Record:
    identifier: str             # includes the leading marker
    sequence: str
    separator: str
    quality: str
    phred64: bool = False

    @property
    def name(self) -> str:
        """Identifier without the marker, cut at the first whitespace."""
        body = self.identifier[len(MARKER):] if self.identifier.startswith(MARKER) else self.identifier
        return body.split(None, 1)[0] if body.strip() else ""

    def __len__(self) -> int:
        return len(self.sequence)

    def to_fastq(self) -> str:
        return f"{self.identifier}\n{self.sequence}\n{self.separator}\n{self.quality}\n"


@dataclass(frozen=True, slots=True)
class RecordPair:
    left: Record
    right: Record


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    path: str
    has_quality: bool = True
    phred64: bool = False
    interleaved: bool = False
    chunk_size: int = CHUNK_SIZE

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


class SourceOpenError(OSError):
    """Raised when a path or URL cannot be opened for reading."""
    pass


class ParseError(RuntimeError):
    """Describes a record the reader could not assemble; the stream stops there."""
    pass
