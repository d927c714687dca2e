import io

import pytest

from fastqstream.core.buffer import ChunkBuffer
from fastqstream.core.model import Record, RecordPair, ReaderConfig, CHUNK_SIZE
from fastqstream.core.scanner import LineScanner, ScanState
from fastqstream.core.util import (
    is_compressed, is_zip_fastq, is_fastq, record_asdict, pair_asdict,
)
from fastqstream.io.base import read_fully


class BytesSource:
    """In-memory byte source for scanner tests."""
    compressed = False

    def __init__(self, data: bytes):
        self._stream = io.BytesIO(data)
        self._at_end = False
        self.refills = 0

    @property
    def at_end(self) -> bool:
        return self._at_end

    def refill(self, view: memoryview) -> int:
        self.refills += 1
        n = read_fully(self._stream, view)
        if n < len(view):
            self._at_end = True
        return n

    def progress(self):
        return self._stream.tell(), len(self._stream.getvalue())

    def close(self):
        pass


def scan_all(data: bytes, chunk_size: int) -> list[bytes]:
    buf = ChunkBuffer(BytesSource(data), chunk_size)
    buf.refill()
    scanner = LineScanner(buf)
    lines = []
    while (line := scanner.next_line()) is not None:
        lines.append(line)
    return lines


class TestModel:
    """Test the value types."""

    def test_record_name_and_length(self):
        rec = Record("@r1 extra comment", "ACGT", "+", "IIII")
        assert rec.name == "r1"
        assert len(rec) == 4
        assert rec.phred64 is False

    def test_record_to_fastq(self):
        rec = Record("@r1", "ACGT", "+", "IIII")
        assert rec.to_fastq() == "@r1\nACGT\n+\nIIII\n"

    def test_record_is_immutable(self):
        rec = Record("@r1", "ACGT", "+", "IIII")
        with pytest.raises(AttributeError):
            rec.sequence = "TTTT"

    def test_config_defaults(self):
        cfg = ReaderConfig("reads.fq")
        assert cfg.has_quality is True
        assert cfg.phred64 is False
        assert cfg.interleaved is False
        assert cfg.chunk_size == CHUNK_SIZE == 1 << 20

    def test_config_rejects_bad_chunk_size(self):
        with pytest.raises(ValueError, match="chunk_size"):
            ReaderConfig("reads.fq", chunk_size=0)


class TestUtil:
    """Test filename helpers and dict conversion."""

    @pytest.mark.parametrize("name", ["a.fastq.gz", "a.fq.gz", "a.fasta.gz", "a.fa.gz"])
    def test_zip_fastq_names(self, name):
        assert is_zip_fastq(name)
        assert is_compressed(name)
        assert not is_fastq(name)

    @pytest.mark.parametrize("name", ["a.fastq", "a.fq", "a.fasta", "a.fa"])
    def test_plain_fastq_names(self, name):
        assert is_fastq(name)
        assert not is_zip_fastq(name)
        assert not is_compressed(name)

    def test_other_gz_is_still_compressed(self):
        assert is_compressed("reads.txt.gz")
        assert not is_zip_fastq("reads.txt.gz")

    def test_record_asdict(self):
        rec = Record("@r1 x", "ACGT", "+", "IIII", phred64=True)
        assert record_asdict(rec) == {
            "id": "@r1 x", "name": "r1", "sequence": "ACGT",
            "quality": "IIII", "length": 4, "phred64": True,
        }

    def test_pair_asdict(self):
        pair = RecordPair(Record("@a", "A", "+", "I"), Record("@b", "C", "+", "J"))
        obj = pair_asdict(pair)
        assert obj["left"]["name"] == "a"
        assert obj["right"]["sequence"] == "C"


class TestChunkBuffer:
    """Test refill bookkeeping."""

    def test_refill_full_chunk(self):
        buf = ChunkBuffer(BytesSource(b"0123456789"), 4)
        assert buf.refill() == 4
        assert buf.valid_length == 4
        assert buf.consume_cursor == 0
        assert buf.full
        assert not buf.truncated_tail

    def test_short_chunk_without_newline_marks_truncated_tail(self):
        buf = ChunkBuffer(BytesSource(b"abc"), 8)
        buf.refill()
        assert buf.valid_length == 3
        assert buf.truncated_tail

    def test_short_chunk_with_newline(self):
        buf = ChunkBuffer(BytesSource(b"abc\n"), 8)
        buf.refill()
        assert not buf.truncated_tail

    def test_empty_source(self):
        buf = ChunkBuffer(BytesSource(b""), 8)
        assert buf.refill() == 0
        assert buf.valid_length == 0
        assert not buf.truncated_tail

    def test_bad_capacity(self):
        with pytest.raises(ValueError):
            ChunkBuffer(BytesSource(b""), 0)


class TestLineScanner:
    """Test line reconstruction across chunk boundaries."""

    DATA = b"@r1\nACGTACGT\n+\nIIIIIIII\n\n@r2 long comment here\nGG\n+\nJJ\n"

    def test_single_chunk(self):
        assert scan_all(self.DATA, 1024) == self.DATA.split(b"\n")[:-1]

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 7, 8, 13, 64])
    def test_chunk_boundary_independence(self, chunk_size):
        assert scan_all(self.DATA, chunk_size) == scan_all(self.DATA, 1 << 20)

    def test_exact_multiple_of_chunk_size(self):
        data = b"ab\ncd\n"          # 6 bytes, chunk of 3 and 6
        assert scan_all(data, 3) == [b"ab", b"cd"]
        assert scan_all(data, 6) == [b"ab", b"cd"]

    @pytest.mark.parametrize("chunk_size", [1, 4, 1024])
    def test_missing_final_newline(self, chunk_size):
        assert scan_all(b"ab\ncd", chunk_size) == [b"ab", b"cd"]

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 1024])
    def test_crlf_is_stripped(self, chunk_size):
        assert scan_all(b"ab\r\ncd\r\n", chunk_size) == [b"ab", b"cd"]

    def test_blank_lines_are_returned(self):
        assert scan_all(b"a\n\nb\n", 2) == [b"a", b"", b"b"]

    def test_empty_input(self):
        assert scan_all(b"", 8) == []

    def test_line_longer_than_chunk(self):
        long_line = b"A" * 100
        assert scan_all(long_line + b"\nB\n", 7) == [long_line, b"B"]

    def test_state_transitions(self):
        buf = ChunkBuffer(BytesSource(b"ab\ncd"), 4)
        buf.refill()
        scanner = LineScanner(buf)
        assert scanner.state is ScanState.SCANNING

        assert scanner.step() == b"ab"
        assert scanner.state is ScanState.SCANNING
        assert buf.consume_cursor == 3

        # "c" has no terminator in this chunk
        assert scanner.step() is None
        assert scanner.state is ScanState.NEEDS_REFILL
        assert scanner.partial == b"c"

        # full chunk, so the scanner refills and keeps the partial line
        assert scanner.step() is None
        assert scanner.state is ScanState.SCANNING
        assert scanner.partial == b"c"

        assert scanner.step() is None
        assert scanner.state is ScanState.NEEDS_REFILL
        assert scanner.partial == b"cd"

        # short chunk: pending content is the final line
        assert scanner.step() == b"cd"
        assert scanner.exhausted
        assert scanner.partial == b""

    def test_exhausted_is_terminal(self):
        source = BytesSource(b"x\n")
        buf = ChunkBuffer(source, 16)
        buf.refill()
        scanner = LineScanner(buf)
        assert scanner.next_line() == b"x"
        assert scanner.next_line() is None
        refills = source.refills
        for _ in range(3):
            assert scanner.next_line() is None
            assert scanner.step() is None
        assert scanner.exhausted
        assert source.refills == refills
