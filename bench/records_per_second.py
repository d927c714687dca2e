"""Throughput sanity benchmark for the FASTQ reader.

Writes a synthetic FASTQ file (plain and gzip) and times a full read of each
with a few chunk sizes. Meant for manual runs, not CI.
"""

import gzip
import sys
import tempfile
import time
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fastqstream import open_reader


def write_fixture(directory: Path, n_records: int) -> tuple[Path, Path]:
    record = "@read{i} 1:N:0:ACGT\n" + "ACGTTGCA" * 19 + "\n+\n" + "IIIIFFFF" * 19 + "\n"
    text = "".join(record.format(i=i) for i in range(n_records)).encode()
    plain = directory / "bench.fq"
    zipped = directory / "bench.fq.gz"
    plain.write_bytes(text)
    zipped.write_bytes(gzip.compress(text, compresslevel=1))
    return plain, zipped


def time_read(path: Path, chunk_size: int) -> tuple[int, float]:
    t0 = time.perf_counter()
    count = 0
    with open_reader(path, chunk_size=chunk_size) as reader:
        for _ in reader:
            count += 1
    return count, time.perf_counter() - t0


def main(n_records: int = 200_000):
    with tempfile.TemporaryDirectory() as tmp:
        plain, zipped = write_fixture(Path(tmp), n_records)
        for path in (plain, zipped):
            for chunk_size in (1 << 12, 1 << 16, 1 << 20):
                count, secs = time_read(path, chunk_size)
                print(f"{path.name:12s} chunk={chunk_size:>8d} records={count} "
                      f"{secs:.2f}s {count / secs:,.0f} records/s")


if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 200_000)
