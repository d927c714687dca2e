"""CLI implementation for fastqstream."""

import itertools
import json
import sys
from pathlib import Path
from typing import Optional

import typer

from .core.model import SourceOpenError
from .core.util import pair_asdict, record_asdict
from .logging_setup import configure_logging
from .readers import open_paired_reader, open_reader

app = typer.Typer(add_completion=False, help="Stream records from FASTQ files (plain or gzip).")


def _source_stats(reader) -> dict:
    """Progress and tail diagnostics for one FastqReader."""
    consumed, total = reader.progress()
    return {
        "bytes_consumed": consumed,
        "bytes_total": total,
        "no_line_break_at_end": reader.has_no_line_break_at_end,
    }


def _summary(reader, paired: bool, records: int, bases: int) -> dict:
    summary = {"records": records, "bases": bases, "error": reader.error}
    if not paired:
        summary.update(_source_stats(reader))
        return summary
    summary["left"] = _source_stats(reader.left)
    if reader.right is not None:
        summary["right"] = _source_stats(reader.right)
    return summary


@app.command()
def main(
    left: str = typer.Argument(..., help="FASTQ path or URL ('-' for stdin)"),
    right: Optional[str] = typer.Argument(None, help="Mate FASTQ path or URL for paired-end input"),
    interleaved: bool = typer.Option(False, "--interleaved", help="LEFT holds alternating mates"),
    no_quality: bool = typer.Option(False, "--no-quality", help="Records carry no quality line"),
    phred64: bool = typer.Option(False, "--phred64", help="Quality strings use the phred+64 encoding"),
    limit: Optional[int] = typer.Option(None, "--limit", min=0, help="Stop after N records or pairs"),
    stats: bool = typer.Option(False, "--stats", help="Emit a JSON summary instead of records"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: $LOG_LEVEL or INFO)"),
):
    """Read one file, a pair of files, or an interleaved file and emit JSON lines."""
    configure_logging(log_level)
    paired = right is not None or interleaved

    try:
        if paired:
            reader = open_paired_reader(left, right, has_quality=not no_quality,
                                        phred64=phred64, interleaved=interleaved)
        else:
            reader = open_reader(left, has_quality=not no_quality, phred64=phred64)
    except (SourceOpenError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    count = 0
    bases = 0
    with reader:
        # open output sink
        sink = open(output, "w", encoding="utf-8") if output else sys.stdout
        try:
            for item in itertools.islice(reader, limit):
                count += 1
                if paired:
                    bases += len(item.left) + len(item.right)
                else:
                    bases += len(item)
                if not stats:
                    obj = pair_asdict(item) if paired else record_asdict(item)
                    sink.write(json.dumps(obj))
                    sink.write("\n")
            if stats:
                summary = _summary(reader, paired, count, bases)
                json.dump(summary, sink, indent=2)
                sink.write("\n")
            error = reader.error
        finally:
            if output:
                sink.close()

    # exit code
    if error:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
