"""Pytest configuration and shared fixtures for bed2gff tests.

Fixtures are organized by category:

- Record fixtures: TranscriptRecord objects built in memory
- File fixtures: BED12 and isoform files written to tmp_path
"""

from pathlib import Path
from typing import Callable

import pytest

from bed2gff.core.models import TranscriptRecord
from bed2gff.io.bed import compute_exon_frames


def make_record(
    exons: list[tuple[int, int]],
    cds: tuple[int, int] | None = None,
    strand: str = "+",
    name: str = "tx1",
    chrom: str = "chr1",
    frames: list[int] | None = None,
) -> TranscriptRecord:
    """Build a transcript from exon spans, deriving frames like the BED reader."""
    starts = [s for s, _ in exons]
    ends = [e for _, e in exons]
    tx_start, tx_end = starts[0], ends[-1]
    cds_start, cds_end = cds if cds is not None else (tx_end, tx_end)
    if frames is None:
        frames = compute_exon_frames(strand, cds_start, cds_end, starts, ends)
    return TranscriptRecord(
        chrom=chrom,
        name=name,
        strand=strand,
        tx_start=tx_start,
        tx_end=tx_end,
        cds_start=cds_start,
        cds_end=cds_end,
        exon_starts=starts,
        exon_ends=ends,
        exon_frames=frames,
    )


def bed_line(
    record: TranscriptRecord,
    score: int = 0,
) -> str:
    """Format a transcript as a BED12 line."""
    sizes = ",".join(str(e - s) for s, e in zip(record.exon_starts, record.exon_ends))
    offsets = ",".join(str(s - record.tx_start) for s in record.exon_starts)
    return "\t".join(
        [
            record.chrom,
            str(record.tx_start),
            str(record.tx_end),
            record.name,
            str(score),
            record.strand,
            str(record.cds_start),
            str(record.cds_end),
            "0",
            str(record.exon_count),
            sizes + ",",
            offsets + ",",
        ]
    )


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def record_factory() -> Callable[..., TranscriptRecord]:
    """Return the record builder."""
    return make_record


@pytest.fixture
def single_exon_plus() -> TranscriptRecord:
    """Fully coding single-exon plus-strand transcript [100, 130)."""
    return make_record([(100, 130)], cds=(100, 130), strand="+")


@pytest.fixture
def single_exon_minus() -> TranscriptRecord:
    """Fully coding single-exon minus-strand transcript [100, 130)."""
    return make_record([(100, 130)], cds=(100, 130), strand="-")


@pytest.fixture
def two_exon_plus() -> TranscriptRecord:
    """Plus-strand transcript with a start codon split 2+1 across the intron.

    Exons [100, 110) and [200, 220); CDS [108, 216) is 18 bases.
    """
    return make_record([(100, 110), (200, 220)], cds=(108, 216), strand="+")


@pytest.fixture
def two_exon_minus() -> TranscriptRecord:
    """Minus-strand transcript with a start codon split 2+1 across the intron.

    Exons [100, 110) and [200, 220); CDS [103, 202) is 9 bases.
    """
    return make_record([(100, 110), (200, 220)], cds=(103, 202), strand="-")


@pytest.fixture
def noncoding() -> TranscriptRecord:
    """Two-exon transcript without a coding span."""
    return make_record([(100, 110), (200, 220)], cds=(220, 220), strand="+")


# =============================================================================
# File Fixtures
# =============================================================================


@pytest.fixture
def bed_file(tmp_path: Path) -> Path:
    """BED12 file with three transcripts of two genes, deliberately unsorted.

    - chr10 txC (geneB)
    - chr2 txB (geneA), starts after txA
    - chr2 txA (geneA)
    """
    records = [
        make_record([(1000, 1030)], cds=(1000, 1030), strand="+", name="txC", chrom="chr10"),
        make_record([(300, 310), (400, 420)], cds=(308, 416), strand="+", name="txB", chrom="chr2"),
        make_record([(100, 130)], cds=(100, 130), strand="-", name="txA", chrom="chr2"),
    ]
    path = tmp_path / "transcripts.bed"
    path.write_text("".join(bed_line(r) + "\n" for r in records))
    return path


@pytest.fixture
def isoforms_file(tmp_path: Path) -> Path:
    """Isoform table matching bed_file."""
    path = tmp_path / "isoforms.tsv"
    path.write_text("geneA\ttxA\ngeneA\ttxB\ngeneB\ttxC\n")
    return path
