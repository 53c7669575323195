"""BED12 input.

This module parses 12-column BED lines into TranscriptRecord objects and
reads the isoform-to-gene table.

BED stores exons as blocks relative to chromStart; records hold absolute
exon coordinates. BED has no frame column, so exon frames are derived from
the thick (coding) span: walking the exons in transcription order, the frame
of a coding exon is the number of coding bases before it modulo 3.

Example:
    >>> from bed2gff.io.bed import read_bed
    >>> records, n_skipped = read_bed("transcripts.bed")
    >>> records[0].exon_frames
    (0, 2, -1)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Iterator

from bed2gff.core.models import TranscriptRecord
from bed2gff.errors import BedFormatError
from bed2gff.io.gff import open_text

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# BED12 column indices
COL_CHROM = 0
COL_START = 1
COL_END = 2
COL_NAME = 3
COL_SCORE = 4
COL_STRAND = 5
COL_THICK_START = 6
COL_THICK_END = 7
COL_RGB = 8
COL_BLOCK_COUNT = 9
COL_BLOCK_SIZES = 10
COL_BLOCK_STARTS = 11

BED12_COLUMNS = 12

# Lines that carry no record
_HEADER_PREFIXES = ("#", "track", "browser")

_DIGITS = re.compile(r"(\d+)")


# =============================================================================
# Parsing
# =============================================================================


def _parse_int_list(field: str, what: str) -> list[int]:
    try:
        return [int(x) for x in field.strip().rstrip(",").split(",") if x != ""]
    except ValueError as e:
        raise BedFormatError(f"Invalid {what} list '{field}'") from e


def compute_exon_frames(
    strand: str,
    cds_start: int,
    cds_end: int,
    exon_starts: list[int],
    exon_ends: list[int],
) -> list[int]:
    """Derive the frame of every exon from the coding span.

    Args:
        strand: Transcript strand.
        cds_start: Coding start.
        cds_end: Coding end.
        exon_starts: Exon starts in genomic order.
        exon_ends: Exon ends in genomic order.

    Returns:
        Frames in genomic order, -1 for exons without coding bases.
    """
    frames = [-1] * len(exon_starts)
    if cds_start >= cds_end:
        return frames

    order = range(len(exon_starts))
    if strand == "-":
        order = reversed(order)

    coding_bases = 0
    for i in order:
        overlap = min(exon_ends[i], cds_end) - max(exon_starts[i], cds_start)
        if overlap > 0:
            frames[i] = coding_bases % 3
            coding_bases += overlap

    return frames


def parse_bed_line(line: str) -> TranscriptRecord:
    """Parse a single BED12 line.

    Args:
        line: Raw BED line.

    Returns:
        Parsed transcript.

    Raises:
        BedFormatError: If the line is not a valid BED12 transcript.
    """
    try:
        line.encode("utf-8")
    except UnicodeEncodeError as e:
        raise BedFormatError(f"Line is not valid UTF-8: {e.reason}") from e

    parts = line.rstrip("\r\n").split("\t")
    if len(parts) < BED12_COLUMNS:
        raise BedFormatError(f"Expected {BED12_COLUMNS} columns, found {len(parts)}")

    try:
        tx_start = int(parts[COL_START])
        tx_end = int(parts[COL_END])
        cds_start = int(parts[COL_THICK_START])
        cds_end = int(parts[COL_THICK_END])
        block_count = int(parts[COL_BLOCK_COUNT])
    except ValueError as e:
        raise BedFormatError(f"Non-integer coordinate: {e}") from e

    name = parts[COL_NAME]
    strand = parts[COL_STRAND]

    if tx_start < 0 or tx_start >= tx_end:
        raise BedFormatError(f"{name}: invalid transcript span {tx_start}-{tx_end}")
    if cds_start > cds_end:
        raise BedFormatError(f"{name}: thickStart {cds_start} after thickEnd {cds_end}")
    if cds_start < tx_start or cds_end > tx_end:
        raise BedFormatError(f"{name}: thick span {cds_start}-{cds_end} outside transcript")

    sizes = _parse_int_list(parts[COL_BLOCK_SIZES], "blockSizes")
    offsets = _parse_int_list(parts[COL_BLOCK_STARTS], "blockStarts")
    if not (block_count == len(sizes) == len(offsets)) or block_count < 1:
        raise BedFormatError(
            f"{name}: blockCount {block_count} does not match "
            f"{len(sizes)} sizes and {len(offsets)} starts"
        )

    exon_starts = []
    exon_ends = []
    for size, offset in zip(sizes, offsets):
        if size <= 0:
            raise BedFormatError(f"{name}: non-positive block size {size}")
        start = tx_start + offset
        end = start + size
        if start < tx_start or end > tx_end:
            raise BedFormatError(f"{name}: block {start}-{end} outside transcript")
        if exon_ends and start < exon_ends[-1]:
            raise BedFormatError(f"{name}: blocks unsorted or overlapping at {start}")
        exon_starts.append(start)
        exon_ends.append(end)

    frames = compute_exon_frames(strand, cds_start, cds_end, exon_starts, exon_ends)

    return TranscriptRecord(
        chrom=parts[COL_CHROM],
        name=name,
        strand=strand,
        tx_start=tx_start,
        tx_end=tx_end,
        cds_start=cds_start,
        cds_end=cds_end,
        exon_starts=exon_starts,
        exon_ends=exon_ends,
        exon_frames=frames,
    )


def iter_bed(path: Path | str) -> Iterator[tuple[int, str]]:
    """Iterate over the record lines of a BED file.

    Yields:
        (line number, line) for every non-empty, non-header line.
    """
    # Undecodable bytes survive as surrogates and are rejected per line
    with open_text(path, errors="surrogateescape") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip() or line.startswith(_HEADER_PREFIXES):
                continue
            yield lineno, line


# =============================================================================
# Sorting
# =============================================================================


def natural_key(text: str) -> list:
    """Sort key putting chr2 before chr10."""
    return [int(tok) if tok.isdigit() else tok for tok in _DIGITS.split(text)]


def sort_records(records: Iterable[TranscriptRecord]) -> list[TranscriptRecord]:
    """Sort transcripts by chromosome (natural order) then start."""
    return sorted(records, key=lambda r: (natural_key(r.chrom), r.tx_start))


def read_bed(path: Path | str) -> tuple[list[TranscriptRecord], int]:
    """Read and sort all transcripts of a BED12 file.

    Lines that fail to parse are logged and skipped.

    Args:
        path: BED12 file, optionally gzip compressed.

    Returns:
        Sorted transcripts and the number of skipped lines.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"BED file not found: {path}")

    records = []
    n_skipped = 0
    for lineno, line in iter_bed(path):
        try:
            records.append(parse_bed_line(line))
        except BedFormatError as e:
            logger.error(f"Failed to parse BED line {lineno}: {e}")
            n_skipped += 1

    logger.info(f"Parsed {len(records)} transcripts from {path.name}")
    return sort_records(records), n_skipped


# =============================================================================
# Isoform Table
# =============================================================================


def read_isoforms(path: Path | str) -> dict[str, str]:
    """Read the isoform-to-gene table.

    Each line holds a gene and one of its isoforms, tab separated.

    Args:
        path: Isoform table.

    Returns:
        Mapping from isoform (transcript name) to gene.

    Raises:
        BedFormatError: If a line does not have two columns.
    """
    isoforms: dict[str, str] = {}
    with open_text(path) as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("\t")
            if len(parts) < 2:
                raise BedFormatError(f"Isoforms line {lineno}: expected gene<TAB>isoform")
            gene, isoform = parts[0], parts[1]
            isoforms[isoform] = gene

    logger.debug(f"Loaded {len(isoforms)} isoforms from {path}")
    return isoforms
