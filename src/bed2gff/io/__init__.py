"""Input/output handlers for bed2gff.

This module provides the readers and writers used by a conversion run:

- BED12: transcript records and the isoform-to-gene table
- GFF3: feature lines and the output writer

Example:
    >>> from bed2gff.io import read_bed, GFF3Writer
    >>> records, n_skipped = read_bed("transcripts.bed")
"""

from bed2gff.io.gff import GFF3Writer, GffFeature, format_attributes
from bed2gff.io.bed import parse_bed_line, read_bed, read_isoforms, sort_records

__all__: list[str] = [
    "GFF3Writer",
    "GffFeature",
    "format_attributes",
    "parse_bed_line",
    "read_bed",
    "read_isoforms",
    "sort_records",
]
