"""Assembly of the GFF3 features of one transcript.

``to_gtf`` orders the output of a transcript as:

1. gene (only for the first transcript of a gene)
2. transcript
3. per exon in genomic order: exon, then its UTR/CDS pieces
4. start codon, stop codon

The stop codon is excluded from the CDS. On the plus strand the stop codon
is the last codon of the coding span; on the minus strand it is the first.

Example:
    >>> from bed2gff.core.assemble import GeneDeduplicator, to_gtf
    >>> seen = GeneDeduplicator()
    >>> features = []
    >>> to_gtf(record, "gene1", features.append, seen.claim("gene1"))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bed2gff.core.codons import codon_complete, find_first_codon, find_last_codon
from bed2gff.core.features import (
    DEFAULT_SOURCE,
    Emit,
    build_feature,
    build_gene_feature,
    write_codon,
    write_features,
)
from bed2gff.core.positions import move_pos
from bed2gff.errors import StrandError
from bed2gff.io.gff import (
    FEATURE_EXON,
    FEATURE_START_CODON,
    FEATURE_STOP_CODON,
    FEATURE_TRANSCRIPT,
)

if TYPE_CHECKING:
    from bed2gff.core.models import TranscriptRecord

logger = logging.getLogger(__name__)

VALID_STRANDS = ("+", "-")


class GeneDeduplicator:
    """Track which genes already have a gene line.

    Example:
        >>> seen = GeneDeduplicator()
        >>> seen.claim("BRCA1"), seen.claim("BRCA1")
        (True, False)
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def claim(self, gene: str) -> bool:
        """Record a gene, returning True only the first time it is seen."""
        if gene in self._seen:
            return False
        self._seen.add(gene)
        return True

    def __contains__(self, gene: object) -> bool:
        return gene in self._seen

    def __len__(self) -> int:
        return len(self._seen)


def to_gtf(
    record: TranscriptRecord,
    gene: str,
    emit: Emit,
    emit_gene_line: bool,
    source: str = DEFAULT_SOURCE,
) -> None:
    """Emit all features of one transcript.

    Args:
        record: Transcript to convert.
        gene: Gene identifier the transcript belongs to.
        emit: Receives each feature in output order.
        emit_gene_line: Whether to emit the gene line first.
        source: Source column value.

    Raises:
        StrandError: If the strand is neither '+' nor '-'.
        CoordinateError: If the coding span is inconsistent with the exons.
    """
    if record.strand not in VALID_STRANDS:
        raise StrandError(record.strand, record.name)

    first_codon = find_first_codon(record)
    last_codon = find_last_codon(record)

    first_utr_end = record.cds_start
    last_utr_start = record.cds_end

    cds_start = record.cds_start
    cds_end = record.cds_end
    if record.strand == "+" and codon_complete(last_codon):
        cds_end = move_pos(record, last_codon.spans[0].end, -3)
    if record.strand == "-" and codon_complete(first_codon):
        cds_start = move_pos(record, first_codon.spans[0].start, 3)

    if emit_gene_line:
        emit(build_gene_feature(record, gene, source))

    emit(
        build_feature(
            record, gene, FEATURE_TRANSCRIPT, record.tx_start, record.tx_end, -1, -1, source
        )
    )

    for i, exon in enumerate(record.exons):
        emit(build_feature(record, gene, FEATURE_EXON, exon.start, exon.end, -1, i, source))
        if cds_start < cds_end:
            write_features(
                i,
                record,
                gene,
                first_utr_end,
                cds_start,
                cds_end,
                last_utr_start,
                record.exon_frames[i],
                emit,
                source,
            )

    if record.strand == "+":
        start_codon, stop_codon = first_codon, last_codon
    else:
        start_codon, stop_codon = last_codon, first_codon

    if codon_complete(start_codon):
        write_codon(record, gene, FEATURE_START_CODON, start_codon, emit, source)
    if codon_complete(stop_codon):
        write_codon(record, gene, FEATURE_STOP_CODON, stop_codon, emit, source)
