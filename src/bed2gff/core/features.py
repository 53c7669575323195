"""Feature line construction and exon partitioning.

This module turns coordinates derived from a transcript into GffFeature
records:

- ``build_feature`` builds one typed line with its ID/Parent attributes
- ``write_features`` splits one exon into UTR and CDS pieces
- ``write_codon`` emits the one or two lines of a start/stop codon

Exon ordinals count from the 5' end of the transcript, so on the minus strand
the exon with the highest coordinates is exon 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from bed2gff.core.models import SingleCodon, SplitCodon
from bed2gff.errors import FeatureTypeError, StrandError
from bed2gff.io.gff import (
    FEATURE_CDS,
    FEATURE_EXON,
    FEATURE_GENE,
    FEATURE_START_CODON,
    FEATURE_STOP_CODON,
    FEATURE_TRANSCRIPT,
    FEATURE_UTR3,
    FEATURE_UTR5,
    GffFeature,
)

if TYPE_CHECKING:
    from bed2gff.core.models import Codon, TranscriptRecord

Emit = Callable[[GffFeature], None]

DEFAULT_SOURCE = "bed2gff"

# ID prefixes by feature type
ID_PREFIXES = {
    FEATURE_EXON: "exon",
    FEATURE_CDS: "CDS",
    FEATURE_UTR5: "UTR5",
    FEATURE_UTR3: "UTR3",
    FEATURE_START_CODON: "start_codon",
    FEATURE_STOP_CODON: "stop_codon",
}

# No ordinal: UTRs (and anything else called with exon=-1)
NO_EXON = -1


def encode_phase(frame: int) -> str:
    """Convert an exon frame into a GFF3 phase.

    The frame counts codon bases already read before the feature; the phase
    counts bases to skip until the next codon starts.

    Args:
        frame: Exon frame, negative for features without a frame.

    Returns:
        '0', '1', '2' or '.'.
    """
    if frame < 0:
        return "."
    if frame == 0:
        return "0"
    if frame == 1:
        return "2"
    return "1"


def exon_ordinal(record: TranscriptRecord, exon: int) -> int:
    """Get the 1-based exon number in transcription order.

    Raises:
        StrandError: If the strand is neither '+' nor '-'.
    """
    if record.strand == "+":
        return exon + 1
    if record.strand == "-":
        return record.exon_count - exon
    raise StrandError(record.strand, record.name)


def build_gene_feature(
    record: TranscriptRecord,
    gene: str,
    source: str = DEFAULT_SOURCE,
) -> GffFeature:
    """Build the gene line spanning the transcript."""
    if not gene:
        raise ValueError(f"Empty gene name for transcript {record.name}")

    return GffFeature(
        seqid=record.chrom,
        source=source,
        feature_type=FEATURE_GENE,
        start=record.tx_start,
        end=record.tx_end,
        strand=record.strand,
        attributes={"ID": gene, "gene_id": gene},
    )


def build_feature(
    record: TranscriptRecord,
    gene: str,
    feature_type: str,
    start: int,
    end: int,
    frame: int,
    exon: int,
    source: str = DEFAULT_SOURCE,
) -> GffFeature:
    """Build a transcript, exon, CDS, UTR or codon line.

    Args:
        record: Owning transcript.
        gene: Gene identifier of the transcript.
        feature_type: One of the transcript-level feature types.
        start: Start (0-based).
        end: End (0-based, exclusive).
        frame: Exon frame (negative for no phase).
        exon: Exon index in genomic order, or -1 for no ordinal.
        source: Source column value.

    Returns:
        The feature.

    Raises:
        FeatureTypeError: For an unknown feature type.
        StrandError: For an ordinal feature on an unknown strand.
    """
    if feature_type == FEATURE_TRANSCRIPT:
        attributes = {
            "ID": record.name,
            "Parent": gene,
            "gene_id": gene,
            "transcript_id": record.name,
        }
    else:
        prefix = ID_PREFIXES.get(feature_type)
        if prefix is None:
            raise FeatureTypeError(feature_type)

        if exon >= 0:
            number = exon_ordinal(record, exon)
            attributes = {
                "ID": f"{prefix}:{record.name}.{number}",
                "Parent": record.name,
                "gene_id": gene,
                "transcript_id": record.name,
                "exon_number": str(number),
            }
        else:
            attributes = {
                "ID": f"{prefix}:{record.name}",
                "Parent": record.name,
                "gene_id": gene,
                "transcript_id": record.name,
            }

    return GffFeature(
        seqid=record.chrom,
        source=source,
        feature_type=feature_type,
        start=start,
        end=end,
        strand=record.strand,
        phase=encode_phase(frame),
        attributes=attributes,
    )


def write_features(
    i: int,
    record: TranscriptRecord,
    gene: str,
    first_utr_end: int,
    cds_start: int,
    cds_end: int,
    last_utr_start: int,
    frame: int,
    emit: Emit,
    source: str = DEFAULT_SOURCE,
) -> None:
    """Emit the UTR and CDS pieces of one exon.

    Args:
        i: Exon index in genomic order.
        record: Owning transcript.
        gene: Gene identifier.
        first_utr_end: End of the low-coordinate UTR.
        cds_start: Start of the CDS, after codon trimming.
        cds_end: End of the CDS, after codon trimming.
        last_utr_start: Start of the high-coordinate UTR.
        frame: Frame of the exon.
        emit: Receives each feature.
        source: Source column value.
    """
    exon_start = record.exon_starts[i]
    exon_end = record.exon_ends[i]

    if exon_start < first_utr_end:
        end = min(exon_end, first_utr_end)
        utr_type = FEATURE_UTR5 if record.strand == "+" else FEATURE_UTR3
        emit(build_feature(record, gene, utr_type, exon_start, end, -1, NO_EXON, source))

    if cds_start < exon_end and exon_start < cds_end:
        start = max(exon_start, cds_start)
        end = min(exon_end, cds_end)
        emit(build_feature(record, gene, FEATURE_CDS, start, end, frame, i, source))

    if exon_end > last_utr_start:
        start = max(exon_start, last_utr_start)
        utr_type = FEATURE_UTR3 if record.strand == "+" else FEATURE_UTR5
        emit(build_feature(record, gene, utr_type, start, exon_end, -1, NO_EXON, source))


def write_codon(
    record: TranscriptRecord,
    gene: str,
    feature_type: str,
    codon: Codon,
    emit: Emit,
    source: str = DEFAULT_SOURCE,
) -> None:
    """Emit the lines of a start or stop codon.

    A split codon gives two lines with the same type and exon number, in
    transcription order. The 3' part's phase counts the bases of the 5' part.
    """
    if isinstance(codon, SplitCodon):
        five, three = sorted(codon.spans, key=lambda s: s.start, reverse=record.strand == "-")
        emit(build_feature(record, gene, feature_type, five.start, five.end, 0, codon.index, source))
        emit(
            build_feature(
                record, gene, feature_type, three.start, three.end, five.length, codon.index, source
            )
        )
    elif isinstance(codon, SingleCodon):
        span = codon.span
        emit(build_feature(record, gene, feature_type, span.start, span.end, 0, codon.index, source))
