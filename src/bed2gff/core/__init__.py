"""Core conversion logic for bed2gff.

This module contains the algorithms that derive GFF3 features from a
BED12 transcript:

- Transcript and codon data models
- Moving positions along exons
- Start/stop codon location
- UTR/CDS partitioning of exons
- Per-transcript feature assembly

Example:
    >>> from bed2gff.core import GeneDeduplicator, to_gtf
    >>> features = []
    >>> to_gtf(record, "gene1", features.append, emit_gene_line=True)
"""

from bed2gff.core.assemble import GeneDeduplicator, to_gtf
from bed2gff.core.codons import codon_complete, find_first_codon, find_last_codon
from bed2gff.core.features import build_feature, encode_phase, write_codon, write_features
from bed2gff.core.models import (
    Codon,
    EmptyCodon,
    SingleCodon,
    Span,
    SplitCodon,
    TranscriptRecord,
)
from bed2gff.core.positions import in_exon, move_pos

__all__: list[str] = [
    # Models
    "Codon",
    "EmptyCodon",
    "SingleCodon",
    "Span",
    "SplitCodon",
    "TranscriptRecord",
    # Algorithms
    "codon_complete",
    "find_first_codon",
    "find_last_codon",
    "in_exon",
    "move_pos",
    "build_feature",
    "encode_phase",
    "write_codon",
    "write_features",
    # Assembly
    "GeneDeduplicator",
    "to_gtf",
]
