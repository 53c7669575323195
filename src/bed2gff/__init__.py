"""bed2gff: convert BED12 gene models into GFF3 annotations.

bed2gff reads transcripts stored as 12-column BED records and writes GFF3
with gene, transcript, exon, CDS, UTR and start/stop codon features,
including split codons and strand-aware phases.

Example:
    >>> import bed2gff
    >>> bed2gff.__version__
    '0.1.0'

Modules:
    core: Feature derivation (codons, positions, partitioning, assembly)
    io: BED12 reader and GFF3 writer
    convert: Whole-file conversion runs
    config: Configuration loading
    utils: Logging and resource utilities
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
