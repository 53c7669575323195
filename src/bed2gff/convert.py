"""Whole-file BED12 to GFF3 conversion.

A run reads and sorts all transcripts, writes the GFF3 preamble and then
converts the transcripts one at a time. Each transcript is assembled in full
before any of its lines are written, so a fatal error never leaves half a
transcript in the output.

Example:
    >>> from bed2gff.convert import convert_bed
    >>> from bed2gff.io.bed import read_isoforms
    >>> stats = convert_bed(
    ...     "transcripts.bed", "annotation.gff3",
    ...     isoforms=read_isoforms("isoforms.tsv"),
    ... )
    >>> stats.n_genes
    1523
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping, Protocol

import attrs

from bed2gff.config import Config
from bed2gff.core.assemble import GeneDeduplicator, to_gtf
from bed2gff.errors import FatalConversionError, UnmappedIsoformError
from bed2gff.io.bed import read_bed
from bed2gff.io.gff import GFF3Writer, GffFeature
from bed2gff.utils.logging import ProgressLogger, Timer
from bed2gff.utils.resources import get_peak_memory_mb

if TYPE_CHECKING:
    from bed2gff.core.models import TranscriptRecord

logger = logging.getLogger(__name__)


# =============================================================================
# Run Statistics
# =============================================================================


@attrs.define
class RunStats:
    """Summary of a conversion run.

    Attributes:
        n_records: Transcripts converted.
        n_skipped: Input lines that failed to parse.
        n_genes: Distinct genes written.
        n_features: Feature lines written.
        elapsed: Wall time in seconds.
        peak_memory_mb: Peak resident memory in MB.
    """

    n_records: int = 0
    n_skipped: int = 0
    n_genes: int = 0
    n_features: int = 0
    elapsed: float = 0.0
    peak_memory_mb: float | None = None

    def to_dict(self) -> dict:
        return attrs.asdict(self)


class RunObserver(Protocol):
    """Receives the statistics of a finished run."""

    def report(self, stats: RunStats) -> None: ...


class LoggingObserver:
    """Log memory usage and elapsed time of a run."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def report(self, stats: RunStats) -> None:
        if stats.peak_memory_mb is not None:
            self.logger.info(f"Memory usage: {stats.peak_memory_mb:.2f} MB")
        self.logger.info(f"Elapsed: {stats.elapsed:.4f} secs")


# =============================================================================
# Conversion
# =============================================================================


def resolve_gene(name: str, isoforms: Mapping[str, str] | None) -> str:
    """Get the gene of a transcript.

    Args:
        name: Transcript name.
        isoforms: Isoform-to-gene mapping. None makes every transcript its
            own gene.

    Returns:
        Gene identifier.

    Raises:
        UnmappedIsoformError: If the mapping lacks the transcript.
    """
    if isoforms is None:
        return name
    gene = isoforms.get(name)
    if gene is None:
        raise UnmappedIsoformError(name)
    return gene


def convert_records(
    records: Iterable[TranscriptRecord],
    writer: GFF3Writer,
    isoforms: Mapping[str, str] | None = None,
    genes: GeneDeduplicator | None = None,
    progress: ProgressLogger | None = None,
) -> int:
    """Convert transcripts and write their features.

    Args:
        records: Transcripts, already sorted.
        writer: Destination with the header already written.
        isoforms: Isoform-to-gene mapping.
        genes: Genes that already have a gene line.
        progress: Optional progress reporter.

    Returns:
        Number of transcripts converted.

    Raises:
        FatalConversionError: On the first transcript that cannot be
            converted. Earlier transcripts remain written.
    """
    genes = genes if genes is not None else GeneDeduplicator()
    n_records = 0

    for record in records:
        features: list[GffFeature] = []
        try:
            gene = resolve_gene(record.name, isoforms)
            to_gtf(record, gene, features.append, genes.claim(gene), source=writer.source)
        except FatalConversionError as e:
            logger.error(f"Conversion aborted at transcript {record.name}: {e}")
            raise

        writer.write_features(features)
        n_records += 1
        if progress is not None:
            progress.update()

    if progress is not None:
        progress.finish()
    return n_records


def convert_bed(
    bed_path: Path | str,
    output_path: Path | str,
    isoforms: Mapping[str, str] | None = None,
    config: Config | None = None,
    observer: RunObserver | None = None,
) -> RunStats:
    """Convert a BED12 file into a GFF3 file.

    Args:
        bed_path: BED12 input (optionally gzip compressed).
        output_path: GFF3 output (gzip compressed if it ends in .gz).
        isoforms: Isoform-to-gene mapping. None makes every transcript its
            own gene.
        config: Run configuration.
        observer: Receives the run statistics at the end.

    Returns:
        Run statistics.

    Raises:
        FatalConversionError: If a transcript cannot be converted.
    """
    config = config or Config()
    stats = RunStats()
    genes = GeneDeduplicator()

    with Timer("Conversion", logger) as timer:
        records, stats.n_skipped = read_bed(bed_path)
        if stats.n_skipped:
            logger.warning(f"Skipped {stats.n_skipped} malformed BED line(s)")

        progress = ProgressLogger(
            logger,
            total=len(records),
            interval=config.logging.progress_interval,
            description="Converting transcripts",
        )

        with GFF3Writer(output_path, source=config.output.source) as writer:
            writer.write_header(
                provider=config.output.provider,
                version=config.output.version,
                contact=config.output.contact,
            )
            stats.n_records = convert_records(records, writer, isoforms, genes, progress)
            stats.n_features = writer.n_features

    stats.n_genes = len(genes)
    stats.elapsed = timer.elapsed
    stats.peak_memory_mb = get_peak_memory_mb()

    logger.info(
        f"Wrote {stats.n_features} features for {stats.n_records} transcripts "
        f"and {stats.n_genes} genes to {output_path}"
    )
    if observer is not None:
        observer.report(stats)

    return stats
