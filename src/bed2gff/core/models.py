"""Data models for transcripts and codons.

Coordinates are 0-based half-open throughout, as in BED. Conversion to the
1-based inclusive GFF3 convention happens only when a line is formatted.

Example:
    >>> from bed2gff.core.models import Span, SingleCodon, TranscriptRecord
    >>> record = TranscriptRecord(
    ...     chrom="chr1", name="tx1", strand="+",
    ...     tx_start=100, tx_end=130, cds_start=100, cds_end=130,
    ...     exon_starts=(100,), exon_ends=(130,), exon_frames=(0,),
    ... )
    >>> record.exon_count
    1
"""

from __future__ import annotations

from typing import NamedTuple, Union

import attrs

# =============================================================================
# Intervals
# =============================================================================


class Span(NamedTuple):
    """A genomic interval.

    Attributes:
        start: Start position (0-based, inclusive).
        end: End position (0-based, exclusive).
    """

    start: int
    end: int

    @property
    def length(self) -> int:
        """Get interval length."""
        return self.end - self.start


# =============================================================================
# Transcript Record
# =============================================================================


def _as_tuple(values) -> tuple[int, ...]:
    return tuple(int(v) for v in values)


@attrs.frozen
class TranscriptRecord:
    """One transcript parsed from a BED12 line.

    Attributes:
        chrom: Chromosome/scaffold name.
        name: Transcript identifier.
        strand: Strand ('+' or '-').
        tx_start: Transcript start (0-based, inclusive).
        tx_end: Transcript end (0-based, exclusive).
        cds_start: Coding (thick) start.
        cds_end: Coding (thick) end. Equal to cds_start for non-coding.
        exon_starts: Absolute exon starts, ascending.
        exon_ends: Absolute exon ends, ascending.
        exon_frames: Reading frame of the first coding base of each exon in
            transcription direction, or -1 for exons without coding bases.
    """

    chrom: str
    name: str
    strand: str
    tx_start: int
    tx_end: int
    cds_start: int
    cds_end: int
    exon_starts: tuple[int, ...] = attrs.field(converter=_as_tuple)
    exon_ends: tuple[int, ...] = attrs.field(converter=_as_tuple)
    exon_frames: tuple[int, ...] = attrs.field(converter=_as_tuple)

    @exon_frames.validator
    def _check_lengths(self, attribute, value) -> None:
        if not value:
            raise ValueError(f"Transcript {self.name} has no exons")
        if not len(self.exon_starts) == len(self.exon_ends) == len(value):
            raise ValueError(
                f"Exon tables of {self.name} differ in length: "
                f"{len(self.exon_starts)} starts, {len(self.exon_ends)} ends, "
                f"{len(value)} frames"
            )

    @property
    def exon_count(self) -> int:
        """Number of exons."""
        return len(self.exon_starts)

    @property
    def exons(self) -> list[Span]:
        """Exons as spans, in genomic order."""
        return [Span(s, e) for s, e in zip(self.exon_starts, self.exon_ends)]

    @property
    def is_coding(self) -> bool:
        """Whether the transcript has a non-empty coding span."""
        return self.cds_start < self.cds_end

    def coding_overlap(self, exon: int) -> Span:
        """Get the coding part of an exon (may be empty or inverted)."""
        return Span(
            max(self.exon_starts[exon], self.cds_start),
            min(self.exon_ends[exon], self.cds_end),
        )


# =============================================================================
# Codons
# =============================================================================


@attrs.frozen
class EmptyCodon:
    """No codon could be placed (no coding frame established)."""

    index: int = -1

    @property
    def spans(self) -> tuple[Span, ...]:
        return ()

    @property
    def length(self) -> int:
        return 0


@attrs.frozen
class SingleCodon:
    """A codon lying in one exon.

    The span holds fewer than three bases when the coding sequence ran out
    before the codon could be finished.
    """

    span: Span
    index: int

    @property
    def spans(self) -> tuple[Span, ...]:
        return (self.span,)

    @property
    def length(self) -> int:
        return self.span.length


@attrs.frozen
class SplitCodon:
    """A codon interrupted by an intron.

    Attributes:
        first: Part in the exon the codon is anchored in.
        second: Remaining bases in the neighbouring exon.
        index: Exon ordinal hosting ``first``.
    """

    first: Span
    second: Span
    index: int

    @property
    def spans(self) -> tuple[Span, ...]:
        return (self.first, self.second)

    @property
    def length(self) -> int:
        return self.first.length + self.second.length


Codon = Union[EmptyCodon, SingleCodon, SplitCodon]
