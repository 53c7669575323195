"""Start and stop codon location.

The first codon sits at the low-coordinate end of the coding span and the
last codon at the high-coordinate end. Which of them is the start codon
depends on the strand and is decided by the assembler.

A codon is only placed when the reading frame at that end of the coding span
is 0, i.e. the coding span starts (or ends) on a codon boundary. A codon may
be split by an intron, in which case the missing bases are taken from the
neighbouring exon.

Example:
    >>> from bed2gff.core.codons import find_first_codon, codon_complete
    >>> codon = find_first_codon(record)
    >>> codon_complete(codon)
    True
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bed2gff.core.models import Codon, EmptyCodon, SingleCodon, Span, SplitCodon

if TYPE_CHECKING:
    from bed2gff.core.models import TranscriptRecord

logger = logging.getLogger(__name__)

CODON_LENGTH = 3


def codon_complete(codon: Codon) -> bool:
    """Check if all three bases of a codon are defined."""
    return codon.length == CODON_LENGTH


def find_first_codon(record: TranscriptRecord) -> Codon:
    """Get the codon at the low-coordinate end of the coding span.

    Args:
        record: Transcript to inspect.

    Returns:
        The codon, possibly incomplete, or EmptyCodon if the coding span
        does not start in frame.
    """
    # An untranslated exon at the edge of the exon table leaves no frame
    if not record.is_coding or record.exon_frames[0] < 0:
        return EmptyCodon()

    exon = 0
    overlap = record.coding_overlap(exon)
    frame = record.exon_frames[exon]
    if record.strand != "+":
        frame = (frame + overlap.length) % 3

    if frame != 0 or overlap.length <= 0:
        logger.debug(f"{record.name}: no in-frame first codon")
        return EmptyCodon()

    span = Span(overlap.start, overlap.start + min(overlap.length, CODON_LENGTH))
    if span.length == CODON_LENGTH:
        return SingleCodon(span, exon)

    nxt = exon + 1
    if nxt >= record.exon_count:
        return SingleCodon(span, exon)

    need = CODON_LENGTH - span.length
    rest = record.coding_overlap(nxt)
    if rest.length < need:
        return SingleCodon(span, exon)

    return SplitCodon(span, Span(rest.start, rest.start + need), exon)


def find_last_codon(record: TranscriptRecord) -> Codon:
    """Get the codon at the high-coordinate end of the coding span.

    Args:
        record: Transcript to inspect.

    Returns:
        The codon, possibly incomplete, or EmptyCodon if the coding span
        does not end in frame.
    """
    if not record.is_coding or record.exon_frames[-1] < 0:
        return EmptyCodon()

    exon = record.exon_count - 1
    overlap = record.coding_overlap(exon)
    frame = record.exon_frames[exon]
    if record.strand != "-":
        frame = (frame + overlap.length) % 3

    if frame != 0 or overlap.length <= 0:
        logger.debug(f"{record.name}: no in-frame last codon")
        return EmptyCodon()

    span = Span(max(overlap.start, overlap.end - CODON_LENGTH), overlap.end)
    if span.length == CODON_LENGTH:
        return SingleCodon(span, exon)

    prev = exon - 1
    if prev < 0:
        return SingleCodon(span, exon)

    need = CODON_LENGTH - span.length
    rest = record.coding_overlap(prev)
    if rest.length < need:
        return SingleCodon(span, exon)

    return SplitCodon(span, Span(rest.end - need, rest.end), exon)
