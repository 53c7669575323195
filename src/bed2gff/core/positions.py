"""Moving positions along the exons of a transcript.

Positions here are interval boundaries (0-based, between bases), so an exon
``[start, end)`` contains the boundary positions ``start..end`` inclusive.
Moving a position by ``n`` counts ``n`` exonic bases and jumps over introns
for free.

Example:
    >>> from bed2gff.core.positions import move_pos
    >>> # exons [100, 110) and [200, 220)
    >>> move_pos(record, 108, 5)
    203
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bed2gff.errors import CoordinateError

if TYPE_CHECKING:
    from bed2gff.core.models import TranscriptRecord


def in_exon(record: TranscriptRecord, pos: int, exon: int) -> bool:
    """Check if a position lies within an exon, boundaries included.

    Args:
        record: Transcript.
        pos: Boundary position.
        exon: Exon index in genomic order.

    Returns:
        True if ``exon_start <= pos <= exon_end``.
    """
    return record.exon_starts[exon] <= pos <= record.exon_ends[exon]


def find_exon(record: TranscriptRecord, pos: int) -> int | None:
    """Get the index of the first exon containing a position."""
    for exon in range(record.exon_count):
        if in_exon(record, pos, exon):
            return exon
    return None


def move_pos(record: TranscriptRecord, pos: int, dist: int) -> int:
    """Move a position by a number of exonic bases.

    A positive distance moves towards higher coordinates, a negative one
    towards lower coordinates. Stepping out of an exon lands on the edge of
    the neighbouring exon without using up a base.

    Args:
        record: Transcript whose exons define the walk.
        pos: Starting boundary position.
        dist: Signed number of bases to move.

    Returns:
        The moved position.

    Raises:
        CoordinateError: If ``pos`` is outside the transcript or its exons,
            or the exons run out before ``dist`` bases were walked.
    """
    if not record.tx_start <= pos <= record.tx_end:
        raise CoordinateError(
            pos, dist, f"outside transcript {record.name} [{record.tx_start}, {record.tx_end}]"
        )

    exon = find_exon(record, pos)
    if exon is None:
        raise CoordinateError(pos, dist, f"not in an exon of {record.name}")

    start = pos
    steps = abs(dist)
    direction = 1 if dist >= 0 else -1

    while 0 <= exon < record.exon_count and steps > 0:
        if in_exon(record, pos + direction, exon):
            pos += direction
            steps -= 1
        elif direction > 0:
            exon += 1
            if exon < record.exon_count:
                pos = record.exon_starts[exon]
        else:
            exon -= 1
            if exon >= 0:
                pos = record.exon_ends[exon]

    if steps > 0:
        raise CoordinateError(
            start, dist, f"only {abs(dist) - steps} exonic bases available in {record.name}"
        )

    return pos
