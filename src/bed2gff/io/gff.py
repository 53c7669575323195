"""GFF3 output.

This module provides the feature line model and the writer for the GFF3
files produced by bed2gff.

Features:
    - GffFeature records with 0-based half-open coordinates
    - Attribute formatting with GFF3 escaping
    - Provenance preamble (provider, version, contact, date)
    - Transparent gzip output for paths ending in ``.gz``

Example:
    >>> from bed2gff.io.gff import GFF3Writer
    >>> with GFF3Writer("output.gff3") as writer:
    ...     writer.write_header(provider="bed2gff", version="0.1.0", contact="me")
    ...     writer.write_features(features)
"""

from __future__ import annotations

import gzip
import logging
from datetime import date as Date
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Iterable

import attrs

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

GFF3_VERSION_LINE = "##gff-version 3"

# Feature types
FEATURE_GENE = "gene"
FEATURE_TRANSCRIPT = "transcript"
FEATURE_EXON = "exon"
FEATURE_CDS = "CDS"
FEATURE_UTR5 = "five_prime_utr"
FEATURE_UTR3 = "three_prime_utr"
FEATURE_START_CODON = "start_codon"
FEATURE_STOP_CODON = "stop_codon"


# =============================================================================
# Data Models
# =============================================================================


@attrs.frozen
class GffFeature:
    """One GFF3 feature line.

    Attributes:
        seqid: Scaffold/chromosome name.
        source: Source column value.
        feature_type: Feature type.
        start: Start position (0-based, inclusive).
        end: End position (0-based, exclusive).
        strand: Strand.
        phase: Encoded phase ('0', '1', '2' or '.').
        attributes: Ordered attribute key/value pairs.
    """

    seqid: str
    source: str
    feature_type: str
    start: int
    end: int
    strand: str
    phase: str = "."
    attributes: dict[str, str] = attrs.Factory(dict)

    def to_line(self) -> str:
        """Format as a GFF3 line without the trailing newline."""
        return format_gff_line(
            self.seqid,
            self.source,
            self.feature_type,
            self.start,
            self.end,
            strand=self.strand,
            phase=self.phase,
            attributes=self.attributes,
        )


# =============================================================================
# Formatting
# =============================================================================


def format_attributes(attributes: dict[str, Any]) -> str:
    """Format attribute dictionary as GFF3 string.

    Args:
        attributes: Dictionary of attributes.

    Returns:
        Semicolon-separated key=value string.
    """
    if not attributes:
        return "."

    parts = []
    for key, value in attributes.items():
        # URL encode special characters
        value = str(value).replace("%", "%25").replace(";", "%3B").replace("=", "%3D")
        value = value.replace("&", "%26").replace(",", "%2C")
        parts.append(f"{key}={value}")

    return ";".join(parts)


def format_gff_line(
    seqid: str,
    source: str,
    feature_type: str,
    start: int,
    end: int,
    score: float | None = None,
    strand: str = ".",
    phase: str = ".",
    attributes: dict[str, Any] | None = None,
) -> str:
    """Format a single GFF3 line.

    Args:
        seqid: Sequence identifier.
        source: Source of the annotation.
        feature_type: Type of feature.
        start: Start position (0-based).
        end: End position (0-based, exclusive).
        score: Feature score.
        strand: Strand.
        phase: Encoded CDS phase.
        attributes: Feature attributes.

    Returns:
        Formatted GFF3 line.
    """
    # Convert to 1-based for GFF3
    gff_start = start + 1
    gff_end = end

    score_str = "." if score is None else f"{score:.4f}"
    attr_str = format_attributes(attributes or {})

    return f"{seqid}\t{source}\t{feature_type}\t{gff_start}\t{gff_end}\t{score_str}\t{strand}\t{phase}\t{attr_str}"


def format_date(day: Date | None = None) -> str:
    """Format a date as YYYY-M-D without zero padding (UTC today by default)."""
    if day is None:
        day = datetime.now(timezone.utc).date()
    return f"{day.year}-{day.month}-{day.day}"


def open_text(path: Path | str, mode: str = "r", errors: str | None = None) -> IO[str]:
    """Open a UTF-8 text file, through gzip when the name ends in ``.gz``.

    Args:
        path: File path.
        mode: 'r' or 'w'.
        errors: Decoding error handler passed to the text layer.
    """
    path = Path(path)
    if path.suffix == ".gz":
        return gzip.open(path, mode + "t", encoding="utf-8", errors=errors)
    return open(path, mode, encoding="utf-8", errors=errors)


# =============================================================================
# GFF3 Writer
# =============================================================================


class GFF3Writer:
    """Write converted transcripts to GFF3 format.

    Example:
        >>> writer = GFF3Writer("output.gff3")
        >>> writer.write_header(provider="bed2gff", version="0.1.0", contact="me")
        >>> writer.write_features(features)
        >>> writer.close()
    """

    def __init__(
        self,
        output_path: Path | str,
        source: str = "bed2gff",
    ) -> None:
        """Initialize the writer.

        Args:
            output_path: Output file path (gzip compressed if it ends in .gz).
            source: Source field value for GFF3.
        """
        self.path = Path(output_path)
        self.source = source
        self._file: IO[str] | None = open_text(self.path, "w")
        self._header_written = False
        self.n_features = 0

    def __enter__(self) -> GFF3Writer:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the output file."""
        if self._file:
            self._file.close()
            self._file = None

    def write_header(
        self,
        provider: str,
        version: str,
        contact: str,
        day: Date | None = None,
    ) -> None:
        """Write the GFF3 preamble with provenance.

        Args:
            provider: Name of the converting tool.
            version: Version of the converting tool.
            contact: Where to report issues.
            day: Date stamp (UTC today if None).
        """
        self._file.write(f"{GFF3_VERSION_LINE}\n")
        self._file.write(f"#provider: {provider}\n")
        self._file.write(f"#version: {version}\n")
        self._file.write(f"#contact: {contact}\n")
        self._file.write(f"#date: {format_date(day)}\n")
        self._header_written = True

    def write_feature(self, feature: GffFeature) -> None:
        """Write a single feature line."""
        if not self._header_written:
            logger.warning(f"Writing features to {self.path} before the GFF3 header")
            self._header_written = True
        self._file.write(feature.to_line() + "\n")
        self.n_features += 1

    def write_features(self, features: Iterable[GffFeature]) -> None:
        """Write multiple feature lines.

        Args:
            features: Features in output order.
        """
        for feature in features:
            self.write_feature(feature)
