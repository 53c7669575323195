"""Exceptions raised by bed2gff.

Two families exist:

- ``BedFormatError``: a single input line could not be parsed. The reader
  logs it and moves on to the next line.
- ``FatalConversionError``: the input is inconsistent in a way that makes
  the whole output untrustworthy. The run is aborted.
"""


class Bed2GffError(Exception):
    """Base class for all bed2gff errors."""

    pass


class BedFormatError(Bed2GffError, ValueError):
    """Raised when a BED line cannot be parsed into a transcript record."""

    pass


class FatalConversionError(Bed2GffError):
    """Raised when a conversion run must be aborted."""

    pass


class CoordinateError(FatalConversionError):
    """Raised when a position cannot be moved along the exons of a transcript."""

    def __init__(self, pos: int, dist: int, reason: str) -> None:
        self.pos = pos
        self.dist = dist
        super().__init__(f"Cannot move position {pos} by {dist}: {reason}")


class UnmappedIsoformError(FatalConversionError):
    """Raised when a transcript name is missing from the isoform table."""

    def __init__(self, isoform: str) -> None:
        self.isoform = isoform
        super().__init__(f"Isoform {isoform} not found in isoforms file")


class StrandError(FatalConversionError):
    """Raised for a strand other than '+' or '-'."""

    def __init__(self, strand: str, name: str | None = None) -> None:
        self.strand = strand
        where = f" in transcript {name}" if name else ""
        super().__init__(f"Invalid strand '{strand}'{where}")


class FeatureTypeError(FatalConversionError):
    """Raised when a line is requested for an unknown feature type."""

    def __init__(self, feature_type: str) -> None:
        self.feature_type = feature_type
        super().__init__(f"Unknown feature type {feature_type}")
