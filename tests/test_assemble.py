"""Unit tests for bed2gff.core.assemble.

Tests cover:
- Full feature sets of single-exon transcripts on both strands
- Split start codons and UTRs of multi-exon transcripts
- Non-coding transcripts
- Feature ordering and exon numbering
- Gene deduplication
"""

import pytest

from bed2gff.core.assemble import GeneDeduplicator, to_gtf
from bed2gff.errors import StrandError


def assemble(record, gene="geneA", emit_gene_line=False):
    features = []
    to_gtf(record, gene, features.append, emit_gene_line)
    return features


def summary(features):
    """(type, 1-based start, end, phase) tuples."""
    return [(f.feature_type, f.start + 1, f.end, f.phase) for f in features]


class TestSingleExon:
    """Single-exon, fully coding transcripts."""

    def test_plus(self, single_exon_plus) -> None:
        """Start codon at the low end, stop codon excluded from the CDS."""
        assert summary(assemble(single_exon_plus)) == [
            ("transcript", 101, 130, "."),
            ("exon", 101, 130, "."),
            ("CDS", 101, 127, "0"),
            ("start_codon", 101, 103, "0"),
            ("stop_codon", 128, 130, "0"),
        ]

    def test_minus(self, single_exon_minus) -> None:
        """Start and stop codons swap on the minus strand."""
        assert summary(assemble(single_exon_minus)) == [
            ("transcript", 101, 130, "."),
            ("exon", 101, 130, "."),
            ("CDS", 104, 130, "0"),
            ("start_codon", 128, 130, "0"),
            ("stop_codon", 101, 103, "0"),
        ]

    def test_no_utrs(self, single_exon_plus) -> None:
        """A fully coding transcript has no UTR lines."""
        types = {f.feature_type for f in assemble(single_exon_plus)}
        assert "five_prime_utr" not in types
        assert "three_prime_utr" not in types


class TestMultiExon:
    """Transcripts with introns."""

    def test_plus_split_start(self, two_exon_plus) -> None:
        """A split start codon gives two start_codon lines."""
        assert summary(assemble(two_exon_plus)) == [
            ("transcript", 101, 220, "."),
            ("exon", 101, 110, "."),
            ("five_prime_utr", 101, 108, "."),
            ("CDS", 109, 110, "0"),
            ("exon", 201, 220, "."),
            ("CDS", 201, 213, "1"),
            ("three_prime_utr", 217, 220, "."),
            ("start_codon", 109, 110, "0"),
            ("start_codon", 201, 201, "1"),
            ("stop_codon", 214, 216, "0"),
        ]

    def test_minus_split_start(self, two_exon_minus) -> None:
        """Minus-strand split start codon and trimmed stop codon."""
        assert summary(assemble(two_exon_minus)) == [
            ("transcript", 101, 220, "."),
            ("exon", 101, 110, "."),
            ("three_prime_utr", 101, 103, "."),
            ("CDS", 107, 110, "1"),
            ("exon", 201, 220, "."),
            ("CDS", 201, 202, "0"),
            ("five_prime_utr", 203, 220, "."),
            ("start_codon", 201, 202, "0"),
            ("start_codon", 110, 110, "1"),
            ("stop_codon", 104, 106, "0"),
        ]

    def test_plus_split_stop(self, record_factory) -> None:
        """A split stop codon is written 5' part first with phase 0."""
        record = record_factory([(100, 110), (200, 230)], cds=(100, 202), strand="+")
        assert summary(assemble(record)) == [
            ("transcript", 101, 230, "."),
            ("exon", 101, 110, "."),
            ("CDS", 101, 109, "0"),
            ("exon", 201, 230, "."),
            ("three_prime_utr", 203, 230, "."),
            ("start_codon", 101, 103, "0"),
            ("stop_codon", 110, 110, "0"),
            ("stop_codon", 201, 202, "2"),
        ]

    def test_minus_split_stop(self, record_factory) -> None:
        """On the minus strand the high-coordinate part of a split stop codon comes first."""
        record = record_factory([(100, 110), (200, 230)], cds=(109, 229), strand="-")
        assert summary(assemble(record)) == [
            ("transcript", 101, 230, "."),
            ("exon", 101, 110, "."),
            ("three_prime_utr", 101, 109, "."),
            ("exon", 201, 230, "."),
            ("CDS", 203, 229, "0"),
            ("five_prime_utr", 230, 230, "."),
            ("start_codon", 227, 229, "0"),
            ("stop_codon", 201, 202, "0"),
            ("stop_codon", 110, 110, "1"),
        ]

    def test_minus_exon_numbers(self, two_exon_minus) -> None:
        """Minus-strand exon numbers follow transcription order."""
        features = assemble(two_exon_minus)
        exons = [f for f in features if f.feature_type == "exon"]
        assert [f.attributes["exon_number"] for f in exons] == ["2", "1"]

        start = [f for f in features if f.feature_type == "start_codon"]
        assert {f.attributes["exon_number"] for f in start} == {"1"}
        stop = [f for f in features if f.feature_type == "stop_codon"]
        assert stop[0].attributes["exon_number"] == "2"

    @pytest.mark.parametrize("strand", ["+", "-"])
    def test_ordinals_increase_5_to_3(self, record_factory, strand) -> None:
        """Exon numbers increase in transcription order on both strands."""
        record = record_factory(
            [(100, 110), (200, 210), (300, 330)], cds=(105, 320), strand=strand
        )
        exons = [f for f in assemble(record) if f.feature_type == "exon"]
        ordered = sorted(exons, key=lambda f: f.start, reverse=(strand == "-"))
        numbers = [int(f.attributes["exon_number"]) for f in ordered]
        assert numbers == [1, 2, 3]

    def test_transcript_first(self, two_exon_plus) -> None:
        """The transcript line precedes its children."""
        features = assemble(two_exon_plus)
        assert features[0].feature_type == "transcript"
        assert all(f.feature_type != "transcript" for f in features[1:])


class TestNonCoding:
    """Transcripts without a CDS."""

    def test_only_transcript_and_exons(self, noncoding) -> None:
        """Non-coding transcripts have no CDS, UTR or codons."""
        assert [f.feature_type for f in assemble(noncoding)] == ["transcript", "exon", "exon"]

    def test_all_frames_negative(self, record_factory) -> None:
        """Explicit -1 frames suppress codons."""
        record = record_factory([(100, 130)], cds=(130, 130), frames=[-1])
        types = [f.feature_type for f in assemble(record)]
        assert "CDS" not in types
        assert "start_codon" not in types
        assert "stop_codon" not in types


class TestGeneLine:
    """Gene line emission."""

    def test_gene_line_first(self, single_exon_plus) -> None:
        """The gene line comes before the transcript."""
        features = assemble(single_exon_plus, emit_gene_line=True)
        assert [f.feature_type for f in features[:2]] == ["gene", "transcript"]
        assert features[0].attributes["ID"] == "geneA"

    def test_no_gene_line(self, single_exon_plus) -> None:
        """Without the flag there is no gene line."""
        assert all(f.feature_type != "gene" for f in assemble(single_exon_plus))


class TestErrors:
    """Fatal conditions."""

    def test_invalid_strand(self, record_factory) -> None:
        """Unknown strands fail before anything is emitted."""
        record = record_factory([(100, 130)], cds=(100, 130), strand=".")
        features = []
        with pytest.raises(StrandError):
            to_gtf(record, "geneA", features.append, True)
        assert features == []


class TestGeneDeduplicator:
    """Tests for GeneDeduplicator."""

    def test_claim_once(self) -> None:
        """Only the first claim succeeds."""
        seen = GeneDeduplicator()
        assert seen.claim("geneA")
        assert not seen.claim("geneA")
        assert seen.claim("geneB")
        assert len(seen) == 2
        assert "geneA" in seen
        assert "geneC" not in seen
