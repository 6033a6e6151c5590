"""Shared fixtures for BEDANNO tests."""

import pytest

from bedanno_crispr.core.models import GenomicSite, OffTargetRecord


GUIDE_BASES = "ACGTACGTACGTACGTACGTCGG"
GUIDE_CONTEXT = "ACGTACGTTTACGTACGTACGTACGTACGTCGGACGTACGTTT"


def make_off_target(contig="test", position=0, forward_strand=True):
    """Create a fake off-target record for testing."""
    site = GenomicSite(
        contig=contig,
        bases=GUIDE_BASES,
        forward_strand=forward_strand,
        position=position,
        sequence_context=GUIDE_CONTEXT,
    )
    return OffTargetRecord(target=site)


@pytest.fixture
def write_lines(tmp_path):
    """Write lines to a file under tmp_path and return its path."""
    def _write(filename, lines):
        path = tmp_path / filename
        path.write_text(''.join(f"{line}\n" for line in lines))
        return path
    return _write


@pytest.fixture
def exon_bed(write_lines):
    """A small BED file with two overlapping exons on chr1 and one on chr2."""
    return write_lines("exons.bed", [
        "chr1\t100\t200\texon1",
        "chr1\t150\t300\texon2",
        "chr2\t0\t50\texon3",
    ])
