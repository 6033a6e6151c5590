"""Tests for bedanno_crispr.core modules."""

import dataclasses
import logging

import pytest
from bedanno_crispr.config import ConfigurationError
from bedanno_crispr.core.models import (
    BED_STOP_EXCLUSIVE,
    NamedAnnotations,
)
from bedanno_crispr.core.remap import (
    OLD_CONTIG_TAG,
    IntervalMappingTable,
    MappingInterval,
)

from conftest import make_off_target


class TestGenomicSite:
    """Test GenomicSite overlap and relocation."""

    def test_bed_intervals_are_half_open(self):
        """The BED stop coordinate is exclusive."""
        assert BED_STOP_EXCLUSIVE is True

    def test_overlap_at_start_is_included(self):
        """Test a site exactly at an interval start overlaps it."""
        site = make_off_target("chr1", 100).target
        assert site.overlaps("chr1", 100, 200)

    def test_overlap_at_stop_is_excluded(self):
        """Test a site exactly at an interval stop does not overlap it."""
        site = make_off_target("chr1", 200).target
        assert not site.overlaps("chr1", 100, 200)

    def test_overlap_just_before_stop(self):
        """Test the last base of the interval overlaps."""
        site = make_off_target("chr1", 199).target
        assert site.overlaps("chr1", 100, 200)

    def test_overlap_requires_same_contig(self):
        """Test intervals on another contig never overlap."""
        site = make_off_target("chr1", 150).target
        assert not site.overlaps("chr2", 100, 200)

    def test_relocated_returns_new_site(self):
        """Test relocation keeps bases, strand and context."""
        site = make_off_target("scaffold_1", 10, forward_strand=False).target
        moved = site.relocated("chr5", 5000)

        assert moved is not site
        assert moved.contig == "chr5"
        assert moved.position == 5000
        assert moved.bases == site.bases
        assert moved.forward_strand is False
        assert moved.sequence_context == site.sequence_context
        assert site.contig == "scaffold_1"

    def test_site_is_immutable(self):
        """Test sites cannot be changed in place."""
        site = make_off_target().target
        with pytest.raises(dataclasses.FrozenInstanceError):
            site.position = 10

    def test_strand_symbol(self):
        """Test strand symbols."""
        assert make_off_target(forward_strand=True).target.strand == '+'
        assert make_off_target(forward_strand=False).target.strand == '-'


class TestNamedAnnotations:
    """Test the ordered annotation multimap."""

    def test_add_creates_key(self):
        """Test first add creates the key."""
        annotations = NamedAnnotations()
        annotations.add("exons", "exon1")
        assert "exons" in annotations
        assert annotations["exons"] == ["exon1"]

    def test_add_appends(self):
        """Test values accumulate rather than overwrite."""
        annotations = NamedAnnotations()
        annotations.add("exons", "exon1")
        annotations.add("exons", "exon2")
        assert annotations.get("exons") == ["exon1", "exon2"]

    def test_missing_key(self):
        """Test missing keys return empty lists from get()."""
        annotations = NamedAnnotations()
        assert annotations.get("exons") == []
        assert "exons" not in annotations
        with pytest.raises(KeyError):
            annotations["exons"]

    def test_key_order(self):
        """Test keys keep first-insertion order."""
        annotations = NamedAnnotations()
        annotations.add("b", "1")
        annotations.add("a", "2")
        annotations.add("b", "3")
        assert annotations.keys() == ["b", "a"]
        assert list(annotations) == ["b", "a"]
        assert len(annotations) == 2

    def test_returned_values_are_copies(self):
        """Test callers cannot mutate stored values through get()."""
        annotations = NamedAnnotations()
        annotations.add("a", "1")
        annotations.get("a").append("2")
        annotations["a"].append("3")
        assert annotations.to_dict() == {"a": ["1"]}

    def test_records_do_not_share_annotations(self):
        """Test each record gets its own annotation map."""
        first = make_off_target()
        second = make_off_target()
        first.annotate("exons", "exon1")
        assert "exons" not in second.annotations


class TestIntervalMappingTable:
    """Test building the mapping table and remapping records."""

    def test_from_file(self, write_lines):
        """Test parsing a four column interval file."""
        path = write_lines("remap.txt", [
            "chrX\t1000\t5000\tscaffold_7",
            "chr2\t0\t300\tscaffold_8",
        ])
        table = IntervalMappingTable.from_file(path)

        assert len(table) == 2
        assert "scaffold_7" in table
        assert table.get("scaffold_7") == MappingInterval("chrX", 1000, 5000, "scaffold_7")

    def test_blank_lines_are_skipped(self, write_lines):
        """Test blank lines in the interval file are ignored."""
        path = write_lines("remap.txt", ["chrX\t1000\t5000\tscaffold_7", ""])
        assert len(IntervalMappingTable.from_file(path)) == 1

    def test_wrong_field_count_raises(self, write_lines):
        """Test a line without four fields is fatal."""
        path = write_lines("remap.txt", ["chrX\t1000\t5000"])
        with pytest.raises(ConfigurationError, match="four part interval"):
            IntervalMappingTable.from_file(path)

    def test_extra_field_raises(self, write_lines):
        """Test a line with five fields is fatal."""
        path = write_lines("remap.txt", ["chrX\t1000\t5000\tscaffold_7\textra"])
        with pytest.raises(ConfigurationError):
            IntervalMappingTable.from_file(path)

    def test_space_delimited_raises(self, write_lines):
        """Test the interval file must be tab-delimited."""
        path = write_lines("remap.txt", ["chrX 1000 5000 scaffold_7"])
        with pytest.raises(ConfigurationError):
            IntervalMappingTable.from_file(path)

    def test_non_integer_offset_raises(self, write_lines):
        """Test a non-integer offset is fatal."""
        path = write_lines("remap.txt", ["chrX\tabc\t5000\tscaffold_7"])
        with pytest.raises(ConfigurationError, match="line 1"):
            IntervalMappingTable.from_file(path)

    def test_duplicate_contig_last_wins(self, write_lines, caplog):
        """Test a repeated new contig id keeps the last mapping and warns."""
        path = write_lines("remap.txt", [
            "chrX\t1000\t5000\tscaffold_7",
            "chrY\t2000\t6000\tscaffold_7",
        ])
        with caplog.at_level(logging.WARNING):
            table = IntervalMappingTable.from_file(path)

        assert len(table) == 1
        assert table.get("scaffold_7").original_contig == "chrY"
        assert "mapped more than once" in caplog.text

    def test_remap_record(self):
        """Test a record is moved to the original contig and offset."""
        table = IntervalMappingTable({
            "scaffold_7": MappingInterval("chrX", 1000, 5000, "scaffold_7"),
        })
        record = make_off_target("scaffold_7", 42)

        assert table.remap(record)

        assert record.target.contig == "chrX"
        assert record.target.position == 1041
        assert record.annotations[OLD_CONTIG_TAG] == ["scaffold_7"]

    def test_remap_keeps_site_details(self):
        """Test strand, bases and context survive remapping."""
        table = IntervalMappingTable({
            "scaffold_7": MappingInterval("chrX", 1000, 5000, "scaffold_7"),
        })
        record = make_off_target("scaffold_7", 42, forward_strand=False)
        original = record.target

        table.remap(record)

        assert record.target is not original
        assert record.target.forward_strand is False
        assert record.target.bases == original.bases
        assert record.target.sequence_context == original.sequence_context

    def test_unmapped_contig_passes_through(self):
        """Test records on contigs missing from the table are unchanged."""
        table = IntervalMappingTable({
            "scaffold_7": MappingInterval("chrX", 1000, 5000, "scaffold_7"),
        })
        record = make_off_target("chr1", 42)
        original = record.target

        assert not table.remap(record)

        assert record.target is original
        assert record.target == make_off_target("chr1", 42).target
        assert len(record.annotations) == 0

    def test_remap_all_counts_moved_records(self):
        """Test remap_all remaps each record once."""
        table = IntervalMappingTable({
            "scaffold_7": MappingInterval("chrX", 1000, 5000, "scaffold_7"),
            "scaffold_8": MappingInterval("chr2", 0, 300, "scaffold_8"),
        })
        records = [
            make_off_target("scaffold_7", 1),
            make_off_target("scaffold_8", 11),
            make_off_target("chr3", 5),
        ]

        assert table.remap_all(records) == 2
        assert [(r.target.contig, r.target.position) for r in records] == [
            ("chrX", 1000), ("chr2", 10), ("chr3", 5),
        ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
