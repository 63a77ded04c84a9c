#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Tests for read loading and FASTA I/O.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from readweaver.errors import InvalidInputError
from readweaver.io_utils import (
    ReadStore,
    format_fasta,
    load_reads,
    read_fasta,
    write_fasta,
)


class TestLoadReads:
    """Test normalization of the accepted read inputs."""

    def test_plain_text_newlines_and_commas(self):
        reads = load_reads("acgt, ttga\n\nccc")

        assert reads.ids == ["read0", "read1", "read2"]
        assert list(reads.values()) == ["ACGT", "TTGA", "CCC"]

    def test_comment_lines_ignored(self):
        reads = load_reads("; sample reads\nACGT\n;another\nGGA")

        assert dict(reads) == {"read0": "ACGT", "read1": "GGA"}

    def test_fasta_text_keeps_header_ids(self, simple_fasta):
        reads = load_reads(simple_fasta)

        assert reads.ids == ["r1", "r2", "r3"]
        assert reads["r1"] == "ACTGAC"
        assert reads["r2"] == "TGACGT"

    def test_fasta_duplicate_ids_renamed(self):
        reads = load_reads(">x\nAC\n>x\nGT\n")

        assert reads.ids == ["x", "x_2"]

    def test_list_input(self):
        reads = load_reads(["ac gt", "GGA"])

        assert dict(reads) == {"read0": "ACGT", "read1": "GGA"}

    def test_mapping_input(self):
        reads = load_reads({"a": "acg", "b": "T"})

        assert reads.ids == ["a", "b"]
        assert reads["a"] == "ACG"

    def test_read_store_passthrough(self, olc_store):
        assert load_reads(olc_store) is olc_store

    def test_empty_text(self):
        assert len(load_reads("")) == 0

    def test_invalid_type(self):
        with pytest.raises(InvalidInputError):
            load_reads(42)

    def test_non_string_element(self):
        with pytest.raises(InvalidInputError, match="Read 1"):
            load_reads(["ACGT", 5])


class TestReadStore:
    """Test the ordered read collection."""

    def test_pair_key_uses_load_order(self, olc_store):
        assert olc_store.pair_key("read2", "read0") == ("read0", "read2")
        assert olc_store.pair_key("read0", "read2") == ("read0", "read2")

    def test_rank_and_length(self, olc_store):
        assert olc_store.rank("read1") == 1
        assert olc_store.total_length() == 18

    def test_store_is_read_only(self, olc_store):
        with pytest.raises(TypeError):
            olc_store["read9"] = "ACGT"

    def test_empty_store(self):
        assert len(ReadStore()) == 0


class TestFastaIO:
    """Test FASTA file reading and writing."""

    def test_format_fasta_wraps(self):
        assert format_fasta([("s", "ACGTACGT")], line_width=4) == ">s\nACGT\nACGT\n"

    def test_format_fasta_no_wrap(self):
        assert format_fasta([("s", "ACGTACGT")], line_width=0) == ">s\nACGTACGT\n"

    def test_write_then_read(self, temp_output_dir):
        path = temp_output_dir / "out" / "assemblies.fasta"
        count = write_fasta([("assembly_0", "ACGT" * 30), ("assembly_1", "TTGA")], path)

        reads = read_fasta(path)

        assert count == 2
        assert reads["assembly_0"] == "ACGT" * 30
        assert reads["assembly_1"] == "TTGA"

    def test_read_plain_text_file(self, temp_output_dir):
        path = temp_output_dir / "reads.txt"
        path.write_text("ACTGAC\nTGACGT\n")

        reads = read_fasta(path)

        assert reads.ids == ["read0", "read1"]

    def test_read_gzipped(self, temp_output_dir):
        path = temp_output_dir / "reads.fasta.gz"
        write_fasta([("r1", "ACGT")], path)

        assert dict(read_fasta(path)) == {"r1": "ACGT"}

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            read_fasta(temp_output_dir / "missing.fasta")

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
