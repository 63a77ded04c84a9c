#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Tests for pairwise overlap detection.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import itertools

import pytest

from readweaver.assembly_core.overlap_module import (
    OverlapDetector,
    detect_overlaps,
    minhash_sketch,
    needleman_wunsch,
    overlap_kmer,
    overlap_minhash,
    overlap_nw,
    overlap_sw,
    smith_waterman,
)
from readweaver.config.methods import KmerOverlapParams, SmithWatermanParams
from readweaver.errors import ConfigValidationError, UnknownMethodError
from readweaver.io_utils import load_reads


class TestKmerOverlap:
    """Test exact shared k-mer overlaps."""

    def test_shared_kmers_scored_k(self, olc_store):
        overlaps = overlap_kmer(olc_store, k=3)

        assert overlaps == {
            ("read0", "read1"): 3,
            ("read0", "read2"): 3,
            ("read1", "read2"): 3,
        }

    def test_no_reversed_duplicate_keys(self, olc_store):
        overlaps = overlap_kmer(olc_store, k=3)

        for read_a, read_b in overlaps:
            assert (read_b, read_a) not in overlaps

    def test_score_bounded_by_read_length(self):
        reads = load_reads(["ACGTACGTAC", "CGTAC", "GTACG", "TTTTT"])
        overlaps = overlap_kmer(reads, k=4)

        for (read_a, read_b), score in overlaps.items():
            assert score <= min(len(reads[read_a]), len(reads[read_b]))

    def test_k_longer_than_reads(self, olc_store):
        assert overlap_kmer(olc_store, k=10) == {}

    def test_repeat_within_one_read_ignored(self):
        reads = load_reads(["ACGACG", "TTTTTT"])

        assert overlap_kmer(reads, k=3) == {}


class TestMinhashOverlap:
    """Test MinHash similarity."""

    def test_identical_reads(self):
        reads = load_reads(["ACGTACGTAC", "ACGTACGTAC"])

        assert overlap_minhash(reads, num_hashes=20) == {("read0", "read1"): 1.0}

    def test_disjoint_reads_dropped(self):
        reads = load_reads(["AAAAAAAA", "CCCCCCCC"])

        assert overlap_minhash(reads, num_hashes=20) == {}

    def test_short_reads_have_no_sketch(self):
        assert minhash_sketch("ACGT", 10) is None

    def test_sketch_size(self):
        assert len(minhash_sketch("ACGTACGT", 7)) == 7

    def test_similarity_range(self, olc_store):
        for score in overlap_minhash(olc_store, num_hashes=50).values():
            assert 0.1 < score <= 1.0


class TestSmithWaterman:
    """Test local alignment."""

    def test_full_self_match(self):
        score, length = smith_waterman("ACTG", "ACTG", match=2, mismatch=-1, gap=-1)

        assert score == 8
        assert length == 4

    def test_local_region(self):
        _, length = smith_waterman("TTTTACGTAC", "ACGTACGGGG")

        assert length == 6

    def test_no_similarity(self):
        assert smith_waterman("AAAA", "CCCC") == (0, 0)

    def test_empty_sequence(self):
        assert smith_waterman("", "ACGT") == (0, 0)

    def test_backtrace_prefers_diagonal_then_up(self):
        # Equal-score moves exist here; only diagonal-first gives length 3
        assert smith_waterman("CAAACA", "CACA")[1] == 3

    def test_overlap_sw_reports_length(self):
        reads = load_reads(["ACTG", "ACTG"])

        assert overlap_sw(reads) == {("read0", "read1"): 4}

    def test_min_length_filter(self):
        reads = load_reads(["ACTG", "ACTG"])

        assert overlap_sw(reads, min_length=5) == {}


class TestNeedlemanWunsch:
    """Test global alignment."""

    def test_identical(self):
        assert needleman_wunsch("ACGT", "ACGT") == 4

    def test_gap_only(self):
        assert needleman_wunsch("AC", "") == -2

    def test_non_positive_dropped(self):
        reads = load_reads(["AAAA", "CCCC", "AAAA"])
        overlaps = overlap_nw(reads)

        assert overlaps == {("read0", "read2"): 4}


class TestOverlapDetector:
    """Test method dispatch."""

    def test_detect_from_text(self):
        detector = OverlapDetector(KmerOverlapParams(k=3))

        assert detector.detect("ACTGAC\nTGACGT") == {("read0", "read1"): 3}

    @pytest.mark.parametrize("method", ["kmer", "minhash", "sw", "nw"])
    def test_keys_are_read_pairs(self, olc_store, method):
        overlaps = detect_overlaps(olc_store, method)
        pairs = set(itertools.combinations(olc_store.ids, 2))

        assert set(overlaps) <= pairs
        assert all(score >= 0 for score in overlaps.values())

    def test_unknown_method(self, olc_store):
        with pytest.raises(UnknownMethodError) as excinfo:
            detect_overlaps(olc_store, "blast")

        assert excinfo.value.method == "blast"
        assert "blast" in str(excinfo.value)

    def test_unknown_parameter(self, olc_store):
        with pytest.raises(ConfigValidationError):
            detect_overlaps(olc_store, "kmer", size=3)

    def test_params_select_method(self):
        assert OverlapDetector(SmithWatermanParams()).method == "sw"

    def test_wrong_params_type(self):
        with pytest.raises(UnknownMethodError):
            OverlapDetector(object())

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
