#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Tests for read layout strategies and branch detection.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging

import pytest

from readweaver.assembly_core.layout_module import (
    LayoutBuilder,
    build_layout,
    find_branches,
    layout_greedy,
    layout_superstring,
    merged_length,
)
from readweaver.assembly_core.overlap_module import overlap_kmer
from readweaver.config.methods import GreedyLayoutParams, SuperstringLayoutParams
from readweaver.errors import UnknownMethodError
from readweaver.io_utils import load_reads


@pytest.fixture
def four_reads():
    return load_reads({"r0": "AAAA", "r1": "CCCC", "r2": "GGGG", "r3": "TTTT"})


@pytest.fixture
def three_reads():
    return load_reads({"r0": "AAAA", "r1": "CCCC", "r2": "GGGG"})


class TestGreedyLayout:
    """Test greedy chain extension."""

    def test_follows_best_overlaps(self, four_reads):
        overlaps = {("r0", "r2"): 20, ("r2", "r3"): 15, ("r0", "r1"): 5}

        order = layout_greedy(four_reads, overlaps, overlap_threshold=10)

        assert order == ["r0", "r2", "r3", "r1"]

    def test_threshold_is_exclusive(self, three_reads):
        overlaps = {("r0", "r2"): 10}

        assert layout_greedy(three_reads, overlaps, overlap_threshold=10) == ["r0", "r1", "r2"]

    def test_sparse_overlaps_still_permutation(self, four_reads):
        order = layout_greedy(four_reads, {}, overlap_threshold=0)

        assert sorted(order) == sorted(four_reads.ids)
        assert len(order) == len(set(order))

    def test_reversed_key_lookup(self, three_reads):
        overlaps = {("r2", "r0"): 20}

        assert layout_greedy(three_reads, overlaps, overlap_threshold=1)[1] == "r2"

    def test_empty(self):
        assert layout_greedy(load_reads([]), {}) == []


class TestSuperstringLayout:
    """Test exhaustive shortest-superstring ordering."""

    def test_shortest_merge_wins(self, three_reads):
        overlaps = {("r0", "r1"): 1, ("r1", "r2"): 3, ("r0", "r2"): 2}

        order = layout_superstring(three_reads, overlaps, min_overlap=1)

        assert order == ["r0", "r2", "r1"]
        assert merged_length(three_reads, overlaps, order) == 7

    def test_no_valid_ordering(self, olc_store):
        overlaps = overlap_kmer(olc_store, k=3)

        assert layout_superstring(olc_store, overlaps, min_overlap=5) == []

    def test_all_orderings_valid_keeps_first(self, olc_store):
        overlaps = overlap_kmer(olc_store, k=3)

        assert layout_superstring(olc_store, overlaps, min_overlap=3) == ["read0", "read1", "read2"]

    def test_size_cutoff(self, caplog):
        reads = load_reads(["ACGT"] * 9)

        with caplog.at_level(logging.WARNING):
            order = layout_superstring(reads, {}, min_overlap=0, max_reads=8)

        assert order == []
        assert "exceeds the cutoff" in caplog.text


class TestBranches:
    """Test detection of overlaps unused by the layout."""

    def test_non_adjacent_overlap_is_branch(self):
        overlaps = {("r0", "r2"): 20, ("r2", "r3"): 15, ("r0", "r1"): 5}

        branches = find_branches(overlaps, ["r0", "r2", "r3", "r1"])

        assert branches == [(0, 3)]

    def test_adjacent_either_direction_not_branch(self):
        assert find_branches({("r1", "r0"): 4}, ["r0", "r1"]) == []

    def test_zero_scores_ignored(self):
        assert find_branches({("r0", "r2"): 0}, ["r0", "r1", "r2"]) == []

    def test_reads_outside_order_ignored(self):
        assert find_branches({("r0", "r9"): 5}, ["r0", "r1"]) == []


class TestLayoutBuilder:
    """Test the configured layout builder."""

    def test_build_greedy(self, olc_store):
        overlaps = overlap_kmer(olc_store, k=3)

        layout = LayoutBuilder(GreedyLayoutParams(overlap_threshold=2)).build(olc_store, overlaps)

        assert layout.order == ["read0", "read1", "read2"]
        assert layout.branches == [(0, 2)]

    def test_build_superstring_empty(self, olc_store):
        overlaps = overlap_kmer(olc_store, k=3)

        layout = LayoutBuilder(SuperstringLayoutParams()).build(olc_store, overlaps)

        assert layout.is_empty
        assert layout.branches == []

    def test_build_by_name(self, olc_store):
        layout = build_layout(olc_store, {}, "greedy", overlap_threshold=1)

        assert len(layout) == 3

    def test_unknown_method(self, olc_store):
        with pytest.raises(UnknownMethodError, match="tsp"):
            build_layout(olc_store, {}, "tsp")

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
