#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Tests for sequence utility functions and the count table.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from readweaver.utils import (
    CountTable,
    extract_kmers,
    iter_kmers,
    normalize_sequence,
    seeded_hash,
)


class TestNormalizeSequence:
    """Test raw sequence normalization."""

    def test_uppercase_and_whitespace(self):
        assert normalize_sequence(" acg t\n") == "ACGT"

    def test_non_nucleotide_characters_kept(self):
        assert normalize_sequence("acnx") == "ACNX"


class TestKmers:
    """Test k-mer extraction."""

    def test_extract_kmers_basic(self):
        """Test basic k-mer extraction."""
        kmers = extract_kmers("ATCGATCG", 3)

        assert kmers == ['ATC', 'TCG', 'CGA', 'GAT', 'ATC', 'TCG']

    def test_extract_kmers_too_short(self):
        """Sequences shorter than k give no k-mers."""
        assert extract_kmers("AC", 3) == []

    def test_iter_kmers_positions(self):
        assert list(iter_kmers("ACGT", 2)) == [(0, "AC"), (1, "CG"), (2, "GT")]

    def test_iter_kmers_invalid_k(self):
        assert list(iter_kmers("ACGT", 0)) == []


class TestSeededHash:
    """Test deterministic seeded hashing."""

    def test_deterministic(self):
        assert seeded_hash("ACGTA", 3) == seeded_hash("ACGTA", 3)

    def test_seed_changes_value(self):
        assert seeded_hash("ACGTA", 0) != seeded_hash("ACGTA", 1)

    def test_non_negative(self):
        assert all(seeded_hash(kmer, seed) >= 0 for kmer in ("A", "CG", "TTT") for seed in range(5))


class TestCountTable:
    """Test the default-zero frequency table."""

    def test_absent_key_is_zero(self):
        table = CountTable()

        assert table.get("missing") == 0
        assert table["missing"] == 0

    def test_increment(self):
        table = CountTable()
        table.increment("AC")
        table.increment("AC", 2)

        assert table.get("AC") == 3

    def test_decrement_floors_at_zero(self):
        table = CountTable({"AC": 1})
        table.decrement("AC")
        table.decrement("AC")

        assert table.get("AC") == 0

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
