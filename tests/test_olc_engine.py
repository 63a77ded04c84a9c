#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Tests for the overlap-layout-consensus assembly engine.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest

from readweaver import run_olc
from readweaver.assembly_core.olc_engine_module import AssemblyEngine
from readweaver.config.methods import (
    GreedyLayoutParams,
    KmerOverlapParams,
    NoConsensusParams,
    OLCConfig,
    SuperstringLayoutParams,
    consensus_params,
    overlap_params,
)
from readweaver.errors import InvalidInputError

SCENARIO_PRIMARY = "ACTGACCGTTGA"
SCENARIO_ALTERNATE = "ACGTGACGTGAC"


@pytest.fixture
def kmer3_config():
    return OLCConfig(overlap=KmerOverlapParams(k=3))


class TestPrimaryAssembly:
    """Test the primary OLC assembly."""

    def test_scenario_primary(self, olc_reads, kmer3_config):
        result = run_olc(olc_reads, kmer3_config)

        assert result.assemblies == [SCENARIO_PRIMARY]
        assert result.branches == [(0, 2)]
        assert result.method == "olc"

    def test_text_input(self, kmer3_config):
        result = run_olc("ACTGAC,TGACGT,ACGTGA", kmer3_config)

        assert result.primary == SCENARIO_PRIMARY

    def test_default_config(self, olc_reads):
        result = run_olc(olc_reads)

        # No 15-mer overlaps: reads are concatenated in load order
        assert result.primary == "".join(olc_reads)

    @pytest.mark.parametrize("method", ["kmer", "minhash", "sw", "nw"])
    def test_every_overlap_method_assembles(self, olc_reads, method):
        result = run_olc(olc_reads, OLCConfig(overlap=overlap_params(method)))

        assert result.primary

    @pytest.mark.parametrize("method", ["majority", "poa", "none"])
    def test_every_consensus_method_assembles(self, olc_reads, method):
        config = OLCConfig(overlap=KmerOverlapParams(k=3), consensus=consensus_params(method))

        assert run_olc(olc_reads, config).primary

    def test_stats_and_timings(self, olc_reads, kmer3_config):
        result = run_olc(olc_reads, kmer3_config)

        assert result.stats["reads"] == 3
        assert result.stats["overlaps"] == 3
        assert result.stats["primary_length"] == len(SCENARIO_PRIMARY)
        assert {"load", "overlap", "layout", "consensus", "total"} <= set(result.stage_timings)

    def test_repeated_runs_identical(self, olc_reads, kmer3_config):
        engine = AssemblyEngine(kmer3_config)

        first = engine.assemble(olc_reads, detect_alternates=True)
        second = engine.assemble(olc_reads, detect_alternates=True)

        assert first.assemblies == second.assemblies
        assert first.branches == second.branches


class TestEmptyResults:
    """Test inputs that legitimately produce no assembly."""

    def test_empty_list(self):
        result = run_olc([])

        assert result.assemblies == []
        assert result.branches == []

    def test_empty_text(self):
        assert run_olc("").assemblies == []

    def test_no_valid_superstring_layout(self, olc_reads):
        config = OLCConfig(overlap=KmerOverlapParams(k=3), layout=SuperstringLayoutParams(min_overlap=5))

        result = run_olc(olc_reads, config)

        assert result.assemblies == []
        assert result.primary == ""

    def test_invalid_input(self):
        with pytest.raises(InvalidInputError):
            run_olc(None)


class TestAlternates:
    """Test alternate assemblies from swapped branch pairs."""

    def test_scenario_alternate(self, olc_reads, kmer3_config):
        result = run_olc(olc_reads, kmer3_config, detect_alternates=True)

        assert result.assemblies == [SCENARIO_PRIMARY, SCENARIO_ALTERNATE]
        assert len(result.alternates) == 1
        assert result.alternates[0].label == "0,2"
        assert result.alternates[0].accepted

    def test_disabled_by_default(self, olc_reads, kmer3_config):
        result = run_olc(olc_reads, kmer3_config)

        assert result.alternates == []
        assert len(result.assemblies) == 1

    def test_config_flag(self, olc_reads):
        config = OLCConfig(overlap=KmerOverlapParams(k=3), detect_alternates=True)

        assert len(run_olc(olc_reads, config).assemblies) == 2

    def test_duplicate_alternate_dropped(self):
        config = OLCConfig(overlap=KmerOverlapParams(k=3), consensus=NoConsensusParams())

        result = run_olc(["ACGT", "ACGT", "ACGT"], config, detect_alternates=True)

        assert result.assemblies == ["ACGTTT"]
        assert result.alternates[0].status == "duplicate"

    def test_assemblies_are_distinct(self):
        reads = ["ACGTTGCA", "TTGCAGGA", "CAGGATCC", "GATCCACG", "CCACGTTG"]
        config = OLCConfig(overlap=KmerOverlapParams(k=3), layout=GreedyLayoutParams(overlap_threshold=1))

        result = run_olc(reads, config, detect_alternates=True)

        assert len(result.assemblies) == len(set(result.assemblies))
        assert all(result.assemblies)

    def test_failure_is_isolated(self, olc_reads, kmer3_config, monkeypatch):
        engine = AssemblyEngine(kmer3_config)
        original = engine.consensus_builder.build
        calls = []

        def flaky_build(reads, overlaps, order):
            calls.append(order)
            if len(calls) > 1:
                raise RuntimeError("consensus exploded")
            return original(reads, overlaps, order)

        monkeypatch.setattr(engine.consensus_builder, "build", flaky_build)

        result = engine.assemble(olc_reads, detect_alternates=True)

        assert result.assemblies == [SCENARIO_PRIMARY]
        assert result.alternates[0].status == "skipped"
        assert "consensus exploded" in result.alternates[0].reason
        assert result.skipped_alternates == result.alternates

    def test_to_dict(self, olc_reads, kmer3_config):
        data = run_olc(olc_reads, kmer3_config, detect_alternates=True).to_dict()

        assert data["method"] == "olc"
        assert data["branches"] == [[0, 2]]
        assert data["alternates"][0]["status"] == "accepted"
        assert data["alternates"][0]["length"] == len(SCENARIO_ALTERNATE)
