#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ReadWeaver v0.1.0

Overlap-Layout-Consensus (OLC) assembly engine.

Pipeline:
1. Load and normalize reads
2. Detect pairwise overlaps
3. Order reads into a layout and collect branch pairs
4. Build the primary consensus
5. (Optional) Swap each branch pair in a copy of the primary order and
   reassemble, keeping distinct non-empty alternates

Each branch is explored on its own; alternates are never combined.
"""

from typing import List, Optional, Set
import logging
import time

from readweaver.assembly_core.consensus_module import ConsensusBuilder
from readweaver.assembly_core.data_structures import (
    AlternateOutcome,
    AssemblyResult,
    BranchPair,
    Layout,
    Overlaps,
)
from readweaver.assembly_core.layout_module import LayoutBuilder
from readweaver.assembly_core.overlap_module import OverlapDetector
from readweaver.config.methods import OLCConfig
from readweaver.errors import AlternateAssemblyFailure
from readweaver.io_utils.read_store import ReadStore, ReadsInput, load_reads

logger = logging.getLogger(__name__)


class AssemblyEngine:
    """
    Orchestrates overlap detection, layout and consensus.

    The engine holds configuration only; every call to assemble() builds its
    own reads, overlaps and layout and shares nothing with other calls.
    """

    def __init__(self, config: Optional[OLCConfig] = None):
        """
        Initialize OLC engine.

        Args:
            config: Method selection and parameters (defaults: kmer/greedy/majority)
        """
        self.config = config if config is not None else OLCConfig()
        self.overlap_detector = OverlapDetector(self.config.overlap)
        self.layout_builder = LayoutBuilder(self.config.layout)
        self.consensus_builder = ConsensusBuilder(self.config.consensus)

    def assemble(self, reads_input: ReadsInput, detect_alternates: Optional[bool] = None) -> AssemblyResult:
        """
        Assemble reads into a primary sequence and optional alternates.

        Args:
            reads_input: Reads in any form accepted by load_reads()
            detect_alternates: Override the configured alternate exploration

        Returns:
            AssemblyResult; assemblies is empty when there are no reads or
            no valid layout
        """
        if detect_alternates is None:
            detect_alternates = self.config.detect_alternates

        timings = {}
        start = time.perf_counter()
        reads = load_reads(reads_input)
        timings['load'] = time.perf_counter() - start

        logger.info(
            f"OLC assembly of {len(reads)} reads "
            f"(overlap={self.overlap_detector.method}, layout={self.layout_builder.method}, "
            f"consensus={self.consensus_builder.method})"
        )

        stage = time.perf_counter()
        overlaps = self.overlap_detector.detect(reads)
        timings['overlap'] = time.perf_counter() - stage

        stage = time.perf_counter()
        layout = self.layout_builder.build(reads, overlaps)
        timings['layout'] = time.perf_counter() - stage

        result = AssemblyResult(
            branches=list(layout.branches),
            stage_timings=timings,
            method='olc',
            stats={
                'reads': len(reads),
                'overlaps': len(overlaps),
                'layout_length': len(layout),
                'branches': len(layout.branches),
            },
        )

        stage = time.perf_counter()
        primary = self._assemble_order(reads, overlaps, layout.order)
        timings['consensus'] = time.perf_counter() - stage

        if not primary:
            logger.info("OLC assembly produced no sequence")
            timings['total'] = time.perf_counter() - start
            return result

        result.assemblies.append(primary)
        result.stats['primary_length'] = len(primary)

        if detect_alternates and layout.branches:
            stage = time.perf_counter()
            self._explore_alternates(reads, overlaps, layout, result)
            timings['alternates'] = time.perf_counter() - stage

        timings['total'] = time.perf_counter() - start
        logger.info(
            f"OLC assembly complete: primary {len(primary)} bp, "
            f"{len(result.assemblies) - 1} alternates, {len(result.branches)} branches"
        )
        return result

    def _assemble_order(self, reads: ReadStore, overlaps: Overlaps, order: List[str]) -> str:
        if not order:
            return ''
        return self.consensus_builder.build(reads, overlaps, order)

    def _explore_alternates(
        self,
        reads: ReadStore,
        overlaps: Overlaps,
        layout: Layout,
        result: AssemblyResult
    ) -> None:
        """Swap each branch pair in turn and keep distinct alternates."""
        seen: Set[str] = {result.primary}

        for branch in layout.branches:
            label = f"{branch[0]},{branch[1]}"
            try:
                sequence = self._assemble_alternate(reads, overlaps, layout.order, branch, label)
            except AlternateAssemblyFailure as e:
                logger.warning(str(e))
                result.alternates.append(AlternateOutcome(label=label, status='skipped', reason=str(e.cause)))
                continue

            if not sequence:
                result.alternates.append(AlternateOutcome(label=label, status='empty', reason='empty sequence'))
            elif sequence in seen:
                result.alternates.append(AlternateOutcome(
                    label=label, status='duplicate', reason='identical to an earlier assembly', sequence=sequence))
            else:
                seen.add(sequence)
                result.assemblies.append(sequence)
                result.alternates.append(AlternateOutcome(label=label, status='accepted', sequence=sequence))

    def _assemble_alternate(
        self,
        reads: ReadStore,
        overlaps: Overlaps,
        primary_order: List[str],
        branch: BranchPair,
        label: str
    ) -> str:
        i, j = branch
        alt_order = list(primary_order)
        try:
            alt_order[i], alt_order[j] = alt_order[j], alt_order[i]
            return self._assemble_order(reads, overlaps, alt_order)
        except Exception as e:
            raise AlternateAssemblyFailure(label, e) from e


def run_olc(reads_input: ReadsInput, config: Optional[OLCConfig] = None,
            detect_alternates: Optional[bool] = None) -> AssemblyResult:
    """
    Run an OLC assembly.

    Args:
        reads_input: Reads in any form accepted by load_reads()
        config: OLC configuration (defaults used when omitted)
        detect_alternates: Override config.detect_alternates

    Returns:
        AssemblyResult
    """
    return AssemblyEngine(config).assemble(reads_input, detect_alternates=detect_alternates)


__all__ = [
    'AssemblyEngine',
    'run_olc',
]
