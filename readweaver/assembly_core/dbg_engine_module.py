#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
ReadWeaver v0.1.0

De Bruijn Graph (DBG) Engine for ReadWeaver.
- Counts k-mers across all reads and filters likely errors (threshold or Bloom)
- Builds a de Bruijn graph: (k-1)-mers as nodes, surviving k-mers as edges
- Removes source tips in a single pass
- Reconstructs the sequence from an Eulerian path
- Explores alternate paths by reordering the successors of branch nodes
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging
import time

from readweaver.assembly_core.data_structures import (
    AlternateOutcome,
    AssemblyResult,
    DeBruijnGraph,
)
from readweaver.assembly_core.eulerian_module import EulerianPathFinder
from readweaver.config.methods import DBGConfig, ErrorFilterParams
from readweaver.errors import AlternateAssemblyFailure
from readweaver.io_utils.read_store import ReadsInput, load_reads
from readweaver.preprocessing.kmer_filter import BloomFilter, count_kmers, filter_errors
from readweaver.utils.count_table import CountTable

logger = logging.getLogger(__name__)


# ============================================================================
# Graph construction
# ============================================================================

@dataclass
class GraphBuildReport:
    """Counts collected while building a graph."""
    distinct_kmers: int = 0
    surviving_kmers: int = 0
    tips_removed: List[str] = field(default_factory=list)


def build_debruijn_graph(kmers: List[str], k: int) -> DeBruijnGraph:
    """
    Build the graph from surviving k-mers.

    Each k-mer adds one edge from its (k-1)-prefix to its (k-1)-suffix, in
    the order given, and updates both degree tables.

    Args:
        kmers: Surviving k-mers
        k: K-mer size

    Returns:
        DeBruijnGraph
    """
    graph = DeBruijnGraph(k=k)
    for kmer in kmers:
        graph.add_kmer(kmer)
    return graph


def simplify_tips(graph: DeBruijnGraph) -> List[str]:
    """
    Remove source tips in one pass.

    A tip is a node with out-degree 1 and in-degree 0. Its single outgoing
    edge is dropped, the neighbour's in-degree and the tip's out-degree are
    decremented. Tips are collected before any removal, so nodes that only
    become tips afterwards are left alone; sink tips and bubbles are not
    touched. This is a deliberate single pass, not a fixpoint cleanup.

    Args:
        graph: Graph to simplify in place

    Returns:
        Tip nodes whose edge was removed
    """
    tips = [
        node for node in graph.adjacency
        if graph.out_degree(node) == 1 and graph.in_degree(node) == 0
    ]

    for tip in tips:
        successors = graph.adjacency[tip]
        if not successors:
            continue
        nxt = successors[0]
        graph.adjacency[tip] = [node for node in successors if node != nxt]
        graph.indegree.decrement(nxt)
        graph.outdegree.decrement(tip)

    if tips:
        logger.debug(f"Tip simplification removed {len(tips)} source tips")
    return tips


class KmerGraphBuilder:
    """
    Builder for de Bruijn graphs from raw reads.

    Pipeline: count k-mers -> filter errors -> build graph -> one tip pass.
    """

    def __init__(self, k: int, error_filter: ErrorFilterParams):
        """
        Initialize graph builder.

        Args:
            k: K-mer size
            error_filter: Threshold or Bloom filter parameters
        """
        self.k = k
        self.error_filter = error_filter

    def count(self, sequences: List[str]) -> CountTable:
        counts = count_kmers(sequences, self.k)
        logger.info(f"Counted {len(counts)} distinct {self.k}-mers")
        return counts

    def build(
        self,
        sequences: List[str],
        bloom: Optional[BloomFilter] = None,
        simplify: bool = True
    ) -> Tuple[DeBruijnGraph, GraphBuildReport]:
        """
        Build (and by default simplify) the graph for a set of reads.

        Args:
            sequences: Read sequences
            bloom: Pre-built Bloom filter to reuse in bloom mode
            simplify: Run the single tip-removal pass

        Returns:
            (graph, build report)
        """
        report = GraphBuildReport()

        counts = self.count(sequences)
        report.distinct_kmers = len(counts)

        kmers = filter_errors(counts, self.error_filter, bloom=bloom)
        report.surviving_kmers = len(kmers)

        graph = build_debruijn_graph(kmers, self.k)
        logger.info(f"Built raw graph: {len(graph.nodes)} nodes, {graph.edge_count} edges")

        if simplify:
            report.tips_removed = simplify_tips(graph)
            logger.info(
                f"Simplified graph: {len(report.tips_removed)} tips removed, "
                f"{graph.edge_count} edges remain"
            )

        return graph, report


# ============================================================================
# Engine
# ============================================================================

class DebruijnEngine:
    """
    Orchestrates de Bruijn assembly.

    The graph built for a run is never mutated after simplification: path
    finding walks copies, and each alternate perturbs its own clone.
    """

    def __init__(self, config: Optional[DBGConfig] = None):
        """
        Initialize DBG engine.

        Args:
            config: k, error filter, Eulerian method (defaults: k=31, threshold=2, hierholzer)
        """
        self.config = config if config is not None else DBGConfig()
        self.graph_builder = KmerGraphBuilder(self.config.k, self.config.error_filter)
        self.path_finder = EulerianPathFinder(self.config.euler)

    def assemble(
        self,
        reads_input: ReadsInput,
        detect_alternates: Optional[bool] = None,
        bloom: Optional[BloomFilter] = None
    ) -> AssemblyResult:
        """
        Assemble reads through a de Bruijn graph.

        Args:
            reads_input: Reads in any form accepted by load_reads()
            detect_alternates: Override the configured alternate exploration
            bloom: Pre-built Bloom filter to reuse in bloom mode

        Returns:
            AssemblyResult; assemblies is empty when no k-mer survives
        """
        if detect_alternates is None:
            detect_alternates = self.config.detect_alternates

        timings: Dict[str, float] = {}
        start = time.perf_counter()
        reads = load_reads(reads_input)
        timings['load'] = time.perf_counter() - start

        logger.info(
            f"DBG assembly of {len(reads)} reads (k={self.config.k}, "
            f"filter={self.config.error_filter.method}, euler={self.path_finder.method})"
        )

        stage = time.perf_counter()
        graph, report = self.graph_builder.build(list(reads.values()), bloom=bloom)
        timings['graph'] = time.perf_counter() - stage

        branch_nodes = graph.branch_nodes()
        result = AssemblyResult(
            branches=[(i, i) for i in range(len(branch_nodes))],
            stage_timings=timings,
            method='dbg',
            stats={
                'reads': len(reads),
                'distinct_kmers': report.distinct_kmers,
                'surviving_kmers': report.surviving_kmers,
                'tips_removed': len(report.tips_removed),
                **graph.stats(),
            },
        )

        stage = time.perf_counter()
        primary = self.path_finder.assemble(graph)
        timings['path'] = time.perf_counter() - stage

        if not primary:
            logger.info("DBG assembly produced no sequence")
            timings['total'] = time.perf_counter() - start
            return result

        result.assemblies.append(primary)
        result.stats['primary_length'] = len(primary)

        if detect_alternates and branch_nodes:
            stage = time.perf_counter()
            self._explore_alternates(graph, branch_nodes, result)
            timings['alternates'] = time.perf_counter() - stage

        timings['total'] = time.perf_counter() - start
        logger.info(
            f"DBG assembly complete: primary {len(primary)} bp, "
            f"{len(result.assemblies) - 1} alternates, {len(branch_nodes)} branch nodes"
        )
        return result

    def _explore_alternates(self, graph: DeBruijnGraph, branch_nodes: List[str], result: AssemblyResult) -> None:
        """Swap the first two successors of each branch node in turn."""
        seen = {result.primary}

        for node in branch_nodes:
            try:
                sequence = self._assemble_alternate(graph, node)
            except AlternateAssemblyFailure as e:
                logger.warning(str(e))
                result.alternates.append(AlternateOutcome(label=node, status='skipped', reason=str(e.cause)))
                continue

            if not sequence:
                result.alternates.append(AlternateOutcome(label=node, status='empty', reason='empty sequence'))
            elif sequence in seen:
                result.alternates.append(AlternateOutcome(
                    label=node, status='duplicate', reason='identical to an earlier assembly', sequence=sequence))
            else:
                seen.add(sequence)
                result.assemblies.append(sequence)
                result.alternates.append(AlternateOutcome(label=node, status='accepted', sequence=sequence))

    def _assemble_alternate(self, graph: DeBruijnGraph, node: str) -> str:
        try:
            alt_adjacency = graph.clone_adjacency()
            successors = alt_adjacency[node]
            successors[0], successors[1] = successors[1], successors[0]
            return self.path_finder.assemble(graph, alt_adjacency)
        except Exception as e:
            raise AlternateAssemblyFailure(node, e) from e


def run_debruijn(reads_input: ReadsInput, config: Optional[DBGConfig] = None,
                 detect_alternates: Optional[bool] = None) -> AssemblyResult:
    """
    Run a de Bruijn graph assembly.

    Args:
        reads_input: Reads in any form accepted by load_reads()
        config: DBG configuration (defaults used when omitted)
        detect_alternates: Override config.detect_alternates

    Returns:
        AssemblyResult
    """
    return DebruijnEngine(config).assemble(reads_input, detect_alternates=detect_alternates)


__all__ = [
    'GraphBuildReport',
    'KmerGraphBuilder',
    'DebruijnEngine',
    'build_debruijn_graph',
    'simplify_tips',
    'run_debruijn',
]
