#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Core data structures shared by the OLC and de Bruijn engines.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging

from readweaver.utils.count_table import CountTable

logger = logging.getLogger(__name__)

# Unordered read pair (earlier-loaded read first) -> overlap score
Overlaps = Dict[Tuple[str, str], float]

BranchPair = Tuple[int, int]


def get_overlap(overlaps: Overlaps, read_a: str, read_b: str) -> float:
    """Score for a read pair in either orientation (0 when absent)."""
    score = overlaps.get((read_a, read_b))
    if score is None:
        score = overlaps.get((read_b, read_a), 0)
    return score


# ============================================================================
# Layout
# ============================================================================

@dataclass
class Layout:
    """
    Ordering of reads produced by a layout strategy.

    Attributes:
        order: Read ids, each exactly once (empty when no valid layout exists)
        branches: Index pairs into `order` of overlapping reads that are not
            adjacent in the layout
    """
    order: List[str] = field(default_factory=list)
    branches: List[BranchPair] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.order)

    @property
    def is_empty(self) -> bool:
        return not self.order


# ============================================================================
# De Bruijn graph
# ============================================================================

@dataclass
class DeBruijnGraph:
    """
    De Bruijn multigraph over (k-1)-mers.

    Uses an adjacency mapping (node -> ordered successor list) plus explicit
    degree tables. Adjacency keys keep their insertion order, which drives
    start-node selection and branch enumeration.
    """
    k: int
    adjacency: Dict[str, List[str]] = field(default_factory=dict)
    indegree: CountTable = field(default_factory=CountTable)
    outdegree: CountTable = field(default_factory=CountTable)

    def add_kmer(self, kmer: str) -> None:
        """Add the edge prefix -> suffix contributed by one k-mer."""
        prefix, suffix = kmer[:-1], kmer[1:]
        self.adjacency.setdefault(prefix, []).append(suffix)
        self.outdegree.increment(prefix)
        self.indegree.increment(suffix)

    def successors(self, node: str) -> List[str]:
        return self.adjacency.get(node, [])

    def out_degree(self, node: str) -> int:
        return self.outdegree.get(node)

    def in_degree(self, node: str) -> int:
        return self.indegree.get(node)

    @property
    def nodes(self) -> List[str]:
        """All nodes (sources and sink-only nodes), first-seen order."""
        seen = dict.fromkeys(self.adjacency)
        for successors in self.adjacency.values():
            seen.update(dict.fromkeys(successors))
        return list(seen)

    @property
    def edge_count(self) -> int:
        return sum(len(successors) for successors in self.adjacency.values())

    @property
    def is_empty(self) -> bool:
        return not self.adjacency

    def branch_nodes(self) -> List[str]:
        """Nodes with more than one outgoing edge."""
        return [node for node, successors in self.adjacency.items() if len(successors) > 1]

    def clone_adjacency(self) -> Dict[str, List[str]]:
        """Independent copy of the adjacency lists."""
        return {node: list(successors) for node, successors in self.adjacency.items()}

    def clone(self) -> 'DeBruijnGraph':
        """Copy whose adjacency and degree tables can be mutated freely."""
        return DeBruijnGraph(
            k=self.k,
            adjacency=self.clone_adjacency(),
            indegree=self.indegree.copy(),
            outdegree=self.outdegree.copy(),
        )

    def stats(self) -> Dict[str, int]:
        return {
            'nodes': len(self.nodes),
            'edges': self.edge_count,
            'branch_nodes': len(self.branch_nodes()),
        }


# ============================================================================
# Results
# ============================================================================

@dataclass
class AlternateOutcome:
    """
    Outcome of one alternate-assembly attempt.

    Attributes:
        label: Marker of the perturbed branch (index pair or graph node)
        status: 'accepted', 'duplicate', 'empty' or 'skipped'
        reason: Why the alternate was not kept (None when accepted)
        sequence: Reconstructed sequence when one was produced
    """
    label: str
    status: str
    reason: Optional[str] = None
    sequence: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status == 'accepted'


@dataclass
class AssemblyResult:
    """
    Result of an assembly run.

    Attributes:
        assemblies: Primary sequence first, then distinct alternates; empty
            when nothing could be assembled
        branches: Ambiguity markers. For OLC, index pairs into the primary
            layout order. For DBG, (i, i) per branch node (opaque markers)
        alternates: Per-alternate outcomes, in exploration order
        stage_timings: Seconds spent per pipeline stage
        method: 'olc' or 'dbg'
        stats: Run statistics (read/overlap/k-mer/node counts)
    """
    assemblies: List[str] = field(default_factory=list)
    branches: List[BranchPair] = field(default_factory=list)
    alternates: List[AlternateOutcome] = field(default_factory=list)
    stage_timings: Dict[str, float] = field(default_factory=dict)
    method: str = ''
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def primary(self) -> str:
        """Primary assembly ('' when nothing was assembled)."""
        return self.assemblies[0] if self.assemblies else ''

    @property
    def skipped_alternates(self) -> List[AlternateOutcome]:
        return [outcome for outcome in self.alternates if outcome.status == 'skipped']

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dictionary."""
        return {
            'method': self.method,
            'assemblies': list(self.assemblies),
            'branches': [list(pair) for pair in self.branches],
            'alternates': [
                {
                    'label': outcome.label,
                    'status': outcome.status,
                    'reason': outcome.reason,
                    'length': len(outcome.sequence) if outcome.sequence is not None else None,
                }
                for outcome in self.alternates
            ],
            'stage_timings': dict(self.stage_timings),
            'stats': dict(self.stats),
        }


__all__ = [
    'Overlaps',
    'BranchPair',
    'get_overlap',
    'CountTable',
    'Layout',
    'DeBruijnGraph',
    'AlternateOutcome',
    'AssemblyResult',
]

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
