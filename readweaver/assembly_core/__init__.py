"""
Assembly Core module for ReadWeaver.

This module provides the two assembly strategies:
- Overlap-layout-consensus (overlap detection, layout, consensus)
- De Bruijn graph construction, tip simplification and Eulerian traversal
"""

from .data_structures import (
    AssemblyResult,
    AlternateOutcome,
    CountTable,
    DeBruijnGraph,
    Layout,
    Overlaps,
    get_overlap,
)

from .overlap_module import (
    OverlapDetector,
    detect_overlaps,
    smith_waterman,
    needleman_wunsch,
)

from .layout_module import (
    LayoutBuilder,
    build_layout,
    find_branches,
)

from .consensus_module import (
    ConsensusBuilder,
    build_consensus,
    merge_layout,
)

from .olc_engine_module import AssemblyEngine, run_olc

from .eulerian_module import EulerianPathFinder, path_to_sequence

from .dbg_engine_module import (
    DebruijnEngine,
    KmerGraphBuilder,
    build_debruijn_graph,
    simplify_tips,
    run_debruijn,
)

__all__ = [
    # Assembly functions
    "run_olc",
    "run_debruijn",
    "detect_overlaps",
    "build_layout",
    "build_consensus",
    # Engines and components
    "AssemblyEngine",
    "DebruijnEngine",
    "OverlapDetector",
    "LayoutBuilder",
    "ConsensusBuilder",
    "KmerGraphBuilder",
    "EulerianPathFinder",
    # Helpers
    "smith_waterman",
    "needleman_wunsch",
    "find_branches",
    "merge_layout",
    "build_debruijn_graph",
    "simplify_tips",
    "path_to_sequence",
    "get_overlap",
    # Data structures
    "AssemblyResult",
    "AlternateOutcome",
    "CountTable",
    "DeBruijnGraph",
    "Layout",
    "Overlaps",
]
