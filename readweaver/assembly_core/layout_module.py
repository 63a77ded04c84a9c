"""
ReadWeaver v0.1.0

Read layout: ordering reads into one linear arrangement from overlap scores.

Strategies:
- greedy:      extend a chain from the first read by the best-scoring unused
               read above a threshold, falling back to load order
- superstring: exhaustive search over all orderings for the shortest merged
               string (factorial time, cut off at a small read count)

Author: ReadWeaver Development Team
Date: 2026-10-19
"""

from typing import Dict, List, Optional
import itertools
import logging

from readweaver.assembly_core.data_structures import (
    BranchPair,
    Layout,
    Overlaps,
    get_overlap,
)
from readweaver.config.methods import (
    GreedyLayoutParams,
    LayoutParams,
    SuperstringLayoutParams,
    layout_params,
)
from readweaver.errors import UnknownMethodError
from readweaver.io_utils.read_store import ReadStore, ReadsInput, load_reads

logger = logging.getLogger(__name__)


def layout_greedy(reads: ReadStore, overlaps: Overlaps, overlap_threshold: float = 10) -> List[str]:
    """
    Greedy chain extension.

    Starts from the first loaded read. At each step the unused read with the
    highest score against the chain tail is appended if that score strictly
    exceeds the threshold; otherwise the first unused read in load order is
    appended. Always returns a full permutation.

    Args:
        reads: Loaded reads
        overlaps: Pairwise overlap scores
        overlap_threshold: Minimum (exclusive) score for an overlap-driven step

    Returns:
        Read ids in layout order
    """
    # dict keeps load order for the fallback choice
    unused: Dict[str, None] = dict.fromkeys(reads.ids)
    order: List[str] = []
    if not unused:
        return order

    current = next(iter(unused))
    del unused[current]
    order.append(current)

    while unused:
        best: Optional[str] = None
        best_score = overlap_threshold
        for candidate in unused:
            score = get_overlap(overlaps, current, candidate)
            if score > best_score:
                best, best_score = candidate, score

        if best is None:
            best = next(iter(unused))
            logger.debug(f"No overlap above {overlap_threshold} from {current}; appending {best}")

        del unused[best]
        order.append(best)
        current = best

    return order


def merged_length(reads: ReadStore, overlaps: Overlaps, order: List[str]) -> int:
    """Length of the string obtained by merging reads in order, trimming overlaps."""
    if not order:
        return 0
    total = len(reads[order[0]])
    for prev, nxt in zip(order, order[1:]):
        ov = int(get_overlap(overlaps, prev, nxt))
        total += max(0, len(reads[nxt]) - ov)
    return total


def layout_superstring(
    reads: ReadStore,
    overlaps: Overlaps,
    min_overlap: float = 5,
    max_reads: int = 8
) -> List[str]:
    """
    Exhaustive shortest-superstring ordering.

    Every permutation is tried; any ordering with a consecutive overlap below
    min_overlap is rejected. The first ordering with the shortest merged
    string wins.

    Args:
        reads: Loaded reads
        overlaps: Pairwise overlap scores
        min_overlap: Minimum overlap required between consecutive reads
        max_reads: Size cutoff; larger inputs return an empty layout

    Returns:
        Read ids in layout order, or [] when no valid ordering exists
    """
    if len(reads) == 0:
        return []
    if len(reads) > max_reads:
        logger.warning(
            f"Superstring layout skipped: {len(reads)} reads exceeds the cutoff of {max_reads}"
        )
        return []

    best_order: Optional[List[str]] = None
    best_len = None

    for order in itertools.permutations(reads.ids):
        if any(get_overlap(overlaps, a, b) < min_overlap for a, b in zip(order, order[1:])):
            continue
        length = merged_length(reads, overlaps, list(order))
        if best_len is None or length < best_len:
            best_order, best_len = list(order), length

    if best_order is None:
        logger.warning(f"Superstring layout found no ordering with overlaps >= {min_overlap}")
        return []
    return best_order


def find_branches(overlaps: Overlaps, order: List[str]) -> List[BranchPair]:
    """
    Overlapping pairs not used as adjacent edges in the layout.

    Args:
        overlaps: Pairwise overlap scores
        order: Layout order

    Returns:
        (index_a, index_b) positions in `order` for every positive-score pair
        whose reads are not adjacent; pairs with a read outside the order are
        ignored
    """
    position = {read_id: i for i, read_id in enumerate(order)}
    adjacent = set()
    for a, b in zip(order, order[1:]):
        adjacent.add((a, b))
        adjacent.add((b, a))

    branches: List[BranchPair] = []
    for (read_a, read_b), score in overlaps.items():
        if score <= 0 or (read_a, read_b) in adjacent:
            continue
        if read_a not in position or read_b not in position:
            continue
        branches.append((position[read_a], position[read_b]))
    return branches


class LayoutBuilder:
    """Order reads and report unused overlaps with a configured strategy."""

    def __init__(self, params: Optional[LayoutParams] = None):
        self.params = params if params is not None else GreedyLayoutParams()
        if not isinstance(self.params, (GreedyLayoutParams, SuperstringLayoutParams)):
            raise UnknownMethodError('layout', str(getattr(self.params, 'method', self.params)),
                                     ('greedy', 'superstring'))

    @property
    def method(self) -> str:
        return self.params.method

    def order(self, reads: ReadStore, overlaps: Overlaps) -> List[str]:
        if isinstance(self.params, GreedyLayoutParams):
            return layout_greedy(reads, overlaps, self.params.overlap_threshold)
        return layout_superstring(reads, overlaps, self.params.min_overlap, self.params.max_reads)

    def build(self, reads: ReadsInput, overlaps: Overlaps) -> Layout:
        """
        Compute the layout and its branches.

        Args:
            reads: Reads in any form accepted by load_reads()
            overlaps: Pairwise overlap scores

        Returns:
            Layout with order and branch index pairs
        """
        reads = load_reads(reads)
        order = self.order(reads, overlaps)
        branches = find_branches(overlaps, order)
        logger.info(f"Layout ({self.method}): {len(order)}/{len(reads)} reads placed, {len(branches)} branches")
        return Layout(order=order, branches=branches)


def build_layout(reads: ReadsInput, overlaps: Overlaps, method: str = 'greedy', **params) -> Layout:
    """Convenience wrapper: build a layout by method name."""
    return LayoutBuilder(layout_params(method, **params)).build(reads, overlaps)


__all__ = [
    'LayoutBuilder',
    'build_layout',
    'layout_greedy',
    'layout_superstring',
    'merged_length',
    'find_branches',
]
