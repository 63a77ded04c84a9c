"""
ReadWeaver v0.1.0

Consensus generation from an ordered set of reads.

Strategies:
- majority: per-column base voting over the merged layout sequence
- poa:      progressive merge on the longest common run (POA-lite)
- none:     the merged layout sequence as-is

Author: ReadWeaver Development Team
Date: 2026-10-19
"""

from difflib import SequenceMatcher
from typing import List, Optional
import logging

from readweaver.assembly_core.data_structures import CountTable, Overlaps, get_overlap
from readweaver.config.methods import (
    ConsensusParams,
    MajorityConsensusParams,
    NoConsensusParams,
    PoaConsensusParams,
    consensus_params,
)
from readweaver.errors import UnknownMethodError
from readweaver.io_utils.read_store import ReadStore

logger = logging.getLogger(__name__)

UNKNOWN_BASE = 'N'


def merge_layout(reads: ReadStore, overlaps: Overlaps, order: List[str]) -> str:
    """
    Concatenate reads in layout order, trimming each pair's overlap.

    Each read after the first contributes read[int(score):], where score is
    its overlap with the previous read (0 when the pair has none).

    Returns:
        Merged seed sequence ('' for an empty order)
    """
    if not order:
        return ''
    parts = [reads[order[0]]]
    for prev, nxt in zip(order, order[1:]):
        ov = max(0, int(get_overlap(overlaps, prev, nxt)))
        parts.append(reads[nxt][ov:])
    return ''.join(parts)


def consensus_majority(seed: str, reads: ReadStore, window: int = 50) -> str:
    """
    Majority-vote consensus over the seed sequence.

    Votes are seeded with the seed itself; every read found literally in the
    seed (first occurrence) adds one vote per covered column. Ties go to the
    base seen first in the column. A column with no votes yields 'N'.

    Args:
        seed: Merged layout sequence
        reads: Loaded reads
        window: Accepted for configuration compatibility; voting is global

    Returns:
        Consensus sequence, same length as the seed
    """
    votes = [CountTable() for _ in range(len(seed))]
    for column, base in zip(votes, seed):
        column.increment(base)

    placed = 0
    for sequence in reads.values():
        if not sequence:
            continue
        pos = seed.find(sequence)
        if pos < 0:
            continue
        placed += 1
        for offset, base in enumerate(sequence):
            if pos + offset < len(seed):
                votes[pos + offset].increment(base)

    logger.debug(f"Majority consensus: {placed}/{len(reads)} reads placed on a {len(seed)} bp seed")
    return ''.join(
        column.most_common(1)[0][0] if column else UNKNOWN_BASE
        for column in votes
    )


def consensus_poa(reads: ReadStore, order: List[str], min_run: int = 10) -> str:
    """
    Progressive consensus on the longest common contiguous run.

    Starting from the first read, each next read is aligned to the growing
    consensus through their longest shared run. A run of at least min_run
    bases splices the read's tail after the run onto the consensus up to the
    run; otherwise the whole read is appended.

    Returns:
        Consensus sequence ('' for an empty order)
    """
    if not order:
        return ''

    consensus = reads[order[0]]
    for read_id in order[1:]:
        sequence = reads[read_id]
        matcher = SequenceMatcher(None, consensus, sequence, autojunk=False)
        run = matcher.find_longest_match(0, len(consensus), 0, len(sequence))
        if run.size >= min_run:
            consensus = consensus[:run.a + run.size] + sequence[run.b + run.size:]
        else:
            consensus += sequence

    return consensus


class ConsensusBuilder:
    """Build a consensus sequence with a configured strategy."""

    def __init__(self, params: Optional[ConsensusParams] = None):
        self.params = params if params is not None else MajorityConsensusParams()
        if not isinstance(self.params, (MajorityConsensusParams, PoaConsensusParams, NoConsensusParams)):
            raise UnknownMethodError('consensus', str(getattr(self.params, 'method', self.params)),
                                     ('majority', 'poa', 'none'))

    @property
    def method(self) -> str:
        return self.params.method

    def build(self, reads: ReadStore, overlaps: Overlaps, order: List[str]) -> str:
        """
        Consensus for reads placed in the given order.

        Args:
            reads: Loaded reads
            overlaps: Pairwise overlap scores
            order: Layout order

        Returns:
            Consensus sequence
        """
        if isinstance(self.params, PoaConsensusParams):
            return consensus_poa(reads, order, self.params.min_run)

        seed = merge_layout(reads, overlaps, order)
        if isinstance(self.params, MajorityConsensusParams):
            return consensus_majority(seed, reads, self.params.window)
        return seed


def build_consensus(reads: ReadStore, overlaps: Overlaps, order: List[str],
                    method: str = 'majority', **params) -> str:
    """Convenience wrapper: build a consensus by method name."""
    return ConsensusBuilder(consensus_params(method, **params)).build(reads, overlaps, order)


__all__ = [
    'ConsensusBuilder',
    'build_consensus',
    'merge_layout',
    'consensus_majority',
    'consensus_poa',
    'UNKNOWN_BASE',
]
