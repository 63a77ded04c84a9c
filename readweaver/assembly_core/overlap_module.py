"""
ReadWeaver v0.1.0

Pairwise overlap detection between reads.

Four interchangeable strategies, each returning a mapping from an unordered
read pair (earlier-loaded read first) to a non-negative score:

- kmer:    exact shared k-mers; score is k
- minhash: MinHash sketch agreement over 5-mers; score is the similarity ratio
- sw:      Smith-Waterman local alignment; score is the aligned length
- nw:      Needleman-Wunsch global alignment; score is the final DP score

Author: ReadWeaver Development Team
Date: 2026-10-19
"""

from typing import Callable, Dict, List, Optional, Tuple
from collections import defaultdict
import itertools
import logging

import numpy as np

from readweaver.assembly_core.data_structures import Overlaps
from readweaver.config.methods import (
    KmerOverlapParams,
    MinhashOverlapParams,
    SmithWatermanParams,
    NeedlemanWunschParams,
    OverlapParams,
    overlap_params,
)
from readweaver.errors import UnknownMethodError
from readweaver.io_utils.read_store import ReadStore, ReadsInput, load_reads
from readweaver.utils.sequence_utils import iter_kmers, seeded_hash

logger = logging.getLogger(__name__)

MINHASH_KMER_SIZE = 5
MINHASH_MIN_SIMILARITY = 0.1


def _as_number(value: float):
    """Collapse integral floats from the DP matrices back to int."""
    value = float(value)
    return int(value) if value.is_integer() else value


# ============================================================================
# Exact k-mer overlap
# ============================================================================

def overlap_kmer(reads: ReadStore, k: int = 15) -> Overlaps:
    """
    Score read pairs that share at least one exact k-mer.

    Args:
        reads: Loaded reads
        k: K-mer size

    Returns:
        Overlaps with score k for every pair sharing a k-mer
    """
    # K-mer index: kmer -> list of (read_id, position)
    index: Dict[str, List[Tuple[str, int]]] = defaultdict(list)
    for read_id, sequence in reads.items():
        for pos, kmer in iter_kmers(sequence, k):
            index[kmer].append((read_id, pos))

    overlaps: Overlaps = {}
    for occurrences in index.values():
        if len(occurrences) < 2:
            continue
        for (read_a, _), (read_b, _) in itertools.combinations(occurrences, 2):
            if read_a == read_b:
                continue
            key = reads.pair_key(read_a, read_b)
            overlaps[key] = max(overlaps.get(key, 0), k)

    logger.debug(f"k-mer index: {len(index)} distinct {k}-mers, {len(overlaps)} overlapping pairs")
    return overlaps


# ============================================================================
# MinHash similarity
# ============================================================================

def minhash_sketch(sequence: str, num_hashes: int) -> Optional[List[int]]:
    """
    MinHash sketch of a sequence's 5-mers.

    Returns:
        One minimum hash per seed, or None for sequences shorter than 5
    """
    shingles = {kmer for _, kmer in iter_kmers(sequence, MINHASH_KMER_SIZE)}
    if not shingles:
        return None
    return [min(seeded_hash(kmer, seed) for kmer in shingles) for seed in range(num_hashes)]


def overlap_minhash(reads: ReadStore, num_hashes: int = 100) -> Overlaps:
    """
    Approximate similarity from MinHash sketch agreement.

    Args:
        reads: Loaded reads
        num_hashes: Number of seeded hash functions per sketch

    Returns:
        Overlaps holding the fraction of agreeing sketch slots, for pairs
        above a similarity of 0.1
    """
    sketches = {read_id: minhash_sketch(seq, num_hashes) for read_id, seq in reads.items()}

    overlaps: Overlaps = {}
    for read_a, read_b in itertools.combinations(reads.ids, 2):
        sketch_a, sketch_b = sketches[read_a], sketches[read_b]
        if sketch_a is None or sketch_b is None:
            continue
        agree = sum(1 for x, y in zip(sketch_a, sketch_b) if x == y)
        similarity = agree / num_hashes
        if similarity > MINHASH_MIN_SIMILARITY:
            overlaps[(read_a, read_b)] = similarity

    return overlaps


# ============================================================================
# Smith-Waterman local alignment
# ============================================================================

def _substitution_row(base: str, other: np.ndarray, match: float, mismatch: float) -> np.ndarray:
    return np.where(other == base, match, mismatch)


def smith_waterman(
    seq_a: str,
    seq_b: str,
    match: float = 2,
    mismatch: float = -1,
    gap: float = -1
) -> Tuple[float, int]:
    """
    Local alignment of two sequences.

    The DP floor is 0. The traceback starts at the first maximal cell in
    row-major order and, when several moves reach the same best score,
    prefers diagonal, then up, then left.

    Args:
        seq_a: First sequence
        seq_b: Second sequence
        match: Score for identical bases
        mismatch: Score for differing bases
        gap: Linear gap score

    Returns:
        (best local score, traced-back alignment length)
    """
    n, m = len(seq_a), len(seq_b)
    H = np.zeros((n + 1, m + 1), dtype=np.float64)
    if n == 0 or m == 0:
        return 0, 0

    b = np.array(list(seq_b))
    for i in range(1, n + 1):
        sub = _substitution_row(seq_a[i - 1], b, match, mismatch)
        # Diagonal and vertical moves only depend on the previous row
        row = np.maximum(H[i - 1, :-1] + sub, H[i - 1, 1:] + gap)
        row = np.maximum(row, 0)
        for j in range(1, m + 1):
            left = H[i, j - 1] + gap
            H[i, j] = row[j - 1] if row[j - 1] >= left else left

    best_i, best_j = np.unravel_index(int(np.argmax(H)), H.shape)
    best_score = H[best_i, best_j]

    i, j = int(best_i), int(best_j)
    length = 0
    while i > 0 and j > 0 and H[i, j] > 0:
        length += 1
        diag = H[i - 1, j - 1] + (match if seq_a[i - 1] == seq_b[j - 1] else mismatch)
        up = H[i - 1, j] + gap
        left = H[i, j - 1] + gap
        if diag >= up and diag >= left:
            i -= 1
            j -= 1
        elif up >= left:
            i -= 1
        else:
            j -= 1

    return _as_number(best_score), length


def overlap_sw(
    reads: ReadStore,
    match: float = 2,
    mismatch: float = -1,
    gap: float = -1,
    min_length: int = 0
) -> Overlaps:
    """
    Local-alignment overlap for every read pair.

    Returns:
        Overlaps holding the traced-back local alignment length; pairs shorter
        than min_length are dropped
    """
    overlaps: Overlaps = {}
    for read_a, read_b in itertools.combinations(reads.ids, 2):
        _, length = smith_waterman(reads[read_a], reads[read_b], match, mismatch, gap)
        if length >= min_length:
            overlaps[(read_a, read_b)] = length
    return overlaps


# ============================================================================
# Needleman-Wunsch global alignment
# ============================================================================

def needleman_wunsch(
    seq_a: str,
    seq_b: str,
    match: float = 1,
    mismatch: float = -1,
    gap: float = -1
) -> float:
    """
    Global alignment score with a linear gap penalty.

    Returns:
        Score of the bottom-right DP cell
    """
    n, m = len(seq_a), len(seq_b)
    F = np.zeros((n + 1, m + 1), dtype=np.float64)
    F[:, 0] = np.arange(n + 1) * gap
    F[0, :] = np.arange(m + 1) * gap

    if n and m:
        b = np.array(list(seq_b))
        for i in range(1, n + 1):
            sub = _substitution_row(seq_a[i - 1], b, match, mismatch)
            row = np.maximum(F[i - 1, :-1] + sub, F[i - 1, 1:] + gap)
            for j in range(1, m + 1):
                left = F[i, j - 1] + gap
                F[i, j] = row[j - 1] if row[j - 1] >= left else left

    return _as_number(F[n, m])


def overlap_nw(
    reads: ReadStore,
    match: float = 1,
    mismatch: float = -1,
    gap: float = -1
) -> Overlaps:
    """
    Global-alignment score for every read pair; non-positive scores dropped.
    """
    overlaps: Overlaps = {}
    for read_a, read_b in itertools.combinations(reads.ids, 2):
        score = needleman_wunsch(reads[read_a], reads[read_b], match, mismatch, gap)
        if score > 0:
            overlaps[(read_a, read_b)] = score
    return overlaps


# ============================================================================
# Dispatch
# ============================================================================

class OverlapDetector:
    """
    Compute pairwise overlaps with a configured strategy.

    Example:
        >>> detector = OverlapDetector(KmerOverlapParams(k=3))
        >>> detector.detect(["ACTGAC", "TGACGT"])
        {('read0', 'read1'): 3}
    """

    _DISPATCH: Dict[str, Callable[[ReadStore, OverlapParams], Overlaps]] = {
        'kmer': lambda reads, p: overlap_kmer(reads, p.k),
        'minhash': lambda reads, p: overlap_minhash(reads, p.num_hashes),
        'sw': lambda reads, p: overlap_sw(reads, p.match, p.mismatch, p.gap, p.min_length),
        'nw': lambda reads, p: overlap_nw(reads, p.match, p.mismatch, p.gap),
    }

    def __init__(self, params: Optional[OverlapParams] = None):
        self.params = params if params is not None else KmerOverlapParams()
        method = getattr(self.params, 'method', None)
        if method not in self._DISPATCH:
            raise UnknownMethodError('overlap', str(method), tuple(self._DISPATCH))

    @property
    def method(self) -> str:
        return self.params.method

    def detect(self, reads: ReadsInput) -> Overlaps:
        """
        Score all overlapping read pairs.

        Args:
            reads: Reads in any form accepted by load_reads()

        Returns:
            Unordered pair -> score mapping
        """
        reads = load_reads(reads)
        overlaps = self._DISPATCH[self.method](reads, self.params)
        logger.info(f"Overlap detection ({self.method}): {len(overlaps)} scored pairs from {len(reads)} reads")
        return overlaps


def detect_overlaps(reads: ReadsInput, method: str = 'kmer', **params) -> Overlaps:
    """
    Convenience wrapper: detect overlaps by method name.

    Raises:
        UnknownMethodError: If the method name is not recognised
    """
    return OverlapDetector(overlap_params(method, **params)).detect(reads)


__all__ = [
    'OverlapDetector',
    'detect_overlaps',
    'overlap_kmer',
    'overlap_minhash',
    'overlap_sw',
    'overlap_nw',
    'minhash_sketch',
    'smith_waterman',
    'needleman_wunsch',
]
