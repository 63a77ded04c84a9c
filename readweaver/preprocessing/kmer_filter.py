#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

K-mer counting and error filtering ahead of de Bruijn graph construction.

Two filters are available:
- threshold: keep k-mers seen at least `threshold` times
- bloom:     seed a Bloom filter with the k-mers passing the threshold, then
             keep every counted k-mer the filter reports as present. False
             positives let some low-count k-mers through; that is accepted.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Any, Dict, Iterable, List, Optional
import logging
import math

import numpy as np

from readweaver.config.methods import (
    BloomFilterParams,
    ErrorFilterParams,
    ThresholdFilterParams,
)
from readweaver.errors import UnknownMethodError
from readweaver.utils.count_table import CountTable
from readweaver.utils.sequence_utils import iter_kmers, seeded_hash

logger = logging.getLogger(__name__)


# ============================================================================
# Bloom filter
# ============================================================================

class BloomFilter:
    """
    Probabilistic set membership for k-mers.

    Fixed-size bit array with a fixed number of seeded hash functions.
    Guarantees no false negatives; false positives are possible.
    """

    def __init__(self, size: int = 10000, hash_count: int = 3):
        """
        Initialize Bloom filter.

        Args:
            size: Number of bits
            hash_count: Number of hash functions
        """
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}")
        if hash_count < 1:
            raise ValueError(f"hash_count must be >= 1, got {hash_count}")

        self.size = size
        self.hash_count = hash_count
        self.bits = np.zeros(size, dtype=bool)
        self.items_added = 0

    @classmethod
    def from_capacity(cls, expected_elements: int, false_positive_rate: float = 0.01) -> 'BloomFilter':
        """
        Size a filter for an expected element count and false positive rate.

        m = -(n * ln(p)) / (ln(2)^2), k = (m / n) * ln(2)
        """
        n = max(1, expected_elements)
        p = false_positive_rate
        size = max(1, int(-(n * math.log(p)) / (math.log(2) ** 2)))
        hash_count = max(1, int((size / n) * math.log(2)))
        return cls(size=size, hash_count=hash_count)

    def _positions(self, item: str) -> List[int]:
        return [seeded_hash(item, seed) % self.size for seed in range(self.hash_count)]

    def add(self, item: str):
        """Add item to the filter."""
        self.bits[self._positions(item)] = True
        self.items_added += 1

    def check(self, item: str) -> bool:
        """
        Check if item might be in the set.

        Returns:
            True if item might be present (with possible false positive),
            False if item is definitely not present
        """
        return bool(self.bits[self._positions(item)].all())

    def __contains__(self, item: str) -> bool:
        return self.check(item)

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the Bloom filter."""
        bits_set = int(self.bits.sum())
        k = self.hash_count
        n = self.items_added
        m = self.size
        estimated_fpr = (1 - math.exp(-k * n / m)) ** k if n > 0 else 0.0

        return {
            'size': m,
            'hash_count': k,
            'items_added': n,
            'bits_set': bits_set,
            'fill_ratio': bits_set / m,
            'estimated_fpr': estimated_fpr,
        }


# ============================================================================
# Counting and filtering
# ============================================================================

def count_kmers(sequences: Iterable[str], k: int) -> CountTable:
    """
    Count every length-k substring across all sequences.

    Args:
        sequences: Read sequences
        k: K-mer size

    Returns:
        CountTable of k-mer -> occurrences, first-seen order
    """
    counts = CountTable()
    for sequence in sequences:
        for _, kmer in iter_kmers(sequence, k):
            counts.increment(kmer)
    return counts


def filter_threshold(counts: CountTable, threshold: int = 2) -> List[str]:
    """K-mers with count >= threshold, in count-table order."""
    return [kmer for kmer, count in counts.items() if count >= threshold]


def build_bloom(counts: CountTable, threshold: int = 2, hash_count: int = 4) -> BloomFilter:
    """
    Bloom filter sized at twice the distinct k-mer count, seeded with the
    k-mers passing the threshold.
    """
    bloom = BloomFilter(size=max(1, 2 * len(counts)), hash_count=hash_count)
    for kmer in filter_threshold(counts, threshold):
        bloom.add(kmer)
    return bloom


def filter_bloom(
    counts: CountTable,
    threshold: int = 2,
    hash_count: int = 4,
    bloom: Optional[BloomFilter] = None
) -> List[str]:
    """
    K-mers reported present by a Bloom filter.

    Args:
        counts: K-mer counts
        threshold: Minimum count for seeding a newly built filter
        hash_count: Hash functions for a newly built filter
        bloom: Existing filter to reuse instead of building one

    Returns:
        Surviving k-mers in count-table order
    """
    if bloom is None:
        bloom = build_bloom(counts, threshold, hash_count)
    return [kmer for kmer in counts if bloom.check(kmer)]


def filter_errors(
    counts: CountTable,
    params: Optional[ErrorFilterParams] = None,
    bloom: Optional[BloomFilter] = None
) -> List[str]:
    """
    Apply the configured error filter.

    Args:
        counts: K-mer counts
        params: ThresholdFilterParams or BloomFilterParams
        bloom: Optional pre-built Bloom filter (bloom mode only)

    Returns:
        Surviving k-mers in count-table order

    Raises:
        UnknownMethodError: For any other parameter type
    """
    if params is None:
        params = ThresholdFilterParams()

    if isinstance(params, ThresholdFilterParams):
        kept = filter_threshold(counts, params.threshold)
    elif isinstance(params, BloomFilterParams):
        kept = filter_bloom(counts, params.threshold, params.hash_count, bloom)
    else:
        raise UnknownMethodError('error_filter', str(getattr(params, 'method', params)),
                                 ('threshold', 'bloom'))

    logger.info(f"Error filter ({params.method}): retained {len(kept)}/{len(counts)} k-mers")
    return kept


__all__ = [
    'BloomFilter',
    'count_kmers',
    'filter_threshold',
    'build_bloom',
    'filter_bloom',
    'filter_errors',
]

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
