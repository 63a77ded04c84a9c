"""
ReadWeaver v0.1.0

Preprocessing module: k-mer counting and error filtering.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .kmer_filter import (
    BloomFilter,
    count_kmers,
    filter_threshold,
    build_bloom,
    filter_bloom,
    filter_errors,
)

__all__ = [
    "BloomFilter",
    "count_kmers",
    "filter_threshold",
    "build_bloom",
    "filter_bloom",
    "filter_errors",
]
