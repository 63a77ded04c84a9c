"""
ReadWeaver v0.1.0

Shared utilities for ReadWeaver.
"""

from .count_table import CountTable
from .sequence_utils import (
    normalize_sequence,
    iter_kmers,
    extract_kmers,
    seeded_hash,
)

__all__ = [
    'CountTable',
    'normalize_sequence',
    'iter_kmers',
    'extract_kmers',
    'seeded_hash',
]
