"""
ReadWeaver v0.1.0

Sequence utility functions for ReadWeaver.

Provides common sequence manipulation and hashing helpers shared by the
overlap detectors and the k-mer filters.
"""

import hashlib
from typing import Iterator, List, Tuple


def normalize_sequence(sequence: str) -> str:
    """
    Normalize a raw sequence string.
    
    Strips surrounding and embedded whitespace and uppercases. Characters
    outside A/C/G/T are kept as-is.
    
    Example:
        >>> normalize_sequence(" acgt\\n")
        'ACGT'
    """
    return ''.join(sequence.split()).upper()


def iter_kmers(sequence: str, k: int) -> Iterator[Tuple[int, str]]:
    """
    Yield (position, k-mer) pairs for every length-k substring.
    
    Args:
        sequence: DNA sequence string
        k: K-mer size
    """
    if k < 1:
        return
    for i in range(len(sequence) - k + 1):
        yield i, sequence[i:i + k]


def extract_kmers(sequence: str, k: int) -> List[str]:
    """
    Extract all k-mers from a sequence.
    
    Args:
        sequence: DNA sequence string
        k: K-mer size
        
    Returns:
        List of k-mer strings
        
    Example:
        >>> extract_kmers("ATCGATCG", 3)
        ['ATC', 'TCG', 'CGA', 'GAT', 'ATC', 'TCG']
    """
    if k < 1 or k > len(sequence):
        return []
    
    sequence = sequence.upper()
    return [kmer for _, kmer in iter_kmers(sequence, k)]


def seeded_hash(item: str, seed: int) -> int:
    """
    Deterministic 64-bit hash of an item under a seed.
    
    Uses MD5 of "{seed}:{item}" so values are stable across interpreter runs,
    unlike the built-in hash() which is salted per process.
    
    Args:
        item: String to hash (typically a k-mer)
        seed: Hash function index
        
    Returns:
        Non-negative integer hash value
    """
    digest = hashlib.md5(f"{seed}:{item}".encode()).digest()
    return int.from_bytes(digest[:8], 'big')


__all__ = [
    'normalize_sequence',
    'iter_kmers',
    'extract_kmers',
    'seeded_hash',
]
