#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Read loading and FASTA I/O for ReadWeaver.

Consolidated module containing:
- ReadStore, the immutable ordered id -> sequence mapping every engine consumes
- Normalization of raw text blobs, sequence lists and id mappings
- FASTA file reading and writing

Text input is either FASTA (any line starting with '>') or plain sequences
separated by newlines and/or commas. Plain sequences and list elements get
synthetic identifiers read0, read1, ... in input order.
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import io
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from Bio import SeqIO

from readweaver.errors import InvalidInputError
from readweaver.utils.sequence_utils import normalize_sequence

logger = logging.getLogger(__name__)

ReadsInput = Union[str, List[str], Tuple[str, ...], Mapping]

_PLAIN_SEPARATORS = re.compile(r'[,\n]')


# =============================================================================
# SECTION 2: READ STORE
# =============================================================================

class ReadStore(Mapping):
    """
    Immutable, ordered collection of reads.

    Iteration order is load order; that order defines the canonical
    orientation of overlap pair keys and the greedy layout's fallback order.
    """

    def __init__(self, reads: Optional[Dict[str, str]] = None):
        self._reads: Dict[str, str] = dict(reads or {})
        self._rank: Dict[str, int] = {rid: i for i, rid in enumerate(self._reads)}

    def __getitem__(self, read_id: str) -> str:
        return self._reads[read_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._reads)

    def __len__(self) -> int:
        return len(self._reads)

    def __repr__(self) -> str:
        return f"ReadStore({len(self)} reads)"

    @property
    def ids(self) -> List[str]:
        """Read identifiers in load order."""
        return list(self._reads)

    def rank(self, read_id: str) -> int:
        """Load-order position of a read."""
        return self._rank[read_id]

    def pair_key(self, read_a: str, read_b: str) -> Tuple[str, str]:
        """Canonical key for an unordered read pair (earlier-loaded read first)."""
        if self._rank[read_a] <= self._rank[read_b]:
            return (read_a, read_b)
        return (read_b, read_a)

    def total_length(self) -> int:
        return sum(len(seq) for seq in self._reads.values())


# =============================================================================
# SECTION 3: NORMALIZATION
# =============================================================================

def _strip_comments(text: str) -> str:
    return '\n'.join(
        line for line in text.splitlines()
        if not line.strip().startswith(';')
    )


def _is_fasta(text: str) -> bool:
    return any(line.lstrip().startswith('>') for line in text.splitlines())


def _unique_id(read_id: str, reads: Dict[str, str]) -> str:
    if read_id not in reads:
        return read_id
    n = 2
    while f"{read_id}_{n}" in reads:
        n += 1
    logger.warning(f"Duplicate read id {read_id!r}; renamed to {read_id}_{n}")
    return f"{read_id}_{n}"


def parse_fasta_text(text: str) -> Dict[str, str]:
    """
    Parse FASTA-formatted text into an ordered id -> sequence mapping.

    Args:
        text: FASTA content ('>' headers, ';' comment lines ignored)

    Returns:
        Dict of read id (first header token) to uppercase sequence
    """
    reads: Dict[str, str] = {}
    lines = [line.strip() for line in _strip_comments(text).splitlines()]
    lines = [line for line in lines if line]
    # Text ahead of the first header is not part of any record
    while lines and not lines[0].startswith('>'):
        lines.pop(0)
    handle = io.StringIO('\n'.join(lines) + '\n')
    for i, record in enumerate(SeqIO.parse(handle, "fasta")):
        read_id = record.id or f"read{i}"
        reads[_unique_id(read_id, reads)] = normalize_sequence(str(record.seq))
    return reads


def parse_plain_text(text: str) -> Dict[str, str]:
    """
    Parse newline- and/or comma-separated sequences.

    Blank entries and ';' comment lines are skipped; ids are read0, read1, ...
    """
    sequences = [
        normalize_sequence(chunk)
        for chunk in _PLAIN_SEPARATORS.split(_strip_comments(text))
    ]
    return {f"read{i}": seq for i, seq in enumerate(s for s in sequences if s)}


def load_reads(reads_input: ReadsInput) -> ReadStore:
    """
    Normalize caller-supplied reads into a ReadStore.

    Args:
        reads_input: One of
            - str: FASTA text, or newline/comma separated sequences
            - list/tuple of str: sequences, ids assigned as read0, read1, ...
            - mapping of id -> sequence: ids kept, sequences normalized
            - an existing ReadStore (returned unchanged)

    Returns:
        ReadStore with uppercase, whitespace-free sequences

    Raises:
        InvalidInputError: If the input is of any other type, or a list or
            mapping holds a non-string sequence
    """
    if isinstance(reads_input, ReadStore):
        return reads_input

    if isinstance(reads_input, str):
        if _is_fasta(reads_input):
            reads = parse_fasta_text(reads_input)
        else:
            reads = parse_plain_text(reads_input)

    elif isinstance(reads_input, (list, tuple)):
        reads = {}
        for i, seq in enumerate(reads_input):
            if not isinstance(seq, str):
                raise InvalidInputError(
                    f"Read {i} must be a string sequence, got {type(seq).__name__}"
                )
            reads[f"read{i}"] = normalize_sequence(seq)

    elif isinstance(reads_input, Mapping):
        reads = {}
        for read_id, seq in reads_input.items():
            if not isinstance(seq, str):
                raise InvalidInputError(
                    f"Read {read_id!r} must be a string sequence, got {type(seq).__name__}"
                )
            reads[str(read_id)] = normalize_sequence(seq)

    else:
        raise InvalidInputError(
            "reads must be a text blob, a list of sequences or an id -> sequence "
            f"mapping, got {type(reads_input).__name__}"
        )

    store = ReadStore(reads)
    logger.debug(f"Loaded {len(store)} reads ({store.total_length()} bp)")
    return store


# =============================================================================
# SECTION 4: FASTA FILE I/O
# =============================================================================

def _open_text(filepath: Path, mode: str):
    if filepath.suffix in ('.gz', '.gzip'):
        return gzip.open(filepath, mode + 't')
    return open(filepath, mode)


def read_fasta(filepath: Union[str, Path]) -> ReadStore:
    """
    Load reads from a FASTA or plain sequence file (can be gzipped).

    Args:
        filepath: Path to the reads file

    Returns:
        ReadStore of the file's reads
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Reads file not found: {filepath}")

    with _open_text(filepath, 'r') as handle:
        text = handle.read()

    store = load_reads(text)
    logger.info(f"Read {len(store)} reads from {filepath}")
    return store


def write_fasta(
    records: Iterable[Tuple[str, str]],
    filepath: Union[str, Path],
    line_width: int = 80
) -> int:
    """
    Write (header, sequence) records to a FASTA file.

    Args:
        records: Iterable of (header, sequence) tuples
        filepath: Output FASTA file path
        line_width: Number of bases per line (0 = no wrapping)

    Returns:
        Number of sequences written
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    records = list(records)
    with _open_text(filepath, 'w') as handle:
        handle.write(format_fasta(records, line_width))

    return len(records)


def format_fasta(records: Iterable[Tuple[str, str]], line_width: int = 80) -> str:
    """Render (header, sequence) records as FASTA text."""
    lines = []
    for header, sequence in records:
        lines.append(f">{header}")
        if line_width > 0:
            for i in range(0, len(sequence), line_width):
                lines.append(sequence[i:i + line_width])
            if not sequence:
                lines.append('')
        else:
            lines.append(sequence)
    return '\n'.join(lines) + ('\n' if lines else '')


__all__ = [
    'ReadStore',
    'ReadsInput',
    'load_reads',
    'parse_fasta_text',
    'parse_plain_text',
    'read_fasta',
    'write_fasta',
    'format_fasta',
]
