"""
ReadWeaver v0.1.0

I/O Module for ReadWeaver.

- read_store.py - ReadStore, read normalization, FASTA read/write
"""

from .read_store import (
    ReadStore,
    load_reads,
    parse_fasta_text,
    parse_plain_text,
    read_fasta,
    write_fasta,
    format_fasta,
)

__all__ = [
    'ReadStore',
    'load_reads',
    'parse_fasta_text',
    'parse_plain_text',
    'read_fasta',
    'write_fasta',
    'format_fasta',
]
