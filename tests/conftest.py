#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from readweaver.io_utils import load_reads


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="readweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def olc_reads():
    """Three short reads that pairwise share at least one 3-mer."""
    return ["ACTGAC", "TGACGT", "ACGTGA"]


@pytest.fixture
def dbg_reads():
    """Two reads sharing the k=3 k-mers TGA and GAC."""
    return ["ACTGAC", "TGACGT"]


@pytest.fixture
def olc_store(olc_reads):
    return load_reads(olc_reads)


@pytest.fixture
def simple_fasta():
    """FASTA text with a multi-line record and a lowercase record."""
    return ">r1 first read\nACTG\nAC\n>r2\ntgacgt\n>r3\nACGTGA\n"


@pytest.fixture
def reads_fasta_file(temp_output_dir, olc_reads):
    """FASTA file holding the OLC reads."""
    path = temp_output_dir / "reads.fasta"
    path.write_text(''.join(f">read{i}\n{seq}\n" for i, seq in enumerate(olc_reads)))
    return path


@pytest.fixture
def restore_logging():
    """Put back root logger handlers replaced by the CLI's basicConfig call."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
