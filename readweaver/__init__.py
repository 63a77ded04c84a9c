#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Package initialization and version metadata.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .version import __version__
from .assembly_core import AssemblyResult, run_olc, run_debruijn

__all__ = ["__version__", "AssemblyResult", "run_olc", "run_debruijn"]

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
