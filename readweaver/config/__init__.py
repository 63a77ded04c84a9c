"""
ReadWeaver v0.1.0

Configuration management for ReadWeaver.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .methods import (
    KmerOverlapParams,
    MinhashOverlapParams,
    SmithWatermanParams,
    NeedlemanWunschParams,
    GreedyLayoutParams,
    SuperstringLayoutParams,
    MajorityConsensusParams,
    PoaConsensusParams,
    NoConsensusParams,
    ThresholdFilterParams,
    BloomFilterParams,
    HierholzerParams,
    RecursiveParams,
    OLCConfig,
    DBGConfig,
    overlap_params,
    layout_params,
    consensus_params,
    error_filter_params,
    euler_params,
)
from .schema import (
    DEFAULT_CONFIG,
    load_config,
    save_config_template,
    validate_config,
    config_structure_errors,
    olc_config_from_dict,
    dbg_config_from_dict,
)

__all__ = [
    "KmerOverlapParams",
    "MinhashOverlapParams",
    "SmithWatermanParams",
    "NeedlemanWunschParams",
    "GreedyLayoutParams",
    "SuperstringLayoutParams",
    "MajorityConsensusParams",
    "PoaConsensusParams",
    "NoConsensusParams",
    "ThresholdFilterParams",
    "BloomFilterParams",
    "HierholzerParams",
    "RecursiveParams",
    "OLCConfig",
    "DBGConfig",
    "overlap_params",
    "layout_params",
    "consensus_params",
    "error_filter_params",
    "euler_params",
    "DEFAULT_CONFIG",
    "load_config",
    "save_config_template",
    "validate_config",
    "config_structure_errors",
    "olc_config_from_dict",
    "dbg_config_from_dict",
]
