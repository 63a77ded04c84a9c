#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ReadWeaver v0.1.0

Method parameter types for the assembly engines.

Every method family (overlap, layout, consensus, error filter, Eulerian walk)
is a closed set of frozen dataclasses. Each variant carries exactly the fields
its algorithm needs and validates them when it is constructed, so a bad
configuration fails before any reads are touched.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field, asdict
from typing import Any, ClassVar, Dict, Type, Union
import logging

from readweaver.errors import ConfigValidationError, UnknownMethodError

logger = logging.getLogger(__name__)


def _require_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigValidationError(f"{name} must be a positive integer, got {value!r}")


def _require_number(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigValidationError(f"{name} must be a number, got {value!r}")


# ============================================================================
# Overlap detection
# ============================================================================

@dataclass(frozen=True)
class KmerOverlapParams:
    """Exact shared k-mer overlap."""
    method: ClassVar[str] = 'kmer'
    k: int = 15

    def __post_init__(self):
        _require_positive_int('k', self.k)


@dataclass(frozen=True)
class MinhashOverlapParams:
    """MinHash sketch similarity over 5-mers."""
    method: ClassVar[str] = 'minhash'
    num_hashes: int = 100

    def __post_init__(self):
        _require_positive_int('num_hashes', self.num_hashes)


@dataclass(frozen=True)
class SmithWatermanParams:
    """Local alignment; overlap is the traced-back alignment length."""
    method: ClassVar[str] = 'sw'
    match: float = 2
    mismatch: float = -1
    gap: float = -1
    min_length: int = 0  # Drop pairs whose alignment is shorter than this

    def __post_init__(self):
        for name in ('match', 'mismatch', 'gap'):
            _require_number(name, getattr(self, name))
        if self.match <= 0:
            raise ConfigValidationError(f"match must be > 0, got {self.match}")
        if isinstance(self.min_length, bool) or not isinstance(self.min_length, int) or self.min_length < 0:
            raise ConfigValidationError(f"min_length must be >= 0, got {self.min_length!r}")


@dataclass(frozen=True)
class NeedlemanWunschParams:
    """Global alignment; overlap is the bottom-right DP score."""
    method: ClassVar[str] = 'nw'
    match: float = 1
    mismatch: float = -1
    gap: float = -1

    def __post_init__(self):
        for name in ('match', 'mismatch', 'gap'):
            _require_number(name, getattr(self, name))


OverlapParams = Union[KmerOverlapParams, MinhashOverlapParams, SmithWatermanParams, NeedlemanWunschParams]


# ============================================================================
# Layout
# ============================================================================

@dataclass(frozen=True)
class GreedyLayoutParams:
    method: ClassVar[str] = 'greedy'
    overlap_threshold: float = 10

    def __post_init__(self):
        _require_number('overlap_threshold', self.overlap_threshold)


@dataclass(frozen=True)
class SuperstringLayoutParams:
    """Exhaustive shortest-superstring ordering (factorial time)."""
    method: ClassVar[str] = 'superstring'
    min_overlap: float = 5
    max_reads: int = 8

    def __post_init__(self):
        _require_number('min_overlap', self.min_overlap)
        _require_positive_int('max_reads', self.max_reads)


LayoutParams = Union[GreedyLayoutParams, SuperstringLayoutParams]


# ============================================================================
# Consensus
# ============================================================================

@dataclass(frozen=True)
class MajorityConsensusParams:
    method: ClassVar[str] = 'majority'
    window: int = 50

    def __post_init__(self):
        _require_positive_int('window', self.window)


@dataclass(frozen=True)
class PoaConsensusParams:
    method: ClassVar[str] = 'poa'
    min_run: int = 10

    def __post_init__(self):
        _require_positive_int('min_run', self.min_run)


@dataclass(frozen=True)
class NoConsensusParams:
    """Return the merged layout sequence unchanged."""
    method: ClassVar[str] = 'none'


ConsensusParams = Union[MajorityConsensusParams, PoaConsensusParams, NoConsensusParams]


# ============================================================================
# De Bruijn error filtering and path finding
# ============================================================================

@dataclass(frozen=True)
class ThresholdFilterParams:
    method: ClassVar[str] = 'threshold'
    threshold: int = 2

    def __post_init__(self):
        _require_positive_int('threshold', self.threshold)


@dataclass(frozen=True)
class BloomFilterParams:
    """Bloom membership filter seeded with k-mers passing the threshold."""
    method: ClassVar[str] = 'bloom'
    threshold: int = 2
    hash_count: int = 4

    def __post_init__(self):
        _require_positive_int('threshold', self.threshold)
        _require_positive_int('hash_count', self.hash_count)


ErrorFilterParams = Union[ThresholdFilterParams, BloomFilterParams]


@dataclass(frozen=True)
class HierholzerParams:
    method: ClassVar[str] = 'hierholzer'


@dataclass(frozen=True)
class RecursiveParams:
    method: ClassVar[str] = 'recursive'
    max_depth: int = 5000  # Edge budget; a graph with more edges than this is refused

    def __post_init__(self):
        _require_positive_int('max_depth', self.max_depth)


EulerParams = Union[HierholzerParams, RecursiveParams]


# ============================================================================
# Factories
# ============================================================================

_FAMILIES: Dict[str, Dict[str, Type]] = {
    'overlap': {cls.method: cls for cls in (
        KmerOverlapParams, MinhashOverlapParams, SmithWatermanParams, NeedlemanWunschParams)},
    'layout': {cls.method: cls for cls in (GreedyLayoutParams, SuperstringLayoutParams)},
    'consensus': {cls.method: cls for cls in (
        MajorityConsensusParams, PoaConsensusParams, NoConsensusParams)},
    'error_filter': {cls.method: cls for cls in (ThresholdFilterParams, BloomFilterParams)},
    'euler': {cls.method: cls for cls in (HierholzerParams, RecursiveParams)},
}


def method_choices(family: str) -> tuple:
    """Names accepted for a method family, in declaration order."""
    return tuple(_FAMILIES[family])


def make_params(family: str, method: str, **kwargs):
    """
    Build the parameter variant for a method name.

    Args:
        family: Method family name
        method: Method name within the family
        **kwargs: Variant fields; unknown fields are rejected

    Returns:
        Frozen parameter dataclass instance

    Raises:
        UnknownMethodError: If the method is not part of the family
        ConfigValidationError: If a field is unknown or invalid
    """
    variants = _FAMILIES[family]
    cls = variants.get(method)
    if cls is None:
        raise UnknownMethodError(family, method, tuple(variants))
    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ConfigValidationError(f"Invalid parameters for {family} method {method!r}: {e}") from e


def overlap_params(method: str, **kwargs) -> OverlapParams:
    return make_params('overlap', method, **kwargs)


def layout_params(method: str, **kwargs) -> LayoutParams:
    return make_params('layout', method, **kwargs)


def consensus_params(method: str, **kwargs) -> ConsensusParams:
    return make_params('consensus', method, **kwargs)


def error_filter_params(method: str, **kwargs) -> ErrorFilterParams:
    return make_params('error_filter', method, **kwargs)


def euler_params(method: str, **kwargs) -> EulerParams:
    return make_params('euler', method, **kwargs)


def params_to_dict(params) -> Dict[str, Any]:
    """Flatten a parameter variant to {'method': ..., 'params': {...}}."""
    return {'method': params.method, 'params': asdict(params)}


# ============================================================================
# Run configurations
# ============================================================================

@dataclass(frozen=True)
class OLCConfig:
    """Full configuration for an overlap-layout-consensus run."""
    overlap: OverlapParams = field(default_factory=KmerOverlapParams)
    layout: LayoutParams = field(default_factory=GreedyLayoutParams)
    consensus: ConsensusParams = field(default_factory=MajorityConsensusParams)
    detect_alternates: bool = False

    def __post_init__(self):
        _check_family('overlap', self.overlap)
        _check_family('layout', self.layout)
        _check_family('consensus', self.consensus)


@dataclass(frozen=True)
class DBGConfig:
    """Full configuration for a de Bruijn graph run."""
    k: int = 31
    error_filter: ErrorFilterParams = field(default_factory=ThresholdFilterParams)
    euler: EulerParams = field(default_factory=HierholzerParams)
    detect_alternates: bool = False

    def __post_init__(self):
        if isinstance(self.k, bool) or not isinstance(self.k, int) or self.k < 2:
            raise ConfigValidationError(f"k must be an integer >= 2, got {self.k!r}")
        if self.k % 2 == 0:
            logger.debug(f"Even k-mer size {self.k}; odd k avoids palindromic k-mers")
        _check_family('error_filter', self.error_filter)
        _check_family('euler', self.euler)


def _check_family(family: str, params: Any) -> None:
    if type(params) not in _FAMILIES[family].values():
        raise ConfigValidationError(
            f"{family} parameters must be one of "
            f"{', '.join(cls.__name__ for cls in _FAMILIES[family].values())}, "
            f"got {type(params).__name__}"
        )


__all__ = [
    'KmerOverlapParams',
    'MinhashOverlapParams',
    'SmithWatermanParams',
    'NeedlemanWunschParams',
    'GreedyLayoutParams',
    'SuperstringLayoutParams',
    'MajorityConsensusParams',
    'PoaConsensusParams',
    'NoConsensusParams',
    'ThresholdFilterParams',
    'BloomFilterParams',
    'HierholzerParams',
    'RecursiveParams',
    'OverlapParams',
    'LayoutParams',
    'ConsensusParams',
    'ErrorFilterParams',
    'EulerParams',
    'OLCConfig',
    'DBGConfig',
    'make_params',
    'method_choices',
    'overlap_params',
    'layout_params',
    'consensus_params',
    'error_filter_params',
    'euler_params',
    'params_to_dict',
]

# ReadWeaver v0.1.0
# Any usage is subject to this software's license.
