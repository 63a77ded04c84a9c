"""
ReadWeaver v0.1.0

Configuration schema for ReadWeaver.

Defines all available configuration parameters with defaults, YAML loading,
validation, and conversion into the typed run configurations consumed by the
assembly engines.

Author: ReadWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, Any, Optional, List
from pathlib import Path
import copy
import logging

import yaml

from readweaver.errors import ConfigValidationError, ReadWeaverError
from readweaver.config.methods import (
    OLCConfig,
    DBGConfig,
    make_params,
    method_choices,
)

logger = logging.getLogger(__name__)


# Default configuration values. Each method family lists the parameters of
# every variant under the variant's name; only the selected one is used.
DEFAULT_CONFIG = {
    # ========================================================================
    # Overlap-Layout-Consensus
    # ========================================================================
    'olc': {
        'overlap': {
            'method': 'kmer',  # 'kmer', 'minhash', 'sw', 'nw'
            'kmer': {'k': 15},
            'minhash': {'num_hashes': 100},
            'sw': {'match': 2, 'mismatch': -1, 'gap': -1, 'min_length': 0},
            'nw': {'match': 1, 'mismatch': -1, 'gap': -1},
        },
        'layout': {
            'method': 'greedy',  # 'greedy', 'superstring'
            'greedy': {'overlap_threshold': 10},
            'superstring': {'min_overlap': 5, 'max_reads': 8},
        },
        'consensus': {
            'method': 'majority',  # 'majority', 'poa', 'none'
            'majority': {'window': 50},
            'poa': {'min_run': 10},
            'none': {},
        },
        'detect_alternates': False,
    },

    # ========================================================================
    # De Bruijn Graph
    # ========================================================================
    'dbg': {
        'k': 31,
        'error_filter': {
            'method': 'threshold',  # 'threshold', 'bloom'
            'threshold': {'threshold': 2},
            'bloom': {'threshold': 2, 'hash_count': 4},
        },
        'euler': {
            'method': 'hierholzer',  # 'hierholzer', 'recursive'
            'hierholzer': {},
            'recursive': {'max_depth': 5000},
        },
        'detect_alternates': False,
    },

    # ========================================================================
    # Logging & Output
    # ========================================================================
    'logging': {
        'level': 'INFO',
        'log_file': None,
    },
    'output': {
        'line_width': 80,
    },
}

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file, merging with defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        Complete configuration dictionary

    Raises:
        FileNotFoundError: If the path does not exist
        ConfigValidationError: If the file is not valid YAML or not a mapping,
            or if one of its sections is not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in config file {config_path}: {e}") from e

        if user_config is None:
            user_config = {}
        if not isinstance(user_config, dict):
            raise ConfigValidationError(
                f"Config file {config_path} must contain a mapping, got {type(user_config).__name__}"
            )

        # Deep merge user config into defaults
        config = _deep_merge(config, user_config)
        errors = config_structure_errors(config)
        if errors:
            raise ConfigValidationError(f"Invalid config file {config_path}: {'; '.join(errors)}")
        logger.debug(f"Loaded configuration from {config_path}")

    return config


def config_structure_errors(config: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None,
                            prefix: str = '') -> List[str]:
    """
    Report sections that should be mappings but are not.

    Every key whose default value is a mapping must hold a mapping too;
    e.g. ``olc: {overlap: sw}`` yields "olc.overlap must be a mapping".

    Args:
        config: Configuration dictionary to inspect
        defaults: Reference layout (DEFAULT_CONFIG when omitted)
        prefix: Dotted path of ``config`` within the full configuration

    Returns:
        List of errors (empty if every section is a mapping)
    """
    defaults = DEFAULT_CONFIG if defaults is None else defaults
    errors = []

    for key, default in defaults.items():
        if not isinstance(default, dict) or key not in config:
            continue
        where = f"{prefix}{key}"
        value = config[key]
        if isinstance(value, dict):
            errors.extend(config_structure_errors(value, default, f"{where}."))
        else:
            errors.append(f"{where} must be a mapping, got {type(value).__name__}")

    return errors


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'olc', 'dbg')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'olc':
        del config['dbg']
        config['olc']['detect_alternates'] = True

    elif template == 'dbg':
        del config['olc']
        config['dbg']['detect_alternates'] = True

    elif template != 'default':
        raise ConfigValidationError(f"Unknown configuration template {template!r}")

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def _section_params(config: Dict[str, Any], family: str, key: str):
    """Build the parameter variant selected in a method section."""
    section = config.get(key, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(f"'{key}' section must be a mapping")
    method = section.get('method')
    params = section.get(method) or {}
    if not isinstance(params, dict):
        raise ConfigValidationError(f"'{key}.{method}' parameters must be a mapping")
    return make_params(family, method, **params)


def olc_config_from_dict(config: Dict[str, Any]) -> OLCConfig:
    """
    Build an OLCConfig from a full configuration dictionary.

    Args:
        config: Configuration as returned by load_config()

    Returns:
        Validated OLCConfig
    """
    olc = config.get('olc', {})
    if not isinstance(olc, dict):
        raise ConfigValidationError("'olc' section must be a mapping")
    return OLCConfig(
        overlap=_section_params(olc, 'overlap', 'overlap'),
        layout=_section_params(olc, 'layout', 'layout'),
        consensus=_section_params(olc, 'consensus', 'consensus'),
        detect_alternates=bool(olc.get('detect_alternates', False)),
    )


def dbg_config_from_dict(config: Dict[str, Any]) -> DBGConfig:
    """
    Build a DBGConfig from a full configuration dictionary.

    Args:
        config: Configuration as returned by load_config()

    Returns:
        Validated DBGConfig
    """
    dbg = config.get('dbg', {})
    if not isinstance(dbg, dict):
        raise ConfigValidationError("'dbg' section must be a mapping")
    return DBGConfig(
        k=dbg.get('k', 31),
        error_filter=_section_params(dbg, 'error_filter', 'error_filter'),
        euler=_section_params(dbg, 'euler', 'euler'),
        detect_alternates=bool(dbg.get('detect_alternates', False)),
    )


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = config_structure_errors(config)
    if errors:
        # Later checks assume every section is a mapping
        return errors

    # Method selections must name a known variant
    for engine, families in (('olc', ('overlap', 'layout', 'consensus')),
                             ('dbg', ('error_filter', 'euler'))):
        if engine not in config:
            continue
        for family in families:
            method = config[engine].get(family, {}).get('method')
            if method not in method_choices(family):
                errors.append(
                    f"Invalid {engine}.{family}.method: {method!r} "
                    f"(expected one of: {', '.join(method_choices(family))})"
                )

    # Parameter values are checked by building the typed configs
    if not errors:
        for engine, builder in (('olc', olc_config_from_dict), ('dbg', dbg_config_from_dict)):
            if engine not in config:
                continue
            try:
                builder(config)
            except ReadWeaverError as e:
                errors.append(f"Invalid {engine} parameters: {e}")

    # Logging
    level = str(config.get('logging', {}).get('level', 'INFO')).upper()
    if level not in VALID_LOG_LEVELS:
        errors.append(f"Invalid logging.level: {level} (expected one of: {', '.join(VALID_LOG_LEVELS)})")

    line_width = config.get('output', {}).get('line_width', 80)
    if not isinstance(line_width, int) or isinstance(line_width, bool) or line_width < 1:
        errors.append(f"Invalid output.line_width: {line_width!r}")

    return errors
