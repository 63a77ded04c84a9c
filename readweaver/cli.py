#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Command-line interface for ReadWeaver.

This module provides the main CLI entry point and all subcommands for
OLC and de Bruijn graph assembly of fragment reads.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from .version import __version__
from .assembly_core import AssemblyResult, run_debruijn, run_olc
from .config.methods import method_choices
from .config.schema import (
    dbg_config_from_dict,
    load_config,
    olc_config_from_dict,
    save_config_template,
    validate_config,
)
from .errors import ReadWeaverError
from .io_utils import format_fasta, read_fasta, write_fasta


def _setup_logging(level: str, log_file: Optional[str] = None):
    """Configure root logging for a CLI run."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def _resolve_log_level(ctx, config: Dict[str, Any]) -> str:
    if ctx.obj.get('VERBOSE'):
        return 'DEBUG'
    if ctx.obj.get('QUIET'):
        return 'ERROR'
    return str(config['logging'].get('level', 'INFO'))


def _load_run_config(ctx, config_file: Optional[str]) -> Dict[str, Any]:
    config = load_config(Path(config_file) if config_file else None)
    _setup_logging(_resolve_log_level(ctx, config), config['logging'].get('log_file'))
    return config


def _emit_result(result: AssemblyResult, output: Optional[str], json_output: Optional[str],
                 line_width: int, quiet: bool):
    """Write assemblies as FASTA and optionally the full result as JSON."""
    records = [
        (f"assembly_{i} {'primary' if i == 0 else 'alternate'} length={len(seq)}", seq)
        for i, seq in enumerate(result.assemblies)
    ]

    if output:
        count = write_fasta(records, output, line_width=line_width)
        if not quiet:
            click.echo(f"✓ Wrote {count} assemblies to {output}", err=True)
    else:
        click.echo(format_fasta(records, line_width), nl=False)

    if json_output:
        with open(json_output, 'w') as f:
            json.dump(result.to_dict(), f, indent=2)
        if not quiet:
            click.echo(f"✓ Wrote result summary to {json_output}", err=True)

    if not quiet:
        if result.assemblies:
            click.echo(
                f"Primary assembly: {len(result.primary)} bp, "
                f"{len(result.assemblies) - 1} alternates, {len(result.branches)} branches",
                err=True,
            )
        else:
            click.echo("No assembly produced (empty input or no surviving layout/k-mers)", err=True)
        for outcome in result.skipped_alternates:
            click.echo(f"⚠ Alternate {outcome.label} skipped: {outcome.reason}", err=True)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.pass_context
def main(ctx, verbose, quiet):
    """
    ReadWeaver: fragment read assembly by OLC and de Bruijn graphs.

    Reconstructs a sequence from overlapping reads with either
    overlap-layout-consensus or de Bruijn graph assembly, optionally
    reporting alternate assemblies at ambiguous branch points.
    """
    # Ensure context object exists
    ctx.ensure_object(dict)
    ctx.obj['VERBOSE'] = verbose
    ctx.obj['QUIET'] = quiet


# ============================================================================
# Assembly Commands
# ============================================================================

@main.command('olc')
@click.argument('reads', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--overlap', type=click.Choice(method_choices('overlap')), help='Overlap detection method')
@click.option('--k', type=int, help='K-mer size for kmer overlap')
@click.option('--num-hashes', type=int, help='Hash functions for minhash overlap')
@click.option('--layout', type=click.Choice(method_choices('layout')), help='Layout method')
@click.option('--overlap-threshold', type=float, help='Greedy layout overlap threshold')
@click.option('--min-overlap', type=float, help='Superstring layout minimum overlap')
@click.option('--consensus', type=click.Choice(method_choices('consensus')), help='Consensus method')
@click.option('--alternates/--no-alternates', default=None, help='Explore alternate assemblies at branches')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output FASTA (default: stdout)')
@click.option('--json', 'json_output', type=click.Path(dir_okay=False), help='Write result summary as JSON')
@click.pass_context
def olc(ctx, reads, config_file, overlap, k, num_hashes, layout, overlap_threshold,
        min_overlap, consensus, alternates, output, json_output):
    """Assemble READS with overlap-layout-consensus."""
    try:
        config = _load_run_config(ctx, config_file)
        section = config['olc']
        if overlap:
            section['overlap']['method'] = overlap
        if k is not None:
            section['overlap']['kmer']['k'] = k
        if num_hashes is not None:
            section['overlap']['minhash']['num_hashes'] = num_hashes
        if layout:
            section['layout']['method'] = layout
        if overlap_threshold is not None:
            section['layout']['greedy']['overlap_threshold'] = overlap_threshold
        if min_overlap is not None:
            section['layout']['superstring']['min_overlap'] = min_overlap
        if consensus:
            section['consensus']['method'] = consensus
        if alternates is not None:
            section['detect_alternates'] = alternates

        olc_config = olc_config_from_dict(config)
        result = run_olc(read_fasta(reads), olc_config)
        _emit_result(result, output, json_output, config['output']['line_width'], ctx.obj['QUIET'])
    except (ReadWeaverError, FileNotFoundError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)


@main.command('dbg')
@click.argument('reads', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', '-c', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--k', type=int, help='K-mer size')
@click.option('--error-filter', type=click.Choice(method_choices('error_filter')), help='K-mer error filter')
@click.option('--threshold', type=int, help='Minimum k-mer count')
@click.option('--euler', type=click.Choice(method_choices('euler')), help='Eulerian path method')
@click.option('--alternates/--no-alternates', default=None, help='Explore alternate paths at branch nodes')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output FASTA (default: stdout)')
@click.option('--json', 'json_output', type=click.Path(dir_okay=False), help='Write result summary as JSON')
@click.pass_context
def dbg(ctx, reads, config_file, k, error_filter, threshold, euler, alternates, output, json_output):
    """Assemble READS with a de Bruijn graph."""
    try:
        config = _load_run_config(ctx, config_file)
        section = config['dbg']
        if k is not None:
            section['k'] = k
        if error_filter:
            section['error_filter']['method'] = error_filter
        if threshold is not None:
            section['error_filter']['threshold']['threshold'] = threshold
            section['error_filter']['bloom']['threshold'] = threshold
        if euler:
            section['euler']['method'] = euler
        if alternates is not None:
            section['detect_alternates'] = alternates

        dbg_config = dbg_config_from_dict(config)
        result = run_debruijn(read_fasta(reads), dbg_config)
        _emit_result(result, output, json_output, config['output']['line_width'], ctx.obj['QUIET'])
    except (ReadWeaverError, FileNotFoundError) as e:
        click.echo(f"✗ Error: {e}", err=True)
        sys.exit(1)


# ============================================================================
# Configuration Management Commands
# ============================================================================

@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command('init')
@click.option('--output', '-o', type=click.Path(), default='readweaver_config.yaml',
              help='Output configuration file path')
@click.option('--template', '-t', type=click.Choice(['default', 'olc', 'dbg']),
              default='default', help='Configuration template type')
def config_init(output, template):
    """Generate a template configuration file with all available parameters."""
    click.echo(f"Generating {template} configuration template: {output}")

    try:
        save_config_template(Path(output), template=template)
    except (ReadWeaverError, OSError) as e:
        click.echo(f"✗ Error creating configuration: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration file created: {output}")


@config.command('validate')
@click.argument('config_file', type=click.Path(exists=True))
def config_validate(config_file):
    """Validate a configuration file."""
    click.echo(f"Validating configuration file: {config_file}")

    try:
        config = load_config(Path(config_file))
    except ReadWeaverError as e:
        click.echo(f"✗ Error validating configuration: {e}", err=True)
        sys.exit(1)

    errors = validate_config(config)
    if errors:
        click.echo("\n✗ Configuration validation failed:")
        for error in errors:
            click.echo(f"  • {error}", err=True)
        sys.exit(1)

    click.echo("✓ Configuration is valid")
    click.echo("\nKey Settings:")
    click.echo(f"  OLC: overlap={config['olc']['overlap']['method']}, "
               f"layout={config['olc']['layout']['method']}, "
               f"consensus={config['olc']['consensus']['method']}")
    click.echo(f"  DBG: k={config['dbg']['k']}, "
               f"filter={config['dbg']['error_filter']['method']}, "
               f"euler={config['dbg']['euler']['method']}")


@config.command('show')
@click.argument('config_file', type=click.Path(exists=True))
@click.option('--format', '-f', type=click.Choice(['yaml', 'summary']), default='summary',
              help='Output format')
def config_show(config_file, format):
    """Display configuration settings."""
    try:
        config = load_config(Path(config_file))
    except ReadWeaverError as e:
        click.echo(f"✗ Error reading configuration: {e}", err=True)
        sys.exit(1)

    if format == 'yaml':
        click.echo(yaml.dump(config, default_flow_style=False, sort_keys=False))
        return

    click.echo(f"Configuration from: {config_file}")
    click.echo("=" * 60)
    for engine in ('olc', 'dbg'):
        click.echo(f"\n{engine.upper()}:")
        for family, section in config[engine].items():
            if isinstance(section, dict):
                method = section.get('method')
                params = section.get(method) or {}
                rendered = ', '.join(f"{key}={value}" for key, value in params.items())
                click.echo(f"  {family}: {method}" + (f" ({rendered})" if rendered else ""))
            else:
                click.echo(f"  {family}: {section}")
    click.echo(f"\nLogging: {config['logging']['level']}")


if __name__ == '__main__':
    main()
