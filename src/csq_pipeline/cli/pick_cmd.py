"""pick command: choose one consequence per variant by canonical, APPRIS and TSL."""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from csq_pipeline.config.loader import load_config_with_overrides
from csq_pipeline.persistence import ProvenanceTracker
from csq_pipeline.vcf import pick_vcf

logger = logging.getLogger(__name__)


@click.command('pick')
@click.argument('input_path', required=False, default='-', metavar='[INPUT]')
@click.option(
    '-o', '--output',
    default='-',
    help='Output VCF/BCF path (default: stdout)'
)
@click.option(
    '--threads',
    type=int,
    default=None,
    help='htslib compression threads for reading and writing'
)
@click.option(
    '--output-format',
    type=click.Choice(['vcf', 'vcf.gz', 'bcf', 'ubcf']),
    default=None,
    help='Output format (default: inferred from output suffix, BCF on stdout)'
)
@click.pass_context
def pick(ctx, input_path, output, threads, output_format):
    """Pick one consequence per variant.

    Narrows the consequence list by canonical flag, then APPRIS level, then
    TSL, and writes the survivor as pick_<column> fields. INPUT defaults
    to stdin.
    """
    try:
        config = load_config_with_overrides(ctx.obj['config_path'], {
            'io.threads': threads,
            'io.output_format': output_format,
        })
    except (FileNotFoundError, ValidationError) as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        sys.exit(1)

    try:
        stats = pick_vcf(
            input_path,
            output,
            field=config.annotation.field,
            threads=config.io.threads,
            output_format=config.io.output_format,
        )
    except (OSError, ValueError) as e:
        click.echo(click.style(f"Error picking consequences: {e}", fg='red'), err=True)
        logger.exception("Failed to pick consequences")
        sys.exit(1)

    if config.provenance and output != '-':
        provenance_tracker = ProvenanceTracker.from_config(config)
        provenance_tracker.record_step('pick_variants', stats.to_dict())
        sidecar = provenance_tracker.save_sidecar(Path(output))
        logger.info(f"Provenance written to {sidecar}")

    logger.info(f"Picked a consequence for {stats.annotated}/{stats.records} records")
