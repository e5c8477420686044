"""mcsq command: merge consequences with transcript metadata and pick views.

Flow:
1. Load config (file + CLI overrides)
2. Build the transcript index from the GFF3 file
3. Stream variants: merge, rank, select, write
4. Optionally write a provenance sidecar
"""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from csq_pipeline.config.loader import load_config_with_overrides
from csq_pipeline.persistence import ProvenanceTracker
from csq_pipeline.transcripts import TranscriptIndexError, build_transcript_index
from csq_pipeline.vcf import ConsequenceHeaderError, annotate_vcf

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ['vcf', 'vcf.gz', 'bcf', 'ubcf']


@click.command('mcsq')
@click.argument('input_path', required=False, default='-', metavar='[INPUT]')
@click.option(
    '-o', '--output',
    default='-',
    help='Output VCF/BCF path (default: stdout)'
)
@click.option(
    '-g', '--gff',
    type=click.Path(path_type=Path),
    default=None,
    help='GFF3 gene-feature file with transcript tags (overrides config gff_path)'
)
@click.option(
    '--threads',
    type=int,
    default=None,
    help='htslib compression threads for reading and writing'
)
@click.option(
    '--workers',
    type=int,
    default=None,
    help='Worker processes for the per-variant pipeline'
)
@click.option(
    '--output-format',
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help='Output format (default: inferred from output suffix, BCF on stdout)'
)
@click.option(
    '--provenance/--no-provenance',
    default=None,
    help='Write {output}.provenance.json next to the output file'
)
@click.pass_context
def mcsq(ctx, input_path, output, gff, threads, workers, output_format, provenance):
    """Merge BCSQ consequences with transcript metadata.

    Replaces the consequence field with fixed-width merged records and adds
    pick_, canon_, worst_ and wpc_ fields for every merged column.
    INPUT defaults to stdin.
    """
    try:
        config = load_config_with_overrides(ctx.obj['config_path'], {
            'gff_path': gff,
            'io.threads': threads,
            'io.output_format': output_format,
            'annotation.workers': workers,
            'provenance': provenance,
        })
    except (FileNotFoundError, ValidationError) as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        sys.exit(1)

    if config.gff_path is None:
        raise click.UsageError("A GFF3 file is required (--gff or gff_path in config)")

    provenance_tracker = ProvenanceTracker.from_config(config)

    try:
        index = build_transcript_index(config.gff_path)
    except (FileNotFoundError, TranscriptIndexError) as e:
        click.echo(click.style(f"Error building transcript index: {e}", fg='red'), err=True)
        logger.exception("Failed to build transcript index")
        sys.exit(1)

    provenance_tracker.record_step('build_transcript_index', {
        'gff_path': str(config.gff_path),
        'transcripts': len(index),
    })

    try:
        stats = annotate_vcf(
            input_path,
            output,
            index,
            field=config.annotation.field,
            workers=config.annotation.workers,
            batch_size=config.annotation.batch_size,
            threads=config.io.threads,
            output_format=config.io.output_format,
        )
    except (OSError, ValueError) as e:
        # ConsequenceHeaderError is a ValueError; OSError covers htslib open failures
        click.echo(click.style(f"Error annotating variants: {e}", fg='red'), err=True)
        logger.exception("Failed to annotate variants")
        sys.exit(1)

    provenance_tracker.record_step('annotate_variants', stats.to_dict())

    if config.provenance and output != '-':
        sidecar = provenance_tracker.save_sidecar(Path(output))
        logger.info(f"Provenance written to {sidecar}")

    logger.info(
        f"Annotated {stats.annotated}/{stats.records} records "
        f"({stats.passthrough} without {config.annotation.field}, "
        f"{stats.canonical_views} with a canonical view)"
    )
