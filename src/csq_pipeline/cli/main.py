"""Main CLI entry point for csq-pipeline.

Provides command group with global options and subcommands for
consequence merging and picking.
"""

from pathlib import Path

import click

from csq_pipeline import __version__
from csq_pipeline.config.loader import load_config_with_overrides
from csq_pipeline.cli.mcsq_cmd import mcsq
from csq_pipeline.cli.pick_cmd import pick
from csq_pipeline.logging_config import configure_logging, set_verbose


# Configure logging (stderr; stdout may carry the variant stream)
configure_logging()


@click.group()
@click.version_option(__version__, prog_name="csq-pipeline")
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help='Path to pipeline configuration YAML file (default: built-in defaults)'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """csq-pipeline: transcript-aware consequence picking for bcftools/csq output.

    Merges BCSQ consequences with GFF3 transcript metadata and selects
    pick, canonical, worst and worst protein-coding consequences per variant.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    set_verbose(verbose)


@cli.command()
@click.pass_context
def info(ctx):
    """Display pipeline information and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"csq-pipeline v{__version__}")
    click.echo(f"Config: {config_path or '(defaults)'}")
    click.echo()

    try:
        config = load_config_with_overrides(config_path, {})
    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg="red"), err=True)
        ctx.exit(1)

    click.echo(f"Config Hash: {config.config_hash()[:16]}...")
    click.echo()

    click.echo(click.style("Annotation:", bold=True))
    click.echo(f"  GFF Path:   {config.gff_path or '(not set)'}")
    click.echo(f"  Field:      {config.annotation.field}")
    click.echo(f"  Batch Size: {config.annotation.batch_size}")
    click.echo(f"  Workers:    {config.annotation.workers}")
    click.echo()

    click.echo(click.style("I/O:", bold=True))
    click.echo(f"  htslib Threads: {config.io.threads}")
    click.echo(f"  Output Format:  {config.io.output_format or '(from suffix)'}")
    click.echo(f"  Provenance:     {config.provenance}")


# Register commands
cli.add_command(mcsq)
cli.add_command(pick)


if __name__ == '__main__':
    cli()
