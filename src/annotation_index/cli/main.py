"""Main CLI entry point for annotation-index.

Provides command group with global options and subcommands.
"""

import logging
from pathlib import Path

import click

from annotation_index import __version__
from annotation_index.config.loader import load_config
from annotation_index.cli.summarize_cmd import summarize


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@click.group()
@click.option(
    '--config',
    type=click.Path(exists=True, path_type=Path),
    default='config/default.yaml',
    help='Path to configuration YAML file'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Enable verbose logging (DEBUG level)'
)
@click.pass_context
def cli(ctx, config, verbose):
    """Annotation-index: compact, mergeable summaries of VEP variant annotations.

    Distills full annotation records into SIFT/PolyPhen ranges, Sequence
    Ontology accessions and cross-reference ids for range and membership
    filtering.
    """
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config
    ctx.obj['verbose'] = verbose

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Verbose logging enabled")


@cli.command()
@click.pass_context
def info(ctx):
    """Display version and configuration summary."""
    config_path = ctx.obj['config_path']

    click.echo(f"Annotation Index v{__version__}")
    click.echo(f"Config: {config_path}")
    click.echo()

    try:
        config = load_config(config_path)

        config_hash = config.config_hash()
        click.echo(f"Config Hash: {config_hash[:16]}...")
        click.echo()

        click.echo(click.style("Paths:", bold=True))
        click.echo(f"  Input:            {config.input_path}")
        click.echo(f"  Output Directory: {config.output.output_dir}")
        click.echo(f"  Formats:          {', '.join(config.output.formats)}")
        click.echo()

        click.echo(click.style("Version Filter:", bold=True))
        if config.versions is None:
            click.echo("  (none - all VEP/cache versions)")
        else:
            click.echo(f"  VEP Version:   {config.versions.vep_version}")
            click.echo(f"  Cache Version: {config.versions.vep_cache_version}")

    except Exception as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        ctx.exit(1)


# Register commands
cli.add_command(summarize)


if __name__ == '__main__':
    cli()
