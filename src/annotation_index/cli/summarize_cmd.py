"""Summarize command: build per-variant annotation summaries from VEP records.

Orchestrates the summary flow:
1. Load config (with CLI overrides)
2. Read annotation documents
3. Filter to the configured VEP/cache version pair (if any)
4. Fold documents into one summary per variant and version pair
5. Write TSV/Parquet output with provenance
"""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from annotation_index.aggregate import (
    build_variant_summaries,
    filter_by_versions,
    summaries_to_frame,
)
from annotation_index.config.loader import load_config_with_overrides
from annotation_index.load import read_annotation_documents
from annotation_index.output import write_summary_output

logger = logging.getLogger(__name__)


@click.command('summarize')
@click.option(
    '--input',
    'input_path',
    type=click.Path(path_type=Path),
    default=None,
    help='Annotation file (default: input_path from config)'
)
@click.option(
    '--output-dir',
    type=click.Path(path_type=Path),
    default=None,
    help='Output directory (default: output.output_dir from config)'
)
@click.option(
    '--format',
    'formats',
    type=click.Choice(['tsv', 'parquet']),
    multiple=True,
    help='Output format; repeat for several (default: output.formats from config)'
)
@click.option(
    '--force',
    is_flag=True,
    help='Overwrite existing output files'
)
@click.pass_context
def summarize(ctx, input_path, output_dir, formats, force):
    """Build annotation summaries from VEP annotation documents.

    Reads annotation documents, groups them by variant and VEP/cache
    version pair, and folds each group into a compact summary holding
    SIFT/PolyPhen ranges, SO accessions and xref ids.

    Examples:

        # Use paths from config
        annotation-index summarize

        # Custom input and Parquet only
        annotation-index summarize --input vep.jsonl.gz --format parquet
    """
    config_path = ctx.obj['config_path']

    click.echo(click.style("=== Annotation Summary ===", bold=True))
    click.echo()

    overrides = {}
    if input_path is not None:
        overrides['input_path'] = input_path
    if output_dir is not None:
        overrides['output.output_dir'] = output_dir
    if formats:
        overrides['output.formats'] = list(formats)

    try:
        config = load_config_with_overrides(config_path, overrides)
    except (FileNotFoundError, ValidationError) as e:
        click.echo(click.style(f"Error loading config: {e}", fg='red'), err=True)
        sys.exit(1)

    click.echo(click.style(f"  Config loaded: {config_path}", fg='green'))
    click.echo()

    output = config.output
    existing = [
        output.output_dir / f"{output.filename_base}.{fmt}"
        for fmt in output.formats
        if (output.output_dir / f"{output.filename_base}.{fmt}").exists()
    ]
    if existing and not force:
        click.echo(click.style(
            f"Warning: Output files already exist at {output.output_dir}",
            fg='yellow'
        ))
        click.echo(click.style(
            "  Use --force to overwrite existing files.",
            fg='yellow'
        ))
        return

    # Step 1: Load annotation documents
    click.echo(click.style("Step 1: Reading annotation documents...", bold=True))
    try:
        documents = list(read_annotation_documents(config.input_path))
    except (FileNotFoundError, ValidationError, ValueError) as e:
        click.echo(click.style(f"  Error reading annotations: {e}", fg='red'), err=True)
        logger.exception("Failed to read annotation documents")
        sys.exit(1)
    click.echo(click.style(f"  Read {len(documents)} documents from {config.input_path}", fg='green'))
    click.echo()

    # Step 2: Version filter
    if config.versions is not None:
        click.echo(click.style("Step 2: Filtering by VEP/cache version...", bold=True))
        documents = filter_by_versions(
            documents,
            config.versions.vep_version,
            config.versions.vep_cache_version,
        )
        click.echo(
            f"  Kept {len(documents)} documents with VEP "
            f"{config.versions.vep_version} / cache {config.versions.vep_cache_version}"
        )
        click.echo()

    # Step 3: Build summaries
    click.echo(click.style("Step 3: Building summaries...", bold=True))
    try:
        summaries = build_variant_summaries(documents)
    except ValueError as e:
        click.echo(click.style(f"  Error building summaries: {e}", fg='red'), err=True)
        logger.exception("Failed to build annotation summaries")
        sys.exit(1)
    df = summaries_to_frame(summaries)
    click.echo(click.style(f"  Built {df.height} summaries", fg='green'))
    click.echo()

    # Step 4: Write output
    click.echo(click.style("Step 4: Writing output...", bold=True))
    try:
        paths = write_summary_output(
            df,
            output_dir=output.output_dir,
            filename_base=output.filename_base,
            formats=output.formats,
        )
    except OSError as e:
        click.echo(click.style(f"  Error writing output: {e}", fg='red'), err=True)
        logger.exception("Failed to write summary output")
        sys.exit(1)

    for name, path in paths.items():
        click.echo(click.style(f"  {name.upper():<11} {path}", fg='green'))
    click.echo()
    click.echo(click.style("=== Summary Complete ===", bold=True))
