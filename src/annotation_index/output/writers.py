"""TSV+Parquet writer for summary tables with provenance sidecar."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import polars as pl
import structlog
import yaml

from annotation_index import __version__

logger = structlog.get_logger()

LIST_COLUMNS = ("so_accessions", "xref_ids")


def _flatten_list_columns(df: pl.DataFrame) -> pl.DataFrame:
    """Join list columns with commas; TSV has no nested types."""
    return df.with_columns([
        pl.col(column).cast(pl.List(pl.String)).list.join(",").alias(column)
        for column in LIST_COLUMNS
        if column in df.columns
    ])


def write_summary_output(
    df: pl.DataFrame,
    output_dir: Path,
    filename_base: str = "annotation_index",
    formats: Iterable[str] = ("tsv", "parquet"),
) -> dict:
    """
    Write a summary table to TSV and/or Parquet with a provenance sidecar.

    Args:
        df: Summary table from summaries_to_frame()
        output_dir: Directory to write output files (created if doesn't exist)
        filename_base: Base filename without extension
        formats: Any of "tsv", "parquet"

    Returns:
        Dictionary with output file paths keyed by format, plus "provenance"

    Raises:
        ValueError: If an unknown format is requested

    Notes:
        - TSV list columns (so_accessions, xref_ids) are comma-joined
        - Parquet keeps list columns as native lists
        - Provenance YAML records generated_at, output files, row count,
          distinct version pairs and column names
    """
    formats = list(dict.fromkeys(formats))
    unknown = [fmt for fmt in formats if fmt not in ("tsv", "parquet")]
    if unknown:
        raise ValueError(f"Unknown output format(s): {', '.join(unknown)}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths: dict[str, Path] = {}

    if "tsv" in formats:
        paths["tsv"] = output_dir / f"{filename_base}.tsv"
        _flatten_list_columns(df).write_csv(paths["tsv"], separator="\t", include_header=True)

    if "parquet" in formats:
        paths["parquet"] = output_dir / f"{filename_base}.parquet"
        df.write_parquet(paths["parquet"], compression="snappy")

    version_pairs = []
    if {"vep_version", "vep_cache_version"} <= set(df.columns) and df.height > 0:
        pairs = df.select(["vep_version", "vep_cache_version"]).unique().sort(
            ["vep_version", "vep_cache_version"]
        )
        version_pairs = pairs.to_dicts()

    provenance = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "annotation_index_version": __version__,
        "output_files": [path.name for path in paths.values()],
        "statistics": {
            "total_summaries": df.height,
            "version_pairs": version_pairs,
        },
        "column_count": len(df.columns),
        "column_names": df.columns,
    }

    provenance_path = output_dir / f"{filename_base}.provenance.yaml"
    with open(provenance_path, "w") as f:
        yaml.dump(provenance, f, default_flow_style=False, sort_keys=False)
    paths["provenance"] = provenance_path

    logger.info(
        "write_summary_output_complete",
        output_dir=str(output_dir),
        formats=formats,
        row_count=df.height,
    )

    return paths
