"""Fold batches of annotation records into per-variant summaries."""

from functools import reduce
from typing import Iterable

import polars as pl
import structlog

from annotation_index.models import AnnotationDocument, AnnotationSource
from annotation_index.summary import AnnotationSummary

logger = structlog.get_logger()

# (variant_id, vep_version, vep_cache_version)
SummaryKey = tuple[str, str, str]

SUMMARY_SCHEMA = {
    "variant_id": pl.String,
    "vep_version": pl.String,
    "vep_cache_version": pl.String,
    "sift_min": pl.Float64,
    "sift_max": pl.Float64,
    "polyphen_min": pl.Float64,
    "polyphen_max": pl.Float64,
    "so_accessions": pl.List(pl.Int64),
    "xref_ids": pl.List(pl.String),
}


def summarize_annotations(annotations: Iterable[AnnotationSource]) -> AnnotationSummary:
    """Fold annotation records into a single summary.

    Versions are taken from the first record.

    Raises:
        ValueError: If annotations is empty
    """
    iterator = iter(annotations)
    first = next(iterator, None)
    if first is None:
        raise ValueError("Cannot summarize an empty collection of annotations")

    return reduce(
        AnnotationSummary.concatenate,
        iterator,
        AnnotationSummary.from_annotation(first),
    )


def merge_summaries(summaries: Iterable[AnnotationSummary]) -> AnnotationSummary:
    """Left-fold summaries with concatenate.

    Raises:
        ValueError: If summaries is empty
    """
    iterator = iter(summaries)
    first = next(iterator, None)
    if first is None:
        raise ValueError("Cannot merge an empty collection of summaries")
    return reduce(AnnotationSummary.concatenate, iterator, first)


def filter_by_versions(
    documents: Iterable[AnnotationDocument],
    vep_version: str,
    vep_cache_version: str,
) -> list[AnnotationDocument]:
    """Keep only documents annotated with the given VEP/cache version pair."""
    documents = list(documents)
    kept = [
        document
        for document in documents
        if document.vep_version == vep_version
        and document.vep_cache_version == vep_cache_version
    ]
    logger.info(
        "filter_by_versions",
        vep_version=vep_version,
        vep_cache_version=vep_cache_version,
        input_count=len(documents),
        kept_count=len(kept),
    )
    return kept


def build_variant_summaries(
    documents: Iterable[AnnotationDocument],
) -> dict[SummaryKey, AnnotationSummary]:
    """Build one summary per variant and version pair.

    Documents sharing (variant_id, vep_version, vep_cache_version) are folded
    together; the order of documents does not affect the result.

    Args:
        documents: Annotation documents, in any order

    Returns:
        Dict keyed by (variant_id, vep_version, vep_cache_version)
    """
    logger.info("build_variant_summaries_start")

    summaries: dict[SummaryKey, AnnotationSummary] = {}
    document_count = 0

    for document in documents:
        document_count += 1
        key = (document.variant_id, document.vep_version, document.vep_cache_version)
        existing = summaries.get(key)
        if existing is None:
            summaries[key] = AnnotationSummary.from_annotation(document)
        else:
            summaries[key] = existing.concatenate(document)

    logger.info(
        "build_variant_summaries_complete",
        document_count=document_count,
        summary_count=len(summaries),
    )
    return summaries


def summaries_to_frame(summaries: dict[SummaryKey, AnnotationSummary]) -> pl.DataFrame:
    """Tabulate summaries as a polars DataFrame.

    Absent ranges become NULL min/max columns (not 0). Set columns are sorted
    lists so the table is deterministic.

    Args:
        summaries: Output of build_variant_summaries

    Returns:
        DataFrame with SUMMARY_SCHEMA columns, sorted by variant_id and versions
    """
    rows = []
    for (variant_id, _, _), summary in summaries.items():
        sift = summary.sift_range or (None, None)
        polyphen = summary.polyphen_range or (None, None)
        rows.append({
            "variant_id": variant_id,
            "vep_version": summary.vep_version,
            "vep_cache_version": summary.vep_cache_version,
            "sift_min": sift[0],
            "sift_max": sift[1],
            "polyphen_min": polyphen[0],
            "polyphen_max": polyphen[1],
            "so_accessions": sorted(summary.so_accessions),
            "xref_ids": sorted(summary.xref_ids),
        })

    df = pl.DataFrame(rows, schema=SUMMARY_SCHEMA)
    return df.sort(["variant_id", "vep_version", "vep_cache_version"])
