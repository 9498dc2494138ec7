"""Tests for summary table writers."""

import polars as pl
import pytest
import yaml

from annotation_index.aggregate import summaries_to_frame
from annotation_index.output import write_summary_output
from annotation_index.summary import AnnotationSummary


@pytest.fixture
def summary_df():
    summaries = {
        ("1_10_A_T", "90", "90"): AnnotationSummary(
            "90", "90", sift_range=(0.1, 0.3), so_accessions={1583, 1575}, xref_ids={"rs1"}
        ),
        ("1_20_G_C", "90", "90"): AnnotationSummary("90", "90", polyphen_range=(0.5, 0.7)),
    }
    return summaries_to_frame(summaries)


def test_write_both_formats(summary_df, tmp_path):
    paths = write_summary_output(summary_df, tmp_path / "out", filename_base="idx")

    assert paths["tsv"].name == "idx.tsv"
    assert paths["parquet"].name == "idx.parquet"
    assert paths["provenance"].name == "idx.provenance.yaml"
    for path in paths.values():
        assert path.exists()


def test_tsv_joins_list_columns(summary_df, tmp_path):
    paths = write_summary_output(summary_df, tmp_path, formats=["tsv"])

    tsv = pl.read_csv(paths["tsv"], separator="\t")
    first = tsv.row(0, named=True)
    assert first["so_accessions"] == "1575,1583"
    assert first["xref_ids"] == "rs1"
    assert "parquet" not in paths


def test_parquet_keeps_lists_and_nulls(summary_df, tmp_path):
    paths = write_summary_output(summary_df, tmp_path, formats=["parquet"])

    df = pl.read_parquet(paths["parquet"])
    assert df["so_accessions"].to_list()[0] == [1575, 1583]
    assert df["sift_min"].to_list()[1] is None
    assert df["polyphen_max"].to_list()[1] == 0.7


def test_provenance_sidecar(summary_df, tmp_path):
    paths = write_summary_output(summary_df, tmp_path, filename_base="idx")

    with open(paths["provenance"]) as f:
        provenance = yaml.safe_load(f)

    assert provenance["statistics"]["total_summaries"] == 2
    assert provenance["statistics"]["version_pairs"] == [
        {"vep_version": "90", "vep_cache_version": "90"}
    ]
    assert provenance["output_files"] == ["idx.tsv", "idx.parquet"]
    assert "generated_at" in provenance


def test_unknown_format_rejected(summary_df, tmp_path):
    with pytest.raises(ValueError, match="csv"):
        write_summary_output(summary_df, tmp_path, formats=["csv"])
