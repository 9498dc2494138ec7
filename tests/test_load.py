"""Tests for reading annotation documents from disk."""

import gzip
import json

import pytest
from pydantic import ValidationError

from annotation_index.load import read_annotation_documents

RECORD = {
    "chromosome": "X",
    "start": 5000,
    "end": 5000,
    "reference": "G",
    "alternate": "A",
    "vep_version": "90",
    "vep_cache_version": "90",
    "consequence_types": [
        {
            "gene_name": "BRCA2",
            "so_accessions": [1583],
            "sift": {"score": 0.02, "description": "deleterious"},
        }
    ],
    "xrefs": [{"id": "rs80357906", "src": "dbSNP"}],
}


def test_read_jsonl(tmp_path):
    path = tmp_path / "annotations.jsonl"
    second = dict(RECORD, start=6000, end=6000)
    path.write_text(json.dumps(RECORD) + "\n\n" + json.dumps(second) + "\n")

    documents = list(read_annotation_documents(path))

    assert [d.start for d in documents] == [5000, 6000]
    assert documents[0].consequence_types[0].sift.score == 0.02
    assert documents[0].xrefs[0].id == "rs80357906"
    assert documents[0].variant_id == "X_5000_G_A"
    assert documents[0].document_id == "X_5000_G_A_90_90"


def test_read_json_array(tmp_path):
    path = tmp_path / "annotations.json"
    path.write_text(json.dumps([RECORD, RECORD]))

    assert len(list(read_annotation_documents(path))) == 2


def test_read_json_single_object(tmp_path):
    path = tmp_path / "annotation.json"
    path.write_text(json.dumps(RECORD))

    documents = list(read_annotation_documents(path))

    assert len(documents) == 1
    assert documents[0].consequence_types[0].so_accessions == {1583}


def test_read_gzipped_jsonl(tmp_path):
    path = tmp_path / "annotations.jsonl.gz"
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(json.dumps(RECORD) + "\n")

    documents = list(read_annotation_documents(path))

    assert len(documents) == 1
    assert documents[0].chromosome == "X"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        list(read_annotation_documents(tmp_path / "missing.jsonl"))


def test_invalid_record_raises(tmp_path):
    path = tmp_path / "annotations.jsonl"
    bad = {k: v for k, v in RECORD.items() if k != "vep_version"}
    path.write_text(json.dumps(RECORD) + "\n" + json.dumps(bad) + "\n")

    with pytest.raises(ValidationError) as exc_info:
        list(read_annotation_documents(path))

    assert "vep_version" in str(exc_info.value)
