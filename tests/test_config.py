"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from annotation_index.config import load_config, load_config_with_overrides
from annotation_index.config.schema import IndexConfig


@pytest.fixture
def config_file(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"""
input_path: {tmp_path / "annotations.jsonl"}
output:
  output_dir: {tmp_path / "index"}
  filename_base: test_index
  formats:
    - parquet
versions:
  vep_version: "90"
  vep_cache_version: "90"
""")
    return config_path


def test_load_default_config():
    """Test loading the shipped default configuration."""
    config = load_config(Path(__file__).parent.parent / "config" / "default.yaml")

    assert isinstance(config, IndexConfig)
    assert config.output.filename_base == "annotation_index"
    assert config.output.formats == ["tsv", "parquet"]
    assert config.versions is None


def test_load_valid_config(config_file, tmp_path):
    config = load_config(config_file)

    assert config.input_path == tmp_path / "annotations.jsonl"
    assert config.output.formats == ["parquet"]
    assert config.versions.vep_version == "90"


def test_config_creates_output_directory(config_file, tmp_path):
    assert not (tmp_path / "index").exists()

    load_config(config_file)

    assert (tmp_path / "index").is_dir()


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_config_missing_field(tmp_path):
    """Test that missing required field raises ValidationError."""
    invalid = tmp_path / "invalid.yaml"
    invalid.write_text(f"""
output:
  output_dir: {tmp_path / "index"}
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(invalid)

    assert "input_path" in str(exc_info.value)


def test_invalid_output_format(tmp_path):
    invalid = tmp_path / "invalid.yaml"
    invalid.write_text(f"""
input_path: annotations.jsonl
output:
  output_dir: {tmp_path / "index"}
  formats:
    - csv
""")

    with pytest.raises(ValidationError):
        load_config(invalid)


def test_blank_version_filter_rejected(tmp_path):
    invalid = tmp_path / "invalid.yaml"
    invalid.write_text(f"""
input_path: annotations.jsonl
output:
  output_dir: {tmp_path / "index"}
versions:
  vep_version: ""
  vep_cache_version: "90"
""")

    with pytest.raises(ValidationError) as exc_info:
        load_config(invalid)

    assert "vep_version" in str(exc_info.value)


def test_overrides_nested_keys(config_file, tmp_path):
    config = load_config_with_overrides(
        config_file,
        {
            "input_path": tmp_path / "other.jsonl",
            "output.formats": ["tsv"],
        },
    )

    assert config.input_path == tmp_path / "other.jsonl"
    assert config.output.formats == ["tsv"]
    assert config.output.filename_base == "test_index"


def test_config_hash_deterministic(config_file):
    """Test that config hash is deterministic and changes with config."""
    config1 = load_config(config_file)
    config2 = load_config(config_file)

    assert config1.config_hash() == config2.config_hash()
    assert len(config1.config_hash()) == 64

    config3 = load_config_with_overrides(config_file, {"versions.vep_version": "91"})
    assert config3.config_hash() != config1.config_hash()


def test_overridden_output_dir_is_the_only_one_created(config_file, tmp_path):
    """Test that the config file's output_dir is not created when overridden."""
    other_dir = tmp_path / "elsewhere"

    config = load_config_with_overrides(config_file, {"output.output_dir": other_dir})

    assert config.output.output_dir == other_dir
    assert other_dir.is_dir()
    assert not (tmp_path / "index").exists()


def test_overrides_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_with_overrides(tmp_path / "nope.yaml", {"input_path": "x.jsonl"})
