"""Pydantic models for annotation index configuration."""

import hashlib
import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

OutputFormat = Literal["tsv", "parquet"]


class VersionFilter(BaseModel):
    """Restrict summarization to a single VEP/cache version pair."""

    vep_version: str = Field(
        ...,
        min_length=1,
        description="VEP release to keep (e.g. '90')",
    )
    vep_cache_version: str = Field(
        ...,
        min_length=1,
        description="VEP cache release to keep (e.g. '90')",
    )


class OutputConfig(BaseModel):
    """Where and how summary tables are written."""

    output_dir: Path = Field(
        ...,
        description="Directory for summary tables and provenance",
    )
    filename_base: str = Field(
        default="annotation_index",
        min_length=1,
        description="Base filename without extension",
    )
    formats: list[OutputFormat] = Field(
        default_factory=lambda: ["tsv", "parquet"],
        min_length=1,
        description="Output formats to write",
    )

    @field_validator("output_dir")
    @classmethod
    def create_directory(cls, v: Path) -> Path:
        """Create directory if it doesn't exist."""
        v.mkdir(parents=True, exist_ok=True)
        return v


class IndexConfig(BaseModel):
    """Main annotation index configuration."""

    input_path: Path = Field(
        ...,
        description="Annotation documents (.json, .jsonl, optionally .gz)",
    )
    output: OutputConfig = Field(
        ...,
        description="Output configuration",
    )
    versions: VersionFilter | None = Field(
        default=None,
        description="Optional VEP/cache version pair filter",
    )

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        useful for tracking which settings produced an output.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
