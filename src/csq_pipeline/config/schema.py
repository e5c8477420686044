"""Pydantic models for pipeline configuration."""

import hashlib
import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

OutputFormat = Literal["vcf", "vcf.gz", "bcf", "ubcf"]


class AnnotationConfig(BaseModel):
    """Settings for the per-variant consequence pipeline."""

    field: str = Field(
        default="BCSQ",
        min_length=1,
        description="INFO field holding the per-transcript consequence list",
    )
    batch_size: int = Field(
        default=1000,
        ge=1,
        description="Number of variants handed to the worker pool at once",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Worker processes for merge/rank/select (1 = in-process)",
    )


class IOConfig(BaseModel):
    """Settings for the variant-record reader and writer."""

    threads: int = Field(
        default=0,
        ge=0,
        description="htslib compression threads for reader and writer",
    )
    output_format: OutputFormat | None = Field(
        default=None,
        description="Force output format; inferred from the output suffix when unset",
    )


class PipelineConfig(BaseModel):
    """Main pipeline configuration."""

    gff_path: Path | None = Field(
        default=None,
        description="GFF3 gene-feature file used to build the transcript index",
    )
    annotation: AnnotationConfig = Field(
        default_factory=AnnotationConfig,
        description="Consequence pipeline configuration",
    )
    io: IOConfig = Field(
        default_factory=IOConfig,
        description="Variant stream I/O configuration",
    )
    provenance: bool = Field(
        default=False,
        description="Write a <output>.provenance.json sidecar next to file outputs",
    )

    @field_validator("gff_path")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand ~ in the GFF path."""
        if v is None:
            return v
        return v.expanduser()

    def config_hash(self) -> str:
        """
        Compute SHA-256 hash of the configuration.

        Returns a deterministic hash based on all config values,
        recorded in provenance sidecars to tie outputs to settings.
        """
        config_dict = self.model_dump(mode="python")
        config_json = json.dumps(
            config_dict,
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(config_json.encode()).hexdigest()
