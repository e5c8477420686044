"""csq-pipeline: transcript-aware consequence merging and picking for bcftools/csq output."""

__version__ = "0.1.0"
