"""Variant stream boundary: header rewriting and record streaming via pysam."""

from csq_pipeline.vcf.header import (
    ConsequenceHeaderError,
    build_mcsq_header,
    build_pick_header,
    consequence_format_columns,
    resolve_write_mode,
)
from csq_pipeline.vcf.stream import AnnotationStats, annotate_vcf, pick_vcf

__all__ = [
    "ConsequenceHeaderError",
    "build_mcsq_header",
    "build_pick_header",
    "consequence_format_columns",
    "resolve_write_mode",
    "AnnotationStats",
    "annotate_vcf",
    "pick_vcf",
]
