"""Per-variant annotation pipeline and worker pool."""

from csq_pipeline.annotation.pipeline import VariantAnnotation, annotate_consequences
from csq_pipeline.annotation.workers import ConsequenceAnnotator

__all__ = [
    "VariantAnnotation",
    "annotate_consequences",
    "ConsequenceAnnotator",
]
