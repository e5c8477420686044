"""Provenance tracking for annotated outputs."""

from csq_pipeline.persistence.provenance import ProvenanceTracker

__all__ = ["ProvenanceTracker"]
