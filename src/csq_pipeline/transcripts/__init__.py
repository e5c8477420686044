"""Transcript metadata index built from GFF3 transcript features."""

from csq_pipeline.transcripts.models import (
    UNCERTAIN_START_END_TAGS,
    TranscriptMetadata,
)
from csq_pipeline.transcripts.index import (
    TranscriptIndex,
    TranscriptIndexError,
    build_transcript_index,
    read_gff_transcripts,
)

__all__ = [
    "UNCERTAIN_START_END_TAGS",
    "TranscriptMetadata",
    "TranscriptIndex",
    "TranscriptIndexError",
    "build_transcript_index",
    "read_gff_transcripts",
]
