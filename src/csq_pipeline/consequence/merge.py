"""Merge raw consequence records with transcript metadata into the fixed-width schema."""

from typing import Sequence

from csq_pipeline.consequence.schema import METADATA_WIDTH, SCHEMA_WIDTH, TRANSCRIPT
from csq_pipeline.fields import field_at, split_fields
from csq_pipeline.transcripts import TranscriptIndex, TranscriptMetadata


def merge_consequence(
    raw_fields: Sequence[str],
    schema_width: int = SCHEMA_WIDTH,
    metadata: TranscriptMetadata | None = None,
) -> list[str]:
    """Pad a raw consequence record to the schema width and fill the metadata block.

    Raw fields occupy the leading positions, missing positions become empty
    strings, and the trailing metadata positions are overwritten with the
    transcript's metadata (or empty strings when there is none). This lets
    records from annotators emitting fewer fields line up column for column.

    Args:
        raw_fields: Fields of one raw record (may be any prefix of the schema)
        schema_width: Number of fields in the output record
        metadata: Metadata of the record's transcript, if known

    Returns:
        List of exactly schema_width strings

    Raises:
        ValueError: If the raw record is wider than the schema, or the schema
            cannot hold the metadata block
    """
    if schema_width < METADATA_WIDTH:
        raise ValueError(
            f"Schema width {schema_width} cannot hold {METADATA_WIDTH} metadata fields"
        )
    if len(raw_fields) > schema_width:
        raise ValueError(
            f"Consequence record has {len(raw_fields)} fields, schema width is {schema_width}"
        )

    merged = list(raw_fields) + [""] * (schema_width - len(raw_fields))
    if metadata is not None:
        merged[schema_width - METADATA_WIDTH:] = metadata.to_fields()
    else:
        merged[schema_width - METADATA_WIDTH:] = [""] * METADATA_WIDTH
    return merged


def merge_raw_consequence(
    raw: str,
    index: TranscriptIndex,
    schema_width: int = SCHEMA_WIDTH,
) -> list[str]:
    """Tokenize one raw consequence string and merge it with its transcript's metadata.

    The transcript is looked up by its unversioned ID. Records without a
    transcript position (e.g. bcftools ``@<pos>`` back-references) and
    transcripts absent from the index get an empty metadata block.
    """
    raw_fields = split_fields(raw)
    transcript = field_at(raw_fields, TRANSCRIPT)
    metadata = index.lookup(transcript) if transcript else None
    return merge_consequence(raw_fields, schema_width, metadata)
