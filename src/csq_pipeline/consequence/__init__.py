"""Consequence merging, ranking and selection."""

from csq_pipeline.consequence.schema import (
    MERGED_COLUMNS,
    METADATA_COLUMNS,
    RAW_COLUMNS,
    SCHEMA_WIDTH,
    format_description,
    parse_format_columns,
)
from csq_pipeline.consequence.merge import merge_consequence, merge_raw_consequence
from csq_pipeline.consequence.rank import UNRANKED, RankVector, compute_ranks
from csq_pipeline.consequence.select import (
    CANONICAL,
    PICK,
    POLICIES,
    WORST,
    WORST_PROTEIN_CODING,
    SelectionPolicy,
    select_index,
    select_views,
)
from csq_pipeline.consequence.pick import LEGACY_COLUMNS, PickLayout, pick_one

__all__ = [
    "MERGED_COLUMNS",
    "METADATA_COLUMNS",
    "RAW_COLUMNS",
    "SCHEMA_WIDTH",
    "format_description",
    "parse_format_columns",
    "merge_consequence",
    "merge_raw_consequence",
    "UNRANKED",
    "RankVector",
    "compute_ranks",
    "CANONICAL",
    "PICK",
    "POLICIES",
    "WORST",
    "WORST_PROTEIN_CODING",
    "SelectionPolicy",
    "select_index",
    "select_views",
    "LEGACY_COLUMNS",
    "PickLayout",
    "pick_one",
]
