"""Per-variant consequence pipeline: merge, rank, select.

A pure function of one variant's raw consequence list and the shared,
read-only transcript index. Each raw record is merged exactly once and all
views are selected from that single merged set.
"""

from dataclasses import dataclass, field
from typing import Sequence

from csq_pipeline.consequence.merge import merge_raw_consequence
from csq_pipeline.consequence.rank import RankVector, compute_ranks
from csq_pipeline.consequence.schema import MERGED_COLUMNS, SCHEMA_WIDTH
from csq_pipeline.consequence.select import POLICIES, select_views
from csq_pipeline.fields import join_fields
from csq_pipeline.transcripts import TranscriptIndex


@dataclass
class VariantAnnotation:
    """Merged consequence records of one variant and the selected views.

    Attributes:
        merged: Merged records, in input order, each SCHEMA_WIDTH fields wide
        ranks: Rank vector of each merged record
        views: Winning record index per view prefix (pick, canon, worst, wpc);
            canon is absent when no canonical record won
    """
    merged: list[list[str]]
    ranks: list[RankVector]
    views: dict[str, int] = field(default_factory=dict)

    def consequence_values(self) -> tuple[str, ...]:
        """Merged records as pipe-delimited strings, replacing the raw field."""
        return tuple(join_fields(record) for record in self.merged)

    def view_fields(
        self,
        columns: Sequence[str] = MERGED_COLUMNS,
        skip_empty: bool = True,
    ) -> dict[str, str]:
        """Derived scalar fields, e.g. {"pick_gene": "BRCA2", "worst_Consequence": ...}."""
        fields: dict[str, str] = {}
        for prefix, idx in self.views.items():
            for column, value in zip(columns, self.merged[idx]):
                if skip_empty and value == "":
                    continue
                fields[f"{prefix}_{column}"] = value
        return fields


def annotate_consequences(
    raw_consequences: Sequence[str],
    index: TranscriptIndex,
    schema_width: int = SCHEMA_WIDTH,
) -> VariantAnnotation:
    """Merge, rank and select one variant's consequence records.

    Args:
        raw_consequences: Raw records from the variant's consequence field
        index: Transcript metadata index
        schema_width: Width of merged records

    Returns:
        VariantAnnotation with all four policies applied

    Raises:
        ValueError: If raw_consequences is empty or a record is wider than
            the schema
    """
    if not raw_consequences:
        raise ValueError("Variant has no consequence records")

    merged = [merge_raw_consequence(raw, index, schema_width) for raw in raw_consequences]
    ranks = [compute_ranks(record) for record in merged]
    return VariantAnnotation(
        merged=merged,
        ranks=ranks,
        views=select_views(ranks, POLICIES),
    )
