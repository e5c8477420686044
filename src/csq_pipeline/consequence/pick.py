"""Pick a single consequence record with three ordered categorical filters.

Independent of the multi-view selector: it reads its own field positions
and narrows the candidate set filter by filter instead of scanning rank
vectors.
"""

from dataclasses import dataclass
from typing import Callable, Sequence

from csq_pipeline.consequence.rank import appris_rank, canon_rank, tsl_rank
from csq_pipeline.fields import field_at, split_fields

# Consequence layout written by older mcsq releases, before gene_id and
# readthrough were part of the metadata block
LEGACY_COLUMNS = (
    "Consequence",
    "gene",
    "transcript",
    "biotype",
    "strand",
    "amino_acid_change",
    "dna_change",
    "CANONICAL",
    "appris",
    "ccds",
    "unknown_start_end",
    "TSL",
)


@dataclass(frozen=True)
class PickLayout:
    """Positions of the fields read by pick_one."""
    canonical: int = LEGACY_COLUMNS.index("CANONICAL")
    appris: int = LEGACY_COLUMNS.index("appris")
    tsl: int = LEGACY_COLUMNS.index("TSL")

    @classmethod
    def from_columns(cls, columns: Sequence[str]) -> "PickLayout":
        """Layout for a header Format description.

        Falls back to the legacy positions unless all three columns are named.
        """
        names = list(columns)
        if all(name in names for name in ("CANONICAL", "appris", "TSL")):
            return cls(
                canonical=names.index("CANONICAL"),
                appris=names.index("appris"),
                tsl=names.index("TSL"),
            )
        return cls()

    def criteria(self) -> list[Callable[[list[str]], int]]:
        """Rank functions in filter order: canonical, APPRIS, TSL."""
        return [
            lambda fields: canon_rank(field_at(fields, self.canonical)),
            lambda fields: appris_rank(field_at(fields, self.appris)),
            lambda fields: tsl_rank(field_at(fields, self.tsl)),
        ]


def pick_one(candidates: Sequence[str], layout: PickLayout = PickLayout()) -> str:
    """Pick one consequence record.

    For each criterion, keep every candidate reaching the minimum rank of
    the current set. Returns as soon as a single candidate remains, else
    the first survivor after all three criteria.

    Args:
        candidates: Raw pipe-delimited consequence records
        layout: Field positions of the ranked columns

    Returns:
        The picked record, unchanged

    Raises:
        ValueError: If candidates is empty
    """
    if not candidates:
        raise ValueError("Cannot pick from an empty consequence list")

    survivors = [(candidate, split_fields(candidate)) for candidate in candidates]
    for criterion in layout.criteria():
        if len(survivors) == 1:
            return survivors[0][0]
        ranks = [criterion(fields) for _, fields in survivors]
        best = min(ranks)
        survivors = [s for s, rank in zip(survivors, ranks) if rank == best]

    return survivors[0][0]
