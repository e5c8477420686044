"""Select representative consequence records using ordered rank comparisons."""

from dataclasses import dataclass
from typing import Sequence

from csq_pipeline.consequence.rank import UNRANKED_VECTOR, RankVector


@dataclass(frozen=True)
class SelectionPolicy:
    """Priority order of rank components for one output view.

    Attributes:
        name: Human-readable policy name
        prefix: Prefix of the derived INFO fields (e.g. "pick" -> pick_gene)
        order: RankVector field names, compared first to last
        canonical_only: Emit the view only when the winner is canonical
    """
    name: str
    prefix: str
    order: tuple[str, ...]
    canonical_only: bool = False

    def __post_init__(self):
        unknown = set(self.order) - set(RankVector._fields)
        if unknown:
            raise ValueError(f"Unknown rank components in policy {self.name}: {sorted(unknown)}")


PICK = SelectionPolicy(
    name="pick",
    prefix="pick",
    order=("readthrough", "canon", "appris", "tsl", "biotype", "severity"),
)
CANONICAL = SelectionPolicy(
    name="canonical",
    prefix="canon",
    order=PICK.order,
    canonical_only=True,
)
WORST = SelectionPolicy(
    name="worst",
    prefix="worst",
    order=("readthrough", "severity", "canon", "appris", "tsl", "biotype"),
)
WORST_PROTEIN_CODING = SelectionPolicy(
    name="worst_protein_coding",
    prefix="wpc",
    order=("readthrough", "biotype", "severity", "canon", "appris", "tsl"),
)

POLICIES = (PICK, CANONICAL, WORST, WORST_PROTEIN_CODING)


def _beats(candidate: RankVector, best: RankVector, order: tuple[str, ...]) -> bool:
    """True if the first differing component in ``order`` is lower for the candidate."""
    for component in order:
        c = getattr(candidate, component)
        b = getattr(best, component)
        if c < b:
            return True
        if c > b:
            return False
    # Full tie: the record seen first stays
    return False


def select_index(ranks: Sequence[RankVector], policy: SelectionPolicy) -> int | None:
    """Index of the winning record under a policy.

    Single left-to-right scan starting from an all-UNRANKED best at index 0.
    For canonical_only policies, returns None when the winner is not
    canonical.

    Raises:
        ValueError: If ranks is empty
    """
    if not ranks:
        raise ValueError("Cannot select from an empty consequence list")

    best = UNRANKED_VECTOR
    best_idx = 0
    for idx, candidate in enumerate(ranks):
        if _beats(candidate, best, policy.order):
            best = candidate
            best_idx = idx

    if policy.canonical_only and best.canon != 1:
        return None
    return best_idx


def select_views(
    ranks: Sequence[RankVector],
    policies: Sequence[SelectionPolicy] = POLICIES,
) -> dict[str, int]:
    """Winning index per policy prefix; canonical-only views may be absent."""
    views: dict[str, int] = {}
    for policy in policies:
        idx = select_index(ranks, policy)
        if idx is not None:
            views[policy.prefix] = idx
    return views
