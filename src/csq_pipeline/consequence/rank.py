"""Categorical ranks of merged consequence records.

Every rank is a small integer where lower means higher priority and
UNRANKED (99) means not applicable. Values missing from a table are
UNRANKED, never an error.
"""

from types import MappingProxyType
from typing import NamedTuple, Sequence

from csq_pipeline.consequence.schema import (
    APPRIS,
    BIOTYPE,
    CANONICAL,
    CONSEQUENCE,
    READTHROUGH,
    TSL,
)
from csq_pipeline.fields import field_at, split_terms

UNRANKED = 99

CANONICAL_VALUE = "YES"
PROTEIN_CODING = "protein_coding"
READTHROUGH_VALUE = "readthrough_transcript"

APPRIS_RANKS = MappingProxyType({
    "principal_1": 1,
    "principal_2": 2,
    "principal_3": 3,
    "principal_4": 4,
    "principal_5": 5,
    "alternative_1": 6,
    "alternative_2": 7,
})

TSL_RANKS = MappingProxyType({str(level): level for level in range(1, 6)})

# bcftools/csq consequence terms, most severe first. Keys are lower-cased.
SEVERITY_RANKS = MappingProxyType({
    "transcript_ablation": 1,
    "splice_acceptor": 2,
    "splice_donor": 2,
    "stop_gained": 3,
    "frameshift": 3,
    "stop_lost": 3,
    "start_lost": 3,
    "disruptive": 4,
    "exon_loss": 5,
    "transcript_amplification": 6,
    "inframe_altering": 7,
    "inframe_insertion": 7,
    "inframe_deletion": 7,
    "missense": 7,
    "protein_altering": 7,
    "inframe": 7,
    "splice_region": 8,
    "incomplete_terminal_codon": 9,
    "synonymous": 10,
    "stop_retained": 10,
    "start_retained": 10,
    "coding_sequence": 11,
    "mature_mirna": 11,
    "5_prime_utr": 12,
    "3_prime_utr": 12,
    "non_coding_transcript_exon": 13,
    "intron": 14,
    "nmd_transcript": 14,
    "non_coding": 15,
    "non_coding_transcript": 15,
    "downstream": 16,
    "upstream": 16,
    # Sequence Ontology spellings of the same classes
    "downstream_gene": 16,
    "upstream_gene": 16,
    "tf_binding_site": 17,
    "tfbs": 17,
    "regulatory": 18,
    "regulatory_region": 18,
    "feature_truncation": 19,
    "feature_elongation": 19,
    "intergenic": 20,
})

SO_SUFFIX = "_variant"


class RankVector(NamedTuple):
    """Per-record ranks compared by the selection policies."""

    canon: int
    appris: int
    tsl: int
    severity: int
    biotype: int
    readthrough: int


UNRANKED_VECTOR = RankVector(*([UNRANKED] * len(RankVector._fields)))


def canon_rank(value: str) -> int:
    return 1 if value == CANONICAL_VALUE else UNRANKED


def appris_rank(value: str) -> int:
    return APPRIS_RANKS.get(value, UNRANKED)


def tsl_rank(value: str) -> int:
    return TSL_RANKS.get(value, UNRANKED)


def term_rank(term: str) -> int:
    """Severity of one consequence term.

    Accepts the bcftools spelling (``missense``) and the Sequence Ontology
    spelling (``missense_variant``), case-insensitively.
    """
    key = term.strip().lower()
    if key in SEVERITY_RANKS:
        return SEVERITY_RANKS[key]
    if key.endswith(SO_SUFFIX):
        return SEVERITY_RANKS.get(key[: -len(SO_SUFFIX)], UNRANKED)
    return UNRANKED


def severity_rank(value: str) -> int:
    """Most severe rank among the ``&``-joined consequence terms."""
    return min((term_rank(term) for term in split_terms(value)), default=UNRANKED)


def biotype_rank(value: str) -> int:
    return 1 if value == PROTEIN_CODING else UNRANKED


def readthrough_rank(value: str) -> int:
    """Readthrough transcripts are pushed behind everything else."""
    return UNRANKED if value == READTHROUGH_VALUE else 1


def compute_ranks(merged: Sequence[str]) -> RankVector:
    """Rank a merged consequence record. Pure; positions past the end read as empty."""
    return RankVector(
        canon=canon_rank(field_at(merged, CANONICAL)),
        appris=appris_rank(field_at(merged, APPRIS)),
        tsl=tsl_rank(field_at(merged, TSL)),
        severity=severity_rank(field_at(merged, CONSEQUENCE)),
        biotype=biotype_rank(field_at(merged, BIOTYPE)),
        readthrough=readthrough_rank(field_at(merged, READTHROUGH)),
    )
