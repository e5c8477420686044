"""Variant header handling for the consequence field and derived view fields."""

from pathlib import Path
from typing import Sequence

import pysam

from csq_pipeline.consequence.schema import (
    MERGED_COLUMNS,
    RAW_COLUMNS,
    format_description,
    parse_format_columns,
)
from csq_pipeline.consequence.select import POLICIES, SelectionPolicy

# htslib write modes
WRITE_MODES = {
    "vcf": "w",
    "vcf.gz": "wz",
    "bcf": "wb",
    "ubcf": "wbu",
}

VIEW_DESCRIPTIONS = {
    "pick": "picked csq, canonical->appris->TSL->biotype->severity",
    "canon": "canonical csq",
    "worst": "most severe csq",
    "wpc": "most severe protein coding csq",
}


class ConsequenceHeaderError(ValueError):
    """The input header cannot carry the consequence pipeline."""


def resolve_write_mode(output: Path | str | None, output_format: str | None = None) -> str:
    """pysam write mode for an output path.

    An explicit output_format wins; otherwise the format follows the file
    suffix. Standard output and unknown suffixes get BCF.
    """
    if output_format is not None:
        if output_format not in WRITE_MODES:
            raise ValueError(
                f"Unknown output format {output_format!r}, expected one of {sorted(WRITE_MODES)}"
            )
        return WRITE_MODES[output_format]

    if output is None or str(output) == "-":
        return WRITE_MODES["bcf"]

    name = str(output).lower()
    if name.endswith(".vcf.gz") or name.endswith(".vcf.bgz"):
        return WRITE_MODES["vcf.gz"]
    if name.endswith(".vcf"):
        return WRITE_MODES["vcf"]
    return WRITE_MODES["bcf"]


def consequence_format_columns(header: pysam.VariantHeader, field: str) -> list[str]:
    """Columns named in the consequence field's header description.

    Raises:
        ConsequenceHeaderError: If the header does not declare the field
    """
    if field not in header.info:
        raise ConsequenceHeaderError(f"Header has no INFO/{field} declaration")
    return parse_format_columns(header.info[field].description or "")


def check_raw_columns(columns: Sequence[str]) -> list[str]:
    """Columns of an input layout that differ from the raw consequence layout.

    Raises:
        ConsequenceHeaderError: If the field already holds merged records
    """
    if list(columns) == list(MERGED_COLUMNS):
        raise ConsequenceHeaderError(
            "Consequence field already carries transcript metadata; merging twice is not supported"
        )
    return [
        column
        for position, column in enumerate(columns)
        if position >= len(RAW_COLUMNS) or RAW_COLUMNS[position] != column
    ]


def rebuild_header(header: pysam.VariantHeader, drop_info: str | None = None) -> pysam.VariantHeader:
    """New header with the records and samples of ``header``.

    The INFO declaration named ``drop_info`` is left out so it can be
    declared again; htslib keeps an ID registered after remove_header.
    """
    out = pysam.VariantHeader()
    for record in header.records:
        if record.key == "INFO" and record.get("ID") == drop_info:
            continue
        out.add_record(record)
    for sample in header.samples:
        out.add_sample(sample)
    return out


def build_mcsq_header(
    header: pysam.VariantHeader,
    field: str,
    columns: Sequence[str] = MERGED_COLUMNS,
    policies: Sequence[SelectionPolicy] = POLICIES,
) -> pysam.VariantHeader:
    """Header for merged output, built from the input header.

    The consequence field is re-declared with the merged Format description
    and one Number=1 String field is declared per view and column.
    """
    out = rebuild_header(header, drop_info=field)
    out.info.add(field, ".", "String", format_description(tuple(columns)))
    for column in columns:
        for policy in policies:
            description = VIEW_DESCRIPTIONS.get(policy.prefix, policy.name)
            out.info.add(f"{policy.prefix}_{column}", 1, "String", f"{description} {column}")
    return out


def build_pick_header(header: pysam.VariantHeader, columns: Sequence[str]) -> pysam.VariantHeader:
    """Header declaring pick_<column> for each consequence column not yet declared."""
    out = rebuild_header(header)
    for column in columns:
        key = f"pick_{column}"
        if key not in out.info:
            out.info.add(key, 1, "String", f"picked one consequence, canonical->appris->TSL {column}")
    return out
