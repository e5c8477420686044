"""Stream variant records through the consequence pipeline."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, Iterator

import pysam
import structlog

from csq_pipeline.annotation import ConsequenceAnnotator
from csq_pipeline.consequence.pick import LEGACY_COLUMNS, PickLayout, pick_one
from csq_pipeline.fields import split_fields
from csq_pipeline.transcripts import TranscriptIndex
from csq_pipeline.vcf.header import (
    build_mcsq_header,
    build_pick_header,
    check_raw_columns,
    consequence_format_columns,
    resolve_write_mode,
)

logger = structlog.get_logger()

PROGRESS_EVERY = 100_000


@dataclass
class AnnotationStats:
    """Counts for one pass over a variant stream.

    Attributes:
        records: Records read
        annotated: Records whose consequence field was rewritten
        passthrough: Records without the consequence field, written unchanged
        canonical_views: Records where a canonical view was emitted
    """
    records: int = 0
    annotated: int = 0
    passthrough: int = 0
    canonical_views: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def _path_arg(path: Path | str | None) -> str:
    return "-" if path is None else str(path)


def _consequences(record: pysam.VariantRecord, field: str) -> tuple[str, ...]:
    """Raw consequence records of a variant (empty when the field is absent)."""
    values = record.info.get(field)
    if values is None:
        return ()
    if isinstance(values, str):
        values = split_fields(values, ",")
    return tuple(v for v in values if v)


def _batches(records: Iterable[pysam.VariantRecord], size: int) -> Iterator[list[pysam.VariantRecord]]:
    batch: list[pysam.VariantRecord] = []
    for record in records:
        batch.append(record)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def annotate_vcf(
    input_path: Path | str | None,
    output_path: Path | str | None,
    index: TranscriptIndex,
    field: str = "BCSQ",
    workers: int = 1,
    batch_size: int = 1000,
    threads: int = 0,
    output_format: str | None = None,
) -> AnnotationStats:
    """Merge consequences with transcript metadata and write the four views.

    Records without the consequence field pass through unchanged. For every
    other record the field is replaced with the merged records and
    pick_/canon_/worst_/wpc_ fields are set from the selected records
    (empty values are not written).

    Args:
        input_path: Input VCF/BCF, or None/"-" for stdin
        output_path: Output path, or None/"-" for stdout
        index: Transcript metadata index
        field: INFO field holding bcftools/csq consequences
        workers: Worker processes for the per-variant pipeline
        batch_size: Variants per worker-pool batch
        threads: htslib compression threads
        output_format: Force vcf, vcf.gz, bcf or ubcf

    Returns:
        AnnotationStats for the pass

    Raises:
        ConsequenceHeaderError: If the input header lacks the field or
            already carries merged records
    """
    stats = AnnotationStats()
    mode = resolve_write_mode(output_path, output_format)

    with pysam.VariantFile(_path_arg(input_path), "r", threads=threads) as vcf_in:
        columns = consequence_format_columns(vcf_in.header, field)
        unexpected = check_raw_columns(columns)
        if unexpected:
            logger.warning(
                "consequence_layout_mismatch",
                field=field,
                columns=columns,
                unexpected=unexpected,
            )

        header = build_mcsq_header(vcf_in.header, field)
        logger.info(
            "annotate_start",
            input=_path_arg(input_path),
            output=_path_arg(output_path),
            mode=mode,
            workers=workers,
        )

        with pysam.VariantFile(_path_arg(output_path), mode, header=header, threads=threads) as vcf_out, \
                ConsequenceAnnotator(index, workers=workers) as annotator:
            for batch in _batches(vcf_in, batch_size):
                raws = [_consequences(record, field) for record in batch]
                annotations = iter(annotator.annotate_many([raw for raw in raws if raw]))

                for record, raw in zip(batch, raws):
                    stats.records += 1
                    if stats.records % PROGRESS_EVERY == 0:
                        logger.info("annotate_progress", **stats.to_dict())
                    record.translate(vcf_out.header)

                    if not raw:
                        stats.passthrough += 1
                        vcf_out.write(record)
                        continue

                    annotation = next(annotations)
                    record.info[field] = annotation.consequence_values()
                    for key, value in annotation.view_fields().items():
                        record.info[key] = value

                    stats.annotated += 1
                    if "canon" in annotation.views:
                        stats.canonical_views += 1
                    vcf_out.write(record)

    logger.info("annotate_complete", **stats.to_dict())
    return stats


def pick_vcf(
    input_path: Path | str | None,
    output_path: Path | str | None,
    field: str = "BCSQ",
    threads: int = 0,
    output_format: str | None = None,
) -> AnnotationStats:
    """Pick one consequence per record and write it as pick_<column> fields.

    Column names and the positions of CANONICAL/appris/TSL come from the
    field's Format description; headers without one use LEGACY_COLUMNS.

    Raises:
        ConsequenceHeaderError: If the input header lacks the field
    """
    stats = AnnotationStats()
    mode = resolve_write_mode(output_path, output_format)

    with pysam.VariantFile(_path_arg(input_path), "r", threads=threads) as vcf_in:
        columns = consequence_format_columns(vcf_in.header, field) or list(LEGACY_COLUMNS)
        layout = PickLayout.from_columns(columns)
        header = build_pick_header(vcf_in.header, columns)
        logger.info("pick_start", columns=columns, layout=layout)

        with pysam.VariantFile(_path_arg(output_path), mode, header=header, threads=threads) as vcf_out:
            for record in vcf_in:
                stats.records += 1
                raw = _consequences(record, field)
                record.translate(vcf_out.header)

                if not raw:
                    stats.passthrough += 1
                    vcf_out.write(record)
                    continue

                picked = split_fields(pick_one(raw, layout))
                for column, value in zip(columns, picked):
                    if value:
                        record.info[f"pick_{column}"] = value
                stats.annotated += 1
                vcf_out.write(record)

    logger.info("pick_complete", **stats.to_dict())
    return stats
