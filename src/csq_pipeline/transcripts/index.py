"""Build the transcript metadata index from a GFF3 gene-feature file."""

import gzip
from pathlib import Path
from typing import IO, Iterable

import polars as pl
import structlog

from csq_pipeline.fields import unversioned
from csq_pipeline.transcripts.models import (
    APPRIS_PREFIX,
    CANONICAL_TAG,
    CCDS_TAG,
    READTHROUGH_TAG,
    UNCERTAIN_START_END_TAGS,
    TranscriptMetadata,
)

logger = structlog.get_logger()

GFF_COLUMNS = [
    "seqid",
    "source",
    "type",
    "start",
    "end",
    "score",
    "strand",
    "phase",
    "attributes",
]

TRANSCRIPT_FEATURE = "transcript"


class TranscriptIndexError(ValueError):
    """A transcript feature cannot be keyed (no transcript_id attribute)."""


def _attribute(key: str) -> pl.Expr:
    """Extract the value of one key=value attribute (null when absent)."""
    return pl.col("attributes").str.extract(rf"(?:^|;)\s*{key}=([^;]*)", 1)


def _has_tag(tag: str) -> pl.Expr:
    return pl.col("tags").list.contains(tag).fill_null(False)


def _open_text(path: Path) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, "rt")
    return open(path, "r")


def _has_features(gff_path: Path) -> bool:
    """True if the file has at least one non-comment, non-blank line."""
    with _open_text(gff_path) as f:
        return any(line.strip() and not line.startswith("#") for line in f)


class TranscriptIndex:
    """Read-only mapping from unversioned transcript ID to TranscriptMetadata.

    The index is never mutated after construction, so lookups are safe to
    share between threads and worker processes (it pickles as a plain dict).
    """

    def __init__(self, entries: dict[str, TranscriptMetadata]):
        self._entries = dict(entries)

    @classmethod
    def from_records(cls, records: Iterable[TranscriptMetadata]) -> "TranscriptIndex":
        """Key records by unversioned transcript ID; later records win."""
        return cls({unversioned(r.transcript_id): r for r in records})

    def lookup(self, transcript_id: str) -> TranscriptMetadata | None:
        """Look up metadata by transcript ID; the version suffix is ignored."""
        return self._entries.get(unversioned(transcript_id))

    def __contains__(self, transcript_id: object) -> bool:
        if not isinstance(transcript_id, str):
            return False
        return unversioned(transcript_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TranscriptIndex({len(self)} transcripts)"


def read_gff_transcripts(gff_path: Path) -> pl.DataFrame:
    """Read transcript features of a GFF3 file with parsed attribute columns.

    Comment lines (#) are skipped and only rows whose type column equals
    "transcript" are kept. Gzip-compressed files are accepted.

    Args:
        gff_path: Path to GFF3 file

    Returns:
        DataFrame with seqid/start/end plus transcript_id, gene_id, canonical,
        appris, ccds, readthrough, uncertain_start_end (list) and tsl columns.
        Missing optional attributes are null/False, never errors.
    """
    gff_path = Path(gff_path)
    if not gff_path.exists():
        raise FileNotFoundError(f"GFF file not found: {gff_path}")

    logger.info("gff_read_start", path=str(gff_path))

    if _has_features(gff_path):
        df = pl.read_csv(
            gff_path,
            separator="\t",
            has_header=False,
            new_columns=GFF_COLUMNS,
            comment_prefix="#",
            quote_char=None,
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
    else:
        logger.warning("gff_no_features", path=str(gff_path))
        df = pl.DataFrame(schema={col: pl.String for col in GFF_COLUMNS})

    df = df.filter(pl.col("type") == TRANSCRIPT_FEATURE)

    df = df.with_columns(
        _attribute("transcript_id").str.strip_chars().alias("transcript_id"),
        _attribute("gene_id").str.strip_chars().alias("gene_id"),
        _attribute("tag").str.split(",").alias("tags"),
        _attribute("transcript_support_level")
        .str.extract(r"^\s*([1-5])(?:\D|$)", 1)
        .cast(pl.Int64)
        .alias("tsl"),
    )

    appris = _attribute("tag").str.extract(rf"(?:^|,){APPRIS_PREFIX}([^,]*)", 1)
    uncertain = [
        pl.when(_has_tag(tag)).then(pl.lit(tag)).otherwise(pl.lit(None))
        for tag in UNCERTAIN_START_END_TAGS
    ]

    df = df.with_columns(
        _has_tag(CANONICAL_TAG).alias("canonical"),
        appris.alias("appris"),
        _has_tag(CCDS_TAG).alias("ccds"),
        _has_tag(READTHROUGH_TAG).alias("readthrough"),
        pl.concat_list(uncertain).list.drop_nulls().alias("uncertain_start_end"),
    )

    return df.select(
        "seqid",
        "start",
        "end",
        "transcript_id",
        "gene_id",
        "canonical",
        "appris",
        "ccds",
        "readthrough",
        "uncertain_start_end",
        "tsl",
    )


def build_transcript_index(gff_path: Path) -> TranscriptIndex:
    """Build the transcript metadata index from a GFF3 file.

    Args:
        gff_path: Path to GFF3 gene-feature file

    Returns:
        TranscriptIndex keyed by unversioned transcript ID

    Raises:
        FileNotFoundError: If the GFF file doesn't exist
        TranscriptIndexError: If any transcript feature lacks transcript_id
    """
    df = read_gff_transcripts(gff_path)

    missing = df.filter(
        pl.col("transcript_id").is_null() | (pl.col("transcript_id") == "")
    )
    if missing.height > 0:
        first = missing.row(0, named=True)
        raise TranscriptIndexError(
            f"{missing.height} transcript feature(s) in {gff_path} have no transcript_id; "
            f"first at {first['seqid']}:{first['start']}-{first['end']}"
        )

    entries: dict[str, TranscriptMetadata] = {}
    for row in df.iter_rows(named=True):
        record = TranscriptMetadata(
            transcript_id=row["transcript_id"],
            gene_id=row["gene_id"] or None,
            canonical=row["canonical"],
            appris=row["appris"] or None,
            ccds=row["ccds"],
            readthrough=row["readthrough"],
            uncertain_start_end=tuple(row["uncertain_start_end"] or ()),
            tsl=row["tsl"],
        )
        entries[unversioned(record.transcript_id)] = record

    duplicates = df.height - len(entries)
    if duplicates:
        logger.debug("gff_duplicate_transcripts", count=duplicates)

    logger.info(
        "transcript_index_built",
        path=str(gff_path),
        transcripts=len(entries),
        canonical=int(df["canonical"].sum()),
        with_appris=int(df["appris"].is_not_null().sum()),
    )

    return TranscriptIndex(entries)
