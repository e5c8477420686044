"""Column layout of merged consequence records.

A merged record is the bcftools/csq prediction (RAW_COLUMNS) followed by the
transcript metadata block (METADATA_COLUMNS). Field position is the contract:
every merged record has exactly SCHEMA_WIDTH fields.
"""

from csq_pipeline.fields import FIELD_SEP, join_fields, split_fields

RAW_COLUMNS = (
    "Consequence",
    "gene",
    "transcript",
    "biotype",
    "strand",
    "amino_acid_change",
    "dna_change",
)

METADATA_COLUMNS = (
    "gene_id",
    "CANONICAL",
    "appris",
    "ccds",
    "readthrough",
    "unknown_start_end",
    "TSL",
    "transcript_id",
)

MERGED_COLUMNS = RAW_COLUMNS + METADATA_COLUMNS
SCHEMA_WIDTH = len(MERGED_COLUMNS)
METADATA_WIDTH = len(METADATA_COLUMNS)

# Positions in a merged record
CONSEQUENCE = MERGED_COLUMNS.index("Consequence")
TRANSCRIPT = MERGED_COLUMNS.index("transcript")
BIOTYPE = MERGED_COLUMNS.index("biotype")
CANONICAL = MERGED_COLUMNS.index("CANONICAL")
APPRIS = MERGED_COLUMNS.index("appris")
READTHROUGH = MERGED_COLUMNS.index("readthrough")
TSL = MERGED_COLUMNS.index("TSL")

FORMAT_MARKER = "Format:"

DESCRIPTION_PREFIX = (
    "Local consequence annotation from BCFtools/csq, see "
    "http://samtools.github.io/bcftools/howtos/csq-calling.html for details, "
    "merged with transcript metadata."
)


def format_description(columns: tuple[str, ...] = MERGED_COLUMNS) -> str:
    """Header description for the merged consequence field."""
    return f"{DESCRIPTION_PREFIX} {FORMAT_MARKER} {join_fields(columns)}"


def parse_format_columns(description: str) -> list[str]:
    """Extract the column names from a consequence header description.

    bcftools writes ``... Format: Consequence|gene|...``. Descriptions
    without the marker yield an empty list.
    """
    if FORMAT_MARKER not in description:
        return []
    layout = description.split(FORMAT_MARKER, 1)[1].strip().strip('"')
    return [column.strip() for column in split_fields(layout, FIELD_SEP)]
