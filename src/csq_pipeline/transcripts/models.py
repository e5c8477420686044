"""Data models for transcript metadata derived from GFF3 transcript features."""

from pydantic import BaseModel, ConfigDict, Field

from csq_pipeline.fields import TERM_SEP

# Tags marking incomplete transcript models, in output order
UNCERTAIN_START_END_TAGS = ("cds_start_NF", "cds_end_NF", "mRNA_start_NF", "mRNA_end_NF")

CANONICAL_TAG = "Ensembl_canonical"
CCDS_TAG = "CCDS"
READTHROUGH_TAG = "readthrough_transcript"
APPRIS_PREFIX = "appris_"


class TranscriptMetadata(BaseModel):
    """Metadata for a single transcript.

    Attributes:
        transcript_id: Versioned transcript ID as written in the GFF (e.g., ENST00000456328.2)
        gene_id: Gene ID of the parent gene (None if absent)
        canonical: Transcript carries the Ensembl_canonical tag
        appris: APPRIS level without the prefix (e.g., principal_1), None if untagged
        ccds: Transcript carries the CCDS tag
        readthrough: Transcript carries the readthrough_transcript tag
        uncertain_start_end: Subset of UNCERTAIN_START_END_TAGS, in that order
        tsl: Transcript support level 1-5, None if unset or NA
    """

    model_config = ConfigDict(frozen=True)

    transcript_id: str
    gene_id: str | None = None
    canonical: bool = False
    appris: str | None = None
    ccds: bool = False
    readthrough: bool = False
    uncertain_start_end: tuple[str, ...] = ()
    tsl: int | None = Field(default=None, ge=1, le=5)

    def to_fields(self) -> list[str]:
        """Render the metadata columns of a merged consequence record.

        Order matches METADATA_COLUMNS in csq_pipeline.consequence.schema.
        """
        return [
            self.gene_id or "",
            "YES" if self.canonical else "",
            self.appris or "",
            CCDS_TAG if self.ccds else "",
            READTHROUGH_TAG if self.readthrough else "",
            TERM_SEP.join(self.uncertain_start_end),
            str(self.tsl) if self.tsl is not None else "",
            self.transcript_id,
        ]
