"""Shared fixtures: a small GENCODE-style GFF3 and bcftools/csq-annotated VCFs."""

from pathlib import Path

import pytest

GFF_CONTENT = "\n".join([
    "##gff-version 3",
    "#description: test annotation",
    "chr1\tHAVANA\tgene\t11000\t16000\t.\t+\t.\tID=ENSG00000000001.1;gene_id=ENSG00000000001.1;gene_name=GENE1",
    "chr1\tHAVANA\ttranscript\t11000\t15000\t.\t+\t.\t"
    "ID=ENST00000000001.3;Parent=ENSG00000000001.1;gene_id=ENSG00000000001.1;"
    "transcript_id=ENST00000000001.3;transcript_type=protein_coding;"
    "tag=basic,Ensembl_canonical,CCDS,appris_principal_1;transcript_support_level=1",
    "chr1\tHAVANA\texon\t11000\t11500\t.\t+\t.\t"
    "ID=exon:ENST00000000001.3:1;Parent=ENST00000000001.3;gene_id=ENSG00000000001.1;"
    "transcript_id=ENST00000000001.3",
    "chr1\tHAVANA\ttranscript\t11200\t16000\t.\t+\t.\t"
    "ID=ENST00000000002.1;Parent=ENSG00000000001.1;gene_id=ENSG00000000001.1;"
    "transcript_id=ENST00000000002.1;"
    "tag=basic,appris_alternative_2,cds_end_NF,mRNA_start_NF;transcript_support_level=NA",
    "chr1\tENSEMBL\ttranscript\t13500\t20000\t.\t+\t.\t"
    "ID=ENST00000000003.4;Parent=ENSG00000000003.2;gene_id=ENSG00000000003.2;"
    "transcript_id=ENST00000000003.4;"
    "tag=readthrough_transcript,mRNA_end_NF,cds_start_NF;"
    "transcript_support_level=2 (assigned to previous version 3)",
    "chr1\tENSEMBL\ttranscript\t17000\t18000\t.\t-\t.\t"
    "ID=ENST00000000004.1;Parent=ENSG00000000004.1;gene_id=ENSG00000000004.1;"
    "transcript_id=ENST00000000004.1",
    "###",
]) + "\n"

BCSQ_HEADER = (
    '##INFO=<ID=BCSQ,Number=.,Type=String,Description="Local consequence annotation '
    'from BCFtools/csq, see http://samtools.github.io/bcftools/howtos/csq-calling.html '
    'for details. Format: Consequence|gene|transcript|biotype|strand|amino_acid_change|dna_change">'
)

VCF_HEADER_LINES = [
    "##fileformat=VCFv4.2",
    "##contig=<ID=chr1,length=248956422>",
]

VCF_COLUMNS = "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO"

# Two calls on GENE1: a missense on the alternative transcript and a
# synonymous on the canonical one
MISSENSE_ALT = "missense|GENE1|ENST00000000002|protein_coding|+|10K>10E|12000A>G"
SYNONYMOUS_CANON = "synonymous|GENE1|ENST00000000001|protein_coding|+|5L|12000A>G"
# Short (older-schema) record on a readthrough transcript
INTRON_READTHROUGH = "intron|GENE3|ENST00000000003|lncRNA"

VCF_RECORDS = [
    f"chr1\t12000\t.\tA\tG\t50\tPASS\tBCSQ={MISSENSE_ALT},{SYNONYMOUS_CANON}",
    "chr1\t13000\t.\tC\tT\t50\tPASS\t.",
    f"chr1\t14000\t.\tG\tA\t50\tPASS\tBCSQ={INTRON_READTHROUGH}",
]


def write_vcf(path: Path, records: list[str], info_headers: list[str] | None = None) -> Path:
    """Write a minimal sites-only VCF."""
    if info_headers is None:
        info_headers = [BCSQ_HEADER]
    lines = VCF_HEADER_LINES + info_headers + [VCF_COLUMNS] + records
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def gff_path(tmp_path: Path) -> Path:
    path = tmp_path / "annotation.gff3"
    path.write_text(GFF_CONTENT)
    return path


@pytest.fixture
def vcf_path(tmp_path: Path) -> Path:
    return write_vcf(tmp_path / "input.vcf", VCF_RECORDS)
