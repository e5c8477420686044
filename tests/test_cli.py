"""Integration tests for the CLI commands using CliRunner."""

import json

import pysam
import pytest
from click.testing import CliRunner

from csq_pipeline.cli.main import cli


@pytest.fixture
def broken_gff(tmp_path):
    path = tmp_path / "broken.gff3"
    path.write_text(
        "##gff-version 3\n"
        "chr1\tHAVANA\ttranscript\t100\t200\t.\t+\t.\tID=T1;gene_id=G1\n"
    )
    return path


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])

    assert result.exit_code == 0
    assert 'mcsq' in result.output
    assert 'pick' in result.output


def test_info_defaults():
    runner = CliRunner()
    result = runner.invoke(cli, ['info'])

    assert result.exit_code == 0
    assert 'csq-pipeline v' in result.output
    assert '(defaults)' in result.output
    assert 'BCSQ' in result.output


def test_info_with_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("annotation:\n  field: CSQ\n  workers: 4\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config_path), 'info'])

    assert result.exit_code == 0
    assert 'CSQ' in result.output
    assert 'Workers:    4' in result.output


def test_info_invalid_config(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("annotation:\n  workers: 0\n")

    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config_path), 'info'])

    assert result.exit_code == 1
    assert 'Error loading config' in result.output


def test_mcsq_writes_views(tmp_path, vcf_path, gff_path):
    output = tmp_path / "out.vcf"

    runner = CliRunner()
    result = runner.invoke(cli, ['mcsq', str(vcf_path), '-o', str(output), '-g', str(gff_path)])

    assert result.exit_code == 0, result.output
    with pysam.VariantFile(str(output)) as vcf:
        records = list(vcf)
    assert len(records) == 3
    assert records[0].info['pick_transcript'] == 'ENST00000000001'
    assert records[0].info['worst_Consequence'] == 'missense'
    assert not (tmp_path / "out.vcf.provenance.json").exists()


def test_mcsq_gff_from_config(tmp_path, vcf_path, gff_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(f"gff_path: {gff_path}\n")
    output = tmp_path / "out.vcf"

    runner = CliRunner()
    result = runner.invoke(cli, ['--config', str(config_path), 'mcsq', str(vcf_path), '-o', str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()


def test_mcsq_requires_gff(tmp_path, vcf_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['mcsq', str(vcf_path), '-o', str(tmp_path / "out.vcf")])

    assert result.exit_code == 2
    assert 'GFF3 file is required' in result.output


def test_mcsq_missing_gff(tmp_path, vcf_path):
    runner = CliRunner()
    result = runner.invoke(cli, [
        'mcsq', str(vcf_path), '-o', str(tmp_path / "out.vcf"), '-g', str(tmp_path / "missing.gff3"),
    ])

    assert result.exit_code == 1
    assert 'Error building transcript index' in result.output


def test_mcsq_transcript_without_id(tmp_path, vcf_path, broken_gff):
    output = tmp_path / "out.vcf"

    runner = CliRunner()
    result = runner.invoke(cli, ['mcsq', str(vcf_path), '-o', str(output), '-g', str(broken_gff)])

    assert result.exit_code == 1
    assert 'transcript_id' in result.output
    assert not output.exists()


def test_mcsq_missing_consequence_field(tmp_path, vcf_path, gff_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("annotation:\n  field: CSQ\n")

    runner = CliRunner()
    result = runner.invoke(cli, [
        '--config', str(config_path),
        'mcsq', str(vcf_path), '-o', str(tmp_path / "out.vcf"), '-g', str(gff_path),
    ])

    assert result.exit_code == 1
    assert 'INFO/CSQ' in result.output


def test_mcsq_provenance_sidecar(tmp_path, vcf_path, gff_path):
    output = tmp_path / "out.vcf"

    runner = CliRunner()
    result = runner.invoke(cli, [
        'mcsq', str(vcf_path), '-o', str(output), '-g', str(gff_path), '--provenance',
    ])

    assert result.exit_code == 0, result.output
    sidecar = tmp_path / "out.vcf.provenance.json"
    metadata = json.loads(sidecar.read_text())
    assert metadata['gff_path'] == str(gff_path)
    steps = [step['step_name'] for step in metadata['processing_steps']]
    assert steps == ['build_transcript_index', 'annotate_variants']
    assert metadata['processing_steps'][0]['details']['transcripts'] == 4
    assert metadata['processing_steps'][1]['details']['annotated'] == 2


def test_mcsq_output_format_override(tmp_path, vcf_path, gff_path):
    output = tmp_path / "out.vcf"

    runner = CliRunner()
    result = runner.invoke(cli, [
        'mcsq', str(vcf_path), '-o', str(output), '-g', str(gff_path), '--output-format', 'bcf',
    ])

    assert result.exit_code == 0, result.output
    assert output.read_bytes()[:2] == b"\x1f\x8b"


def test_pick_command(tmp_path, vcf_path, gff_path):
    merged = tmp_path / "merged.vcf"
    picked = tmp_path / "picked.vcf"

    runner = CliRunner()
    result = runner.invoke(cli, ['mcsq', str(vcf_path), '-o', str(merged), '-g', str(gff_path)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(cli, ['pick', str(merged), '-o', str(picked)])

    assert result.exit_code == 0, result.output
    with pysam.VariantFile(str(picked)) as vcf:
        first = next(iter(vcf))
    assert first.info['pick_transcript'] == 'ENST00000000001'


def test_pick_missing_input(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ['pick', str(tmp_path / "missing.vcf"), '-o', str(tmp_path / "out.vcf")])

    assert result.exit_code == 1
    assert 'Error picking consequences' in result.output
