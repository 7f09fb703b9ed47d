from pathlib import Path

import pytest
from click.testing import CliRunner

from invisible_overlay.cli import main


def test_cli_version_command():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "invisible_overlay" in result.output


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_cli_writes_default_output_name(source_file: Path):
    pytest.importorskip("fitz")
    runner = CliRunner()
    result = runner.invoke(main, ["--pdf", str(source_file), "--text", "Hello\nWorld"])
    assert result.exit_code == 0, result.output
    assert "Modified PDF saved as resumeUpdated.pdf" in result.output
    assert (source_file.parent / "resumeUpdated.pdf").is_file()


def test_cli_reads_text_from_stdin_and_honours_out(source_file: Path, tmp_path: Path):
    pytest.importorskip("fitz")
    out = tmp_path / "custom" / "final.pdf"
    runner = CliRunner()
    result = runner.invoke(main, ["--pdf", str(source_file), "--out", str(out)], input="from stdin\n")
    assert result.exit_code == 0, result.output
    assert out.is_file()


def test_cli_text_file(source_file: Path, tmp_path: Path):
    pytest.importorskip("fitz")
    text_file = tmp_path / "posting.txt"
    text_file.write_text("Job posting\nRequirements", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["--pdf", str(source_file), "--text-file", str(text_file), "--suffix", "_v2"])
    assert result.exit_code == 0, result.output
    assert (source_file.parent / "resume_v2.pdf").is_file()


def test_cli_missing_pdf_is_an_error(tmp_path: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["--pdf", str(tmp_path / "missing.pdf"), "--text", "hi"])
    assert result.exit_code == 1
    assert "Error: Please paste the text to overlay and select the source PDF." in result.output


def test_cli_rejects_text_and_text_file_together(source_file: Path, tmp_path: Path):
    text_file = tmp_path / "t.txt"
    text_file.write_text("x", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["--pdf", str(source_file), "--text", "y", "--text-file", str(text_file)])
    assert result.exit_code == 2


def test_cli_non_pdf_reports_processing_error(tmp_path: Path):
    bogus = tmp_path / "notes.pdf"
    bogus.write_bytes(b"plain text, not a pdf")
    runner = CliRunner()
    result = runner.invoke(main, ["--pdf", str(bogus), "--text", "hi"])
    assert result.exit_code == 1
    assert "Error: An error occurred while merging the PDFs." in result.output
    assert not (tmp_path / "notesUpdated.pdf").exists()
