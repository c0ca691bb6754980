"""Tests for the command-line interface."""

import json

import pytest

from word_parser.cli import build_parser, main


class TestExtract:
    """extract subcommand"""

    def test_plain_text_to_stdout(self, sample_docx, capsys):
        assert main(["extract", str(sample_docx)]) == 0
        captured = capsys.readouterr()
        assert "The first paragraph explains the plan." in captured.out
        assert "Title: Quarterly Report" in captured.err

    def test_json_to_file(self, sample_docx, tmp_path):
        output = tmp_path / "out.json"
        argv = ["extract", str(sample_docx), "-f", "json", "-o", str(output)]
        assert main(argv) == 0
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload["format"] == "json"
        assert payload["metadata"]["pages"] == 3

    def test_no_metadata_flag(self, sample_docx, tmp_path):
        output = tmp_path / "out.json"
        argv = ["extract", str(sample_docx), "-f", "json", "--no-metadata"]
        assert main(argv + ["-o", str(output)]) == 0
        assert json.loads(output.read_text(encoding="utf-8"))["metadata"] is None

    def test_failure_exit_code(self, tmp_path, capsys):
        assert main(["extract", str(tmp_path / "missing.docx")]) == 1
        assert "File does not exist" in capsys.readouterr().err

    def test_rejects_unknown_format(self, sample_docx):
        with pytest.raises(SystemExit):
            main(["extract", str(sample_docx), "-f", "pdf"])


class TestOtherCommands:
    """convert, info and validate subcommands"""

    def test_convert_defaults_to_markdown(self, sample_docx, tmp_path):
        output = tmp_path / "out.md"
        assert main(["convert", str(sample_docx), str(output)]) == 0
        assert output.read_text(encoding="utf-8").startswith(
            "# Quarterly Report\n\n**Author:** Jordan Lee"
        )

    def test_info_detailed(self, sample_docx, capsys):
        assert main(["info", str(sample_docx), "--detailed"]) == 0
        out = capsys.readouterr().out
        assert "Title: Quarterly Report" in out
        assert "Pages: 3" in out
        assert "Paragraphs: 2" in out

    def test_validate_passes(self, sample_docx, capsys):
        assert main(["validate", str(sample_docx)]) == 0
        assert "Document validation passed" in capsys.readouterr().out

    def test_validate_fails(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        assert main(["validate", str(path)]) == 1
        out = capsys.readouterr().out
        assert "Unsupported file extension: .txt" in out

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
