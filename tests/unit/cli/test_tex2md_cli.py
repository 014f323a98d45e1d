#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the tex2md command-line interface."""

import argparse
import io
import json

import pytest

from tex2md.cli import build_options, create_parser, main
from tex2md.cli.actions import env_key_for, nesting_depth, positive_int
from tex2md.constants import (
    EXIT_CONVERSION_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    MAX_NESTING_DEPTH_CEILING,
)


@pytest.fixture(autouse=True)
def _reset_logging(restore_package_logger):
    yield


@pytest.fixture
def tex_file(tmp_path):
    """Create a small LaTeX input file."""
    path = tmp_path / "question.tex"
    path.write_text(r"What is \textbf{$2+2$}?", encoding="utf-8")
    return path


@pytest.mark.unit
@pytest.mark.cli
class TestArgumentParsing:
    """Test parser construction and option mapping."""

    def test_defaults(self) -> None:
        """Test that defaults map onto default options."""
        options = build_options(create_parser().parse_args([]))

        assert options.use_dispatcher is True
        assert options.parser.strict_mode is False
        assert options.parser.strip_comments is True
        assert options.parser.max_nesting_depth == 64
        assert options.renderer.itemize_marker == "-"

    def test_flags_map_to_options(self) -> None:
        """Test that every flag reaches its option field."""
        parsed = create_parser().parse_args(
            [
                "--force",
                "--strict",
                "--keep-comments",
                "--keep-preamble",
                "--max-depth",
                "8",
                "--max-input-length",
                "100",
                "--itemize-marker",
                "+",
            ]
        )

        options = build_options(parsed)

        assert options.use_dispatcher is False
        assert options.max_input_length == 100
        assert options.parser.strict_mode is True
        assert options.parser.strip_comments is False
        assert options.parser.strip_preamble is False
        assert options.parser.max_nesting_depth == 8
        assert options.renderer.itemize_marker == "+"

    def test_non_positive_depth_rejected(self, capsys) -> None:
        """Test that argparse rejects a zero nesting depth."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--max-depth", "0"])

        assert exc_info.value.code == 2

    def test_positive_int(self) -> None:
        """Test the positive integer argument type."""
        assert positive_int("3") == 3
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("-1")
        with pytest.raises(argparse.ArgumentTypeError):
            positive_int("many")

    def test_depth_above_ceiling_rejected(self, capsys) -> None:
        """Test that argparse rejects a nesting depth above the ceiling."""
        assert nesting_depth(str(MAX_NESTING_DEPTH_CEILING)) == MAX_NESTING_DEPTH_CEILING

        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--max-depth", str(MAX_NESTING_DEPTH_CEILING + 1)])

        assert exc_info.value.code == 2

    def test_env_depth_above_ceiling_ignored(self, monkeypatch) -> None:
        """Test that an oversized TEX2MD_MAX_DEPTH falls back to the default."""
        monkeypatch.setenv("TEX2MD_MAX_DEPTH", "100000")

        assert create_parser().parse_args([]).max_depth == 64

    def test_env_key(self) -> None:
        """Test environment variable naming."""
        assert env_key_for("itemize_marker") == "TEX2MD_ITEMIZE_MARKER"

    def test_env_defaults(self, monkeypatch) -> None:
        """Test that environment variables provide defaults."""
        monkeypatch.setenv("TEX2MD_FORCE", "yes")
        monkeypatch.setenv("TEX2MD_MAX_DEPTH", "12")
        monkeypatch.setenv("TEX2MD_ITEMIZE_MARKER", "*")

        parsed = create_parser().parse_args([])

        assert parsed.force is True
        assert parsed.max_depth == 12
        assert parsed.itemize_marker == "*"

    def test_invalid_env_value_ignored(self, monkeypatch) -> None:
        """Test that an invalid environment value falls back to the default."""
        monkeypatch.setenv("TEX2MD_ITEMIZE_MARKER", "#")

        assert create_parser().parse_args([]).itemize_marker == "-"

    def test_explicit_argument_beats_env(self, monkeypatch) -> None:
        """Test that command-line arguments override environment defaults."""
        monkeypatch.setenv("TEX2MD_MAX_DEPTH", "12")

        assert create_parser().parse_args(["--max-depth", "4"]).max_depth == 4


@pytest.mark.unit
@pytest.mark.cli
class TestMain:
    """Test the main entry point."""

    def test_file_to_stdout(self, tex_file, capsys) -> None:
        """Test normalizing a file to stdout."""
        assert main([str(tex_file)]) == EXIT_SUCCESS

        assert capsys.readouterr().out == "What is **$2+2$**?\n"

    def test_stdin(self, monkeypatch, capsys) -> None:
        """Test reading from stdin."""
        monkeypatch.setattr("sys.stdin", io.StringIO(r"\emph{hi}"))

        assert main(["-"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "*hi*\n"

    def test_stdin_by_default(self, monkeypatch, capsys) -> None:
        """Test that stdin is read when no input is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("plain"))

        assert main([]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "plain\n"

    def test_multiple_inputs_joined(self, tmp_path, capsys) -> None:
        """Test that several inputs are separated by a blank line."""
        first = tmp_path / "a.tex"
        second = tmp_path / "b.tex"
        first.write_text(r"\textbf{a}", encoding="utf-8")
        second.write_text(r"\textit{b}", encoding="utf-8")

        assert main([str(first), str(second)]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "**a**\n\n*b*\n"

    def test_output_file(self, tex_file, tmp_path, capsys) -> None:
        """Test writing to an output file."""
        target = tmp_path / "out.md"

        assert main([str(tex_file), "--out", str(target)]) == EXIT_SUCCESS

        assert target.read_text(encoding="utf-8") == "What is **$2+2$**?\n"
        assert capsys.readouterr().out == ""

    def test_missing_input(self, tmp_path, capsys) -> None:
        """Test that a missing file is a file error."""
        assert main([str(tmp_path / "missing.tex")]) == EXIT_FILE_ERROR
        assert "not found" in capsys.readouterr().err

    def test_unwritable_output(self, tex_file, tmp_path, capsys) -> None:
        """Test that an unwritable output path is a file error."""
        target = tmp_path / "no-such-dir" / "out.md"

        assert main([str(tex_file), "--out", str(target)]) == EXIT_FILE_ERROR

    def test_stdin_twice_rejected(self, capsys) -> None:
        """Test that stdin can only be named once."""
        assert main(["-", "-"]) == EXIT_VALIDATION_ERROR
        assert "only be read once" in capsys.readouterr().err

    def test_strict_failure(self, tmp_path, capsys) -> None:
        """Test that strict mode turns malformed markup into an error exit."""
        source = tmp_path / "bad.tex"
        source.write_text(r"\textbf{oops", encoding="utf-8")

        assert main([str(source), "--strict"]) == EXIT_CONVERSION_ERROR
        assert "unbalanced_braces" in capsys.readouterr().err

    def test_force_strips_comments(self, tmp_path, capsys) -> None:
        """Test that --force runs the pipeline on prose."""
        source = tmp_path / "notes.tex"
        source.write_text("abc % note\ndef", encoding="utf-8")

        assert main([str(source), "--force"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "abc\ndef\n"

    def test_keep_comments(self, tmp_path, capsys) -> None:
        """Test that --keep-comments leaves comments in place."""
        source = tmp_path / "notes.tex"
        source.write_text("abc % note\ndef", encoding="utf-8")

        assert main([str(source), "--force", "--keep-comments"]) == EXIT_SUCCESS
        assert capsys.readouterr().out == "abc % note\ndef\n"

    def test_report(self, tmp_path, capsys) -> None:
        """Test that --report prints one JSON line per input to stderr."""
        source = tmp_path / "bad.tex"
        source.write_text(r"\textbf{oops", encoding="utf-8")

        assert main([str(source), "--report"]) == EXIT_SUCCESS

        captured = capsys.readouterr()
        assert captured.out == "\\textbf{oops\n"
        payload = json.loads(captured.err.strip().splitlines()[-1])
        assert payload["input"] == str(source)
        assert payload["dispatched"] is True
        assert payload["counts"] == {"unbalanced_braces": 1}

    def test_log_file(self, tex_file, tmp_path, capsys) -> None:
        """Test that debug logging can be written to a file."""
        log_path = tmp_path / "tex2md.log"

        assert main([str(tex_file), "--log-level", "DEBUG", "--log-file", str(log_path)]) == EXIT_SUCCESS

        assert "Normalizing" in log_path.read_text(encoding="utf-8")
