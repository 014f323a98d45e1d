"""Command-line interface for tex2md.

This module provides a simple command-line tool for normalizing LaTeX
snippets to Markdown-style text.

Usage:
    tex2md <input> [options]
    python -m tex2md <input> [options]

Examples
--------
Normalize a file and print the result:
    tex2md notes.tex

Read from stdin and write to a file:
    cat question.tex | tex2md - --out question.md

Always run the pipeline and print the diagnostics report:
    tex2md notes.tex --force --report

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import json
import logging
import sys

from tex2md.api import normalize
from tex2md.cli.actions import create_env_aware_argument, env_key_for, nesting_depth, positive_int
from tex2md.constants import (
    DEFAULT_ITEMIZE_MARKER,
    DEFAULT_MAX_INPUT_LENGTH,
    DEFAULT_MAX_NESTING_DEPTH,
    EXIT_CONVERSION_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from tex2md.diagnostics import NormalizationReport
from tex2md.exceptions import ConversionError, FileError
from tex2md.logging_utils import configure_logging
from tex2md.options import LatexOptions, MarkdownRendererOptions, NormalizeOptions
from tex2md.utils.io_utils import read_text, write_text

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def _get_version() -> str:
    from tex2md import __version__

    return __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser. Defaults of most options can be set through
        ``TEX2MD_<OPTION>`` environment variables.

    """
    parser = argparse.ArgumentParser(
        prog="tex2md",
        description="Normalize LaTeX-flavored text into Markdown-style text.",
        epilog=f"Environment variables such as {env_key_for('max_depth')}=32 set option defaults.",
    )
    parser.add_argument(
        "input",
        nargs="*",
        help="Input files to normalize; '-' or no argument reads stdin",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")

    create_env_aware_argument(parser, "--out", "-o", metavar="PATH", help="Write output to PATH instead of stdout")
    create_env_aware_argument(
        parser,
        "--force",
        action="store_true",
        help="Always run the conversion pipeline, even without $ or \\command{ markers",
    )
    create_env_aware_argument(
        parser,
        "--strict",
        action="store_true",
        help="Fail on the first malformed construct instead of keeping it as literal text",
    )
    create_env_aware_argument(
        parser,
        "--max-depth",
        type=nesting_depth,
        default=DEFAULT_MAX_NESTING_DEPTH,
        metavar="N",
        help=f"Maximum brace/environment nesting depth (default: {DEFAULT_MAX_NESTING_DEPTH})",
    )
    create_env_aware_argument(
        parser,
        "--max-input-length",
        type=positive_int,
        default=DEFAULT_MAX_INPUT_LENGTH,
        metavar="N",
        help=f"Inputs longer than N characters are returned unchanged (default: {DEFAULT_MAX_INPUT_LENGTH})",
    )
    create_env_aware_argument(parser, "--keep-comments", action="store_true", help="Keep %% comments as literal text")
    create_env_aware_argument(
        parser,
        "--keep-preamble",
        action="store_true",
        help="Keep \\documentclass and \\usepackage as literal text",
    )
    create_env_aware_argument(
        parser,
        "--itemize-marker",
        choices=["-", "*", "+"],
        default=DEFAULT_ITEMIZE_MARKER,
        help=f"Bullet for unlabeled itemize entries (default: {DEFAULT_ITEMIZE_MARKER})",
    )
    create_env_aware_argument(
        parser,
        "--report",
        action="store_true",
        help="Print the diagnostics report for each input as JSON to stderr",
    )
    create_env_aware_argument(
        parser,
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    create_env_aware_argument(parser, "--log-file", metavar="PATH", help="Also write log messages to PATH")
    create_env_aware_argument(
        parser,
        "--trace",
        action="store_true",
        help="Enable trace logging with timestamps (implies --log-level DEBUG)",
    )

    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes precedence over --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def build_options(parsed_args: argparse.Namespace) -> NormalizeOptions:
    """Translate parsed arguments into NormalizeOptions.

    Raises
    ------
    ValueError
        If an option value is out of range

    """
    return NormalizeOptions(
        max_input_length=parsed_args.max_input_length,
        use_dispatcher=not parsed_args.force,
        parser=LatexOptions(
            max_nesting_depth=parsed_args.max_depth,
            strict_mode=parsed_args.strict,
            strip_comments=not parsed_args.keep_comments,
            strip_preamble=not parsed_args.keep_preamble,
        ),
        renderer=MarkdownRendererOptions(itemize_marker=parsed_args.itemize_marker),
    )


def _read_input(source: str) -> str:
    if source == STDIN_MARKER:
        return sys.stdin.read()
    return read_text(source)


def _print_reports(sources: list[str], reports: list[NormalizationReport]) -> None:
    for source, report in zip(sources, reports):
        payload = {"input": "<stdin>" if source == STDIN_MARKER else source, **report.to_dict()}
        print(json.dumps(payload), file=sys.stderr)


def main(args: list[str] | None = None) -> int:
    """Execute the CLI.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code: 0 success, 1 strict-mode conversion error, 2 invalid
        arguments, 3 file error

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        options = build_options(parsed_args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    sources = parsed_args.input or [STDIN_MARKER]
    if sources.count(STDIN_MARKER) > 1:
        print("Error: stdin ('-') can only be read once", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    outputs: list[str] = []
    reports: list[NormalizationReport] = []

    try:
        for source in sources:
            logger.debug(f"Normalizing {source}")
            outputs.append(normalize(_read_input(source), options, diagnostics_callback=reports.append))
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONVERSION_ERROR
    finally:
        if parsed_args.report:
            _print_reports(sources, reports)

    result = "\n\n".join(outputs)

    if parsed_args.out:
        try:
            write_text(result + "\n", parsed_args.out)
        except FileError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info(f"Wrote output to {parsed_args.out}")
    else:
        sys.stdout.write(result + "\n")

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
