#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for diagnostics reports and the exception hierarchy."""

import json

import pytest

from tex2md.diagnostics import NormalizationReport, RecoveryEvent, RecoveryKind
from tex2md.exceptions import (
    ConversionError,
    FileError,
    InputTooLargeError,
    InvalidOptionsError,
    MismatchedEnvironmentError,
    MissingArgumentError,
    NestingDepthError,
    Tex2MdError,
    UnbalancedBracesError,
    UnterminatedMathError,
    ValidationError,
    error_for_kind,
)
from tex2md.options import LatexOptions, MarkdownRendererOptions


@pytest.mark.unit
class TestRecoveryEvent:
    """Test recovery event formatting."""

    def test_str_with_detail(self) -> None:
        """Test the compact description with context."""
        event = RecoveryEvent(RecoveryKind.UNBALANCED_BRACES, 7, "textbf")

        assert str(event) == "unbalanced_braces at offset 7 (textbf)"

    def test_str_without_detail(self) -> None:
        """Test the compact description without context."""
        assert str(RecoveryEvent(RecoveryKind.UNTERMINATED_MATH, 3)) == "unterminated_math at offset 3"


@pytest.mark.unit
class TestNormalizationReport:
    """Test report aggregation."""

    def test_empty_report(self) -> None:
        """Test a report without events."""
        report = NormalizationReport(input_length=5)

        assert report.total == 0
        assert report.counts == {}
        assert report.dispatched is False

    def test_counts_per_kind(self) -> None:
        """Test that events are counted per kind."""
        report = NormalizationReport(
            input_length=20,
            dispatched=True,
            events=[
                RecoveryEvent(RecoveryKind.UNBALANCED_BRACES, 1),
                RecoveryEvent(RecoveryKind.UNBALANCED_BRACES, 9),
                RecoveryEvent(RecoveryKind.UNTERMINATED_MATH, 12),
            ],
        )

        assert report.total == 3
        assert report.counts == {RecoveryKind.UNBALANCED_BRACES: 2, RecoveryKind.UNTERMINATED_MATH: 1}

    def test_to_dict_is_json_serializable(self) -> None:
        """Test the JSON view of a report."""
        report = NormalizationReport(
            input_length=4,
            dispatched=True,
            events=[RecoveryEvent(RecoveryKind.MISSING_ARGUMENT, 0, "emph")],
        )

        payload = json.loads(json.dumps(report.to_dict()))

        assert payload == {
            "input_length": 4,
            "dispatched": True,
            "total": 1,
            "counts": {"missing_argument": 1},
            "events": [{"kind": "missing_argument", "position": 0, "detail": "emph"}],
        }


@pytest.mark.unit
class TestExceptions:
    """Test the exception hierarchy."""

    @pytest.mark.parametrize(
        "kind,error_class",
        [
            (RecoveryKind.UNBALANCED_BRACES, UnbalancedBracesError),
            (RecoveryKind.MISSING_ARGUMENT, MissingArgumentError),
            (RecoveryKind.UNTERMINATED_MATH, UnterminatedMathError),
            (RecoveryKind.MISMATCHED_ENVIRONMENT, MismatchedEnvironmentError),
            (RecoveryKind.EXCEEDED_NESTING_DEPTH, NestingDepthError),
            (RecoveryKind.INPUT_TOO_LARGE, InputTooLargeError),
        ],
    )
    def test_error_for_kind(self, kind: RecoveryKind, error_class: type) -> None:
        """Test that every recovery kind maps to its own error class."""
        error = error_for_kind(kind, "boom", position=4)

        assert type(error) is error_class
        assert isinstance(error, ConversionError)
        assert isinstance(error, Tex2MdError)
        assert error.kind is kind
        assert error.position == 4
        assert str(error) == "boom"

    def test_conversion_error_wraps_original(self) -> None:
        """Test that the original exception is kept."""
        cause = RuntimeError("inner")

        error = ConversionError("outer", original_error=cause)

        assert error.original_error is cause
        assert error.position == -1

    def test_invalid_options_message(self) -> None:
        """Test the generated message for a wrong options class."""
        error = InvalidOptionsError("latex", LatexOptions, MarkdownRendererOptions)

        assert isinstance(error, ValidationError)
        assert "LatexOptions" in str(error)
        assert "MarkdownRendererOptions" in str(error)
        assert error.parameter_name == "options"

    def test_file_error(self) -> None:
        """Test that file errors carry the path."""
        error = FileError("missing", file_path="notes.tex")

        assert error.file_path == "notes.tex"
        assert isinstance(error, Tex2MdError)
