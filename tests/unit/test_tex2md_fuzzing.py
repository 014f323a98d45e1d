#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Property-based tests for the normalization pipeline.

Inputs are assembled from fragments of the supported LaTeX subset, including
unbalanced braces, stray environment delimiters and unknown commands, so
the generated documents exercise both the happy path and every fallback.
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from tex2md import LatexOptions, NormalizeOptions, convert, normalize
from tex2md.ast import walk
from tex2md.parsers import LatexParser

# Math fragments and lists are self-contained so that every dollar sign is
# paired and every environment is closed where it was opened. "\%" is left
# out: its literal "%" output starts a comment on a second pass.
STABLE_FRAGMENTS = [
    "x",
    "y z",
    " ",
    "\n",
    "\n\n\n",
    "\\textbf{",
    "\\textit{",
    "\\emph{",
    "}",
    "{",
    "$a+b$",
    "$$c$$",
    "\\[d\\]",
    "% note\n",
    "\\begin{itemize}\\item a\\item[(b)] b\\end{itemize}",
    "\\begin{enumerate}\\item[i] x\\item \\textbf{y}\\end{enumerate}",
    "\\begin{enumerate}\\item x\\begin{itemize}\\item $y$\\end{itemize}\\end{enumerate}",
    "\\item ",
    "\\unknown",
    "\\\\",
    "\\$",
]

HOSTILE_FRAGMENTS = STABLE_FRAGMENTS + [
    "\\begin{enumerate}",
    "\\begin{itemize}",
    "\\end{enumerate}",
    "\\end{itemize}",
    "\\item[a] ",
    "$",
    "$$",
    "\\(",
    "\\)",
    "\\[",
    "\\%",
    "\\",
    "[",
    "]",
    "\\begin{equation}",
    "\\end{equation}",
    "\\begin{document}",
    "\\end{align*}",
    "\\documentclass[",
    "\\usepackage{",
    "\r\n",
    "\t",
]

stable_documents = st.lists(st.sampled_from(STABLE_FRAGMENTS), max_size=25).map("".join)
hostile_documents = st.lists(st.sampled_from(HOSTILE_FRAGMENTS), max_size=30).map("".join)
math_bodies = st.text(
    alphabet=st.characters(blacklist_characters="$\\\r\n", blacklist_categories=("Cs",)),
    min_size=1,
    max_size=40,
)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestNormalizeProperties:
    """Property-based tests for normalize."""

    @given(text=hostile_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_never_raises_on_fragments(self, text: str) -> None:
        """Test that malformed LaTeX never escapes as an exception."""
        result = normalize(text)

        assert isinstance(result, str)

    @given(text=st.text(max_size=200))
    def test_never_raises_on_arbitrary_text(self, text: str) -> None:
        """Test that arbitrary Unicode input is handled."""
        assert isinstance(convert(text), str)

    @given(text=stable_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_idempotent(self, text: str) -> None:
        """Test that normalizing twice equals normalizing once."""
        once = normalize(text)

        assert normalize(once) == once

    @given(text=st.text(alphabet=st.characters(blacklist_characters="$\\"), max_size=200))
    def test_prose_unchanged(self, text: str) -> None:
        """Test that text without markers passes through byte-for-byte."""
        assert normalize(text) == text

    @given(body=math_bodies)
    def test_inline_math_verbatim(self, body: str) -> None:
        """Test that inline math content is never altered."""
        assert normalize(f"before ${body}$ after") == f"before ${body}$ after"

    @given(body=math_bodies.filter(lambda body: body.strip() == body))
    def test_display_math_verbatim(self, body: str) -> None:
        """Test that trimmed display math content is never altered."""
        assert f"$${body}$$" in normalize(f"text $${body}$$")

    @given(text=hostile_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_output_has_no_blank_line_runs(self, text: str) -> None:
        """Test that converted output never holds three consecutive newlines."""
        result = convert(text)

        assert "\n\n\n" not in result
        assert "\r" not in result
        assert result == result.strip()


@pytest.mark.unit
@pytest.mark.fuzzing
class TestParserProperties:
    """Property-based tests for the parser."""

    @given(text=hostile_documents, depth=st.integers(min_value=1, max_value=6))
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_tree_depth_bounded(self, text: str, depth: int) -> None:
        """Test that styled nesting never exceeds the configured limit."""
        parser = LatexParser(LatexOptions(max_nesting_depth=depth))

        doc = parser.parse(text)

        assert _styled_depth(doc) <= depth

    @given(text=hostile_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_strict_mode_only_raises_conversion_errors(self, text: str) -> None:
        """Test that strict mode fails only with library exceptions."""
        from tex2md import ConversionError

        options = NormalizeOptions(parser=LatexOptions(strict_mode=True))
        try:
            normalize(text, options)
        except ConversionError:
            pass

    @given(text=hostile_documents)
    @settings(suppress_health_check=[HealthCheck.too_slow])
    def test_passthrough_content_comes_from_input(self, text: str) -> None:
        """Test that passthrough nodes only carry slices of the input."""
        doc = LatexParser().parse(text)

        for node in walk(doc):
            content = getattr(node, "content", None)
            if type(node).__name__ == "Passthrough":
                assert content in text


def _styled_depth(node, level: int = 0) -> int:
    from tex2md.ast import Styled, get_node_children

    current = level + 1 if isinstance(node, Styled) else level
    children = get_node_children(node)
    if not children:
        return current
    return max(_styled_depth(child, current) for child in children)
