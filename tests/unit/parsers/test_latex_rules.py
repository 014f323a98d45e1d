#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the command and environment rule tables."""

import dataclasses

import pytest

from tex2md.ast import List, ListItem, MathSpan, Styled, Text
from tex2md.parsers import (
    COMMAND_RULES,
    ENVIRONMENT_RULES,
    ArgHandling,
    CommandRule,
    EnvironmentKind,
    EnvironmentRule,
    extend_command_rules,
    extend_environment_rules,
)


@pytest.mark.unit
class TestDefaultTables:
    """Test the built-in rule tables."""

    def test_style_commands(self) -> None:
        """Test that style commands build the expected styled nodes."""
        children = [Text("x")]

        assert COMMAND_RULES["textbf"].build(children) == Styled("bold", children)
        assert COMMAND_RULES["textit"].build(children) == Styled("italic", children)
        assert COMMAND_RULES["emph"].build(children) == Styled("italic", children)
        assert COMMAND_RULES["textbf"].arg_handling is ArgHandling.RECURSIVE

    def test_preamble_commands(self) -> None:
        """Test that preamble commands are verbatim and zero-width."""
        for name in ("documentclass", "usepackage"):
            rule = COMMAND_RULES[name]
            assert rule.preamble
            assert rule.optional_arg
            assert rule.arg_handling is ArgHandling.VERBATIM
            assert rule.build("article") is None

    def test_math_environments(self) -> None:
        """Test that math environments build display or inline spans."""
        for name in ("equation", "equation*", "displaymath", "align", "align*"):
            rule = ENVIRONMENT_RULES[name]
            assert rule.kind is EnvironmentKind.MATH
            assert rule.build is not None
            assert rule.build("x") == MathSpan("x", display=True)

        math_rule = ENVIRONMENT_RULES["math"]
        assert math_rule.build is not None
        assert math_rule.build("x") == MathSpan("x", display=False)

    def test_list_environments(self) -> None:
        """Test that list environments build lists of the right style."""
        items = [ListItem([Text("a")])]
        enumerate_rule = ENVIRONMENT_RULES["enumerate"]
        itemize_rule = ENVIRONMENT_RULES["itemize"]

        assert enumerate_rule.build is not None and itemize_rule.build is not None
        assert enumerate_rule.build(items) == List(style="enumerate", items=items)
        assert itemize_rule.build(items) == List(style="itemize", items=items)

    def test_document_is_wrapper(self) -> None:
        """Test that the document environment only wraps content."""
        assert ENVIRONMENT_RULES["document"].kind is EnvironmentKind.WRAPPER

    def test_tables_are_read_only(self) -> None:
        """Test that the default tables cannot be modified."""
        with pytest.raises(TypeError):
            COMMAND_RULES["underline"] = COMMAND_RULES["textbf"]  # type: ignore[index]
        with pytest.raises(TypeError):
            ENVIRONMENT_RULES["center"] = ENVIRONMENT_RULES["document"]  # type: ignore[index]


@pytest.mark.unit
class TestRuleDefinitions:
    """Test rule validation and table extension."""

    def test_rules_are_frozen(self) -> None:
        """Test that rule instances are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            COMMAND_RULES["textbf"].arg_count = 0  # type: ignore[misc]

    def test_invalid_arg_count(self) -> None:
        """Test that commands take at most one required argument."""
        with pytest.raises(ValueError, match="arg_count"):
            CommandRule("frac", 2, ArgHandling.VERBATIM, lambda value: None)

    def test_extend_command_rules(self) -> None:
        """Test that extending returns a new table and leaves the default intact."""
        rule = CommandRule("underline", 1, ArgHandling.RECURSIVE, lambda children: Styled("italic", children))

        table = extend_command_rules(rule)

        assert table["underline"] is rule
        assert "textbf" in table
        assert "underline" not in COMMAND_RULES

    def test_extend_replaces_existing(self) -> None:
        """Test that an extension rule replaces a default rule of the same name."""
        rule = CommandRule("emph", 1, ArgHandling.RECURSIVE, lambda children: Styled("bold", children))

        assert extend_command_rules(rule)["emph"] is rule

    def test_extend_environment_rules(self) -> None:
        """Test adding a wrapper environment."""
        table = extend_environment_rules(EnvironmentRule("center", EnvironmentKind.WRAPPER))

        assert table["center"].kind is EnvironmentKind.WRAPPER
        assert "center" not in ENVIRONMENT_RULES
