#  Copyright (c) 2025 Tom Villani, Ph.D.

# tex2md/options/markdown.py
"""Configuration options for the Markdown-style serializer."""

from __future__ import annotations

from dataclasses import dataclass, field

from tex2md.constants import (
    DEFAULT_COLLAPSE_BLANK_LINES,
    DEFAULT_ITEMIZE_MARKER,
    DEFAULT_NESTED_LIST_INDENT,
    ItemizeMarker,
)
from tex2md.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    """Configuration options for AST-to-Markdown rendering.

    Parameters
    ----------
    collapse_blank_lines : bool, default True
        Collapse three or more consecutive newlines into exactly two.
    itemize_marker : {"-", "*", "+"}, default "-"
        Bullet used for unlabeled ``itemize`` items.
    nested_list_indent : int, default 3
        Spaces of indentation per level of list nesting.

    """

    collapse_blank_lines: bool = field(
        default=DEFAULT_COLLAPSE_BLANK_LINES,
        metadata={
            "help": "Collapse runs of blank lines into a single blank line",
            "cli_name": "no-collapse-blank-lines",
            "importance": "advanced",
        },
    )
    itemize_marker: ItemizeMarker = field(
        default=DEFAULT_ITEMIZE_MARKER,
        metadata={"help": "Bullet for unlabeled itemize entries", "choices": ["-", "*", "+"], "importance": "core"},
    )
    nested_list_indent: int = field(
        default=DEFAULT_NESTED_LIST_INDENT,
        metadata={"help": "Spaces of indentation per nested list level", "type": int, "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()
        if self.itemize_marker not in ("-", "*", "+"):
            raise ValueError(f"itemize_marker must be one of '-', '*', '+', got {self.itemize_marker!r}")
        if self.nested_list_indent < 0:
            raise ValueError(f"nested_list_indent must be non-negative, got {self.nested_list_indent}")
