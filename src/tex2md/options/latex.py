#  Copyright (c) 2025 Tom Villani, Ph.D.

# tex2md/options/latex.py
"""Configuration options for parsing the LaTeX subset.

This module defines options for the tokenizer and recursive-descent parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tex2md.constants import (
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_STRICT_MODE,
    DEFAULT_STRIP_COMMENTS,
    DEFAULT_STRIP_PREAMBLE,
    MAX_NESTING_DEPTH_CEILING,
)
from tex2md.options.base import BaseParserOptions


@dataclass(frozen=True)
class LatexOptions(BaseParserOptions):
    r"""Configuration options for LaTeX-to-AST parsing.

    Parameters
    ----------
    max_nesting_depth : int, default 64
        Maximum brace, environment and recursive-parse depth. Constructs
        nested deeper than this are passed through as literal text. At most
        MAX_NESTING_DEPTH_CEILING (100).
    strict_mode : bool, default False
        Raise a ConversionError on the first recoverable condition instead
        of falling back to passthrough text.
    strip_comments : bool, default True
        Drop ``%`` comments. When False, comments are kept as literal text.
    strip_preamble : bool, default True
        Drop ``\documentclass`` and ``\usepackage``. When False they are kept
        as literal text. Their arguments are recorded in document metadata
        either way.

    """

    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum brace/environment nesting depth before constructs are passed through literally",
            "type": int,
            "importance": "security",
        },
    )
    strict_mode: bool = field(
        default=DEFAULT_STRICT_MODE,
        metadata={"help": "Raise errors on malformed markup instead of passing it through", "importance": "advanced"},
    )
    strip_comments: bool = field(
        default=DEFAULT_STRIP_COMMENTS,
        metadata={"help": "Drop % comments", "cli_name": "keep-comments", "importance": "core"},
    )
    strip_preamble: bool = field(
        default=DEFAULT_STRIP_PREAMBLE,
        metadata={
            "help": "Drop \\documentclass and \\usepackage commands",
            "cli_name": "keep-preamble",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If max_nesting_depth is not in 1..MAX_NESTING_DEPTH_CEILING.

        """
        super().__post_init__()
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if self.max_nesting_depth > MAX_NESTING_DEPTH_CEILING:
            raise ValueError(
                f"max_nesting_depth must be at most {MAX_NESTING_DEPTH_CEILING}, got {self.max_nesting_depth}"
            )
