#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/options/__init__.py
"""Configuration options for tex2md.

All option classes are frozen dataclasses; use ``create_updated`` to derive
modified copies.
"""

from tex2md.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from tex2md.options.latex import LatexOptions
from tex2md.options.markdown import MarkdownRendererOptions
from tex2md.options.normalize import NormalizeOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "LatexOptions",
    "MarkdownRendererOptions",
    "NormalizeOptions",
]
