#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/tex2md/renderers/__init__.py
"""Renderers that serialize the tex2md AST."""

from tex2md.renderers.base import BaseRenderer, InlineContentMixin
from tex2md.renderers.markdown import MarkdownRenderer

__all__ = ["BaseRenderer", "InlineContentMixin", "MarkdownRenderer"]
