#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/ast/__init__.py
"""Abstract Syntax Tree for normalized LaTeX content.

The parser builds a fresh tree per call; the Markdown serializer walks it
with the visitor pattern and the tree is discarded afterwards.

Examples
--------
    >>> from tex2md.ast import Document, Styled, Text
    >>> doc = Document(children=[Styled("bold", [Text("Hello")])])

"""

from tex2md.ast.nodes import (
    Comment,
    Document,
    List,
    ListItem,
    MathSpan,
    Node,
    Passthrough,
    Styled,
    Text,
    get_node_children,
)
from tex2md.ast.visitors import NodeVisitor, walk

__all__ = [
    "Comment",
    "Document",
    "List",
    "ListItem",
    "MathSpan",
    "Node",
    "NodeVisitor",
    "Passthrough",
    "Styled",
    "Text",
    "get_node_children",
    "walk",
]
