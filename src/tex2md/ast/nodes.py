#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/ast/nodes.py
"""AST node classes for normalized document representation.

This module defines the node hierarchy produced by the LaTeX parser and
consumed by the Markdown serializer. The tree is shallow: children only
arise from styling and list wrapping.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

- Document: root container of the node sequence
- Text: plain text
- Styled: bold or italic wrapper around child nodes
- MathSpan: inline or display math, content carried verbatim
- List / ListItem: enumerate or itemize environments
- Comment: a dropped ``%`` comment, kept explicit in the tree
- Passthrough: original source text for anything not safely interpretable

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from tex2md.constants import ListStyleType, StyleType
from tex2md.diagnostics import RecoveryKind


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass
class Document(Node):
    r"""Root node holding the ordered node sequence.

    Parameters
    ----------
    children : list of Node, default = empty list
        Nodes in source order
    metadata : dict, default = empty dict
        Document-level metadata (``document_class`` and ``packages`` from
        ``\documentclass`` / ``\usepackage`` when present)

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_document``."""
        return visitor.visit_document(self)


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    content : str
        The text, emitted unchanged

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_text``."""
        return visitor.visit_text(self)


@dataclass
class Styled(Node):
    """Bold or italic wrapper.

    Parameters
    ----------
    style : {"bold", "italic"}
        Which style to apply
    content : list of Node, default = empty list
        Styled child nodes

    """

    style: StyleType
    content: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the style name."""
        if self.style not in ("bold", "italic"):
            raise ValueError(f"Unsupported style: {self.style}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_styled``."""
        return visitor.visit_styled(self)


@dataclass
class MathSpan(Node):
    """Inline or display math.

    The content is the raw source between the delimiters and is never
    reparsed, restyled or otherwise altered.

    Parameters
    ----------
    content : str
        Raw math source without delimiters
    display : bool, default False
        True for display math (``$$``, ``\\[``, math environments)

    """

    content: str
    display: bool = False

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_math_span``."""
        return visitor.visit_math_span(self)


@dataclass
class ListItem(Node):
    r"""A single ``\item`` of a list.

    Parameters
    ----------
    children : list of Node, default = empty list
        Parsed item content
    label : str or None, default = None
        Explicit label from ``\item[label]``

    """

    children: list[Node] = field(default_factory=list)
    label: Optional[str] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list_item``."""
        return visitor.visit_list_item(self)


@dataclass
class List(Node):
    """Enumerate or itemize list.

    Parameters
    ----------
    style : {"enumerate", "itemize"}, default "enumerate"
        Source environment
    items : list of ListItem, default = empty list
        Items in source order

    """

    style: ListStyleType = "enumerate"
    items: list[ListItem] = field(default_factory=list)

    @property
    def ordered(self) -> bool:
        """Whether unlabeled items are numbered."""
        return self.style == "enumerate"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_list``."""
        return visitor.visit_list(self)


@dataclass
class Comment(Node):
    """A ``%`` comment; renders as nothing.

    Parameters
    ----------
    content : str
        The comment source, including the leading whitespace and ``%``

    """

    content: str = ""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_comment``."""
        return visitor.visit_comment(self)


@dataclass
class Passthrough(Node):
    """Original source text emitted unchanged.

    Used for unknown commands and environments and for any construct that
    could not be parsed safely.

    Parameters
    ----------
    content : str
        Verbatim source slice
    reason : RecoveryKind or None, default None
        The recoverable condition that forced the passthrough, or None for
        constructs that are simply not recognized

    """

    content: str
    reason: Optional[RecoveryKind] = None

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_passthrough``."""
        return visitor.visit_passthrough(self)


def get_node_children(node: Node) -> list[Node]:
    """Return the direct children of a node in document order.

    Parameters
    ----------
    node : Node
        Any AST node

    Returns
    -------
    list of Node
        Child nodes; empty for leaf nodes

    """
    if isinstance(node, Document):
        return list(node.children)
    if isinstance(node, Styled):
        return list(node.content)
    if isinstance(node, List):
        return list(node.items)
    if isinstance(node, ListItem):
        return list(node.children)
    return []
