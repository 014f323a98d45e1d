#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

Visitors keep algorithms such as rendering separate from the node classes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator

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


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for every node type.

    Examples
    --------
    Counting math spans:

        >>> class MathCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_math_span(self, node):
        ...         self.count += 1
        ...
        ...     def generic_visit(self, node):
        ...         for child in get_node_children(node):
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_styled(self, node: Styled) -> Any:
        """Visit a Styled node."""

    @abstractmethod
    def visit_math_span(self, node: MathSpan) -> Any:
        """Visit a MathSpan node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_comment(self, node: Comment) -> Any:
        """Visit a Comment node."""

    @abstractmethod
    def visit_passthrough(self, node: Passthrough) -> Any:
        """Visit a Passthrough node."""

    def generic_visit(self, node: Node) -> Any:
        """Visit every child of ``node``; used by visitors that only care about some node types.

        Parameters
        ----------
        node : Node
            The node whose children should be visited

        """
        for child in get_node_children(node):
            child.accept(self)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants depth-first in document order.

    Parameters
    ----------
    node : Node
        Root of the traversal

    Yields
    ------
    Node
        Each node in pre-order

    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))
