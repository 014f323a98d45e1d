#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/renderers/markdown.py
"""Markdown-style rendering from AST.

This module provides the MarkdownRenderer class which serializes the AST
into the narrow markup understood by lightweight chat/markdown displays:
``**bold**``, ``*italic*``, ``$inline$`` and ``$$display$$`` math, and one
line per list item.

The rendering process uses the visitor pattern to walk the tree in
document order. A final cleanup pass normalizes line endings, collapses
runs of blank lines and trims the result.

"""

from __future__ import annotations

import re

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
)
from tex2md.ast.visitors import NodeVisitor
from tex2md.constants import (
    BOLD_DELIMITER,
    DISPLAY_MATH_DELIMITER,
    INLINE_MATH_DELIMITER,
    ITALIC_DELIMITER,
)
from tex2md.options.markdown import MarkdownRendererOptions
from tex2md.renderers.base import BaseRenderer, InlineContentMixin

_BLANK_LINE_RUN_RE = re.compile(r"\n{3,}")


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to Markdown-style text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
    Basic usage:

        >>> from tex2md.ast import Document, Styled, Text
        >>> from tex2md.renderers.markdown import MarkdownRenderer
        >>> doc = Document(children=[Text("Area is "), Styled("bold", [Text("large")])])
        >>> MarkdownRenderer().render_to_string(doc)
        'Area is **large**'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._list_depth: int = 0
        self._pending_break: bool = False
        self._inline_break: bool = False

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Normalized text

        """
        self._output = []
        self._list_depth = 0
        self._pending_break = False

        document.accept(self)

        return self._cleanup_output("".join(self._output))

    def _cleanup_output(self, text: str) -> str:
        """Normalize line endings, collapse blank-line runs and trim.

        Parameters
        ----------
        text : str
            Concatenated output

        Returns
        -------
        str
            Cleaned text

        """
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        if self.options.collapse_blank_lines:
            text = _BLANK_LINE_RUN_RE.sub("\n\n", text)
        return text.strip()

    def _write(self, text: str) -> None:
        """Append text, starting a new line first if a list just ended."""
        if not text:
            return
        if self._pending_break:
            text = text.lstrip(" \t")
            if not text:
                return
            if not text.startswith("\n"):
                text = "\n" + text
            self._pending_break = False
        self._output.append(text)

    def _start_line(self) -> None:
        """Drop trailing horizontal whitespace and make sure output ends a line."""
        while self._output:
            last = self._output[-1].rstrip(" \t")
            if last:
                self._output[-1] = last
                break
            self._output.pop()
        if self._output and not self._output[-1].endswith("\n"):
            self._output.append("\n")
        self._pending_break = False

    def _render_inline_content(self, content: list[Node]) -> str:
        saved_break = self._pending_break
        self._pending_break = False
        result = super()._render_inline_content(content)
        self._inline_break = self._pending_break
        self._pending_break = saved_break
        return result

    def visit_document(self, node: Document) -> None:
        """Render every top-level node in order."""
        for child in node.children:
            child.accept(self)

    def visit_text(self, node: Text) -> None:
        """Render text unchanged."""
        self._write(node.content)

    def visit_passthrough(self, node: Passthrough) -> None:
        """Render passthrough source unchanged."""
        self._write(node.content)

    def visit_comment(self, node: Comment) -> None:
        """Render nothing for comments."""
        pass

    def visit_styled(self, node: Styled) -> None:
        """Render bold as ``**...**`` and italic as ``*...*``.

        Empty styled spans produce no output, since an empty delimiter pair
        would read as a different delimiter. A list inside the span keeps
        its lines: a span opening with a list starts a new line, and text
        after a span ending with a list does too.
        """
        content = self._render_inline_content(node.content)
        ends_with_list = self._inline_break
        if not content:
            return
        if isinstance(_first_significant(node.content), List):
            self._start_line()
        delimiter = BOLD_DELIMITER if node.style == "bold" else ITALIC_DELIMITER
        self._write(f"{delimiter}{content}{delimiter}")
        if ends_with_list:
            self._pending_break = True

    def visit_math_span(self, node: MathSpan) -> None:
        """Render math verbatim between ``$`` or ``$$`` delimiters.

        Display math is trimmed of surrounding whitespace; inline math is
        emitted exactly as written.
        """
        if node.display:
            self._write(f"{DISPLAY_MATH_DELIMITER}{node.content.strip()}{DISPLAY_MATH_DELIMITER}")
        else:
            self._write(f"{INLINE_MATH_DELIMITER}{node.content}{INLINE_MATH_DELIMITER}")

    def visit_list(self, node: List) -> None:
        """Render a list with one item per line.

        Labeled items use their label; unlabeled enumerate items use their
        1-based position in the list, and unlabeled itemize items use the
        configured bullet. Nested lists are indented.
        """
        if not node.items:
            return

        self._start_line()
        indent = " " * (self.options.nested_list_indent * self._list_depth)
        lines: list[str] = []

        for ordinal, item in enumerate(node.items, start=1):
            marker = self._item_marker(node, item, ordinal)
            body_lines = self._render_item_body(item).split("\n")
            lines.append(f"{indent}{marker}{body_lines[0]}".rstrip())
            lines.extend(line.rstrip() for line in body_lines[1:])

        self._output.append("\n".join(lines))
        self._pending_break = True

    def visit_list_item(self, node: ListItem) -> None:
        """Render the item content without a marker."""
        for child in node.children:
            child.accept(self)

    def _item_marker(self, node: List, item: ListItem, ordinal: int) -> str:
        if item.label is not None:
            return f"{item.label}. " if node.ordered else f"{item.label} "
        if node.ordered:
            return f"{ordinal}. "
        return f"{self.options.itemize_marker} "

    def _render_item_body(self, item: ListItem) -> str:
        saved_output, saved_break = self._output, self._pending_break
        self._output, self._pending_break = [], False
        self._list_depth += 1
        try:
            item.accept(self)
        finally:
            self._list_depth -= 1
        body = "".join(self._output)
        self._output, self._pending_break = saved_output, saved_break
        return body.strip()


def _first_significant(nodes: list[Node]) -> Node | None:
    """Return the first node that is not whitespace-only text."""
    for child in nodes:
        if isinstance(child, Text) and not child.content.strip():
            continue
        return child
    return None
