#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class renderers inherit from, plus the
mixin text renderers use to capture the output of nested inline content.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from tex2md.ast import Document, Node
from tex2md.exceptions import InvalidOptionsError
from tex2md.options.base import BaseRendererOptions
from tex2md.utils.io_utils import write_text


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    Examples
    --------
    Creating a custom renderer:

        >>> from tex2md.renderers.base import BaseRenderer
        >>>
        >>> class PlainRenderer(BaseRenderer):
        ...     def render_to_string(self, doc):
        ...         return "rendered output"

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        """
        raise NotImplementedError

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST and write it to a file or stream.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            Output destination

        Raises
        ------
        FileError
            If the output path cannot be written

        """
        write_text(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


class InlineContentMixin:
    """Mixin providing nested content capture for text-based renderers.

    The implementing class must have an ``_output`` attribute (list of str)
    that its visitor methods append to.

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render nodes into a temporary buffer and return the text.

        Parameters
        ----------
        content : list of Node
            Nodes to render

        Returns
        -------
        str
            Rendered content

        """
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result
