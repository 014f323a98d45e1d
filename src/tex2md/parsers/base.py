#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/parsers/base.py
"""Base classes for parsers.

This module defines the abstract base class parsers inherit from. The
BaseParser provides option validation and the shared bookkeeping for
recoverable conditions: every fallback is logged, recorded as a
:class:`~tex2md.diagnostics.RecoveryEvent` and, in strict mode, raised.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from tex2md.ast import Document
from tex2md.diagnostics import RecoveryEvent, RecoveryKind
from tex2md.exceptions import InvalidOptionsError, error_for_kind
from tex2md.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser-specific options

    Attributes
    ----------
    events : list of RecoveryEvent
        Recoverable conditions met during the most recent ``parse`` call

    Examples
    --------
    Creating a custom parser:

        >>> from tex2md.parsers.base import BaseParser
        >>> from tex2md.ast import Document, Text
        >>>
        >>> class PlainParser(BaseParser):
        ...     def parse(self, text):
        ...         return Document(children=[Text(text)])
        ...
        ...     def extract_metadata(self, text):
        ...         return {}

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options
        self.events: list[RecoveryEvent] = []

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, text: str) -> Document:
        """Parse the input text into an AST.

        Parameters
        ----------
        text : str
            Source text

        Returns
        -------
        Document
            AST Document node

        Raises
        ------
        ConversionError
            Only in strict mode, on the first recoverable condition

        """
        raise NotImplementedError

    @abstractmethod
    def extract_metadata(self, text: str) -> dict[str, Any]:
        """Extract document-level metadata from the source text."""
        raise NotImplementedError

    def _recover(self, kind: RecoveryKind, position: int, detail: str = "") -> None:
        """Record a recoverable condition, raising it in strict mode.

        Parameters
        ----------
        kind : RecoveryKind
            The condition met
        position : int
            Character offset in the input
        detail : str, default ""
            Command or environment name, or other short context

        Raises
        ------
        ConversionError
            The subclass matching ``kind``, when ``strict_mode`` is enabled

        """
        event = RecoveryEvent(kind, position, detail)
        self.events.append(event)
        logger.debug("Falling back to passthrough: %s", event)

        if getattr(self.options, "strict_mode", False):
            raise error_for_kind(kind, f"Malformed LaTeX: {event}", position=position)
