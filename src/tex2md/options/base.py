#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/options/base.py
"""Base classes for parser and renderer options.

This module defines the foundation classes for the options used throughout
the tex2md normalization pipeline.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Renderers convert AST documents into output text.

    Notes
    -----
    Subclasses should define format-specific rendering options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate field values; subclasses extend this."""


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for all parser options.

    Parsers convert source text into AST representation.

    Notes
    -----
    Subclasses should define format-specific parsing options as frozen dataclass fields.

    """

    def __post_init__(self) -> None:
        """Validate field values; subclasses extend this."""
