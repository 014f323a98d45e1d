#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/parsers/__init__.py
"""Parsers that build the tex2md AST from source text."""

from tex2md.parsers._latex_rules import (
    COMMAND_RULES,
    ENVIRONMENT_RULES,
    ArgHandling,
    CommandRule,
    EnvironmentKind,
    EnvironmentRule,
    extend_command_rules,
    extend_environment_rules,
)
from tex2md.parsers.base import BaseParser
from tex2md.parsers.latex import LatexParser

__all__ = [
    "COMMAND_RULES",
    "ENVIRONMENT_RULES",
    "ArgHandling",
    "BaseParser",
    "CommandRule",
    "EnvironmentKind",
    "EnvironmentRule",
    "LatexParser",
    "extend_command_rules",
    "extend_environment_rules",
]
