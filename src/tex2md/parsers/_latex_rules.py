#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/parsers/_latex_rules.py
"""Command and environment rule tables.

Recognized constructs are data, not control flow: supporting a new command
or environment means adding an entry here (or passing an extended table to
:class:`~tex2md.parsers.latex.LatexParser`). The default tables are
read-only mappings built once at import time.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from tex2md.ast import List, ListItem, MathSpan, Node, Styled


class ArgHandling(str, Enum):
    """How a command argument is consumed."""

    VERBATIM = "verbatim"
    RECURSIVE = "recursive"


class EnvironmentKind(str, Enum):
    """Structural role of a recognized environment."""

    MATH = "math"
    LIST = "list"
    WRAPPER = "wrapper"


@dataclass(frozen=True)
class CommandRule:
    """Recognition rule for a backslash command.

    Parameters
    ----------
    name : str
        Command name without the backslash
    arg_count : int
        Number of required ``{...}`` arguments (0 or 1)
    arg_handling : ArgHandling
        RECURSIVE arguments are parsed into nodes; VERBATIM ones are kept as text
    build : callable
        Called with the parsed argument (list of nodes, str or None); returns
        the replacement node, or None for a zero-width command
    optional_arg : bool, default False
        Whether a ``[...]`` argument may precede the required one
    preamble : bool, default False
        Whether the command belongs to the document preamble and is
        controlled by ``strip_preamble``

    """

    name: str
    arg_count: int
    arg_handling: ArgHandling
    build: Callable[[Any], Optional[Node]]
    optional_arg: bool = False
    preamble: bool = False

    def __post_init__(self) -> None:
        if self.arg_count not in (0, 1):
            raise ValueError(f"arg_count must be 0 or 1, got {self.arg_count}")


@dataclass(frozen=True)
class EnvironmentRule:
    """Recognition rule for a ``\\begin{name}...\\end{name}`` environment.

    Parameters
    ----------
    name : str
        Environment name, including a trailing ``*`` for starred variants
    kind : EnvironmentKind
        MATH bodies become a MathSpan, LIST bodies a List, WRAPPER
        delimiters are dropped while the body is parsed in place
    build : callable or None
        MATH: called with the raw body. LIST: called with the list items.
        WRAPPER: unused.

    """

    name: str
    kind: EnvironmentKind
    build: Optional[Callable[[Any], Node]] = None


def _bold(children: list[Node]) -> Styled:
    return Styled("bold", children)


def _italic(children: list[Node]) -> Styled:
    return Styled("italic", children)


def _zero_width(_argument: Any) -> None:
    return None


def _display_math(raw: str) -> MathSpan:
    return MathSpan(raw, display=True)


def _inline_math(raw: str) -> MathSpan:
    return MathSpan(raw, display=False)


def _enumerate(items: list[ListItem]) -> List:
    return List(style="enumerate", items=items)


def _itemize(items: list[ListItem]) -> List:
    return List(style="itemize", items=items)


def _command_table(*rules: CommandRule) -> Mapping[str, CommandRule]:
    return MappingProxyType({rule.name: rule for rule in rules})


def _environment_table(*rules: EnvironmentRule) -> Mapping[str, EnvironmentRule]:
    return MappingProxyType({rule.name: rule for rule in rules})


COMMAND_RULES: Mapping[str, CommandRule] = _command_table(
    CommandRule("textbf", 1, ArgHandling.RECURSIVE, _bold),
    CommandRule("textit", 1, ArgHandling.RECURSIVE, _italic),
    CommandRule("emph", 1, ArgHandling.RECURSIVE, _italic),
    CommandRule("documentclass", 1, ArgHandling.VERBATIM, _zero_width, optional_arg=True, preamble=True),
    CommandRule("usepackage", 1, ArgHandling.VERBATIM, _zero_width, optional_arg=True, preamble=True),
)

ENVIRONMENT_RULES: Mapping[str, EnvironmentRule] = _environment_table(
    EnvironmentRule("equation", EnvironmentKind.MATH, _display_math),
    EnvironmentRule("equation*", EnvironmentKind.MATH, _display_math),
    EnvironmentRule("displaymath", EnvironmentKind.MATH, _display_math),
    EnvironmentRule("align", EnvironmentKind.MATH, _display_math),
    EnvironmentRule("align*", EnvironmentKind.MATH, _display_math),
    EnvironmentRule("math", EnvironmentKind.MATH, _inline_math),
    EnvironmentRule("enumerate", EnvironmentKind.LIST, _enumerate),
    EnvironmentRule("itemize", EnvironmentKind.LIST, _itemize),
    EnvironmentRule("document", EnvironmentKind.WRAPPER),
)


def extend_command_rules(
    *rules: CommandRule, base: Mapping[str, CommandRule] = COMMAND_RULES
) -> Mapping[str, CommandRule]:
    """Return a new read-only command table with ``rules`` added or replaced.

    Examples
    --------
        >>> table = extend_command_rules(CommandRule("textsl", 1, ArgHandling.RECURSIVE, _italic))
        >>> "textsl" in table and "textbf" in table
        True

    """
    merged = dict(base)
    merged.update((rule.name, rule) for rule in rules)
    return MappingProxyType(merged)


def extend_environment_rules(
    *rules: EnvironmentRule, base: Mapping[str, EnvironmentRule] = ENVIRONMENT_RULES
) -> Mapping[str, EnvironmentRule]:
    """Return a new read-only environment table with ``rules`` added or replaced."""
    merged = dict(base)
    merged.update((rule.name, rule) for rule in rules)
    return MappingProxyType(merged)
