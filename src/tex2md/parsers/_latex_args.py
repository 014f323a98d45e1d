#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/parsers/_latex_args.py
"""Argument and environment extent scanning.

These helpers locate the extent of a ``{...}`` or ``[...]`` argument, or of
a ``\\begin``/``\\end`` environment body, without interpreting the content.
They report failure as data rather than raising, so the parser can decide
between a passthrough fallback and a strict-mode error.

All offsets are absolute positions in the source string.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from tex2md.constants import DEFAULT_MAX_NESTING_DEPTH
from tex2md.diagnostics import RecoveryKind

_GROUP_SCAN_RE = re.compile(r"\\.|%[^\n]*|[{}\]]", re.DOTALL)
_STRUCTURE_RE = re.compile(
    r"\\(?:(begin|end)\s*\{([A-Za-z]+\*?)\}|(item)(?![A-Za-z])|[A-Za-z]+|.)|%[^\n]*|[{}]",
    re.DOTALL,
)


@dataclass(frozen=True)
class ArgumentResult:
    """Outcome of extracting a delimited argument.

    Parameters
    ----------
    ok : bool
        Whether a balanced argument was found
    start : int
        Offset extraction started at
    end : int
        Offset just past the closing delimiter; equal to ``start`` on failure
    text : str, default ""
        Argument content without its delimiters
    content_start : int, default -1
        Offset of the first content character
    content_end : int, default -1
        Offset of the closing delimiter
    error : RecoveryKind or None, default None
        Failure kind when ``ok`` is False
    error_position : int, default -1
        Offset the failure was detected at

    """

    ok: bool
    start: int
    end: int
    text: str = ""
    content_start: int = -1
    content_end: int = -1
    error: Optional[RecoveryKind] = None
    error_position: int = -1


@dataclass(frozen=True)
class EnvironmentSpan:
    r"""Outcome of scanning an environment body.

    Parameters
    ----------
    ok : bool
        Whether the matching ``\end`` was found
    name : str
        Environment name
    start : int
        Offset of ``\begin``
    body_start : int
        Offset just past ``\begin{name}``
    body_end : int, default -1
        Offset of the matching ``\end``
    end : int, default -1
        Offset just past the matching ``\end{name}``. For a mismatched
        ``\end`` this is the offset past the offending ``\end{...}``; for an
        unterminated environment it stays -1.
    items : tuple of (int, int), default ()
        ``(start, end)`` offsets of each top-level ``\item`` keyword
    error : RecoveryKind or None, default None
        Failure kind when ``ok`` is False
    error_position : int, default -1
        Offset the failure was detected at
    detail : str, default ""
        Human-readable failure context

    """

    ok: bool
    name: str
    start: int
    body_start: int
    body_end: int = -1
    end: int = -1
    items: tuple[tuple[int, int], ...] = ()
    error: Optional[RecoveryKind] = None
    error_position: int = -1
    detail: str = ""


def skip_whitespace(source: str, pos: int, end: int) -> int:
    """Return the first offset at or after ``pos`` that is not whitespace."""
    while pos < end and source[pos].isspace():
        pos += 1
    return pos


def _scan_group(source: str, start: int, open_at: int, end: int, closer: str, max_depth: int) -> ArgumentResult:
    """Scan a group opened at ``open_at`` up to its ``closer``.

    Escaped characters and ``%`` comments are skipped. ``]`` only closes a
    bracket group outside nested braces.
    """
    brace_depth = 0
    outer = 1 if closer == "}" else 0

    for match in _GROUP_SCAN_RE.finditer(source, open_at + 1, end):
        token = match.group()
        if token == "{":
            brace_depth += 1
            if brace_depth + outer > max_depth:
                return ArgumentResult(
                    ok=False,
                    start=start,
                    end=start,
                    error=RecoveryKind.EXCEEDED_NESTING_DEPTH,
                    error_position=match.start(),
                )
        elif token == "}":
            if brace_depth == 0:
                if closer == "}":
                    return _found(source, start, open_at, match.start())
                break
            brace_depth -= 1
        elif token == "]" and closer == "]" and brace_depth == 0:
            return _found(source, start, open_at, match.start())

    return ArgumentResult(
        ok=False,
        start=start,
        end=start,
        error=RecoveryKind.UNBALANCED_BRACES,
        error_position=open_at,
    )


def _found(source: str, start: int, open_at: int, close_at: int) -> ArgumentResult:
    return ArgumentResult(
        ok=True,
        start=start,
        end=close_at + 1,
        text=source[open_at + 1 : close_at],
        content_start=open_at + 1,
        content_end=close_at,
    )


def extract_argument(
    source: str,
    pos: int,
    end: Optional[int] = None,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> ArgumentResult:
    """Extract a required ``{...}`` argument starting at ``pos``.

    Whitespace between the command and its brace is allowed.

    Parameters
    ----------
    source : str
        Complete input document
    pos : int
        Offset just past the command name
    end : int or None, default None
        Offset the argument must close before
    max_depth : int, default DEFAULT_MAX_NESTING_DEPTH
        Maximum brace depth, counting the argument's own braces

    Returns
    -------
    ArgumentResult
        Balanced argument, or a failure with MISSING_ARGUMENT,
        UNBALANCED_BRACES or EXCEEDED_NESTING_DEPTH

    Examples
    --------
        >>> extract_argument(r"\\textbf{a{b}c} rest", 7).text
        'a{b}c'

    """
    end = len(source) if end is None else end
    open_at = skip_whitespace(source, pos, end)
    if open_at >= end or source[open_at] != "{":
        return ArgumentResult(
            ok=False,
            start=pos,
            end=pos,
            error=RecoveryKind.MISSING_ARGUMENT,
            error_position=pos,
        )
    return _scan_group(source, pos, open_at, end, "}", max_depth)


def extract_optional_argument(
    source: str,
    pos: int,
    end: Optional[int] = None,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> Optional[ArgumentResult]:
    """Extract an optional ``[...]`` argument starting at ``pos``.

    Only spaces and tabs may separate the bracket from ``pos``.

    Returns
    -------
    ArgumentResult or None
        None when no ``[`` follows; otherwise the scan result, which may be
        an UNBALANCED_BRACES failure

    """
    end = len(source) if end is None else end
    open_at = pos
    while open_at < end and source[open_at] in " \t":
        open_at += 1
    if open_at >= end or source[open_at] != "[":
        return None
    return _scan_group(source, pos, open_at, end, "]", max_depth)


def scan_environment(
    source: str,
    start: int,
    body_start: int,
    end: int,
    name: str,
    max_depth: int = DEFAULT_MAX_NESTING_DEPTH,
) -> EnvironmentSpan:
    r"""Find the ``\end{name}`` matching a ``\begin{name}``.

    Nested environments are tracked with a stack; every ``\end`` must match
    the innermost open ``\begin``. Top-level ``\item`` keywords (outside
    nested environments and braces) are collected for list environments.

    Parameters
    ----------
    source : str
        Complete input document
    start : int
        Offset of ``\begin{name}``
    body_start : int
        Offset just past ``\begin{name}``
    end : int
        Offset scanning must stop at
    name : str
        Environment name
    max_depth : int, default DEFAULT_MAX_NESTING_DEPTH
        Maximum environment nesting, counting this environment

    Returns
    -------
    EnvironmentSpan
        The matched extent, or a MISMATCHED_ENVIRONMENT /
        EXCEEDED_NESTING_DEPTH failure

    """
    stack = [name]
    brace_depth = 0
    items: list[tuple[int, int]] = []

    for match in _STRUCTURE_RE.finditer(source, body_start, end):
        keyword, env_name, item = match.group(1), match.group(2), match.group(3)

        if keyword == "begin":
            stack.append(env_name)
            if len(stack) > max_depth:
                return EnvironmentSpan(
                    ok=False,
                    name=name,
                    start=start,
                    body_start=body_start,
                    error=RecoveryKind.EXCEEDED_NESTING_DEPTH,
                    error_position=match.start(),
                    detail=env_name,
                )
        elif keyword == "end":
            if env_name != stack[-1]:
                return EnvironmentSpan(
                    ok=False,
                    name=name,
                    start=start,
                    body_start=body_start,
                    end=match.end(),
                    error=RecoveryKind.MISMATCHED_ENVIRONMENT,
                    error_position=match.start(),
                    detail=f"expected \\end{{{stack[-1]}}}, found \\end{{{env_name}}}",
                )
            stack.pop()
            if not stack:
                return EnvironmentSpan(
                    ok=True,
                    name=name,
                    start=start,
                    body_start=body_start,
                    body_end=match.start(),
                    end=match.end(),
                    items=tuple(items),
                )
        elif item:
            if len(stack) == 1 and brace_depth == 0:
                items.append((match.start(), match.end()))
        else:
            token = match.group()
            if token == "{":
                brace_depth += 1
            elif token == "}" and brace_depth > 0:
                brace_depth -= 1

    return EnvironmentSpan(
        ok=False,
        name=name,
        start=start,
        body_start=body_start,
        error=RecoveryKind.MISMATCHED_ENVIRONMENT,
        error_position=start,
        detail=f"\\begin{{{name}}} is never closed",
    )
