#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/parsers/_latex_tokens.py
"""Single-pass tokenizer for the supported LaTeX subset.

The tokenizer is a lazy iterator over absolute offsets of one source string.
It never copies or mutates the source; every token records the ``[start,
end)`` slice it came from so the parser can pass original text through.

Recognition rules
-----------------
- ``\\name`` (ASCII letters) is a command; ``\\begin{env}`` and
  ``\\end{env}`` are environment tokens.
- ``\\`` followed by anything else is literal text. ``\\%`` yields ``%``;
  every other escape is kept as written.
- ``$``/``$$`` and ``\\(``/``\\[`` open math spans. The whole span is
  emitted as opener, raw body and closer. An opener without a closer turns
  the rest of the input into literal text.
- ``%`` starts a comment running to (not including) the end of the line.
  Horizontal whitespace directly before the ``%`` belongs to the comment.

"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from tex2md.diagnostics import RecoveryKind

RecoveryHandler = Callable[[RecoveryKind, int, str], None]

_SPECIAL_RE = re.compile(r"[\\$%{}]")
_COMMAND_RE = re.compile(r"\\([A-Za-z]+)")
_ENV_NAME_RE = re.compile(r"\s*\{([A-Za-z]+\*?)\}")

# opener -> (closer, display)
_MATH_DELIMITERS: dict[str, tuple[str, bool]] = {
    "$$": ("$$", True),
    "$": ("$", False),
    "\\[": ("\\]", True),
    "\\(": ("\\)", False),
}

# The closer is tried before the escape alternative so that "\)" and "\]" close
# their spans while "\$" and "\\" are skipped.
_MATH_CLOSE_PATTERNS: dict[str, re.Pattern[str]] = {
    closer: re.compile(re.escape(closer) + r"|\\.", re.DOTALL) for closer, _ in _MATH_DELIMITERS.values()
}


class TokenType(Enum):
    """Token categories produced by the tokenizer."""

    TEXT = "text"
    COMMAND = "command"
    MATH_BOUNDARY = "math_boundary"
    COMMENT = "comment"
    ENV_BEGIN = "env_begin"
    ENV_END = "env_end"
    BRACE_OPEN = "brace_open"
    BRACE_CLOSE = "brace_close"


@dataclass(frozen=True)
class Token:
    """A lexical token.

    Parameters
    ----------
    type : TokenType
        Token category
    value : str
        Text for TEXT/COMMENT/braces, the bare name for COMMAND and
        environment tokens, the delimiter for MATH_BOUNDARY
    start : int
        Offset of the first source character
    end : int
        Offset one past the last source character
    display : bool, default False
        MATH_BOUNDARY only: display rather than inline math
    closing : bool, default False
        MATH_BOUNDARY only: closing rather than opening delimiter

    """

    type: TokenType
    value: str
    start: int
    end: int
    display: bool = False
    closing: bool = False


def find_math_close(source: str, start: int, end: int, closer: str) -> int:
    """Return the offset of the first unescaped ``closer`` in ``source[start:end]``, or -1."""
    for match in _MATH_CLOSE_PATTERNS[closer].finditer(source, start, end):
        if match.group() == closer:
            return match.start()
    return -1


class LatexTokenizer:
    """Lazy tokenizer over ``source[start:end]``.

    Iteration is forward-only. The parser may :meth:`seek` past text it
    consumed through argument extraction.

    Parameters
    ----------
    source : str
        Complete input document
    start : int, default 0
        Offset to begin scanning at
    end : int or None, default None
        Offset to stop at; defaults to the end of ``source``
    on_recovery : callable, optional
        Called as ``on_recovery(kind, position, detail)`` when a recoverable
        condition is met

    """

    def __init__(
        self,
        source: str,
        start: int = 0,
        end: Optional[int] = None,
        on_recovery: Optional[RecoveryHandler] = None,
    ):
        self.source = source
        self.pos = start
        self.end = len(source) if end is None else end
        self._on_recovery = on_recovery
        self._pending: deque[Token] = deque()

    def __iter__(self) -> LatexTokenizer:
        return self

    def __next__(self) -> Token:
        if self._pending:
            return self._pending.popleft()
        if self.pos >= self.end:
            raise StopIteration
        return self._scan()

    def seek(self, position: int) -> None:
        """Continue scanning at ``position``.

        Raises
        ------
        ValueError
            If ``position`` lies before the current position.

        """
        if position < self.pos:
            raise ValueError(f"Tokenizer cannot move backwards from {self.pos} to {position}")
        self._pending.clear()
        self.pos = min(position, self.end)

    def _emit(self, token_type: TokenType, value: str, start: int, end: int) -> Token:
        self.pos = end
        return Token(token_type, value, start, end)

    def _scan(self) -> Token:
        source, pos = self.source, self.pos
        char = source[pos]

        if char == "\\":
            return self._scan_backslash(pos)
        if char == "$":
            opener = "$$" if source.startswith("$$", pos, self.end) else "$"
            return self._scan_math(pos, opener)
        if char == "%":
            return self._scan_comment(pos)
        if char == "{":
            return self._emit(TokenType.BRACE_OPEN, "{", pos, pos + 1)
        if char == "}":
            return self._emit(TokenType.BRACE_CLOSE, "}", pos, pos + 1)
        return self._scan_text(pos)

    def _scan_text(self, pos: int) -> Token:
        source = self.source
        match = _SPECIAL_RE.search(source, pos, self.end)
        stop = match.start() if match else self.end

        if match is not None and source[stop] == "%":
            trimmed = stop
            while trimmed > pos and source[trimmed - 1] in " \t":
                trimmed -= 1
            if trimmed == pos:
                return self._scan_comment(pos)
            stop = trimmed

        return self._emit(TokenType.TEXT, source[pos:stop], pos, stop)

    def _scan_comment(self, pos: int) -> Token:
        eol = self.source.find("\n", pos, self.end)
        stop = self.end if eol < 0 else eol
        return self._emit(TokenType.COMMENT, self.source[pos:stop], pos, stop)

    def _scan_backslash(self, pos: int) -> Token:
        source = self.source
        if pos + 1 >= self.end:
            return self._emit(TokenType.TEXT, "\\", pos, pos + 1)

        command = _COMMAND_RE.match(source, pos, self.end)
        if command is not None:
            name = command.group(1)
            if name in ("begin", "end"):
                env = _ENV_NAME_RE.match(source, command.end(), self.end)
                if env is not None:
                    token_type = TokenType.ENV_BEGIN if name == "begin" else TokenType.ENV_END
                    return self._emit(token_type, env.group(1), pos, env.end())
            return self._emit(TokenType.COMMAND, name, pos, command.end())

        following = source[pos + 1]
        if following in "([":
            return self._scan_math(pos, "\\" + following)
        if following == "%":
            return self._emit(TokenType.TEXT, "%", pos, pos + 2)
        return self._emit(TokenType.TEXT, source[pos : pos + 2], pos, pos + 2)

    def _scan_math(self, pos: int, opener: str) -> Token:
        source = self.source
        closer, display = _MATH_DELIMITERS[opener]
        body_start = pos + len(opener)
        close_at = find_math_close(source, body_start, self.end, closer)

        if close_at < 0:
            if self._on_recovery is not None:
                self._on_recovery(RecoveryKind.UNTERMINATED_MATH, pos, opener)
            return self._emit(TokenType.TEXT, source[pos : self.end], pos, self.end)

        close_end = close_at + len(closer)
        self._pending.append(Token(TokenType.TEXT, source[body_start:close_at], body_start, close_at))
        self._pending.append(
            Token(TokenType.MATH_BOUNDARY, closer, close_at, close_end, display=display, closing=True)
        )
        self.pos = close_end
        return Token(TokenType.MATH_BOUNDARY, opener, pos, body_start, display=display)


def tokenize(source: str, on_recovery: Optional[RecoveryHandler] = None) -> list[Token]:
    """Tokenize a whole string eagerly; convenient for inspection and tests."""
    return list(LatexTokenizer(source, on_recovery=on_recovery))
