#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/parsers/latex.py
r"""LaTeX subset to AST converter.

This module turns a narrow, chat-oriented LaTeX subset into the tex2md AST.
Parsing is a single forward pass of a hand-written tokenizer driven by a
recursive-descent parser. Commands and environments are looked up in rule
tables; anything unknown or malformed becomes a Passthrough node carrying
the original source slice, so no input is ever rejected.

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from tex2md.ast import Comment, Document, ListItem, MathSpan, Node, Passthrough, Text
from tex2md.diagnostics import RecoveryKind
from tex2md.options.latex import LatexOptions
from tex2md.parsers._latex_args import (
    ArgumentResult,
    EnvironmentSpan,
    extract_argument,
    extract_optional_argument,
    scan_environment,
)
from tex2md.parsers._latex_rules import (
    COMMAND_RULES,
    ENVIRONMENT_RULES,
    ArgHandling,
    CommandRule,
    EnvironmentKind,
    EnvironmentRule,
)
from tex2md.parsers._latex_tokens import LatexTokenizer, Token, TokenType
from tex2md.parsers.base import BaseParser

logger = logging.getLogger(__name__)

ParsedConstruct = Union[Node, list[Node], None]


class LatexParser(BaseParser):
    r"""Convert the supported LaTeX subset to AST representation.

    Supported LaTeX Features
    ------------------------
    Text Formatting:
        - \textbf{...} - Bold text
        - \textit{...}, \emph{...} - Italic text

    Math:
        - Inline math: $...$, \(...\), \begin{math}...\end{math}
        - Display math: $$...$$, \[...\]
        - Environments: equation, equation*, align, align*, displaymath

    Lists:
        - \begin{enumerate}...\end{enumerate} with optional \item[label]
        - \begin{itemize}...\end{itemize}

    Preamble:
        - \documentclass[...]{...}, \usepackage[...]{...} (removed; their
          arguments are recorded in the document metadata)
        - \begin{document}, \end{document} (removed, body kept)

    Comments:
        - % to end of line (removed); \% is a literal percent sign

    Unknown commands and environments are passed through verbatim, and the
    contents of unknown environments are still parsed.

    Parameters
    ----------
    options : LatexOptions or None, default = None
        Parser configuration options
    command_rules : mapping, optional
        Replacement command rule table
    environment_rules : mapping, optional
        Replacement environment rule table

    Examples
    --------
    Basic parsing:

        >>> parser = LatexParser()
        >>> doc = parser.parse(r"Area: \textbf{$\pi r^2$}")

    Strict parsing:

        >>> parser = LatexParser(LatexOptions(strict_mode=True))
        >>> parser.parse(r"\textbf{oops")
        Traceback (most recent call last):
        ...
        tex2md.exceptions.UnbalancedBracesError: Malformed LaTeX: unbalanced_braces at offset 7 (textbf)

    """

    def __init__(
        self,
        options: LatexOptions | None = None,
        command_rules: Optional[Mapping[str, CommandRule]] = None,
        environment_rules: Optional[Mapping[str, EnvironmentRule]] = None,
    ):
        """Initialize the LaTeX parser."""
        BaseParser._validate_options_type(options, LatexOptions, "latex")
        options = options or LatexOptions()
        super().__init__(options)
        self.options: LatexOptions = options
        self.command_rules = COMMAND_RULES if command_rules is None else command_rules
        self.environment_rules = ENVIRONMENT_RULES if environment_rules is None else environment_rules
        self.document_metadata: dict[str, Any] = {}
        self._source = ""

    def parse(self, text: str) -> Document:
        """Parse LaTeX text into an AST Document.

        Parameters
        ----------
        text : str
            LaTeX source

        Returns
        -------
        Document
            AST document node; ``metadata`` holds preamble information

        Raises
        ------
        ConversionError
            Only in strict mode, on the first recoverable condition

        """
        # Reset parser state to prevent leakage across parse calls
        self.events = []
        self.document_metadata = {}
        self._source = text or ""

        children = self._parse_range(0, len(self._source), depth=0)

        if self.events:
            logger.debug("Parsed %d characters with %d fallback(s)", len(self._source), len(self.events))

        return Document(children=children, metadata=dict(self.document_metadata))

    def extract_metadata(self, text: str) -> dict[str, Any]:
        """Extract preamble metadata (document class, options, packages).

        Parameters
        ----------
        text : str
            LaTeX source; parsed again unless it is the most recent input

        Returns
        -------
        dict
            ``document_class``, ``document_options`` and ``packages`` when present

        """
        if text != self._source:
            self.parse(text)
        return dict(self.document_metadata)

    def _parse_range(self, start: int, end: int, depth: int) -> list[Node]:
        """Parse ``source[start:end]`` into a node sequence."""
        nodes: list[Node] = []
        tokenizer = LatexTokenizer(self._source, start, end, on_recovery=self._recover)

        for token in tokenizer:
            token_type = token.type

            if token_type is TokenType.TEXT:
                nodes.append(Text(token.value))
            elif token_type is TokenType.MATH_BOUNDARY:
                nodes.append(self._read_math(tokenizer, token))
            elif token_type is TokenType.COMMENT:
                nodes.append(Comment(token.value) if self.options.strip_comments else Passthrough(token.value))
            elif token_type is TokenType.COMMAND:
                self._append(nodes, self._parse_command(tokenizer, token, depth))
            elif token_type is TokenType.ENV_BEGIN:
                self._append(nodes, self._parse_environment(tokenizer, token, depth))
            elif token_type is TokenType.ENV_END:
                self._append(nodes, self._stray_environment_end(token))
            else:
                # Bare braces carry no meaning in the subset
                nodes.append(Text(token.value))

        return nodes

    @staticmethod
    def _append(nodes: list[Node], converted: ParsedConstruct) -> None:
        if converted is None:
            return
        if isinstance(converted, list):
            nodes.extend(converted)
        else:
            nodes.append(converted)

    @staticmethod
    def _read_math(tokenizer: LatexTokenizer, opener: Token) -> MathSpan:
        body = next(tokenizer)
        next(tokenizer)  # closing delimiter
        return MathSpan(content=body.value, display=opener.display)

    def _passthrough(self, start: int, end: int, reason: Optional[RecoveryKind] = None) -> Passthrough:
        return Passthrough(self._source[start:end], reason=reason)

    def _demote(self, token: Token, result: ArgumentResult) -> Passthrough:
        """Record a failed extraction and pass the command name through.

        Only the name is demoted. Constructs after the failed opener are
        still converted, so ``\\textbf{a \\textit{b} c`` becomes
        ``\\textbf{a *b* c``.
        """
        assert result.error is not None
        self._recover(result.error, result.error_position, token.value)
        return self._passthrough(token.start, token.end, reason=result.error)

    def _parse_command(self, tokenizer: LatexTokenizer, token: Token, depth: int) -> ParsedConstruct:
        """Convert a command token according to the command rule table.

        On any failure only the command name is passed through and scanning
        resumes right after it, so the would-be argument is parsed as
        ordinary content.
        """
        rule = self.command_rules.get(token.value)
        if rule is None:
            return self._passthrough(token.start, token.end)

        source = self._source
        max_depth = self.options.max_nesting_depth
        position = token.end
        option_text: Optional[str] = None

        if rule.optional_arg:
            optional = extract_optional_argument(source, position, tokenizer.end, max_depth)
            if optional is not None:
                if not optional.ok:
                    return self._demote(token, optional)
                option_text = optional.text
                position = optional.end

        if rule.arg_count == 0:
            tokenizer.seek(position)
            return rule.build(None)

        argument = extract_argument(source, position, tokenizer.end, max_depth)
        if not argument.ok:
            return self._demote(token, argument)

        if rule.arg_handling is ArgHandling.RECURSIVE:
            if depth + 1 > max_depth:
                self._recover(RecoveryKind.EXCEEDED_NESTING_DEPTH, token.start, token.value)
                return self._passthrough(token.start, token.end, reason=RecoveryKind.EXCEEDED_NESTING_DEPTH)
            value: Any = self._parse_range(argument.content_start, argument.content_end, depth + 1)
        else:
            value = argument.text

        tokenizer.seek(argument.end)

        if rule.preamble:
            self._record_preamble(rule.name, argument.text, option_text)
            if not self.options.strip_preamble:
                return self._passthrough(token.start, argument.end)

        return rule.build(value)

    def _record_preamble(self, name: str, argument: str, option_text: Optional[str]) -> None:
        if name == "documentclass":
            self.document_metadata["document_class"] = argument.strip()
            if option_text is not None:
                self.document_metadata["document_options"] = _split_names(option_text)
        elif name == "usepackage":
            packages = self.document_metadata.setdefault("packages", [])
            packages.extend(_split_names(argument))

    def _parse_environment(self, tokenizer: LatexTokenizer, token: Token, depth: int) -> ParsedConstruct:
        r"""Convert a ``\begin{name}`` token according to the environment rule table."""
        rule = self.environment_rules.get(token.value)
        if rule is None:
            # Unknown environment: keep the delimiter, parse the body in place
            return self._passthrough(token.start, token.end)
        if rule.kind is EnvironmentKind.WRAPPER:
            return None

        max_depth = self.options.max_nesting_depth
        span = scan_environment(self._source, token.start, token.end, tokenizer.end, token.value, max_depth)

        if not span.ok:
            assert span.error is not None
            self._recover(span.error, span.error_position, span.detail or token.value)
            if span.end >= 0:
                tokenizer.seek(span.end)
                return self._passthrough(token.start, span.end, reason=span.error)
            return self._passthrough(token.start, token.end, reason=span.error)

        if rule.kind is EnvironmentKind.MATH:
            tokenizer.seek(span.end)
            assert rule.build is not None
            return rule.build(self._source[span.body_start : span.body_end])

        if depth + 1 > max_depth:
            self._recover(RecoveryKind.EXCEEDED_NESTING_DEPTH, token.start, token.value)
            tokenizer.seek(span.end)
            return self._passthrough(token.start, span.end, reason=RecoveryKind.EXCEEDED_NESTING_DEPTH)

        tokenizer.seek(span.end)
        return self._build_list(rule, span, depth)

    def _build_list(self, rule: EnvironmentRule, span: EnvironmentSpan, depth: int) -> list[Node]:
        """Split a list body at its top-level ``\\item`` keywords and parse each item."""
        source = self._source
        nodes: list[Node] = []
        boundaries = [item_start for item_start, _ in span.items] + [span.body_end]

        # Content before the first \item is kept, ahead of the list
        first_item = boundaries[0]
        if source[span.body_start : first_item].strip():
            nodes.extend(self._parse_range(span.body_start, first_item, depth + 1))

        items: list[ListItem] = []
        for index, (_, keyword_end) in enumerate(span.items):
            content_end = boundaries[index + 1]
            content_start = keyword_end
            label: Optional[str] = None

            optional = extract_optional_argument(source, keyword_end, content_end, self.options.max_nesting_depth)
            if optional is not None:
                if optional.ok:
                    label = optional.text.strip() or None
                    content_start = optional.end
                else:
                    assert optional.error is not None
                    self._recover(optional.error, optional.error_position, "item")

            children = self._parse_range(content_start, content_end, depth + 1)
            items.append(ListItem(children=children, label=label))

        assert rule.build is not None
        nodes.append(rule.build(items))
        return nodes

    def _stray_environment_end(self, token: Token) -> ParsedConstruct:
        r"""Handle an ``\end{name}`` with no open ``\begin`` in this range."""
        rule = self.environment_rules.get(token.value)
        if rule is None:
            return self._passthrough(token.start, token.end)
        if rule.kind is EnvironmentKind.WRAPPER:
            return None
        self._recover(RecoveryKind.MISMATCHED_ENVIRONMENT, token.start, f"unopened \\end{{{token.value}}}")
        return self._passthrough(token.start, token.end, reason=RecoveryKind.MISMATCHED_ENVIRONMENT)


def _split_names(text: str) -> list[str]:
    return [name.strip() for name in text.split(",") if name.strip()]
