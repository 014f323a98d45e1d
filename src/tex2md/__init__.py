r"""tex2md - Normalize author-written LaTeX snippets into Markdown-style text.

Educational content (questions, explanations, lecture notes) is often written
with LaTeX conventions but displayed through a renderer that only understands
a narrow markup subset. tex2md bridges the two: it parses a constrained LaTeX
subset and serializes it as ``**bold**``, ``*italic*``, ``$math$`` and
``$$display math$$`` with one line per list item.

Key Features
------------
- Nesting-aware parsing (``\textbf{a \textit{b} c}`` resolves correctly)
- Math carried verbatim, never restyled
- Unknown or malformed markup kept as literal text, never dropped
- Cheap dispatcher that leaves plain prose byte-for-byte unchanged
- Optional diagnostics hook reporting every fallback taken

Requirements
------------
- Python 3.10+

Examples
--------
Basic usage:

    >>> from tex2md import normalize
    >>> normalize(r"\begin{enumerate}\item[i] one\item two\end{enumerate}")
    'i. one\n2. two'

Working with the AST directly:

    >>> from tex2md import render, to_ast
    >>> doc = to_ast(r"\emph{Note:} $E = mc^2$")
    >>> render(doc)
    '*Note:* $E = mc^2$'

See Also
--------
tex2md.ast : AST node definitions
tex2md.diagnostics : Recoverable-error reporting

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from tex2md.api import convert, needs_conversion, normalize, render, to_ast
from tex2md.diagnostics import DiagnosticsCallback, NormalizationReport, RecoveryEvent, RecoveryKind
from tex2md.exceptions import (
    ConversionError,
    FileError,
    InputTooLargeError,
    InvalidOptionsError,
    MismatchedEnvironmentError,
    MissingArgumentError,
    NestingDepthError,
    Tex2MdError,
    UnbalancedBracesError,
    UnterminatedMathError,
    ValidationError,
)
from tex2md.options import LatexOptions, MarkdownRendererOptions, NormalizeOptions

__version__ = "1.0.0"

__all__ = [
    "ConversionError",
    "DiagnosticsCallback",
    "FileError",
    "InputTooLargeError",
    "InvalidOptionsError",
    "LatexOptions",
    "MarkdownRendererOptions",
    "MismatchedEnvironmentError",
    "MissingArgumentError",
    "NestingDepthError",
    "NormalizationReport",
    "NormalizeOptions",
    "RecoveryEvent",
    "RecoveryKind",
    "Tex2MdError",
    "UnbalancedBracesError",
    "UnterminatedMathError",
    "ValidationError",
    "__version__",
    "convert",
    "needs_conversion",
    "normalize",
    "render",
    "to_ast",
]
