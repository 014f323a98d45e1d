"""The major exported API functions for LaTeX normalization."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/tex2md/api.py
import logging
from dataclasses import fields
from typing import Any, Optional

from tex2md.ast.nodes import Document
from tex2md.constants import LATEX_COMMAND_TRIGGER_PATTERN
from tex2md.diagnostics import DiagnosticsCallback, NormalizationReport, RecoveryEvent, RecoveryKind
from tex2md.exceptions import ConversionError, InputTooLargeError, NestingDepthError
from tex2md.options.latex import LatexOptions
from tex2md.options.markdown import MarkdownRendererOptions
from tex2md.options.normalize import NormalizeOptions
from tex2md.parsers.latex import LatexParser
from tex2md.renderers.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

_NESTED_OPTIONS: dict[str, type] = {"parser": LatexOptions, "renderer": MarkdownRendererOptions}


def needs_conversion(text: str) -> bool:
    r"""Decide cheaply whether ``text`` may contain LaTeX markup.

    The check is a heuristic: it triggers on any ``$`` or on a backslash
    command immediately followed by ``{``. Prose with a stray backslash
    (``C:\Users``) does not trigger; a lone currency sign does.

    Parameters
    ----------
    text : str
        Candidate text

    Returns
    -------
    bool
        True when the conversion pipeline should run

    Examples
    --------
        >>> needs_conversion("Just prose.")
        False
        >>> needs_conversion(r"\textbf{yes}")
        True

    """
    return "$" in text or LATEX_COMMAND_TRIGGER_PATTERN.search(text) is not None


def _resolve_options(options: Optional[NormalizeOptions], **kwargs: Any) -> NormalizeOptions:
    """Merge keyword overrides into a NormalizeOptions instance.

    Keyword names are matched against NormalizeOptions fields first, then
    against the nested parser and renderer option fields.
    """
    options = options or NormalizeOptions()
    if not kwargs:
        return options

    top_level = {f.name for f in fields(NormalizeOptions)} - set(_NESTED_OPTIONS)
    updates: dict[str, Any] = {k: kwargs.pop(k) for k in list(kwargs) if k in top_level}

    for attribute, options_class in _NESTED_OPTIONS.items():
        names = {f.name for f in fields(options_class)}
        nested = {k: kwargs.pop(k) for k in list(kwargs) if k in names}
        if nested:
            updates[attribute] = getattr(options, attribute).create_updated(**nested)

    if kwargs:
        logger.debug(f"Skipping unknown options: {sorted(kwargs)}")

    return options.create_updated(**updates) if updates else options


def to_ast(text: str, options: Optional[NormalizeOptions] = None, **kwargs: Any) -> Document:
    """Parse LaTeX text into an AST Document without rendering it.

    Parameters
    ----------
    text : str
        LaTeX source
    options : NormalizeOptions, optional
        Only the ``parser`` options are used
    kwargs : Any
        Individual option overrides, e.g. ``strict_mode=True``

    Returns
    -------
    Document
        Parsed document

    Raises
    ------
    ConversionError
        Only in strict mode

    """
    options = _resolve_options(options, **kwargs)
    return LatexParser(options.parser).parse(text or "")


def render(document: Document, options: Optional[NormalizeOptions] = None, **kwargs: Any) -> str:
    """Serialize an AST Document to Markdown-style text.

    Parameters
    ----------
    document : Document
        Document to render
    options : NormalizeOptions, optional
        Only the ``renderer`` options are used
    kwargs : Any
        Individual option overrides, e.g. ``itemize_marker="*"``

    Returns
    -------
    str
        Normalized text

    """
    options = _resolve_options(options, **kwargs)
    return MarkdownRenderer(options.renderer).render_to_string(document)


def _notify(callback: Optional[DiagnosticsCallback], report: NormalizationReport) -> None:
    if callback is None:
        return
    try:
        callback(report)
    except Exception as e:
        # Diagnostics are observational; never let them affect the result
        logger.warning(f"Diagnostics callback raised exception: {e}", exc_info=True)


def _run_pipeline(
    text: Optional[str],
    options: NormalizeOptions,
    diagnostics_callback: Optional[DiagnosticsCallback],
    dispatch: bool,
) -> str:
    text = text or ""
    report = NormalizationReport(input_length=len(text))
    try:
        return _convert_with_report(text, options, report, dispatch)
    finally:
        _notify(diagnostics_callback, report)


def _convert_with_report(text: str, options: NormalizeOptions, report: NormalizationReport, dispatch: bool) -> str:
    strict = options.parser.strict_mode

    if not text:
        return ""

    if len(text) > options.max_input_length:
        event = RecoveryEvent(RecoveryKind.INPUT_TOO_LARGE, options.max_input_length, f"{len(text)} characters")
        report.events.append(event)
        logger.warning(
            f"Input of {len(text)} characters exceeds max_input_length={options.max_input_length}; "
            "returning it unchanged"
        )
        if strict:
            raise InputTooLargeError(f"Input too large: {event}", position=options.max_input_length)
        return text

    if dispatch and not needs_conversion(text):
        logger.debug("No LaTeX markers found; returning input unchanged")
        return text

    report.dispatched = True
    parser = LatexParser(options.parser)
    try:
        document = parser.parse(text)
        return MarkdownRenderer(options.renderer).render_to_string(document)
    except ConversionError:
        raise
    except RecursionError as e:
        event = RecoveryEvent(RecoveryKind.EXCEEDED_NESTING_DEPTH, 0, "interpreter recursion limit reached")
        report.events.append(event)
        if strict:
            raise NestingDepthError(f"Nesting too deep: {event}", position=0, original_error=e) from e
        logger.warning("Interpreter recursion limit reached while normalizing; returning input unchanged")
        return text
    except Exception as e:
        if strict:
            raise ConversionError(f"Failed to normalize input: {e}", original_error=e) from e
        logger.error(f"Unexpected failure while normalizing; returning input unchanged: {e}", exc_info=True)
        return text
    finally:
        report.events.extend(parser.events)


def normalize(
    text: Optional[str],
    options: Optional[NormalizeOptions] = None,
    diagnostics_callback: Optional[DiagnosticsCallback] = None,
    **kwargs: Any,
) -> str:
    r"""Normalize LaTeX-flavored text into Markdown-style text.

    This is the main entry point. Inputs without any LaTeX markers are
    returned byte-for-byte unchanged; everything else is tokenized, parsed
    and serialized. With default options this function never raises:
    malformed constructs are kept as literal text.

    Parameters
    ----------
    text : str or None
        Text to normalize; None and "" yield ""
    options : NormalizeOptions, optional
        Pipeline configuration
    diagnostics_callback : DiagnosticsCallback, optional
        Called once with a NormalizationReport describing the fallbacks taken
    kwargs : Any
        Individual option overrides matched by field name against
        NormalizeOptions, LatexOptions and MarkdownRendererOptions

    Returns
    -------
    str
        Normalized text

    Raises
    ------
    ConversionError
        Only when ``strict_mode`` is enabled
    ValueError
        If an option override has an invalid value

    Examples
    --------
        >>> normalize(r"\textbf{a\textit{b}c} and $x^2$")
        '**a*b*c** and $x^2$'
        >>> normalize("Plain prose stays as it is.  ")
        'Plain prose stays as it is.  '

    """
    options = _resolve_options(options, **kwargs)
    return _run_pipeline(text, options, diagnostics_callback, dispatch=options.use_dispatcher)


def convert(
    text: Optional[str],
    options: Optional[NormalizeOptions] = None,
    diagnostics_callback: Optional[DiagnosticsCallback] = None,
    **kwargs: Any,
) -> str:
    r"""Run the full conversion pipeline, bypassing the dispatcher.

    Identical to :func:`normalize` with ``use_dispatcher=False``: input
    without ``$`` or ``\command{`` patterns is still processed, so comments
    are stripped and whitespace is normalized.

    Examples
    --------
        >>> convert("abc % note\ndef")
        'abc\ndef'

    """
    options = _resolve_options(options, **kwargs)
    return _run_pipeline(text, options, diagnostics_callback, dispatch=False)
