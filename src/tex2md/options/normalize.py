#  Copyright (c) 2025 Tom Villani, Ph.D.

# tex2md/options/normalize.py
"""Top-level options for the ``normalize`` entry point."""

from __future__ import annotations

from dataclasses import dataclass, field

from tex2md.constants import DEFAULT_MAX_INPUT_LENGTH, DEFAULT_USE_DISPATCHER
from tex2md.options.base import CloneFrozenMixin
from tex2md.options.latex import LatexOptions
from tex2md.options.markdown import MarkdownRendererOptions


@dataclass(frozen=True)
class NormalizeOptions(CloneFrozenMixin):
    """Options controlling a full normalization call.

    Parameters
    ----------
    max_input_length : int, default 1_000_000
        Inputs longer than this many characters skip the pipeline and are
        returned unchanged (or raise InputTooLargeError in strict mode).
    use_dispatcher : bool, default True
        Run the cheap heuristic check first and return inputs without any
        LaTeX markers unchanged.
    parser : LatexOptions
        Options for the LaTeX parser.
    renderer : MarkdownRendererOptions
        Options for the Markdown serializer.

    """

    max_input_length: int = field(
        default=DEFAULT_MAX_INPUT_LENGTH,
        metadata={"help": "Maximum input length in characters", "type": int, "importance": "security"},
    )
    use_dispatcher: bool = field(
        default=DEFAULT_USE_DISPATCHER,
        metadata={
            "help": "Only convert inputs that contain $ or a \\command{ pattern",
            "cli_name": "force",
            "importance": "core",
        },
    )
    parser: LatexOptions = field(default_factory=LatexOptions)
    renderer: MarkdownRendererOptions = field(default_factory=MarkdownRendererOptions)

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If max_input_length is not positive.

        """
        if self.max_input_length < 1:
            raise ValueError(f"max_input_length must be positive, got {self.max_input_length}")
