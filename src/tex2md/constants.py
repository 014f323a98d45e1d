#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for tex2md.

This module centralizes the hardcoded values and default configuration
constants used across the tex2md library.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Resource Limits - Guards against pathological input
3. Parsing Behavior - LaTeX subset recognition defaults
4. Rendering Behavior - Markdown-style output defaults
5. CLI - Exit codes and environment variable prefix
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

StyleType = Literal["bold", "italic"]
ListStyleType = Literal["enumerate", "itemize"]
ItemizeMarker = Literal["-", "*", "+"]

# =============================================================================
# Resource Limits
# =============================================================================

# Inputs longer than this (in characters) skip the pipeline entirely
DEFAULT_MAX_INPUT_LENGTH = 1_000_000

# Maximum brace / environment / recursive parse depth
DEFAULT_MAX_NESTING_DEPTH = 64

# Upper bound for max_nesting_depth; each level costs several interpreter frames
# while parsing and rendering
MAX_NESTING_DEPTH_CEILING = 100

# =============================================================================
# Parsing Behavior
# =============================================================================

DEFAULT_STRICT_MODE = False
DEFAULT_STRIP_COMMENTS = True
DEFAULT_STRIP_PREAMBLE = True
DEFAULT_USE_DISPATCHER = True

# Heuristic trigger for the dispatcher: a backslash command directly followed by "{"
LATEX_COMMAND_TRIGGER_PATTERN = re.compile(r"\\[a-zA-Z]+\{")

# =============================================================================
# Rendering Behavior
# =============================================================================

DEFAULT_COLLAPSE_BLANK_LINES = True
DEFAULT_ITEMIZE_MARKER: ItemizeMarker = "-"
DEFAULT_NESTED_LIST_INDENT = 3

BOLD_DELIMITER = "**"
ITALIC_DELIMITER = "*"
INLINE_MATH_DELIMITER = "$"
DISPLAY_MATH_DELIMITER = "$$"

# =============================================================================
# CLI
# =============================================================================

ENV_VAR_PREFIX = "TEX2MD_"

EXIT_SUCCESS = 0
EXIT_CONVERSION_ERROR = 1
EXIT_VALIDATION_ERROR = 2
EXIT_FILE_ERROR = 3
