#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/diagnostics.py
"""Recoverable-error reporting for normalization calls.

Every malformed construct the pipeline meets is resolved locally by a
passthrough fallback. This module lets embedders observe those fallbacks
without changing the returned text, e.g. for content-quality monitoring.

Examples
--------
Counting fallbacks per call:

    >>> from tex2md import normalize
    >>> from tex2md.diagnostics import NormalizationReport
    >>>
    >>> def on_report(report: NormalizationReport) -> None:
    ...     if report.total:
    ...         print(report.counts)
    >>>
    >>> text = normalize(r"\\textbf{unclosed", diagnostics_callback=on_report)
    {<RecoveryKind.UNBALANCED_BRACES: 'unbalanced_braces'>: 1}

"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class RecoveryKind(str, Enum):
    """Kinds of recoverable conditions met while normalizing."""

    UNBALANCED_BRACES = "unbalanced_braces"
    MISSING_ARGUMENT = "missing_argument"
    UNTERMINATED_MATH = "unterminated_math"
    MISMATCHED_ENVIRONMENT = "mismatched_environment"
    EXCEEDED_NESTING_DEPTH = "exceeded_nesting_depth"
    INPUT_TOO_LARGE = "input_too_large"


@dataclass(frozen=True)
class RecoveryEvent:
    """A single fallback taken by the pipeline.

    Parameters
    ----------
    kind : RecoveryKind
        Which condition was detected
    position : int
        Character offset in the input where it was detected
    detail : str, default ""
        Short human-readable context (command or environment name)

    """

    kind: RecoveryKind
    position: int
    detail: str = ""

    def __str__(self) -> str:
        """Return a compact description of the event."""
        suffix = f" ({self.detail})" if self.detail else ""
        return f"{self.kind.value} at offset {self.position}{suffix}"


@dataclass
class NormalizationReport:
    """Summary of one normalization call.

    Parameters
    ----------
    input_length : int
        Length of the input text in characters
    dispatched : bool
        Whether the conversion pipeline ran (False when the dispatcher
        passed the input through unchanged)
    events : list of RecoveryEvent
        Fallbacks taken, in detection order

    """

    input_length: int = 0
    dispatched: bool = False
    events: list[RecoveryEvent] = field(default_factory=list)

    @property
    def counts(self) -> dict[RecoveryKind, int]:
        """Number of events per kind."""
        return dict(Counter(event.kind for event in self.events))

    @property
    def total(self) -> int:
        """Total number of recoverable conditions."""
        return len(self.events)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the report."""
        return {
            "input_length": self.input_length,
            "dispatched": self.dispatched,
            "total": self.total,
            "counts": {kind.value: count for kind, count in self.counts.items()},
            "events": [
                {"kind": event.kind.value, "position": event.position, "detail": event.detail}
                for event in self.events
            ],
        }


DiagnosticsCallback = Callable[[NormalizationReport], None]
"""Type alias for diagnostics hooks.

The callback is invoked once per call, after the output has been computed.
Exceptions raised by the callback are logged and never reach the caller.
"""
