#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the tex2md library.

With default options the public ``normalize`` function never raises: every
malformed construct is folded into a passthrough fallback. The exceptions
below surface only when a caller opts in with ``strict_mode`` or passes
invalid configuration.

Exception Hierarchy
-------------------
- Tex2MdError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser/renderer)

  - ConversionError (strict-mode recoverable conditions)
    - UnbalancedBracesError
    - MissingArgumentError
    - UnterminatedMathError
    - MismatchedEnvironmentError
    - NestingDepthError
    - InputTooLargeError

  - FileError (CLI input/output failures)

"""

from __future__ import annotations

from typing import Any

from tex2md.diagnostics import RecoveryKind


class Tex2MdError(Exception):
    """Base exception class for all tex2md-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Tex2MdError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    converter_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{converter_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.converter_name = converter_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConversionError(Tex2MdError):
    """Base exception for recoverable conditions raised in strict mode.

    Parameters
    ----------
    message : str
        Description of the condition
    kind : RecoveryKind
        The recoverable-condition kind that triggered the error
    position : int, default -1
        Character offset in the input where the condition was detected

    """

    kind: RecoveryKind = RecoveryKind.UNBALANCED_BRACES

    def __init__(self, message: str, position: int = -1, original_error: Exception | None = None):
        """Initialize the conversion error with its input offset."""
        super().__init__(message, original_error=original_error)
        self.position = position


class UnbalancedBracesError(ConversionError):
    """A ``{`` or ``[`` argument was never closed."""

    kind = RecoveryKind.UNBALANCED_BRACES


class MissingArgumentError(ConversionError):
    """A command that requires a ``{...}`` argument was not followed by one."""

    kind = RecoveryKind.MISSING_ARGUMENT


class UnterminatedMathError(ConversionError):
    """A math span was opened but never closed."""

    kind = RecoveryKind.UNTERMINATED_MATH


class MismatchedEnvironmentError(ConversionError):
    r"""An ``\end`` did not match the innermost open ``\begin``, or was missing."""

    kind = RecoveryKind.MISMATCHED_ENVIRONMENT


class NestingDepthError(ConversionError):
    """Brace or environment nesting exceeded the configured maximum."""

    kind = RecoveryKind.EXCEEDED_NESTING_DEPTH


class InputTooLargeError(ConversionError):
    """The input exceeded the configured maximum length."""

    kind = RecoveryKind.INPUT_TOO_LARGE


_ERRORS_BY_KIND: dict[RecoveryKind, type[ConversionError]] = {
    cls.kind: cls
    for cls in (
        UnbalancedBracesError,
        MissingArgumentError,
        UnterminatedMathError,
        MismatchedEnvironmentError,
        NestingDepthError,
        InputTooLargeError,
    )
}


def error_for_kind(kind: RecoveryKind, message: str, position: int = -1) -> ConversionError:
    """Build the strict-mode exception matching a recovery kind.

    Parameters
    ----------
    kind : RecoveryKind
        The detected condition
    message : str
        Error message
    position : int, default -1
        Character offset of the condition

    Returns
    -------
    ConversionError
        Instance of the subclass registered for ``kind``

    """
    return _ERRORS_BY_KIND[kind](message, position=position)


class FileError(Tex2MdError):
    """Exception raised for CLI file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path
